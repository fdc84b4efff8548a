from __future__ import annotations

import pytest

from offramp.domain.errors import ClaimExecutionFailure
from offramp.domain.model import RouteDecision
from offramp.domain.settlement import LinkClaimExecutor
from tests.helpers.settlement import (
    USDC_OPTIMISM,
    FakeClaimService,
    make_liquidation_address,
    make_link,
)

DIRECT = RouteDecision(
    token_name="usdc",
    chain_name="polygon",
    destination_chain_id="137",
    destination_token_address="0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359",
)
BRIDGED = RouteDecision(
    token_name="usdc",
    chain_name="optimism",
    destination_chain_id="10",
    destination_token_address=USDC_OPTIMISM,
    bridging_required=True,
)


def test_direct_claim() -> None:
    claims = FakeClaimService(tx_hash="0x1")
    address = make_liquidation_address()
    link = make_link()

    tx_hash = LinkClaimExecutor(claims).claim(DIRECT, address, link)

    assert tx_hash == "0x1"
    assert claims.direct_calls == [(address.address, link.link)]
    assert claims.cross_chain_calls == []


def test_cross_chain_claim_targets_decision() -> None:
    claims = FakeClaimService(tx_hash="0x2")
    address = make_liquidation_address()

    LinkClaimExecutor(claims).claim(BRIDGED, address, make_link())

    assert claims.direct_calls == []
    assert claims.cross_chain_calls[0]["destination_chain_id"] == "10"
    assert claims.cross_chain_calls[0]["destination_token"] == USDC_OPTIMISM
    assert claims.cross_chain_calls[0]["address"] == address.address


def test_second_claim_of_same_link_is_refused() -> None:
    claims = FakeClaimService(tx_hash="0x3")
    executor = LinkClaimExecutor(claims)
    executor.claim(DIRECT, make_liquidation_address(), make_link())

    with pytest.raises(ClaimExecutionFailure) as excinfo:
        executor.claim(DIRECT, make_liquidation_address(), make_link())

    assert excinfo.value.transaction_hash == "0x3"
    assert claims.claim_calls == 1


def test_claim_errors_are_translated() -> None:
    claims = FakeClaimService(error=TimeoutError("relay timeout"))

    with pytest.raises(ClaimExecutionFailure):
        LinkClaimExecutor(claims).claim(DIRECT, make_liquidation_address(), make_link())
    assert claims.claim_calls == 1


def test_blank_hash_is_a_failure() -> None:
    claims = FakeClaimService(tx_hash="  ")

    with pytest.raises(ClaimExecutionFailure, match="no transaction hash"):
        LinkClaimExecutor(claims).claim(DIRECT, make_liquidation_address(), make_link())

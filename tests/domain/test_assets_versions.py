from __future__ import annotations

import pytest

from offramp.domain.assets import (
    USDC_OPTIMISM,
    chain_id_for_partner_chain,
    is_native_token,
    is_testnet_chain,
    partner_chain_name,
    partner_token_name,
    token_address_for_partner_token,
)
from offramp.domain.versions import parse_contract_version, version_at_least


def test_partner_lookups_are_case_insensitive() -> None:
    assert partner_chain_name("10") == "optimism"
    assert partner_chain_name("100") is None
    assert partner_token_name("10", USDC_OPTIMISM.lower()) == "usdc"
    assert partner_token_name("10", USDC_OPTIMISM.upper().replace("0X", "0x")) == "usdc"
    assert partner_token_name("100", USDC_OPTIMISM) is None
    assert chain_id_for_partner_chain("Optimism") == "10"
    assert token_address_for_partner_token("10", "USDC") == USDC_OPTIMISM


def test_native_and_testnet_detection() -> None:
    assert is_native_token("0x0000000000000000000000000000000000000000")
    assert not is_native_token(USDC_OPTIMISM)
    assert is_testnet_chain("11155111")
    assert not is_testnet_chain("10")


@pytest.mark.parametrize(
    ("minimum", "actual", "expected"),
    [
        ("v4.2", "v4.2", True),
        ("v4.2", "v4.3", True),
        ("v4.2", "v4.10", True),
        ("v4.2", "v4", False),
        ("v4.2", "v5", True),
        ("v4.2", "v4.1.9", False),
        ("v4.2", "4.2.0", True),
    ],
)
def test_version_at_least(minimum: str, actual: str, *, expected: bool) -> None:
    assert version_at_least(minimum, actual) is expected


def test_parse_contract_version_rejects_garbage() -> None:
    assert parse_contract_version("V4.3") == (4, 3)
    with pytest.raises(ValueError, match="Unrecognised"):
        parse_contract_version("latest")

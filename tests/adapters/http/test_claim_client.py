from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest

from offramp.adapters.claims import ClaimAPIError, ClaimClient
from offramp.config import ClaimConfig, ResilienceConfig
from tests.helpers.http import RecordingHandler, make_client_factory

CONFIG = ClaimConfig(
    api_key="claim-key",
    resilience=ResilienceConfig(name="claims", base_url="https://claims.test/"),
)


def _client(handler: RecordingHandler) -> ClaimClient:
    return ClaimClient(config=CONFIG, client_factory=make_client_factory(handler))


def test_claim_direct() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"txHash": "0x123"}))

    tx_hash = _client(handler).claim_direct("0xaddr", "https://link")

    assert tx_hash == "0x123"
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/claim"
    assert request.headers["api-key"] == "claim-key"
    assert json.loads(request.content) == {"address": "0xaddr", "link": "https://link"}


def test_claim_cross_chain() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"transactionHash": "0x456"}))

    tx_hash = _client(handler).claim_cross_chain(
        "0xaddr", "https://link", destination_chain_id="10", destination_token="0xusdc"
    )

    assert tx_hash == "0x456"
    assert handler.requests[0].url.path == "/claim-x-chain"
    assert json.loads(handler.requests[0].content) == {
        "address": "0xaddr",
        "link": "https://link",
        "destinationChainId": "10",
        "destinationToken": "0xusdc",
    }


def test_claim_is_sent_once_even_on_server_error() -> None:
    handler = RecordingHandler(httpx.Response(503))

    with pytest.raises(ClaimAPIError) as excinfo:
        _client(handler).claim_direct("0xaddr", "https://link")

    assert excinfo.value.status_code == 503
    assert len(handler.requests) == 1


def test_claim_without_hash_raises() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"status": "queued"}))

    with pytest.raises(ClaimAPIError, match="no transaction hash"):
        _client(handler).claim_direct("0xaddr", "https://link")


def test_get_link_details() -> None:
    handler = RecordingHandler(
        httpx.Response(
            200,
            json={
                "link": "https://link",
                "chainId": 100,
                "tokenAddress": "0xtoken",
                "tokenAmount": "25.5",
                "tokenDecimals": 6,
                "senderAddress": "0xsender",
                "contractVersion": "v4.3",
                "tokenSymbol": "USDC",
                "claimed": True,
            },
        )
    )

    link = _client(handler).get_link_details("https://link")

    assert link.chain_id == "100"
    assert link.token_amount == Decimal("25.5")
    assert link.contract_version == "v4.3"
    assert link.claimed is True
    assert handler.requests[0].url.params["link"] == "https://link"

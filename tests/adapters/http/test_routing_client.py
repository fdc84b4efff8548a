from __future__ import annotations

import json
from datetime import UTC, datetime
from decimal import Decimal
from email.utils import format_datetime

import httpx
import pytest

from offramp.adapters.routing import RoutingAPIError, RoutingClient, from_base_units, to_base_units
from offramp.adapters.http_resilience import ResilientClient
from offramp.config import CacheConfig, ResilienceConfig, RoutingConfig
from offramp.domain.assets import USDC_OPTIMISM
from tests.helpers.http import RecordingHandler, make_client_factory, make_transport_factory

CONFIG = RoutingConfig(
    api_key=None,
    resilience=ResilienceConfig(name="routing", base_url="https://router.test/"),
)


def _client(handler: RecordingHandler) -> RoutingClient:
    return RoutingClient(config=CONFIG, client_factory=make_client_factory(handler))


def _route_kwargs() -> dict[str, object]:
    return {
        "source_token": "0xsource",
        "source_chain_id": "100",
        "destination_token": USDC_OPTIMISM,
        "destination_chain_id": "10",
        "decimals": 6,
        "amount": Decimal("12.5"),
        "sender": "0xsender",
    }


def test_get_options_translates_chains() -> None:
    handler = RecordingHandler(
        httpx.Response(
            200,
            json={
                "chains": [
                    {"chainId": 10, "axelarChainName": "optimism", "tokens": [{"address": "0xa"}]},
                    {"chainId": "137"},
                ]
            },
        )
    )

    options = _client(handler).get_options("100", 1, is_testnet=False)

    assert [option.chain_id for option in options] == ["10", "137"]
    assert options[0].name == "optimism"
    assert options[0].tokens == ("0xa",)
    params = handler.requests[0].url.params
    assert params["sourceChainId"] == "100"
    assert params["tokenType"] == "1"
    assert params["isTestnet"] == "false"


def test_get_options_accepts_bare_list() -> None:
    handler = RecordingHandler(httpx.Response(200, json=[{"chainId": "10"}]))

    options = _client(handler).get_options("100", 0, is_testnet=True)

    assert [option.chain_id for option in options] == ["10"]
    assert handler.requests[0].url.params["isTestnet"] == "true"


def test_get_options_http_error_raises() -> None:
    handler = RecordingHandler(httpx.Response(500))

    with pytest.raises(httpx.HTTPStatusError):
        _client(handler).get_options("100", 1, is_testnet=False)


def test_compute_route_posts_base_units() -> None:
    handler = RecordingHandler(
        httpx.Response(200, json={"route": {"estimate": {"toAmount": "12400000"}, "id": "r1"}})
    )

    route = _client(handler).compute_route(**_route_kwargs())  # type: ignore[arg-type]

    assert route is not None
    assert route.to_chain_id == "10"
    assert route.to_token == USDC_OPTIMISM
    assert route.estimated_amount == Decimal("12.4")
    assert route.raw["id"] == "r1"
    body = json.loads(handler.requests[0].content)
    assert body["fromAmount"] == "12500000"
    assert body["fromChain"] == "100"
    assert body["toChain"] == "10"
    assert body["fromAddress"] == body["toAddress"] == "0xsender"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404),
        httpx.Response(200),
        httpx.Response(200, json={"route": None}),
    ],
)
def test_compute_route_without_route_returns_none(response: httpx.Response) -> None:
    handler = RecordingHandler(response)

    assert _client(handler).compute_route(**_route_kwargs()) is None  # type: ignore[arg-type]


def test_compute_route_bad_payload_raises() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"route": "nope"}))

    with pytest.raises(RoutingAPIError):
        _client(handler).compute_route(**_route_kwargs())  # type: ignore[arg-type]


def test_compare_versions() -> None:
    client = _client(RecordingHandler())

    assert client.compare_versions("v4.2", "v4.3")
    assert not client.compare_versions("v4.2", "v4.0")


def test_base_unit_conversion() -> None:
    assert to_base_units(Decimal("1.5"), 6) == "1500000"
    assert to_base_units(Decimal("0.1"), 18) == "100000000000000000"
    assert from_base_units("1500000", 6) == Decimal("1.5")
    assert from_base_units(None, 6) is None
    assert from_base_units("x", 6) is None


def _options_response() -> httpx.Response:
    return httpx.Response(
        200,
        json={"chains": [{"chainId": "10"}]},
        headers={
            "Cache-Control": "max-age=300",
            "Date": format_datetime(datetime.now(UTC), usegmt=True),
        },
    )


def test_repeated_options_lookup_is_served_from_cache() -> None:
    config = RoutingConfig(
        api_key=None,
        resilience=ResilienceConfig(
            name="routing",
            base_url="https://router.test/",
            cache=CacheConfig(backend="memory", default_ttl_seconds=300),
        ),
    )
    handler = RecordingHandler(_options_response())

    with RoutingClient(config=config, client_factory=make_transport_factory(handler)) as client:
        first = client.get_options("56", 1, is_testnet=False)
        second = client.get_options("56", 1, is_testnet=False)

    assert first == second
    assert [option.chain_id for option in second] == ["10"]
    assert len(handler.requests) == 1


def test_calls_share_one_http_client_until_closed() -> None:
    created: list[ResilientClient] = []
    handler = RecordingHandler(_options_response(), _options_response(), _options_response())
    factory = make_transport_factory(handler, created=created)
    client = RoutingClient(config=CONFIG, client_factory=factory)

    client.get_options("56", 1, is_testnet=False)
    client.get_options("100", 1, is_testnet=False)
    assert len(created) == 1

    client.close()
    client.get_options("56", 1, is_testnet=False)
    client.close()

    assert len(created) == 2
    assert len(handler.requests) == 3

"""HTTP client for the cross-chain routing service."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from offramp.adapters.http_resilience import ClientSession
from offramp.config.routing import RoutingConfig, get_routing_config
from offramp.domain.versions import version_at_least

from .schema import ChainOptionsResponse, RouteRequest, RouteResponse
from .translator import to_base_units, translate_option, translate_route

if TYPE_CHECKING:
    from collections.abc import Callable
    from decimal import Decimal

    import httpx

    from offramp.adapters.http_resilience import ResilientClient
    from offramp.config.http_resilience import ResilienceConfig
    from offramp.domain.model import BridgeRoute, CrossChainOption

log = getLogger(__name__)

# every settlement asset the router targets is a 6-decimal stablecoin
SETTLEMENT_TOKEN_DECIMALS: Final[int] = 6


class RoutingAPIError(RuntimeError):
    """Raised when the routing service returns an unexpected response."""


class RoutingClient:
    def __init__(
        self,
        *,
        config: RoutingConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_routing_config()
        self._session = ClientSession(self._config.resilience, client_factory)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> RoutingClient:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def get_options(
        self, source_chain_id: str, token_type: int, *, is_testnet: bool
    ) -> list[CrossChainOption]:
        response = self._session.run(
            self._get_options_async, source_chain_id, token_type, is_testnet
        )
        return [translate_option(chain) for chain in response.chains]

    def compare_versions(self, min_version: str, actual_version: str) -> bool:
        return version_at_least(min_version, actual_version)

    def compute_route(
        self,
        *,
        source_token: str,
        source_chain_id: str,
        destination_token: str,
        destination_chain_id: str,
        decimals: int,
        amount: Decimal,
        sender: str,
    ) -> BridgeRoute | None:
        request = RouteRequest(
            from_token=source_token,
            from_chain=source_chain_id,
            to_token=destination_token,
            to_chain=destination_chain_id,
            from_amount=to_base_units(amount, decimals),
            from_address=sender,
            to_address=sender,
        )
        response = self._session.run(self._compute_route_async, request)
        if response is None or response.route is None:
            log.info("No route from %s on %s", source_token, source_chain_id)
            return None
        return translate_route(
            response.route,
            from_chain_id=source_chain_id,
            from_token=source_token,
            to_chain_id=destination_chain_id,
            to_token=destination_token,
            to_decimals=SETTLEMENT_TOKEN_DECIMALS,
        )

    async def _get_options_async(
        self, client: ResilientClient, source_chain_id: str, token_type: int, is_testnet: bool
    ) -> ChainOptionsResponse:
        params = {
            "sourceChainId": source_chain_id,
            "tokenType": str(token_type),
            "isTestnet": "true" if is_testnet else "false",
        }
        response = await client.get("cross-chain/options", params=params)
        response.raise_for_status()
        payload = response.json()
        if isinstance(payload, list):
            payload = {"chains": payload}
        try:
            return ChainOptionsResponse.model_validate(payload)
        except ValidationError as exc:
            raise RoutingAPIError("Unexpected cross-chain options payload") from exc

    async def _compute_route_async(
        self, client: ResilientClient, request: RouteRequest
    ) -> RouteResponse | None:
        response = await client.post("cross-chain/route", json=request.model_dump(by_alias=True))
        return _parse_route_response(response)


def _parse_route_response(response: httpx.Response) -> RouteResponse | None:
    if response.status_code == 404:  # noqa: PLR2004
        return None
    response.raise_for_status()
    if not response.content:
        return None
    try:
        return RouteResponse.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise RoutingAPIError("Unexpected route payload") from exc


if TYPE_CHECKING:
    from offramp.domain.ports import RouteService

    _route_check: RouteService = RoutingClient()

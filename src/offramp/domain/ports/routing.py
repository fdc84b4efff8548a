"""Port for the cross-chain bridging venue."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from decimal import Decimal

    from offramp.domain.model import BridgeRoute, CrossChainOption


@runtime_checkable
class RouteService(Protocol):
    def get_options(
        self, source_chain_id: str, token_type: int, *, is_testnet: bool
    ) -> Sequence[CrossChainOption]: ...

    def compare_versions(self, min_version: str, actual_version: str) -> bool:
        """Return whether ``actual_version`` is at least ``min_version``."""
        ...

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
    ) -> BridgeRoute | None: ...

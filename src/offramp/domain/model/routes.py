"""Route decisions produced per settlement attempt (never persisted)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from decimal import Decimal

    from offramp.domain.model.primitives import ChainId, TokenAddress


@dataclass(frozen=True, kw_only=True)
class CrossChainOption:
    """A destination chain the bridging venue can reach from the source chain."""

    chain_id: ChainId
    name: str | None = None
    tokens: tuple[TokenAddress, ...] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True)
class BridgeRoute:
    from_chain_id: ChainId
    from_token: TokenAddress
    to_chain_id: ChainId
    to_token: TokenAddress
    estimated_amount: Decimal | None = None
    raw: Mapping[str, object] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True, kw_only=True)
class RouteDecision:
    """Where the claimed funds settle and whether they must be bridged first."""

    token_name: str
    chain_name: str
    destination_chain_id: ChainId
    destination_token_address: TokenAddress
    bridging_required: bool = False
    options: tuple[CrossChainOption, ...] = field(default_factory=tuple)
    route: BridgeRoute | None = None

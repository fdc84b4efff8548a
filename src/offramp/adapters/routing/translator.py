"""Translate routing payloads to domain objects."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from offramp.domain.model import BridgeRoute, CrossChainOption

if TYPE_CHECKING:
    from .schema import ChainOptionPayload, RoutePayload


def translate_option(payload: ChainOptionPayload) -> CrossChainOption:
    return CrossChainOption(
        chain_id=payload.chain_id,
        name=payload.name,
        tokens=tuple(token.address for token in payload.tokens),
    )


def to_base_units(amount: Decimal, decimals: int) -> str:
    """Token amount in the smallest unit, as the integer string routers expect."""
    return str(int((amount * (Decimal(10) ** decimals)).to_integral_value()))


def from_base_units(value: str | None, decimals: int) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(value) / (Decimal(10) ** decimals)
    except InvalidOperation:
        return None


def translate_route(
    payload: RoutePayload,
    *,
    from_chain_id: str,
    from_token: str,
    to_chain_id: str,
    to_token: str,
    to_decimals: int,
) -> BridgeRoute:
    estimate = payload.estimate
    return BridgeRoute(
        from_chain_id=from_chain_id,
        from_token=from_token,
        to_chain_id=to_chain_id,
        to_token=to_token,
        estimated_amount=from_base_units(estimate.to_amount if estimate else None, to_decimals),
        raw=payload.raw,
    )

"""Payment links as reported by the claim service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from offramp.domain.model.primitives import NATIVE_TOKEN_ADDRESSES

if TYPE_CHECKING:
    from decimal import Decimal

    from offramp.domain.model.primitives import ChainId, TokenAddress


@dataclass(frozen=True, kw_only=True)
class PaymentLink:
    link: str
    chain_id: ChainId
    token_address: TokenAddress
    token_amount: Decimal
    token_decimals: int
    sender_address: str
    contract_version: str
    token_symbol: str | None = None
    claimed: bool = False

    @property
    def is_native_token(self) -> bool:
        return self.token_address.lower() in NATIVE_TOKEN_ADDRESSES

"""Settlement artifacts: partner deposit addresses, recovery entries, records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decimal import Decimal

    from offramp.domain.model.primitives import AttemptId, ChainId, TransactionHash


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, kw_only=True)
class LiquidationAddress:
    """Partner-issued deposit address bound to (chain, currency, external account)."""

    id: str
    address: str
    chain: str
    currency: str
    external_account_id: str

    @property
    def natural_key(self) -> tuple[str, str, str]:
        return (self.chain.lower(), self.currency.lower(), self.external_account_id)


@dataclass(frozen=True, kw_only=True)
class RecoveryEntry:
    attempt_id: AttemptId
    link: str
    created_at: datetime

    def age(self, *, now: datetime | None = None) -> float:
        """Seconds elapsed since the entry was written."""
        return ((now or _utcnow()) - self.created_at).total_seconds()


@dataclass(frozen=True, kw_only=True)
class SettlementRecord:
    link: str
    transaction_hash: TransactionHash
    liquidation_address: LiquidationAddress
    customer_id: str
    external_account_id: str
    destination_chain_id: ChainId
    destination_currency: str
    usd_value: Decimal | None
    fee: Decimal
    received_amount: Decimal | None = None
    user_id: str | None = None
    account_identifier: str | None = None
    account_id: str | None = None
    created_at: datetime = field(default_factory=_utcnow)

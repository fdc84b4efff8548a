"""Port for the banking partner that owns liquidation addresses and the cash-out ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from offramp.domain.model import LiquidationAddress, SettlementRecord


@runtime_checkable
class BankingPartner(Protocol):
    def list_liquidation_addresses(self, customer_id: str) -> Sequence[LiquidationAddress]: ...

    def create_liquidation_address(
        self,
        customer_id: str,
        *,
        chain: str,
        currency: str,
        external_account_id: str,
        rail: str,
        settlement_currency: str,
    ) -> LiquidationAddress: ...

    def submit_settlement(self, record: SettlementRecord) -> None: ...

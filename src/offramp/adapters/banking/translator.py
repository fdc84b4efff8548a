"""Translate banking partner payloads to and from domain objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from offramp.domain.model import LiquidationAddress

from .schema import CashoutSubmission

if TYPE_CHECKING:
    from offramp.domain.model import SettlementRecord

    from .schema import LiquidationAddressPayload


def translate_liquidation_address(payload: LiquidationAddressPayload) -> LiquidationAddress:
    return LiquidationAddress(
        id=payload.id,
        address=payload.address,
        chain=payload.chain,
        currency=payload.currency,
        external_account_id=payload.external_account_id,
    )


def build_cashout_submission(record: SettlementRecord) -> CashoutSubmission:
    return CashoutSubmission(
        link=record.link,
        bridge_customer_id=record.customer_id,
        liquidation_address_id=record.liquidation_address.id,
        cashout_transaction_hash=record.transaction_hash,
        external_account_id=record.external_account_id,
        chain_id=record.destination_chain_id,
        token_name=record.destination_currency,
        usd_value=record.usd_value,
        fee=record.fee,
    )

"""Public interface for the banking partner adapter."""

from __future__ import annotations

from .client import BankingAPIError, BankingClient, idempotency_key
from .schema import CashoutSubmission, LiquidationAddressPayload
from .translator import build_cashout_submission, translate_liquidation_address

__all__ = [
    "BankingAPIError",
    "BankingClient",
    "CashoutSubmission",
    "LiquidationAddressPayload",
    "build_cashout_submission",
    "idempotency_key",
    "translate_liquidation_address",
]

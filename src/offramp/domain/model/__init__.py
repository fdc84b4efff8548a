"""Domain model for the cash-out settlement workflow."""

from __future__ import annotations

from .accounts import Account, UserContext, normalize_account_identifier
from .enums import AccountKind, ErrorKind, FiatCurrency, PaymentRail, WorkflowState
from .links import PaymentLink
from .primitives import NATIVE_TOKEN_ADDRESSES, AttemptId, ChainId, TokenAddress, TransactionHash
from .routes import BridgeRoute, CrossChainOption, RouteDecision
from .settlement import LiquidationAddress, RecoveryEntry, SettlementRecord

__all__ = [
    "NATIVE_TOKEN_ADDRESSES",
    "Account",
    "AccountKind",
    "AttemptId",
    "BridgeRoute",
    "ChainId",
    "CrossChainOption",
    "ErrorKind",
    "FiatCurrency",
    "LiquidationAddress",
    "PaymentLink",
    "PaymentRail",
    "RecoveryEntry",
    "RouteDecision",
    "SettlementRecord",
    "TokenAddress",
    "TransactionHash",
    "UserContext",
    "WorkflowState",
    "normalize_account_identifier",
]

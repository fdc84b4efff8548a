"""Cash-out settlement workflow."""

from __future__ import annotations

from .claim_executor import LinkClaimExecutor
from .orchestrator import FAILURE_KIND_BY_STATE, WorkflowOrchestrator, new_attempt_id
from .recovery import KEY_PREFIX, RecoveryLedger, recovery_key
from .registry import LiquidationAddressRegistry, rail_for
from .route_resolver import (
    EXCLUDED_BRIDGE_CHAINS,
    FALLBACK_CHAIN_ID,
    FALLBACK_TOKEN_ADDRESS,
    MIN_CROSS_CHAIN_VERSION,
    RouteResolver,
    sort_options,
)
from .status import WorkflowStatus
from .submitter import SettlementSubmitter

__all__ = [
    "EXCLUDED_BRIDGE_CHAINS",
    "FAILURE_KIND_BY_STATE",
    "FALLBACK_CHAIN_ID",
    "FALLBACK_TOKEN_ADDRESS",
    "KEY_PREFIX",
    "MIN_CROSS_CHAIN_VERSION",
    "LinkClaimExecutor",
    "LiquidationAddressRegistry",
    "RecoveryLedger",
    "RouteResolver",
    "SettlementSubmitter",
    "WorkflowOrchestrator",
    "WorkflowStatus",
    "new_attempt_id",
    "rail_for",
    "recovery_key",
]

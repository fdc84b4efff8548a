"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class AccountKind(StrEnum):
    IBAN = "iban"
    US = "us"


class PaymentRail(StrEnum):
    SEPA = "sepa"
    ACH = "ach"


class FiatCurrency(StrEnum):
    EUR = "eur"
    USD = "usd"


class WorkflowState(StrEnum):
    IDLE = "idle"
    RESOLVING_ROUTE = "resolving_route"
    RESOLVING_ADDRESS = "resolving_address"
    AWAITING_CLAIM = "awaiting_claim"
    RECORDING = "recording"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in {WorkflowState.DONE, WorkflowState.FAILED}


class ErrorKind(StrEnum):
    MISSING_CONTEXT = "missing_context"
    LINK_UNAVAILABLE = "link_unavailable"
    ROUTE_UNAVAILABLE = "route_unavailable"
    ADDRESS_PROVISIONING = "address_provisioning"
    CLAIM_EXECUTION = "claim_execution"
    SUBMISSION = "submission"

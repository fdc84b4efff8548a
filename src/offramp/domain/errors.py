"""Failure taxonomy of a cash-out attempt.

Every step raises one of these; the workflow orchestrator catches them once and
turns them into a ``FAILED`` status carrying the error kind.
"""

from __future__ import annotations

from typing import ClassVar

from offramp.domain.model.enums import ErrorKind


class CashoutError(RuntimeError):
    """Base class for user-visible settlement failures."""

    kind: ClassVar[ErrorKind]
    default_message: ClassVar[str] = (
        "We've encountered an error. Your funds are safe, please reach out to support"
    )

    def __init__(self, message: str | None = None, *, transaction_hash: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.transaction_hash = transaction_hash

    @property
    def user_message(self) -> str:
        return str(self)


class MissingContext(CashoutError):
    """User, session or account data needed for the cash-out is absent."""

    kind = ErrorKind.MISSING_CONTEXT
    default_message = "Missing account information"


class LinkUnavailable(MissingContext):
    """The payment link was already claimed or cannot be found."""

    kind = ErrorKind.LINK_UNAVAILABLE
    default_message = "Sorry, this link has been claimed already."


class RouteUnavailable(CashoutError):
    kind = ErrorKind.ROUTE_UNAVAILABLE
    default_message = "Offramp unavailable"


class AddressProvisioningFailure(CashoutError):
    kind = ErrorKind.ADDRESS_PROVISIONING
    default_message = "Could not prepare a deposit address for your bank account"


class ClaimExecutionFailure(CashoutError):
    """The on-chain claim did not go through; the link is still redeemable."""

    kind = ErrorKind.CLAIM_EXECUTION
    default_message = "Claiming the link failed. Your funds are safe and can be reclaimed"


class SubmissionFailure(CashoutError):
    """The claim succeeded but the bank-side record could not be written."""

    kind = ErrorKind.SUBMISSION
    default_message = "Recording the cash-out with the bank failed"

    def __init__(self, message: str | None = None, *, transaction_hash: str | None = None) -> None:
        text = message or self.default_message
        if transaction_hash:
            text = f"{text} (transaction {transaction_hash}); please contact support"
        super().__init__(text, transaction_hash=transaction_hash)


ERROR_BY_KIND: dict[ErrorKind, type[CashoutError]] = {
    cls.kind: cls
    for cls in (
        MissingContext,
        LinkUnavailable,
        RouteUnavailable,
        AddressProvisioningFailure,
        ClaimExecutionFailure,
        SubmissionFailure,
    )
}

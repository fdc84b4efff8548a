"""Sequence one cash-out attempt from route decision to partner settlement."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final
from uuid import uuid4

from offramp.domain.errors import (
    ERROR_BY_KIND,
    CashoutError,
    LinkUnavailable,
    MissingContext,
)
from offramp.domain.fees import fee_for, total_received
from offramp.domain.model import ErrorKind, PaymentLink, SettlementRecord, WorkflowState

from .status import WorkflowStatus

if TYPE_CHECKING:
    from decimal import Decimal

    from offramp.domain.model import (
        Account,
        LiquidationAddress,
        RouteDecision,
        UserContext,
    )
    from offramp.domain.ports import ClaimService, SettlementHistory

    from .claim_executor import LinkClaimExecutor
    from .recovery import RecoveryLedger
    from .registry import LiquidationAddressRegistry
    from .route_resolver import RouteResolver
    from .submitter import SettlementSubmitter

log = getLogger(__name__)

StatusListener = Callable[[WorkflowStatus], None]

# error kind reported for unexpected exceptions, by the state they escaped from
FAILURE_KIND_BY_STATE: Final[dict[WorkflowState, ErrorKind]] = {
    WorkflowState.IDLE: ErrorKind.MISSING_CONTEXT,
    WorkflowState.RESOLVING_ROUTE: ErrorKind.ROUTE_UNAVAILABLE,
    WorkflowState.RESOLVING_ADDRESS: ErrorKind.ADDRESS_PROVISIONING,
    WorkflowState.AWAITING_CLAIM: ErrorKind.CLAIM_EXECUTION,
    WorkflowState.RECORDING: ErrorKind.SUBMISSION,
}

_NEXT_STATE: Final[dict[WorkflowState, WorkflowState]] = {
    WorkflowState.IDLE: WorkflowState.RESOLVING_ROUTE,
    WorkflowState.RESOLVING_ROUTE: WorkflowState.RESOLVING_ADDRESS,
    WorkflowState.RESOLVING_ADDRESS: WorkflowState.AWAITING_CLAIM,
    WorkflowState.AWAITING_CLAIM: WorkflowState.RECORDING,
    WorkflowState.RECORDING: WorkflowState.DONE,
}


def new_attempt_id() -> str:
    return uuid4().hex


@dataclass(slots=True)
class _Selection:
    account: Account
    customer_id: str
    external_account_id: str


@dataclass
class WorkflowOrchestrator:
    """State machine over a single cash-out attempt.

    ``IDLE -> RESOLVING_ROUTE -> RESOLVING_ADDRESS -> AWAITING_CLAIM -> RECORDING -> DONE``,
    with ``FAILED`` reachable from every non-terminal state. Steps run strictly
    one after another and no state is entered twice; an instance handles exactly
    one attempt. Callers must not run two attempts for the same link at once.
    """

    route_resolver: RouteResolver
    registry: LiquidationAddressRegistry
    recovery: RecoveryLedger
    executor: LinkClaimExecutor
    submitter: SettlementSubmitter
    claims: ClaimService | None = None
    history: SettlementHistory | None = None
    attempt_id: str = field(default_factory=new_attempt_id)
    _listeners: list[StatusListener] = field(default_factory=list, repr=False)
    _status: WorkflowStatus = field(init=False, repr=False)
    _started: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self._status = WorkflowStatus(attempt_id=self.attempt_id)

    @property
    def status(self) -> WorkflowStatus:
        return self._status

    def add_listener(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def settle(
        self,
        link: PaymentLink | str,
        user_context: UserContext,
        *,
        recipient: str,
        usd_value: Decimal | None = None,
    ) -> WorkflowStatus:
        """Run the attempt to ``DONE`` or ``FAILED`` and return the final status.

        Step failures never propagate: they are reported through the returned
        status, which also keeps the link and any claim transaction hash so
        the user can reclaim or support can reconcile.
        """

        if self._started:
            raise RuntimeError(f"Attempt {self.attempt_id} was already started")
        self._started = True
        self._update(link=link if isinstance(link, str) else link.link)

        try:
            self._run(link, user_context, recipient=recipient, usd_value=usd_value)
        except CashoutError as exc:
            self._fail(exc.kind, exc.user_message, exc.transaction_hash)
        except Exception:
            kind = FAILURE_KIND_BY_STATE[self._status.state]
            log.exception("Unexpected error while %s", self._status.state)
            self._fail(kind, ERROR_BY_KIND[kind]().user_message, None)
        return self._status

    def _run(
        self,
        link: PaymentLink | str,
        user_context: UserContext,
        *,
        recipient: str,
        usd_value: Decimal | None,
    ) -> None:
        selection = _select_account(user_context, recipient)
        payment_link = self._load_link(link)

        self._advance()
        decision = self.route_resolver.resolve(payment_link)

        self._advance()
        liquidation_address = self.registry.resolve_or_create(
            selection.customer_id,
            decision.chain_name,
            decision.token_name,
            selection.external_account_id,
            selection.account.kind,
        )

        self._advance()
        tx_hash = self._claim(decision, liquidation_address, payment_link)

        self._advance()
        record = self._build_record(
            payment_link,
            decision,
            liquidation_address,
            selection,
            user_context,
            tx_hash=tx_hash,
            usd_value=usd_value,
        )
        self._update(record=record)
        self._remember(record)
        self.submitter.submit(record)

        self._advance()

    def _load_link(self, link: PaymentLink | str) -> PaymentLink:
        if isinstance(link, PaymentLink):
            payment_link = link
        else:
            if self.claims is None:
                raise MissingContext("No claim service configured to look up the link")
            try:
                payment_link = self.claims.get_link_details(link)
            except Exception as exc:
                raise LinkUnavailable("Payment link could not be found") from exc
        if payment_link.claimed:
            raise LinkUnavailable()
        return payment_link

    def _claim(
        self,
        decision: RouteDecision,
        liquidation_address: LiquidationAddress,
        link: PaymentLink,
    ) -> str:
        self.recovery.write(self.attempt_id, link.link)
        tx_hash = self.executor.claim(decision, liquidation_address, link)
        self._update(transaction_hash=tx_hash)
        try:
            self.recovery.clear(self.attempt_id)
        except Exception:  # noqa: BLE001
            log.warning(
                "Could not clear recovery entry for attempt %s", self.attempt_id, exc_info=True
            )
        return tx_hash

    def _remember(self, record: SettlementRecord) -> None:
        if self.history is None:
            return
        try:
            self.history.add(record)
        except Exception:  # noqa: BLE001
            log.warning("Could not store settlement %s locally", record.transaction_hash, exc_info=True)

    def _build_record(
        self,
        link: PaymentLink,
        decision: RouteDecision,
        liquidation_address: LiquidationAddress,
        selection: _Selection,
        user_context: UserContext,
        *,
        tx_hash: str,
        usd_value: Decimal | None,
    ) -> SettlementRecord:
        return SettlementRecord(
            link=link.link,
            transaction_hash=tx_hash,
            liquidation_address=liquidation_address,
            customer_id=selection.customer_id,
            external_account_id=selection.external_account_id,
            destination_chain_id=decision.destination_chain_id,
            destination_currency=decision.token_name,
            usd_value=usd_value,
            fee=fee_for(selection.account.kind),
            received_amount=(
                None if usd_value is None else total_received(usd_value, selection.account.kind)
            ),
            user_id=user_context.user_id,
            account_identifier=selection.account.identifier,
            account_id=selection.account.account_id,
        )

    def _advance(self) -> None:
        current = self._status.state
        following = _NEXT_STATE[current]
        log.info("Attempt %s: %s -> %s", self.attempt_id, current, following)
        self._update(state=following)

    def _fail(self, kind: ErrorKind, message: str, transaction_hash: str | None) -> None:
        log.error("Attempt %s failed in %s: %s (%s)", self.attempt_id, self._status.state, kind, message)
        self._update(
            state=WorkflowState.FAILED,
            error_kind=kind,
            error_message=message,
            transaction_hash=self._status.transaction_hash or transaction_hash,
        )

    def _update(self, **changes: object) -> None:
        self._status = dataclasses.replace(self._status, **changes)  # type: ignore[arg-type]
        for listener in self._listeners:
            listener(self._status)


def _select_account(user_context: UserContext, recipient: str) -> _Selection:
    if not recipient or not recipient.strip():
        raise MissingContext("No bank account selected")
    account = user_context.find_account(recipient)
    if account is None:
        raise MissingContext()
    if not user_context.customer_id or not account.external_account_id:
        raise MissingContext()
    return _Selection(
        account=account,
        customer_id=user_context.customer_id,
        external_account_id=account.external_account_id,
    )

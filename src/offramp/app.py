"""Application entry points wiring the settlement workflow to configured adapters."""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from offramp.adapters.banking import BankingClient
from offramp.adapters.claims import ClaimClient
from offramp.adapters.identity import IdentityClient
from offramp.adapters.local_storage import JsonFileKeyValueStore
from offramp.adapters.routing import RoutingClient
from offramp.adapters.sqlalchemy import (
    SqlAlchemyKeyValueStore,
    SqlAlchemySettlementHistory,
    is_started,
    startup,
)
from offramp.config import get_settlement_config
from offramp.domain.errors import MissingContext
from offramp.domain.settlement import (
    LinkClaimExecutor,
    LiquidationAddressRegistry,
    RecoveryLedger,
    RouteResolver,
    SettlementSubmitter,
    WorkflowOrchestrator,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import timedelta
    from decimal import Decimal

    from offramp.domain.model import PaymentLink, RecoveryEntry, SettlementRecord
    from offramp.domain.ports import (
        BankingPartner,
        ClaimService,
        IdentityService,
        KeyValueStore,
        RouteService,
        SettlementHistory,
    )
    from offramp.domain.settlement import WorkflowStatus

log = getLogger(__name__)

STALE_ENTRY_ADVICE = (
    "claim may have succeeded without confirmation; "
    "check on-chain status before resubmitting"
)


@dataclass(frozen=True, slots=True)
class RecoveryReport:
    """Outcome of checking one stale recovery entry against the claim service."""

    entry: RecoveryEntry
    claimed: bool | None = None
    error: str | None = None

    @property
    def advice(self) -> str:
        if self.claimed is None:
            return STALE_ENTRY_ADVICE
        if self.claimed:
            return "link was claimed; reconcile the settlement with the banking partner"
        return "link is still unclaimed; the holder can reclaim it"


def _ensure_database() -> None:
    if not is_started():
        startup()


def default_recovery_store() -> KeyValueStore:
    """Return the key/value store selected by ``OFFRAMP_RECOVERY_BACKEND``."""

    if get_settlement_config().recovery_backend == "file":
        return JsonFileKeyValueStore()
    _ensure_database()
    return SqlAlchemyKeyValueStore()


def default_settlement_history() -> SettlementHistory:
    _ensure_database()
    return SqlAlchemySettlementHistory()


def build_orchestrator(
    *,
    banking: BankingPartner,
    routing: RouteService,
    claims: ClaimService,
    store: KeyValueStore,
    history: SettlementHistory | None = None,
) -> WorkflowOrchestrator:
    return WorkflowOrchestrator(
        route_resolver=RouteResolver(routing),
        registry=LiquidationAddressRegistry(banking),
        recovery=RecoveryLedger(store),
        executor=LinkClaimExecutor(claims),
        submitter=SettlementSubmitter(banking),
        claims=claims,
        history=history,
    )


def settle_cashout(  # noqa: PLR0913
    link: PaymentLink | str,
    *,
    session_token: str,
    recipient: str,
    usd_value: Decimal | None = None,
    identity: IdentityService | None = None,
    banking: BankingPartner | None = None,
    routing: RouteService | None = None,
    claims: ClaimService | None = None,
    store: KeyValueStore | None = None,
    history: SettlementHistory | None = None,
    listener: Callable[[WorkflowStatus], None] | None = None,
) -> WorkflowStatus:
    """Cash out ``link`` into the bank account identified by ``recipient``.

    Adapters default to the configured HTTP clients and local storage. The
    returned status is terminal; step failures are reported through it.
    Failing to load the user's account information raises ``MissingContext``
    before any attempt is started. HTTP clients created here are closed on return.
    """

    with ExitStack() as owned:
        effective_identity = identity or owned.enter_context(IdentityClient())
        try:
            user_context = effective_identity.get_user_context(session_token)
        except Exception as exc:
            raise MissingContext("Could not load account information") from exc

        orchestrator = build_orchestrator(
            banking=banking or owned.enter_context(BankingClient()),
            routing=routing or owned.enter_context(RoutingClient()),
            claims=claims or owned.enter_context(ClaimClient()),
            store=store if store is not None else default_recovery_store(),
            history=history if history is not None else default_settlement_history(),
        )
        if listener is not None:
            orchestrator.add_listener(listener)

        log.info(
            "Starting cash-out attempt %s for user %s",
            orchestrator.attempt_id,
            user_context.user_id,
        )
        status = orchestrator.settle(link, user_context, recipient=recipient, usd_value=usd_value)
    log.info(
        "Finished cash-out attempt %s: state=%s, tx=%s",
        status.attempt_id,
        status.state,
        status.transaction_hash,
    )
    return status


def resubmit_settlement(record: SettlementRecord, *, banking: BankingPartner | None = None) -> None:
    """Submit a stored record again; the claim is never repeated."""

    if banking is not None:
        SettlementSubmitter(banking).submit(record)
        return
    with BankingClient() as client:
        SettlementSubmitter(client).submit(record)


def find_settlement(
    transaction_hash: str, *, history: SettlementHistory | None = None
) -> SettlementRecord | None:
    effective_history = history if history is not None else default_settlement_history()
    wanted = transaction_hash.casefold()
    for record in effective_history.list():
        if record.transaction_hash.casefold() == wanted:
            return record
    return None


def list_stale_recovery_entries(
    max_age: timedelta | None = None,
    *,
    store: KeyValueStore | None = None,
) -> list[RecoveryEntry]:
    ledger = RecoveryLedger(store if store is not None else default_recovery_store())
    threshold = max_age if max_age is not None else get_settlement_config().stale_after
    return ledger.list_stale(threshold)


def reconcile_recovery_entries(
    *,
    claims: ClaimService | None = None,
    store: KeyValueStore | None = None,
    max_age: timedelta | None = None,
) -> list[RecoveryReport]:
    """Look up the claim status of every stale recovery entry.

    Lookup failures are reported per entry rather than aborting the sweep.
    """

    entries = list_stale_recovery_entries(max_age, store=store)
    if not entries:
        return []
    reports: list[RecoveryReport] = []
    with ExitStack() as owned:
        effective_claims = claims or owned.enter_context(ClaimClient())
        for entry in entries:
            try:
                details = effective_claims.get_link_details(entry.link)
            except Exception as exc:  # noqa: BLE001
                log.warning("Could not look up link for attempt %s: %s", entry.attempt_id, exc)
                reports.append(RecoveryReport(entry=entry, error=str(exc) or type(exc).__name__))
                continue
            reports.append(RecoveryReport(entry=entry, claimed=details.claimed))
    return reports


def list_settlement_history(
    limit: int | None = None,
    *,
    history: SettlementHistory | None = None,
) -> list[SettlementRecord]:
    effective_history = history if history is not None else default_settlement_history()
    return list(effective_history.list(limit=limit))

"""Observable status of a single cash-out attempt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from offramp.domain.model import WorkflowState

if TYPE_CHECKING:
    from offramp.domain.model import ErrorKind, SettlementRecord


@dataclass(frozen=True, kw_only=True)
class WorkflowStatus:
    attempt_id: str
    state: WorkflowState = WorkflowState.IDLE
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    transaction_hash: str | None = None
    link: str | None = None
    record: SettlementRecord | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def succeeded(self) -> bool:
        return self.state is WorkflowState.DONE

    @property
    def claim_obtained(self) -> bool:
        """Whether the claim went through and produced a transaction hash."""
        return self.transaction_hash is not None

    @property
    def reclaim_available(self) -> bool:
        """Whether a failed attempt left the user something to reclaim or reconcile.

        This holds for every failure once the link is known. Use ``claim_obtained``
        to tell the two cases apart: without a claim the link is still redeemable
        by its holder, with one the hash is what support needs to reconcile the
        bank-side record.
        """
        return self.state is WorkflowState.FAILED and (
            self.link is not None or self.transaction_hash is not None
        )

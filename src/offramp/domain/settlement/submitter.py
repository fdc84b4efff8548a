"""Report completed settlements to the banking partner."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from offramp.domain.errors import SubmissionFailure

if TYPE_CHECKING:
    from offramp.domain.model import SettlementRecord
    from offramp.domain.ports import BankingPartner

log = getLogger(__name__)


@dataclass(slots=True)
class SettlementSubmitter:
    """Send a finished settlement to the partner ledger.

    The partner deduplicates on (link, transaction hash), so the same record may
    be submitted again after a failure without touching the claim.
    """

    banking: BankingPartner

    def submit(self, record: SettlementRecord) -> None:
        try:
            self.banking.submit_settlement(record)
        except Exception as exc:
            log.exception("Submitting settlement for tx %s failed", record.transaction_hash)
            raise SubmissionFailure(transaction_hash=record.transaction_hash) from exc
        log.info("Settlement for tx %s recorded", record.transaction_hash)

from __future__ import annotations

import pytest

from offramp.domain.errors import SubmissionFailure
from offramp.domain.settlement import SettlementSubmitter
from tests.helpers.settlement import FakeBankingPartner, make_record


def test_submit_forwards_record() -> None:
    banking = FakeBankingPartner()
    record = make_record()

    SettlementSubmitter(banking).submit(record)

    assert banking.submitted == [record]


def test_submit_failure_carries_transaction_hash() -> None:
    banking = FakeBankingPartner(submit_errors=[ConnectionError("reset")])

    with pytest.raises(SubmissionFailure) as excinfo:
        SettlementSubmitter(banking).submit(make_record(transaction_hash="0xfeed"))

    assert excinfo.value.transaction_hash == "0xfeed"
    assert "0xfeed" in str(excinfo.value)
    assert banking.submitted == []

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from offramp.adapters.sqlalchemy import SqlAlchemyKeyValueStore, SqlAlchemySettlementHistory
from offramp.adapters.sqlalchemy.repositories import (
    SqlAlchemyKeyValueRepository,
    SqlAlchemySettlementRepository,
)
from offramp.domain.settlement import RecoveryLedger
from tests.helpers.settlement import make_record

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session

    from offramp.adapters.sqlalchemy import SqlAlchemyUnitOfWork


def test_key_value_repository_upserts(sqlite_session: Session) -> None:
    repo = SqlAlchemyKeyValueRepository(sqlite_session)

    repo.put("a", "1")
    repo.put("a", "2")
    repo.put("b", "3")
    sqlite_session.commit()

    assert repo.get("a") == "2"
    assert repo.keys() == ["a", "b"]


def test_key_prefix_is_matched_literally(sqlite_session: Session) -> None:
    repo = SqlAlchemyKeyValueRepository(sqlite_session)
    repo.put("TEMP_CASHOUT_LINK_1", "x")
    repo.put("TEMPXCASHOUT_LINK_2", "y")
    repo.put("other", "z")

    assert repo.keys("TEMP_CASHOUT_LINK_") == ["TEMP_CASHOUT_LINK_1"]


def test_key_value_store_commits_each_operation(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    store = SqlAlchemyKeyValueStore(sqlite_unit_of_work)

    store.put("k", "v")
    assert SqlAlchemyKeyValueStore(sqlite_unit_of_work).get("k") == "v"

    store.remove("k")
    store.remove("missing")
    assert store.get("k") is None
    assert store.keys() == []


def test_recovery_ledger_on_sqlalchemy_store(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    ledger = RecoveryLedger(SqlAlchemyKeyValueStore(sqlite_unit_of_work))

    ledger.write("attempt-1", "https://link")
    entries = RecoveryLedger(SqlAlchemyKeyValueStore(sqlite_unit_of_work)).entries()

    assert [(entry.attempt_id, entry.link) for entry in entries] == [("attempt-1", "https://link")]
    ledger.clear("attempt-1")
    assert ledger.entries() == []


def test_settlement_repository_round_trip(sqlite_session: Session) -> None:
    repo = SqlAlchemySettlementRepository(sqlite_session)
    record = make_record(usd_value=Decimal("25.123456"))

    repo.add(record)
    sqlite_session.commit()

    (stored,) = repo.list()
    assert stored == record
    assert stored.received_amount == Decimal("24.623456")
    assert stored.created_at.tzinfo is not None


def test_settlement_repository_ignores_duplicates(sqlite_session: Session) -> None:
    repo = SqlAlchemySettlementRepository(sqlite_session)

    repo.add(make_record())
    repo.add(make_record())

    assert len(repo.list()) == 1
    assert repo.exists(link=make_record().link, transaction_hash="0xabc")


def test_settlement_history_lists_newest_first(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    history = SqlAlchemySettlementHistory(sqlite_unit_of_work)
    history.add(make_record(transaction_hash="0x1", created_at=datetime(2025, 1, 1, tzinfo=UTC)))
    history.add(make_record(transaction_hash="0x2", created_at=datetime(2025, 2, 1, tzinfo=UTC)))
    history.add(
        make_record(
            transaction_hash="0x3", created_at=datetime(2025, 3, 1, tzinfo=UTC), usd_value=None
        )
    )

    records = history.list()
    assert [record.transaction_hash for record in records] == ["0x3", "0x2", "0x1"]
    assert records[0].usd_value is None
    assert records[0].received_amount is None
    assert [record.transaction_hash for record in history.list(limit=2)] == ["0x3", "0x2"]

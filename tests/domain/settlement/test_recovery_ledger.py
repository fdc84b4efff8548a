from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import pytest

from offramp.domain.settlement import KEY_PREFIX, RecoveryLedger, recovery_key
from offramp.domain.settlement.recovery import decode_entry
from tests.helpers.settlement import InMemoryKeyValueStore

NOW = datetime(2025, 3, 1, 9, 30, tzinfo=UTC)


def test_recovery_key_format() -> None:
    assert recovery_key("abc") == "TEMP_CASHOUT_LINK_abc"
    assert KEY_PREFIX == "TEMP_CASHOUT_LINK_"


def test_entry_lifecycle() -> None:
    store = InMemoryKeyValueStore()
    ledger = RecoveryLedger(store, clock=lambda: NOW)

    assert ledger.get("a1") is None
    ledger.write("a1", "https://link")
    entry = ledger.get("a1")
    assert entry is not None
    assert entry.link == "https://link"
    assert entry.created_at == NOW

    ledger.clear("a1")
    assert ledger.get("a1") is None
    assert store.data == {}


def test_entry_survives_a_new_ledger_instance() -> None:
    store = InMemoryKeyValueStore()
    RecoveryLedger(store, clock=lambda: NOW).write("a1", "https://link")

    restarted = RecoveryLedger(store)

    assert [entry.attempt_id for entry in restarted.entries()] == ["a1"]


def test_stored_value_is_link_and_epoch_millis() -> None:
    store = InMemoryKeyValueStore()
    RecoveryLedger(store, clock=lambda: NOW).write("a1", "https://link")

    payload = json.loads(store.data["TEMP_CASHOUT_LINK_a1"])

    assert payload == {"link": "https://link", "createdAt": int(NOW.timestamp() * 1000)}


def test_list_stale_uses_age_threshold() -> None:
    store = InMemoryKeyValueStore()
    RecoveryLedger(store, clock=lambda: NOW - timedelta(minutes=30)).write("old", "l-old")
    RecoveryLedger(store, clock=lambda: NOW - timedelta(minutes=1)).write("new", "l-new")
    ledger = RecoveryLedger(store, clock=lambda: NOW)

    stale = ledger.list_stale(timedelta(minutes=10))

    assert [entry.attempt_id for entry in stale] == ["old"]
    assert stale[0].age(now=NOW) == pytest.approx(1800)


def test_unreadable_entries_are_skipped() -> None:
    store = InMemoryKeyValueStore(
        {
            "TEMP_CASHOUT_LINK_bad": "not json",
            "TEMP_CASHOUT_LINK_partial": json.dumps({"link": "x"}),
            "unrelated": "value",
        }
    )
    RecoveryLedger(store, clock=lambda: NOW).write("good", "l-good")

    entries = RecoveryLedger(store).entries()

    assert [entry.attempt_id for entry in entries] == ["good"]


def test_decode_entry_rejects_missing_fields() -> None:
    with pytest.raises(ValueError, match="Malformed"):
        decode_entry("a1", json.dumps({"createdAt": 1}))

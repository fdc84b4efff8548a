"""Crash-safe breadcrumbs for links whose claim may be in flight."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from offramp.domain.model import RecoveryEntry

if TYPE_CHECKING:
    from datetime import timedelta

    from offramp.domain.ports import KeyValueStore

log = getLogger(__name__)

KEY_PREFIX: Final[str] = "TEMP_CASHOUT_LINK_"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def recovery_key(attempt_id: str) -> str:
    return f"{KEY_PREFIX}{attempt_id}"


def encode_entry(entry: RecoveryEntry) -> str:
    return json.dumps(
        {"link": entry.link, "createdAt": int(entry.created_at.timestamp() * 1000)}
    )


def decode_entry(attempt_id: str, payload: str) -> RecoveryEntry:
    data = json.loads(payload)
    if not isinstance(data, dict) or "link" not in data or "createdAt" not in data:
        raise ValueError(f"Malformed recovery entry for attempt {attempt_id}")
    created_at = datetime.fromtimestamp(int(data["createdAt"]) / 1000, tz=UTC)
    return RecoveryEntry(attempt_id=attempt_id, link=str(data["link"]), created_at=created_at)


@dataclass(slots=True)
class RecoveryLedger:
    """Record of links between "about to claim" and "claim hash obtained".

    Local to the device and best effort: it exists so that a link whose claim
    was interrupted can be found again after a crash, it is not a source of
    truth about the claim itself.
    """

    store: KeyValueStore
    clock: Clock = field(default=_utcnow)

    def write(self, attempt_id: str, link: str) -> RecoveryEntry:
        entry = RecoveryEntry(attempt_id=attempt_id, link=link, created_at=self.clock())
        self.store.put(recovery_key(attempt_id), encode_entry(entry))
        log.info("Saved recovery entry %s", recovery_key(attempt_id))
        return entry

    def clear(self, attempt_id: str) -> None:
        self.store.remove(recovery_key(attempt_id))
        log.info("Removed recovery entry %s", recovery_key(attempt_id))

    def get(self, attempt_id: str) -> RecoveryEntry | None:
        payload = self.store.get(recovery_key(attempt_id))
        if payload is None:
            return None
        return decode_entry(attempt_id, payload)

    def entries(self) -> list[RecoveryEntry]:
        entries: list[RecoveryEntry] = []
        for key in self.store.keys(KEY_PREFIX):
            attempt_id = key.removeprefix(KEY_PREFIX)
            payload = self.store.get(key)
            if payload is None:
                continue
            try:
                entries.append(decode_entry(attempt_id, payload))
            except (ValueError, TypeError):
                log.warning("Skipping unreadable recovery entry %s", key)
        return sorted(entries, key=lambda entry: entry.created_at)

    def list_stale(self, max_age: timedelta) -> list[RecoveryEntry]:
        cutoff = self.clock() - max_age
        return [entry for entry in self.entries() if entry.created_at <= cutoff]

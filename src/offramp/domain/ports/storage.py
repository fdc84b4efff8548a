"""Ports for local persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from offramp.domain.model import SettlementRecord


@runtime_checkable
class KeyValueStore(Protocol):
    """Durable string store, atomic per key."""

    def put(self, key: str, value: str) -> None: ...

    def get(self, key: str) -> str | None: ...

    def remove(self, key: str) -> None: ...

    def keys(self, prefix: str = "") -> Sequence[str]: ...


@runtime_checkable
class SettlementHistory(Protocol):
    """Local log of settlements, kept for manual reconciliation."""

    def add(self, record: SettlementRecord) -> None: ...

    def list(self, *, limit: int | None = None) -> Sequence[SettlementRecord]: ...

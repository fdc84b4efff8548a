"""Port implementations that open one unit of work per operation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .unit_of_work import SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from offramp.domain.model import SettlementRecord

log = logging.getLogger(__name__)

type UnitOfWorkFactory = Callable[[], SqlAlchemyUnitOfWork]


@dataclass(slots=True)
class SqlAlchemyKeyValueStore:
    """KeyValueStore over the ``key_value`` table; every write commits immediately."""

    uow_factory: UnitOfWorkFactory = SqlAlchemyUnitOfWork

    def put(self, key: str, value: str) -> None:
        with self.uow_factory() as uow:
            uow.repositories.key_values.put(key, value)
            uow.commit()

    def get(self, key: str) -> str | None:
        with self.uow_factory() as uow:
            return uow.repositories.key_values.get(key)

    def remove(self, key: str) -> None:
        with self.uow_factory() as uow:
            uow.repositories.key_values.remove(key)
            uow.commit()

    def keys(self, prefix: str = "") -> list[str]:
        with self.uow_factory() as uow:
            return uow.repositories.key_values.keys(prefix)


@dataclass(slots=True)
class SqlAlchemySettlementHistory:
    uow_factory: UnitOfWorkFactory = SqlAlchemyUnitOfWork

    def add(self, record: SettlementRecord) -> None:
        with self.uow_factory() as uow:
            uow.repositories.settlements.add(record)
            uow.commit()
        log.debug("Recorded settlement for transaction %s", record.transaction_hash)

    def list(self, *, limit: int | None = None) -> list[SettlementRecord]:
        with self.uow_factory() as uow:
            return uow.repositories.settlements.list(limit=limit)


if TYPE_CHECKING:
    from offramp.domain.ports import KeyValueStore, SettlementHistory

    _kv_check: KeyValueStore = SqlAlchemyKeyValueStore()
    _history_check: SettlementHistory = SqlAlchemySettlementHistory()

"""SQLAlchemy persistence for recovery entries and settlement history."""

from __future__ import annotations

from .mappings import key_value_table, metadata, settlement_table
from .stores import SqlAlchemyKeyValueStore, SqlAlchemySettlementHistory
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyKeyValueStore",
    "SqlAlchemySettlementHistory",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "configured_engine",
    "is_started",
    "key_value_table",
    "metadata",
    "settlement_table",
    "shutdown",
    "startup",
]

"""SQLAlchemy engine lifecycle and unit of work for local settlement storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from offramp.adapters.sqlalchemy.migrations import upgrade_head
from offramp.adapters.sqlalchemy.repositories import (
    SqlAlchemyKeyValueRepository,
    SqlAlchemySettlementRepository,
)
from offramp.config import get_database_config

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call offramp.adapters.sqlalchemy."
                "startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Create the engine (unless one is given) and migrate it to the latest schema."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    upgrade_head(engine=resolved_engine)
    _STATE.engine = resolved_engine


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


@dataclass(frozen=True, slots=True)
class SettlementRepositories:
    key_values: SqlAlchemyKeyValueRepository
    settlements: SqlAlchemySettlementRepository


class SqlAlchemyUnitOfWork:
    """Session scope exposing the key/value and settlement repositories."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None
        self._repositories: SettlementRepositories | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = self.session_factory()
        self._repositories = SettlementRepositories(
            key_values=SqlAlchemyKeyValueRepository(self._session),
            settlements=SqlAlchemySettlementRepository(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self._session = None
        self._repositories = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @property
    def repositories(self) -> SettlementRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

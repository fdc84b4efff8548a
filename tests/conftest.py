from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from offramp.adapters.sqlalchemy.migrations import upgrade_head
from offramp.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def offramp_env(monkeypatch: pytest.MonkeyPatch, tmp_path: object) -> None:
    """Point every service at a local base URL and keep data under ``tmp_path``."""

    monkeypatch.setenv("BANKING_API_URL", "https://bank.test/v0/")
    monkeypatch.setenv("BANKING_API_KEY", "bank-key")
    monkeypatch.setenv("ROUTING_API_URL", "https://router.test/")
    monkeypatch.setenv("CLAIM_API_URL", "https://claims.test/")
    monkeypatch.setenv("CLAIM_API_KEY", "claim-key")
    monkeypatch.setenv("IDENTITY_API_URL", "https://identity.test/")
    monkeypatch.setenv("OFFRAMP_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("ROUTING_API_KEY", raising=False)
    monkeypatch.delenv("OFFRAMP_RECOVERY_BACKEND", raising=False)
    monkeypatch.delenv("OFFRAMP_STALE_AFTER_SECONDS", raising=False)

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, inspect

from offramp.adapters.sqlalchemy import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    assert not is_started()
    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_startup_migrates_schema() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine)

    tables = set(inspect(engine).get_table_names())
    assert {"key_value", "settlement", "alembic_version"} <= tables
    columns = {column["name"] for column in inspect(engine).get_columns("settlement")}
    assert "received_amount" in columns


def test_rollback_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyUnitOfWork() as uow:
        uow.repositories.key_values.put("k", "v")
        raise RuntimeError("abort")

    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.key_values.get("k") is None


def test_session_is_closed_after_exit(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    uow = SqlAlchemyUnitOfWork()
    with uow:
        pass

    with pytest.raises(StartupError):
        _ = uow.session

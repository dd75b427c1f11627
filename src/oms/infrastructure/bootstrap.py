"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from oms.domain.repository.unit_of_work import UnitOfWork
from oms.infrastructure.config import Settings
from oms.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from oms.infrastructure.persistence.tables import Base

UnitOfWorkFactory = Callable[[], UnitOfWork]


def build_engine(settings: Settings) -> Engine:
    url = make_url(settings.database_url)
    kwargs: dict = {"echo": settings.sql_echo}
    if url.get_backend_name() == "sqlite":
        # Request handlers run on a worker thread pool.
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(url, **kwargs)
    if url.get_backend_name() == "sqlite":
        _begin_sqlite_transactions_explicitly(engine)
    return engine


def _begin_sqlite_transactions_explicitly(engine: Engine) -> None:
    """Have SQLAlchemy emit BEGIN instead of the pysqlite driver.

    pysqlite only opens a transaction at the first write, so a SAVEPOINT
    taken before it would start (and on release, commit) a transaction of
    its own.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")


def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def unit_of_work_factory(engine: Engine) -> UnitOfWorkFactory:
    sessions = session_factory(engine)
    return lambda: SqlUnitOfWork(sessions)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


class Container:
    """Lazily built engine and unit-of-work factory for one process."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._engine: Engine | None = None
        self._uow_factory: UnitOfWorkFactory | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = build_engine(self.settings)
        return self._engine

    def unit_of_work(self) -> UnitOfWork:
        if self._uow_factory is None:
            self._uow_factory = unit_of_work_factory(self.engine)
        return self._uow_factory()

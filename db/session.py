"""
db/session.py

Catalog store: SQLAlchemy engine and session factory with an explicit lifecycle.

The store is constructed once by the application (or a test), opened before
use and disposed on shutdown. Nothing here is module-level state; callers get
the store injected and ask it for sessions.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db.base import Base
from db.config import ensure_sqlite_directory, is_sqlite_url


class StoreNotOpenError(RuntimeError):
    """Raised when a closed store is asked for a session or engine."""


def _install_sqlite_pragmas(engine: Engine) -> None:
    # pysqlite issues its own BEGIN lazily and never for SAVEPOINT; take over
    # transaction demarcation so begin_nested() works per row.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str, *, echo: bool = False) -> Engine:
    """
    Create an engine for the catalog database.

    SQLite is the embedded default. In-memory URLs share one connection so every
    session sees the same database.
    """

    if not is_sqlite_url(database_url):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    ensure_sqlite_directory(database_url)
    kwargs: dict[str, Any] = {
        "echo": echo,
        "connect_args": {"check_same_thread": False},
    }
    if database_url in {"sqlite://", "sqlite:///:memory:"}:
        kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    _install_sqlite_pragmas(engine)
    return engine


class CatalogStore:
    """
    Owner of the catalog engine and session factory.
    """

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self._database_url = database_url
        self._echo = echo
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def database_url(self) -> str:
        return self._database_url

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StoreNotOpenError("Catalog store is not open.")
        return self._engine

    def open(self) -> CatalogStore:
        if self._engine is None:
            self._engine = create_db_engine(self._database_url, echo=self._echo)
            self._session_factory = sessionmaker(
                bind=self._engine,
                class_=Session,
                autoflush=False,
                expire_on_commit=False,
            )
        return self

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None

    def session(self) -> Session:
        """Return a new session bound to this store."""
        if self._session_factory is None:
            raise StoreNotOpenError("Catalog store is not open.")
        return self._session_factory()

    def create_schema(self) -> None:
        import db.models  # noqa: F401  registers all ORM models on Base.metadata

        Base.metadata.create_all(self.engine)

    def missing_tables(self) -> set[str]:
        """Return table names registered on Base.metadata but absent from the database."""
        import db.models  # noqa: F401

        actual = set(inspect(self.engine).get_table_names())
        return set(Base.metadata.tables.keys()) - actual

    def __enter__(self) -> CatalogStore:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def get_store(request: Request) -> CatalogStore:
    """FastAPI dependency returning the store opened in the app lifespan."""
    return request.app.state.store


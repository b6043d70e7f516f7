"""
Engine, sessions and the declarative base.

One process-wide ``DatabaseManager`` (``db``) owns the engine. Request
handlers get sessions through ``get_db``; scripts and tests use
``db.session()`` directly. Either way the unit of work commits when the
block exits cleanly and rolls back otherwise.

SQLite (local development and the test suite) runs on a single shared
connection with foreign keys on and driver-level autocommit off, so that
``Session.begin_nested()`` SAVEPOINTs behave as they do on PostgreSQL.
The stats recompute after a review change relies on that.
"""

import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import get_settings


class Base(DeclarativeBase):
    pass


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _engine_options(url: str) -> dict[str, Any]:
    if _is_sqlite(url):
        # In-memory databases vanish with their connection, so share exactly one
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}

    settings = get_settings()
    return {
        "poolclass": QueuePool,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
    }


def _configure_sqlite(engine: Engine) -> None:
    """Enforce foreign keys and hand transaction control to SQLAlchemy."""

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_engine_for_url(url: str, echo: bool = False) -> Engine:
    engine = create_engine(url, echo=echo, **_engine_options(url))
    if _is_sqlite(url):
        _configure_sqlite(engine)
    return engine


class DatabaseManager:
    """
    Process-wide holder of the engine and session factory.

    ``DatabaseManager()`` always returns the same instance. Nothing connects
    until ``initialize()`` runs (application startup); ``reset()`` disposes
    the engine so tests can start over with a different URL.
    """

    _instance: Optional["DatabaseManager"] = None

    def __new__(cls) -> "DatabaseManager":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.engine = None
            instance.SessionLocal = None
            cls._instance = instance
        return cls._instance

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    def initialize(self, database_url: str | None = None) -> None:
        """Create the engine. Later calls are ignored until ``reset()``."""
        if self.is_initialized:
            return
        settings = get_settings()
        self.engine = create_engine_for_url(
            database_url or settings.database_url, echo=settings.debug
        )
        self.SessionLocal = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    def reset(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.SessionLocal = None

    def create_all_tables(self) -> None:
        """Create every mapped table. Migrations are the production path."""
        from . import models  # noqa: F401  # registers the mappers on Base.metadata

        Base.metadata.create_all(bind=self._require_engine())

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        self._require_engine()
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> dict:
        """
        Round-trip a ``SELECT 1``.

        Returns:
            ``{"healthy": bool, "latency_ms": float, "error": str | None}``
        """
        if not self.is_initialized:
            return {"healthy": False, "latency_ms": 0, "error": "Database not initialized"}

        started = time.perf_counter()
        error = None
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            error = str(e)
        latency_ms = round((time.perf_counter() - started) * 1000, 2)
        return {"healthy": error is None, "latency_ms": latency_ms, "error": error}

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")
        return self.engine


db = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one committed-or-rolled-back session per request."""
    with db.session() as session:
        yield session


__all__ = ["Base", "DatabaseManager", "create_engine_for_url", "db", "get_db"]

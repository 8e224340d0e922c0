"""Database engine and session management.

Engines are cached per URL so every request reuses one connection pool.
In-memory SQLite uses StaticPool so all threads see the same database.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from thumbsmith.db.schema import Base

# Seconds a SQLite writer waits for the database lock
SQLITE_BUSY_TIMEOUT = 30

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}


def _use_immediate_transactions(engine: Engine) -> None:
    """Make SQLite take the write lock at BEGIN.

    pysqlite defers BEGIN until the first write, so concurrent writers can
    deadlock on lock upgrade. BEGIN IMMEDIATE makes them queue on the busy
    timeout instead.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def get_engine(url: str) -> Engine:
    """Get a cached SQLAlchemy engine for a database URL.

    Args:
        url: SQLAlchemy database URL.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    if url in _engine_cache:
        return _engine_cache[url]

    kwargs: dict = {"echo": False, "pool_pre_ping": True}
    in_memory = ":memory:" in url or url in ("sqlite://", "sqlite:///")
    if url.startswith("sqlite"):
        # SQLite thread-safety config for FastAPI's threadpool
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT}
        if in_memory:
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    if url.startswith("sqlite") and not in_memory:
        _use_immediate_transactions(engine)
    _engine_cache[url] = engine
    return engine


def init_db(engine: Engine) -> None:
    """Create tables that do not exist yet."""
    Base.metadata.create_all(engine)


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Args:
        factory: Session factory bound to an engine.

    Yields:
        SQLAlchemy Session instance.
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

"""
Database connection management
"""

import os
import threading

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ..config import settings
from ..logging import get_logger

logger = get_logger(__name__)

_async_engine: AsyncEngine | None = None
_init_lock = threading.Lock()


def get_database_url() -> str:
    """Get database URL, checking the environment first for test compatibility."""
    return os.getenv("THOUGHTBOARD_DATABASE_URL") or settings.database_url


def to_async_url(database_url: str) -> str:
    """Select the async driver for a plain database URL."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def create_engine_for_url(database_url: str) -> AsyncEngine:
    """Create an async engine; pool sizing only applies to server databases."""
    async_url = to_async_url(database_url)
    if async_url.startswith("sqlite"):
        return create_async_engine(async_url, echo=settings.sql_echo)
    return create_async_engine(
        async_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.sql_echo,
    )


def init_database(database_url: str | None = None, force_reinit: bool = False) -> AsyncEngine:
    """Initialize the shared async engine.

    Thread-safe; repeated calls return the existing engine unless
    ``force_reinit`` is set or an explicit URL is given.
    """
    global _async_engine

    if _async_engine is not None and not force_reinit and database_url is None:
        return _async_engine

    with _init_lock:
        if _async_engine is not None and not force_reinit and database_url is None:
            return _async_engine

        db_url = database_url or get_database_url()
        _async_engine = create_engine_for_url(db_url)
        logger.info("Database initialized", database_url=_redact(db_url))
        return _async_engine


def enable_sqlite_write_locking(engine: AsyncEngine) -> None:
    """Make every SQLite transaction take the database write lock on BEGIN.

    The sqlite3 driver defers BEGIN until the first write, so a
    read-modify-write would otherwise read before locking. No-op for other
    dialects and safe to call more than once per engine.
    """
    if engine.dialect.name != "sqlite":
        return

    sync_engine = engine.sync_engine
    if event.contains(sync_engine, "connect", _disable_driver_transactions):
        return
    event.listen(sync_engine, "connect", _disable_driver_transactions)
    event.listen(sync_engine, "begin", _begin_immediate)


def _disable_driver_transactions(dbapi_connection, connection_record) -> None:
    # Let SQLAlchemy emit BEGIN itself
    dbapi_connection.isolation_level = None


def _begin_immediate(conn) -> None:
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def reset_database() -> None:
    """Forget the shared engine (for tests)."""
    global _async_engine
    _async_engine = None


def _redact(database_url: str) -> str:
    scheme, sep, rest = database_url.partition("://")
    if "@" not in rest:
        return database_url
    credentials, _, host = rest.rpartition("@")
    user = credentials.split(":", 1)[0]
    return f"{scheme}{sep}{user}:***@{host}"

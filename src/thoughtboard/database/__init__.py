"""Database engine management for the SQL store."""

from .connection import (
    create_engine_for_url,
    enable_sqlite_write_locking,
    init_database,
    reset_database,
)

__all__ = [
    "create_engine_for_url",
    "enable_sqlite_write_locking",
    "init_database",
    "reset_database",
]

"""Tests specific to the SQLAlchemy document store."""

from datetime import UTC, datetime

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine

from thoughtboard.database import enable_sqlite_write_locking
from thoughtboard.database.connection import _begin_immediate
from thoughtboard.store import THOUGHTS, StoreException
from thoughtboard.store.sql import SQLDocumentStore, decode_json, encode_json


class TestJsonEncoding:
    def test_datetimes_are_tagged(self):
        moment = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)

        encoded = encode_json([{"created_at": moment, "body": "x"}])

        assert encoded == [{"created_at": {"$date": moment.isoformat()}, "body": "x"}]
        assert decode_json(encoded) == [{"created_at": moment, "body": "x"}]

    def test_plain_values_pass_through(self):
        assert encode_json(["a", 1, None]) == ["a", 1, None]
        assert decode_json({"nested": {"$date": "x", "other": 1}}) == {
            "nested": {"$date": "x", "other": 1}
        }


class TestSQLDocumentStore:
    @pytest.mark.asyncio
    async def test_unknown_field_is_rejected(self, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
        store = SQLDocumentStore(engine)
        await store.create_tables()
        try:
            with pytest.raises(StoreException, match="Unknown field"):
                await store.find(THOUGHTS, {"colour": "blue"})
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_create_tables_is_idempotent(self, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
        store = SQLDocumentStore(engine)
        try:
            await store.create_tables()
            await store.create_tables()
            assert await store.find(THOUGHTS) == []
        finally:
            await store.close()


class TestSQLiteWriteLocking:
    @pytest.mark.asyncio
    async def test_listeners_registered_on_sqlite(self, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
        try:
            enable_sqlite_write_locking(engine)
            enable_sqlite_write_locking(engine)
            SQLDocumentStore(engine)

            assert event.contains(engine.sync_engine, "begin", _begin_immediate)
        finally:
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_other_dialects_untouched(self):
        engine = create_async_engine("postgresql+asyncpg://user:pw@localhost/db")
        try:
            enable_sqlite_write_locking(engine)

            assert not event.contains(engine.sync_engine, "begin", _begin_immediate)
        finally:
            await engine.dispose()

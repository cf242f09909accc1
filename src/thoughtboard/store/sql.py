"""Document store backed by SQLAlchemy (PostgreSQL in production, SQLite in tests)."""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ..database import enable_sqlite_write_locking
from ..dbmodels import COLLECTION_MODELS, Base
from ..logging import get_logger
from .base import (
    DESCENDING,
    ConstraintViolation,
    Document,
    DocumentStore,
    Filter,
    StoreException,
    UnknownCollection,
    project,
)
from .schemas import SCHEMAS, CollectionSchema

logger = get_logger(__name__)

DATE_KEY = "$date"


def encode_json(value: Any) -> Any:
    """Make embedded values JSON-safe; datetimes become ``{"$date": iso}``."""
    if isinstance(value, datetime):
        return {DATE_KEY: value.isoformat()}
    if isinstance(value, Mapping):
        return {key: encode_json(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [encode_json(item) for item in value]
    return value


def decode_json(value: Any) -> Any:
    if isinstance(value, Mapping):
        if set(value) == {DATE_KEY}:
            return datetime.fromisoformat(value[DATE_KEY])
        return {key: decode_json(item) for key, item in value.items()}
    if isinstance(value, list):
        return [decode_json(item) for item in value]
    return value


class SQLDocumentStore(DocumentStore):
    """Maps each collection onto one table.

    Array updates are read-modify-write inside a single transaction that
    locks before reading: ``SELECT ... FOR UPDATE`` on PostgreSQL, ``BEGIN
    IMMEDIATE`` on SQLite.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        schemas: Mapping[str, CollectionSchema] | None = None,
        models: Mapping[str, type[Base]] | None = None,
    ):
        self.engine = engine
        enable_sqlite_write_locking(engine)
        self.schemas = dict(schemas or SCHEMAS)
        self.models = dict(models or COLLECTION_MODELS)
        self._sessionmaker = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    def _model(self, collection: str) -> type[Base]:
        try:
            return self.models[collection]
        except KeyError:
            raise UnknownCollection(f"Unknown collection: {collection}") from None

    def _column(self, model: type[Base], field_name: str):
        attr = "id" if field_name == "_id" else field_name
        if attr not in inspect(model).columns:
            raise StoreException(f"Unknown field {model.__tablename__}.{field_name}")
        return getattr(model, attr)

    def _to_row_values(self, model: type[Base], fields: Mapping[str, Any]) -> dict[str, Any]:
        columns = inspect(model).columns
        values = {}
        for field_name, value in fields.items():
            attr = "id" if field_name == "_id" else field_name
            if attr not in columns:
                raise StoreException(f"Unknown field {model.__tablename__}.{field_name}")
            values[attr] = encode_json(value) if isinstance(value, list) else value
        return values

    def _to_document(self, record: Base) -> Document:
        document: Document = {}
        for column in inspect(type(record)).columns:
            value = getattr(record, column.key)
            if isinstance(value, datetime) and value.tzinfo is None:
                value = value.replace(tzinfo=UTC)
            elif isinstance(value, list):
                value = decode_json(value)
            document["_id" if column.key == "id" else column.key] = value
        return document

    def _where(self, model: type[Base], filter: Filter | None) -> list[Any]:
        clauses = []
        for field_name, expected in (filter or {}).items():
            column = self._column(model, field_name)
            if isinstance(expected, Mapping) and "$in" in expected:
                clauses.append(column.in_(list(expected["$in"])))
            else:
                clauses.append(column == expected)
        return clauses

    async def _conflicting_field(
        self, collection: str, fields: Mapping[str, Any], skip_id: str | None = None
    ) -> tuple[str, Any]:
        model = self._model(collection)
        candidates = ["_id", *self.schemas[collection].unique]
        async with self._sessionmaker() as session:
            for field_name in candidates:
                if field_name not in fields or (field_name == "_id" and skip_id):
                    continue
                stmt = select(model).where(self._column(model, field_name) == fields[field_name])
                if skip_id is not None:
                    stmt = stmt.where(model.id != skip_id)
                if (await session.execute(stmt.limit(1))).scalar_one_or_none() is not None:
                    return field_name, fields[field_name]
        return "_id", fields.get("_id", skip_id)

    async def find(
        self,
        collection: str,
        filter: Filter | None = None,
        *,
        sort: list[tuple[str, int]] | None = None,
        exclude: Iterable[str] = (),
    ) -> list[Document]:
        model = self._model(collection)
        stmt = select(model).where(*self._where(model, filter))
        for field_name, direction in sort or []:
            column = self._column(model, field_name)
            stmt = stmt.order_by(column.desc() if direction == DESCENDING else column.asc())

        async with self._sessionmaker() as session:
            records = (await session.execute(stmt)).scalars().all()
            return [project(self._to_document(record), exclude) for record in records]

    async def find_one(
        self,
        collection: str,
        filter: Filter,
        *,
        exclude: Iterable[str] = (),
    ) -> Document | None:
        model = self._model(collection)
        stmt = select(model).where(*self._where(model, filter)).limit(1)

        async with self._sessionmaker() as session:
            record = (await session.execute(stmt)).scalar_one_or_none()
            return project(self._to_document(record), exclude) if record else None

    async def create(self, collection: str, document: Mapping[str, Any]) -> Document:
        model = self._model(collection)
        prepared = self.schemas[collection].prepare_new(document)
        record = model(**self._to_row_values(model, prepared))

        try:
            async with self._sessionmaker() as session, session.begin():
                session.add(record)
        except IntegrityError as e:
            field_name, value = await self._conflicting_field(collection, prepared)
            raise ConstraintViolation(collection, field_name, value) from e

        logger.debug("Document created", collection=collection, document_id=prepared["_id"])
        return self._to_document(record)

    async def update_by_id(
        self, collection: str, id: str, changes: Mapping[str, Any]
    ) -> Document | None:
        model = self._model(collection)
        prepared = self.schemas[collection].prepare_changes(changes)
        values = self._to_row_values(model, prepared)

        try:
            async with self._sessionmaker() as session, session.begin():
                record = await session.get(model, id, with_for_update=True)
                if record is None:
                    return None
                for attr, value in values.items():
                    setattr(record, attr, value)
        except IntegrityError as e:
            field_name, value = await self._conflicting_field(collection, prepared, skip_id=id)
            raise ConstraintViolation(collection, field_name, value) from e

        return self._to_document(record)

    async def append_to_array(
        self, collection: str, id: str, field: str, value: Any
    ) -> Document | None:
        model = self._model(collection)
        self._column(model, field)
        element = self.schemas[collection].prepare_element(field, value)

        async with self._sessionmaker() as session, session.begin():
            record = await session.get(model, id, with_for_update=True)
            if record is None:
                return None
            # Reassign rather than mutate so the JSON column is flagged dirty
            setattr(record, field, [*(getattr(record, field) or []), encode_json(element)])

        return self._to_document(record)

    async def add_to_set(self, collection: str, id: str, field: str, value: Any) -> Document | None:
        model = self._model(collection)
        self._column(model, field)
        element = encode_json(self.schemas[collection].prepare_element(field, value))

        async with self._sessionmaker() as session, session.begin():
            record = await session.get(model, id, with_for_update=True)
            if record is None:
                return None
            current = getattr(record, field) or []
            if element not in current:
                setattr(record, field, [*current, element])

        return self._to_document(record)

    async def create_tables(self) -> None:
        """Create the collection tables on the bound engine."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()

"""In-process document store used for development and tests."""

from collections.abc import Iterable, Mapping
from typing import Any

from ..logging import get_logger
from .base import (
    DESCENDING,
    ConstraintViolation,
    Document,
    DocumentStore,
    Filter,
    UnknownCollection,
    matches,
    project,
)
from .schemas import SCHEMAS, CollectionSchema

logger = get_logger(__name__)


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store keeping documents in insertion order.

    Every operation completes without awaiting, so each call is atomic with
    respect to other coroutines on the same event loop.
    """

    def __init__(self, schemas: Mapping[str, CollectionSchema] | None = None):
        self.schemas = dict(schemas or SCHEMAS)
        self._collections: dict[str, dict[str, Document]] = {
            name: {} for name in self.schemas
        }

    def _collection(self, collection: str) -> dict[str, Document]:
        try:
            return self._collections[collection]
        except KeyError:
            raise UnknownCollection(f"Unknown collection: {collection}") from None

    def _check_unique(
        self, collection: str, candidate: Mapping[str, Any], skip_id: str | None = None
    ) -> None:
        schema = self.schemas[collection]
        for doc_id, existing in self._collection(collection).items():
            if doc_id == skip_id:
                continue
            for field_name in schema.unique:
                if field_name in candidate and existing.get(field_name) == candidate[field_name]:
                    raise ConstraintViolation(collection, field_name, candidate[field_name])

    async def find(
        self,
        collection: str,
        filter: Filter | None = None,
        *,
        sort: list[tuple[str, int]] | None = None,
        exclude: Iterable[str] = (),
    ) -> list[Document]:
        found = [doc for doc in self._collection(collection).values() if matches(doc, filter)]
        # Apply keys last to first so the first sort key dominates
        for field_name, direction in reversed(sort or []):
            found.sort(key=lambda doc: doc.get(field_name), reverse=direction == DESCENDING)
        return [project(doc, exclude) for doc in found]

    async def find_one(
        self,
        collection: str,
        filter: Filter,
        *,
        exclude: Iterable[str] = (),
    ) -> Document | None:
        for doc in self._collection(collection).values():
            if matches(doc, filter):
                return project(doc, exclude)
        return None

    async def create(self, collection: str, document: Mapping[str, Any]) -> Document:
        docs = self._collection(collection)
        prepared = self.schemas[collection].prepare_new(document)
        if prepared["_id"] in docs:
            raise ConstraintViolation(collection, "_id", prepared["_id"])
        self._check_unique(collection, prepared)
        docs[prepared["_id"]] = prepared
        logger.debug("Document created", collection=collection, document_id=prepared["_id"])
        return project(prepared)

    async def update_by_id(
        self, collection: str, id: str, changes: Mapping[str, Any]
    ) -> Document | None:
        doc = self._collection(collection).get(id)
        if doc is None:
            return None
        prepared = self.schemas[collection].prepare_changes(changes)
        self._check_unique(collection, prepared, skip_id=id)
        doc.update(prepared)
        return project(doc)

    async def append_to_array(
        self, collection: str, id: str, field: str, value: Any
    ) -> Document | None:
        doc = self._collection(collection).get(id)
        if doc is None:
            return None
        element = self.schemas[collection].prepare_element(field, value)
        doc.setdefault(field, []).append(element)
        return project(doc)

    async def add_to_set(self, collection: str, id: str, field: str, value: Any) -> Document | None:
        doc = self._collection(collection).get(id)
        if doc is None:
            return None
        values = doc.setdefault(field, [])
        if value not in values:
            values.append(self.schemas[collection].prepare_element(field, value))
        return project(doc)

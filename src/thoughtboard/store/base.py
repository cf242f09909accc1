"""Document store interface shared by all storage backends."""

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

Document = dict[str, Any]
Filter = Mapping[str, Any]

ASCENDING = 1
DESCENDING = -1


class StoreException(Exception):
    """Base exception for storage operations."""

    pass


class ConstraintViolation(StoreException):
    """A write would break a uniqueness constraint."""

    def __init__(self, collection: str, field_name: str, value: Any = None):
        self.collection = collection
        self.field_name = field_name
        self.value = value
        super().__init__(f"Duplicate value for {collection}.{field_name}: {value!r}")


class UnknownCollection(StoreException):
    """Operation addressed a collection the store does not define."""

    pass


@dataclass(frozen=True)
class CollectionSchema:
    """Per-collection write rules applied by every backend.

    ``pre_save`` receives the fields being written (the whole document on
    create, only the changed fields on update) and returns the fields to
    persist. ``embedded`` maps array fields holding sub-documents to a
    factory of defaults for each appended element.
    """

    name: str
    unique: tuple[str, ...] = ()
    defaults: Callable[[], Document] = dict
    pre_save: Callable[[Document], Document] | None = None
    embedded: Mapping[str, Callable[[], Document]] = field(default_factory=dict)

    def prepare_new(self, document: Mapping[str, Any]) -> Document:
        prepared = self.defaults()
        prepared.update(copy.deepcopy(dict(document)))
        if self.pre_save:
            prepared = self.pre_save(prepared)
        return prepared

    def prepare_changes(self, changes: Mapping[str, Any]) -> Document:
        prepared = copy.deepcopy(dict(changes))
        prepared.pop("_id", None)
        if self.pre_save:
            prepared = self.pre_save(prepared)
        return prepared

    def prepare_element(self, array_field: str, value: Any) -> Any:
        factory = self.embedded.get(array_field)
        if factory is None:
            return copy.deepcopy(value)
        element = factory()
        element.update(copy.deepcopy(dict(value)))
        return element


def matches(document: Mapping[str, Any], filter: Filter | None) -> bool:
    """Equality match; ``{"$in": [...]}`` matches any of the listed values."""
    if not filter:
        return True
    for key, expected in filter.items():
        actual = document.get(key)
        if isinstance(expected, Mapping) and "$in" in expected:
            if actual not in expected["$in"]:
                return False
        elif actual != expected:
            return False
    return True


def project(document: Mapping[str, Any], exclude: Iterable[str] = ()) -> Document:
    """Return a detached copy of ``document`` without the excluded fields."""
    excluded = set(exclude)
    return {key: copy.deepcopy(value) for key, value in document.items() if key not in excluded}


class DocumentStore(ABC):
    """Abstract base class for the persistence collaborator.

    All reads return detached copies; mutating a returned document never
    changes stored state. Update operations return the updated document, or
    None when no document has the given id.
    """

    @abstractmethod
    async def find(
        self,
        collection: str,
        filter: Filter | None = None,
        *,
        sort: list[tuple[str, int]] | None = None,
        exclude: Iterable[str] = (),
    ) -> list[Document]:
        """Return every document matching ``filter``."""
        pass

    @abstractmethod
    async def find_one(
        self,
        collection: str,
        filter: Filter,
        *,
        exclude: Iterable[str] = (),
    ) -> Document | None:
        """Return the first document matching ``filter`` or None."""
        pass

    @abstractmethod
    async def create(self, collection: str, document: Mapping[str, Any]) -> Document:
        """Insert a new document and return it as stored.

        Raises:
            ConstraintViolation: If a unique field value is already taken
        """
        pass

    @abstractmethod
    async def update_by_id(
        self, collection: str, id: str, changes: Mapping[str, Any]
    ) -> Document | None:
        """Set the given fields on the document with ``id``."""
        pass

    @abstractmethod
    async def append_to_array(
        self, collection: str, id: str, field: str, value: Any
    ) -> Document | None:
        """Append ``value`` to the array ``field``."""
        pass

    @abstractmethod
    async def add_to_set(self, collection: str, id: str, field: str, value: Any) -> Document | None:
        """Append ``value`` to the array ``field`` unless it is already present."""
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None

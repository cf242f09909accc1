"""Persistence collaborator for users and thoughts."""

from .base import (
    ASCENDING,
    DESCENDING,
    CollectionSchema,
    ConstraintViolation,
    Document,
    DocumentStore,
    StoreException,
    UnknownCollection,
)
from .factory import get_document_store
from .memory import InMemoryDocumentStore
from .schemas import THOUGHTS, USERS

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "CollectionSchema",
    "ConstraintViolation",
    "Document",
    "DocumentStore",
    "InMemoryDocumentStore",
    "StoreException",
    "THOUGHTS",
    "USERS",
    "UnknownCollection",
    "get_document_store",
]

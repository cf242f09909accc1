"""Collection definitions for users and thoughts."""

import uuid
from datetime import UTC, datetime

from ..auth.passwords import hash_password
from .base import CollectionSchema, Document

USERS = "users"
THOUGHTS = "thoughts"


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(UTC)


def _user_defaults() -> Document:
    return {"_id": new_id(), "thoughts": [], "friends": []}


def _hash_user_password(fields: Document) -> Document:
    # Plaintext is accepted on every write and only the hash is persisted
    if fields.get("password") is not None:
        fields["password"] = hash_password(fields["password"])
    return fields


def _thought_defaults() -> Document:
    return {"_id": new_id(), "created_at": utcnow(), "reactions": []}


def _reaction_defaults() -> Document:
    return {"_id": new_id(), "created_at": utcnow()}


user_schema = CollectionSchema(
    name=USERS,
    unique=("username", "email"),
    defaults=_user_defaults,
    pre_save=_hash_user_password,
)

thought_schema = CollectionSchema(
    name=THOUGHTS,
    defaults=_thought_defaults,
    embedded={"reactions": _reaction_defaults},
)

SCHEMAS: dict[str, CollectionSchema] = {
    USERS: user_schema,
    THOUGHTS: thought_schema,
}

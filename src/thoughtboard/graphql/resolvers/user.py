from __future__ import annotations

from typing import Any

import strawberry

from ...logging import get_logger
from ...store import THOUGHTS, USERS, Document, DocumentStore
from ..access_control import require_identity
from ..context import ResolverContext
from ..types.thought import Thought
from ..types.user import User

logger = get_logger(__name__)

# Fields never returned on a read path
HIDDEN_USER_FIELDS = ("password",)


async def _load_in_order(
    store: DocumentStore, collection: str, ids: list[str], **kwargs: Any
) -> list[Document]:
    """Fetch documents by id, keeping the order of ``ids`` and skipping dangling ones."""
    if not ids:
        return []
    found = await store.find(collection, {"_id": {"$in": ids}}, **kwargs)
    by_id = {doc["_id"]: doc for doc in found}
    return [by_id[doc_id] for doc_id in ids if doc_id in by_id]


async def populate_user(store: DocumentStore, document: Document) -> User:
    """Build a User with its friends and thoughts expanded one level."""
    friend_docs = await _load_in_order(
        store, USERS, document.get("friends", []), exclude=HIDDEN_USER_FIELDS
    )
    thought_docs = await _load_in_order(store, THOUGHTS, document.get("thoughts", []))

    return User.from_document(
        document,
        friends=[User.from_document(doc) for doc in friend_docs],
        thoughts=[Thought.from_document(doc) for doc in thought_docs],
    )


# Query resolvers
async def resolve_me(context: ResolverContext) -> User | None:
    """
    Resolve the authenticated user's own profile.

    Raises Unauthenticated for anonymous callers.
    """
    identity = require_identity(context, "me")

    document = await context.store.find_one(
        USERS, {"_id": identity.id}, exclude=HIDDEN_USER_FIELDS
    )
    if document is None:
        # Token outlived its user record
        logger.warning("Authenticated user not found", user_id=identity.id)
        return None

    return await populate_user(context.store, document)


async def resolve_users(context: ResolverContext) -> list[User]:
    """Resolve every user, friends and thoughts expanded."""
    documents = await context.store.find(USERS, exclude=HIDDEN_USER_FIELDS)
    return [await populate_user(context.store, document) for document in documents]


async def resolve_user(context: ResolverContext, username: str) -> User | None:
    """Resolve a user by username; None when there is no such user."""
    document = await context.store.find_one(
        USERS, {"username": username}, exclude=HIDDEN_USER_FIELDS
    )
    if document is None:
        logger.info("User not found", username=username)
        return None

    return await populate_user(context.store, document)


# Mutation resolvers
async def add_friend(context: ResolverContext, friend_id: str) -> User | None:
    """
    Add ``friend_id`` to the caller's friend list.

    Re-adding an existing friend is a no-op. Only the caller's own record is
    updated; the friend's list is left untouched.
    """
    identity = require_identity(context, "addFriend")

    document = await context.store.add_to_set(USERS, identity.id, "friends", friend_id)
    if document is None:
        logger.warning("Authenticated user not found", user_id=identity.id)
        return None

    logger.info("Friend added", user_id=identity.id, friend_id=friend_id)
    document.pop("password", None)
    return await populate_user(context.store, document)


# User field resolvers
async def resolve_user_friends(user: User, info: strawberry.Info) -> list[User]:
    """Load a user's friends when they were not populated by the parent resolver."""
    context = ResolverContext.from_info(info)
    documents = await _load_in_order(
        context.store, USERS, user.friend_ids, exclude=HIDDEN_USER_FIELDS
    )
    return [User.from_document(doc) for doc in documents]


async def resolve_user_thoughts(user: User, info: strawberry.Info) -> list[Thought]:
    """Load a user's thoughts when they were not populated by the parent resolver."""
    context = ResolverContext.from_info(info)
    documents = await _load_in_order(context.store, THOUGHTS, user.thought_ids)
    return [Thought.from_document(doc) for doc in documents]

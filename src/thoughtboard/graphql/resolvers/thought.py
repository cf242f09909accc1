from __future__ import annotations

from ...logging import get_logger
from ...store import DESCENDING, THOUGHTS, USERS
from ..access_control import require_identity
from ..context import ResolverContext
from ..types.thought import Thought

logger = get_logger(__name__)


# Query resolvers
async def resolve_thoughts(context: ResolverContext, username: str | None = None) -> list[Thought]:
    """
    Resolve thoughts, most recent first.

    Filters by author when ``username`` is given. No authentication required.
    """
    params = {"username": username} if username else {}
    documents = await context.store.find(THOUGHTS, params, sort=[("created_at", DESCENDING)])
    return [Thought.from_document(doc) for doc in documents]


async def resolve_thought(context: ResolverContext, id: str) -> Thought | None:
    """Resolve a thought by its ID; None when it does not exist."""
    document = await context.store.find_one(THOUGHTS, {"_id": id})
    if document is None:
        logger.info("Thought not found", thought_id=id)
        return None
    return Thought.from_document(document)


# Mutation resolvers
async def add_thought(context: ResolverContext, thought_text: str) -> Thought:
    """
    Post a thought as the authenticated user.

    The author's username always comes from the verified identity. The
    thought is created first and then linked to the author's list in a
    second write; a reader between the two sees the thought without the
    link.
    """
    identity = require_identity(context, "addThought")

    document = await context.store.create(
        THOUGHTS, {"thought_text": thought_text, "username": identity.username}
    )
    await context.store.append_to_array(USERS, identity.id, "thoughts", document["_id"])

    logger.info("Thought created", thought_id=document["_id"], username=identity.username)
    return Thought.from_document(document)


async def add_reaction(
    context: ResolverContext, thought_id: str, reaction_body: str
) -> Thought | None:
    """
    Append a reaction by the authenticated user to a thought.

    Returns None, without raising, when the thought does not exist.
    """
    identity = require_identity(context, "addReaction")

    document = await context.store.append_to_array(
        THOUGHTS,
        thought_id,
        "reactions",
        {"reaction_body": reaction_body, "username": identity.username},
    )
    if document is None:
        logger.info("Reaction target not found", thought_id=thought_id)
        return None

    logger.info("Reaction added", thought_id=thought_id, username=identity.username)
    return Thought.from_document(document)

"""
Thought and Reaction GraphQL type definitions
"""

from datetime import datetime
from typing import Any

import strawberry


@strawberry.type
class Reaction:
    """A response embedded in a thought; it has no lifecycle of its own."""

    id: strawberry.ID = strawberry.field(name="_id")
    reaction_body: str
    username: str
    created_at: datetime

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Reaction":
        return cls(
            id=strawberry.ID(document["_id"]),
            reaction_body=document["reaction_body"],
            username=document["username"],
            created_at=document["created_at"],
        )


@strawberry.type
class Thought:
    """Thought type for GraphQL API."""

    id: strawberry.ID = strawberry.field(name="_id")
    thought_text: str
    username: str
    created_at: datetime
    reactions: list[Reaction]

    @strawberry.field
    def reaction_count(self) -> int:
        """Number of reactions on this thought."""
        return len(self.reactions)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Thought":
        return cls(
            id=strawberry.ID(document["_id"]),
            thought_text=document["thought_text"],
            username=document["username"],
            created_at=document["created_at"],
            reactions=[Reaction.from_document(r) for r in document.get("reactions", [])],
        )

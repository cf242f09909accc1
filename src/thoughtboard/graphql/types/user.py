"""
User GraphQL type definitions
"""

from typing import Any

import strawberry

from .thought import Thought


@strawberry.type
class User:
    """User type for GraphQL API. The password is never part of this type."""

    id: strawberry.ID = strawberry.field(name="_id")
    username: str
    email: str
    friend_ids: strawberry.Private[list[str]]
    thought_ids: strawberry.Private[list[str]]
    # Filled when the resolver populated the relation in the same request
    preloaded_friends: strawberry.Private[list | None] = None
    preloaded_thoughts: strawberry.Private[list | None] = None

    @strawberry.field
    def friend_count(self) -> int:
        """Number of users in this user's friend list."""
        return len(self.friend_ids)

    @strawberry.field
    async def friends(self, info: strawberry.Info) -> list["User"]:
        """Users this user has added as friends."""
        if self.preloaded_friends is not None:
            return self.preloaded_friends
        from ..resolvers.user import resolve_user_friends

        return await resolve_user_friends(self, info)

    @strawberry.field
    async def thoughts(self, info: strawberry.Info) -> list[Thought]:
        """Thoughts written by this user, in posting order."""
        if self.preloaded_thoughts is not None:
            return self.preloaded_thoughts
        from ..resolvers.user import resolve_user_thoughts

        return await resolve_user_thoughts(self, info)

    @classmethod
    def from_document(
        cls,
        document: dict[str, Any],
        friends: list["User"] | None = None,
        thoughts: list[Thought] | None = None,
    ) -> "User":
        return cls(
            id=strawberry.ID(document["_id"]),
            username=document["username"],
            email=document["email"],
            friend_ids=list(document.get("friends", [])),
            thought_ids=list(document.get("thoughts", [])),
            preloaded_friends=friends,
            preloaded_thoughts=thoughts,
        )


@strawberry.type
class Auth:
    """Signed token plus the user it was issued for."""

    token: str
    user: User

"""
Root GraphQL query definitions
"""

from typing import Annotated

import strawberry

from ..context import ResolverContext
from ..types.thought import Thought
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.user import resolve_me

        return await resolve_me(ResolverContext.from_info(info))

    @strawberry.field
    async def users(self, info: strawberry.Info) -> list[User]:
        """Get all users."""
        from ..resolvers.user import resolve_users

        return await resolve_users(ResolverContext.from_info(info))

    @strawberry.field
    async def user(self, info: strawberry.Info, username: str) -> User | None:
        """Get a user by username."""
        from ..resolvers.user import resolve_user

        return await resolve_user(ResolverContext.from_info(info), username)

    @strawberry.field
    async def thoughts(self, info: strawberry.Info, username: str | None = None) -> list[Thought]:
        """Get thoughts, most recent first, optionally by one author."""
        from ..resolvers.thought import resolve_thoughts

        return await resolve_thoughts(ResolverContext.from_info(info), username)

    @strawberry.field
    async def thought(
        self,
        info: strawberry.Info,
        id: Annotated[strawberry.ID, strawberry.argument(name="_id")],
    ) -> Thought | None:
        """Get a thought by ID."""
        from ..resolvers.thought import resolve_thought

        return await resolve_thought(ResolverContext.from_info(info), str(id))

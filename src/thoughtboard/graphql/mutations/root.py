"""
Root GraphQL mutation definitions
"""

import strawberry

from ..context import ResolverContext
from ..types.thought import Thought
from ..types.user import Auth, User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Account mutations
    @strawberry.mutation(name="login")
    async def login(self, info: strawberry.Info, email: str, password: str) -> Auth:
        """Sign in with email and password."""
        from ..resolvers.auth import login

        return await login(ResolverContext.from_info(info), email, password)

    @strawberry.mutation(name="addUser")
    async def add_user(
        self, info: strawberry.Info, username: str, email: str, password: str
    ) -> Auth:
        """Register a new user and sign them in."""
        from ..resolvers.auth import add_user

        return await add_user(ResolverContext.from_info(info), username, email, password)

    # Thought mutations
    @strawberry.mutation(name="addThought")
    async def add_thought(self, info: strawberry.Info, thought_text: str) -> Thought:
        """Post a thought as the current user."""
        from ..resolvers.thought import add_thought

        return await add_thought(ResolverContext.from_info(info), thought_text)

    @strawberry.mutation(name="addReaction")
    async def add_reaction(
        self, info: strawberry.Info, thought_id: strawberry.ID, reaction_body: str
    ) -> Thought | None:
        """React to a thought."""
        from ..resolvers.thought import add_reaction

        return await add_reaction(ResolverContext.from_info(info), str(thought_id), reaction_body)

    # Friend mutations
    @strawberry.mutation(name="addFriend")
    async def add_friend(self, info: strawberry.Info, friend_id: strawberry.ID) -> User | None:
        """Add a user to the current user's friend list."""
        from ..resolvers.user import add_friend

        return await add_friend(ResolverContext.from_info(info), str(friend_id))

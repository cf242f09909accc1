"""Resolver package for GraphQL schema.

Every resolver takes an explicit ``ResolverContext`` (store, token signer and
the caller's authentication) followed by the operation arguments, so the
functions can be exercised without a running GraphQL server.
"""

from .auth import add_user, login
from .thought import add_reaction, add_thought, resolve_thought, resolve_thoughts
from .user import add_friend, resolve_me, resolve_user, resolve_users

__all__ = [
    "add_friend",
    "add_reaction",
    "add_thought",
    "add_user",
    "login",
    "resolve_me",
    "resolve_thought",
    "resolve_thoughts",
    "resolve_user",
    "resolve_users",
]

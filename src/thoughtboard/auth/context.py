"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Verified identity of the caller, as embedded in a signed token."""

    id: str
    username: str
    email: str


@dataclass(frozen=True)
class AuthContext:
    """Runtime authentication context for a request."""

    identity: Identity | None = None
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Check if the request is authenticated."""
        return self.identity is not None

    @property
    def user_id(self) -> str | None:
        return self.identity.id if self.identity else None


ANONYMOUS = AuthContext()

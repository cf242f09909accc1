"""
Errors the resolver layer raises to reject a request.

Absence of data is never an error here; resolvers return None or an empty
list for misses. These exceptions carry ``extensions.code`` so clients can
tell a rejected request apart from an empty result.
"""

from graphql import GraphQLError

UNAUTHENTICATED = "UNAUTHENTICATED"


class ResolverError(GraphQLError):
    """Base class for failures raised explicitly by resolvers."""

    default_message = "Request rejected"
    code = "BAD_REQUEST"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message, extensions={"code": self.code})


class Unauthenticated(ResolverError):
    """A gated operation was called without a verified identity."""

    default_message = "Not logged in"
    code = UNAUTHENTICATED


class InvalidCredentials(ResolverError):
    """Login failed. Unknown email and wrong password are indistinguishable."""

    default_message = "Incorrect credentials"
    code = UNAUTHENTICATED

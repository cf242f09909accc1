"""Authentication exceptions raised below the GraphQL layer."""


class AuthenticationError(Exception):
    """Raised when a token cannot be verified."""

    pass

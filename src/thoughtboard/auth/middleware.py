"""Resolve the caller's identity from the Authorization header."""

from __future__ import annotations

from ..logging import get_logger
from .context import ANONYMOUS, AuthContext
from .errors import AuthenticationError
from .tokens import TokenSigner

logger = get_logger(__name__)


def get_auth_context(authorization: str | None, signer: TokenSigner) -> AuthContext:
    """
    Extract authentication context from the Authorization header.

    Anonymous access is always allowed at this point: a missing, malformed,
    invalid or expired token produces an unauthenticated context and the
    gated resolvers reject the call themselves.

    Args:
        authorization: Authorization header value (``Bearer <token>``)
        signer: Token signer used to verify the bearer token

    Returns:
        AuthContext for the request
    """
    if not authorization:
        return ANONYMOUS

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        logger.warning("Invalid authorization format received")
        return ANONYMOUS

    try:
        identity = signer.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        return ANONYMOUS

    return AuthContext(identity=identity, token=token)

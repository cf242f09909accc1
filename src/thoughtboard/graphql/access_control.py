"""
Shared access control logic for GraphQL resolvers
"""

from ..auth.context import Identity
from ..logging import get_logger
from .context import ResolverContext
from .errors import Unauthenticated

logger = get_logger(__name__)


def require_identity(context: ResolverContext, operation: str) -> Identity:
    """
    Return the caller's identity or reject the operation.

    Raises:
        Unauthenticated: If the request carries no verified identity
    """
    identity = context.auth.identity
    if identity is None:
        logger.info("Unauthenticated access rejected", operation=operation)
        raise Unauthenticated()
    return identity

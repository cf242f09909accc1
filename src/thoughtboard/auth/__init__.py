"""Authentication for Thoughtboard."""

from .context import ANONYMOUS, AuthContext, Identity
from .errors import AuthenticationError
from .middleware import get_auth_context
from .passwords import hash_password, verify_password
from .tokens import TokenSigner, get_token_signer

__all__ = [
    "ANONYMOUS",
    "AuthContext",
    "AuthenticationError",
    "Identity",
    "TokenSigner",
    "get_auth_context",
    "get_token_signer",
    "hash_password",
    "verify_password",
]

"""JWT signing and verification for self-issued session tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import InvalidTokenError

from ..config import Settings, settings
from ..logging import get_logger
from .context import Identity
from .errors import AuthenticationError

logger = get_logger(__name__)

DEVELOPMENT_SECRET = "thoughtboard-development-secret"


class TokenSigner:
    """Issues and verifies the bearer tokens returned by ``login`` and ``addUser``."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "thoughtboard",
        audience: str = "thoughtboard-api",
        token_expiry_hours: int = 2,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_expiry_hours = token_expiry_hours

    def issue_token(self, identity: Identity) -> str:
        """Sign a token embedding the user's id, username and email."""
        now = datetime.now(UTC)

        payload = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(hours=self.token_expiry_hours),
            "sub": identity.id,
            "username": identity.username,
            "email": identity.email,
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Identity:
        """Verify a token and return the identity it carries.

        Raises:
            AuthenticationError: If the token is invalid, expired or incomplete
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "verify_exp": True,
                    "verify_nbf": True,
                    "verify_iat": True,
                },
            )
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise AuthenticationError("Invalid token") from e

        subject = payload.get("sub")
        username = payload.get("username")
        if not subject or not username:
            raise AuthenticationError("Token is missing identity claims")

        return Identity(id=subject, username=username, email=payload.get("email", ""))


def get_token_signer(config: Settings | None = None) -> TokenSigner:
    """Create the token signer from settings.

    A missing secret is fatal in production; elsewhere a fixed development
    secret is used.
    """
    config = config or settings

    secret_key = config.jwt_secret
    if not secret_key:
        if config.is_production:
            raise ValueError(
                "JWT secret key is required. Set THOUGHTBOARD_JWT_SECRET in production."
            )
        logger.warning(
            "THOUGHTBOARD_JWT_SECRET is not set - using the development secret",
            environment=config.environment,
        )
        secret_key = DEVELOPMENT_SECRET

    return TokenSigner(
        secret_key=secret_key,
        algorithm=config.jwt_algorithm,
        issuer=config.jwt_issuer,
        audience=config.jwt_audience,
        token_expiry_hours=config.token_expiry_hours,
    )

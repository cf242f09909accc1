from __future__ import annotations

from ...auth.context import Identity
from ...auth.passwords import dummy_verify, verify_password
from ...logging import get_logger
from ...store import USERS, Document
from ..context import ResolverContext
from ..errors import InvalidCredentials
from ..types.user import Auth, User

logger = get_logger(__name__)


def _issue(context: ResolverContext, document: Document) -> Auth:
    identity = Identity(id=document["_id"], username=document["username"], email=document["email"])
    token = context.tokens.issue_token(identity)
    document = {key: value for key, value in document.items() if key != "password"}
    return Auth(token=token, user=User.from_document(document))


async def add_user(context: ResolverContext, username: str, email: str, password: str) -> Auth:
    """
    Register a user and sign them in.

    The store hashes the password; uniqueness conflicts on username or email
    propagate from the store unchanged.
    """
    document = await context.store.create(
        USERS, {"username": username, "email": email, "password": password}
    )
    logger.info("User created", user_id=document["_id"], username=username)
    return _issue(context, document)


async def login(context: ResolverContext, email: str, password: str) -> Auth:
    """
    Exchange email and password for a fresh token.

    An unknown email and a wrong password raise the same InvalidCredentials.
    """
    document = await context.store.find_one(USERS, {"email": email})
    if document is None:
        dummy_verify()
    if document is None or not verify_password(password, document.get("password")):
        logger.info("Login failed")
        raise InvalidCredentials()

    logger.info("User logged in", user_id=document["_id"])
    return _issue(context, document)

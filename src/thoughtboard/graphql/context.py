"""
Request-scoped values handed to every resolver
"""

from dataclasses import dataclass
from typing import Any

import strawberry

from ..auth.context import ANONYMOUS, AuthContext
from ..auth.tokens import TokenSigner
from ..store.base import DocumentStore


@dataclass(frozen=True)
class ResolverContext:
    """Everything a resolver may touch: the store, the token signer and the caller."""

    store: DocumentStore
    tokens: TokenSigner
    auth: AuthContext = ANONYMOUS

    @classmethod
    def from_info(cls, info: strawberry.Info) -> "ResolverContext":
        return cls.from_mapping(info.context)

    @classmethod
    def from_mapping(cls, context: dict[str, Any]) -> "ResolverContext":
        return cls(
            store=context["store"],
            tokens=context["tokens"],
            auth=context.get("auth") or ANONYMOUS,
        )

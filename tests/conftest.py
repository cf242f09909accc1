"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from typing import Any

import pytest
import pytest_asyncio

from thoughtboard.auth.context import ANONYMOUS, AuthContext, Identity
from thoughtboard.auth.tokens import TokenSigner
from thoughtboard.graphql.context import ResolverContext
from thoughtboard.graphql.resolvers.auth import add_user
from thoughtboard.store.memory import InMemoryDocumentStore

TEST_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def tokens() -> TokenSigner:
    return TokenSigner(secret_key=TEST_SECRET, issuer="test-thoughtboard", audience="test-api")


@pytest.fixture
def anonymous(store, tokens) -> ResolverContext:
    """Resolver context without an identity."""
    return ResolverContext(store=store, tokens=tokens, auth=ANONYMOUS)


def context_for(anonymous: ResolverContext, user: Any) -> ResolverContext:
    """Resolver context authenticated as ``user`` (a GraphQL User)."""
    identity = Identity(id=str(user.id), username=user.username, email=user.email)
    return ResolverContext(
        store=anonymous.store,
        tokens=anonymous.tokens,
        auth=AuthContext(identity=identity, token="test-token"),
    )


@pytest_asyncio.fixture
async def alice(anonymous):
    """Registered user 'alice' (GraphQL User)."""
    auth = await add_user(anonymous, "alice", "alice@example.com", "alice-password")
    return auth.user


@pytest_asyncio.fixture
async def bob(anonymous):
    """Registered user 'bob' (GraphQL User)."""
    auth = await add_user(anonymous, "bob", "bob@example.com", "bob-password")
    return auth.user


@pytest.fixture
def as_alice(anonymous, alice) -> ResolverContext:
    return context_for(anonymous, alice)


@pytest.fixture
def as_bob(anonymous, bob) -> ResolverContext:
    return context_for(anonymous, bob)


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")

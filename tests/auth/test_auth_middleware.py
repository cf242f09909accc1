"""Unit tests for resolving the caller from the Authorization header."""

import pytest

from thoughtboard.auth.context import ANONYMOUS, Identity
from thoughtboard.auth.middleware import get_auth_context
from thoughtboard.auth.tokens import TokenSigner


@pytest.fixture
def signer():
    return TokenSigner(
        secret_key="test-secret-key-for-testing-only", issuer="test-thoughtboard", audience="test-api"
    )


@pytest.fixture
def identity():
    return Identity(id="user-123", username="alice", email="alice@example.com")


class TestGetAuthContext:
    def test_missing_header_is_anonymous(self, signer):
        context = get_auth_context(None, signer)

        assert context is ANONYMOUS
        assert not context.is_authenticated
        assert context.user_id is None

    def test_valid_bearer_token(self, signer, identity):
        token = signer.issue_token(identity)

        context = get_auth_context(f"Bearer {token}", signer)

        assert context.is_authenticated
        assert context.identity == identity
        assert context.user_id == "user-123"
        assert context.token == token

    def test_scheme_is_case_insensitive(self, signer, identity):
        token = signer.issue_token(identity)

        assert get_auth_context(f"bearer {token}", signer).is_authenticated

    @pytest.mark.parametrize("header", ["Bearer", "Bearer   ", "Basic abc", "token-only"])
    def test_malformed_header_is_anonymous(self, signer, header):
        assert get_auth_context(header, signer) is ANONYMOUS

    def test_invalid_token_is_anonymous(self, signer):
        assert get_auth_context("Bearer not-a-jwt", signer) is ANONYMOUS

    def test_foreign_token_is_anonymous(self, signer, identity):
        other = TokenSigner(secret_key="another-secret", issuer="test-thoughtboard", audience="test-api")

        assert get_auth_context(f"Bearer {other.issue_token(identity)}", signer) is ANONYMOUS

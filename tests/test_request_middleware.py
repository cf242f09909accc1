"""Tests for request logging middleware helpers."""

import pytest

from thoughtboard.middleware import operation_name_from_query, sanitize_query_params


class TestSanitizeQueryParams:
    def test_redacts_sensitive_keys(self):
        params = {"page": "2", "access_token": "abc", "Password": "pw", "session_id": "s"}

        assert sanitize_query_params(params) == {
            "page": "2",
            "access_token": "[REDACTED]",
            "Password": "[REDACTED]",
            "session_id": "[REDACTED]",
        }

    def test_empty(self):
        assert sanitize_query_params({}) == {}


class TestOperationName:
    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("query Me { me { username } }", "Me"),
            ("mutation AddThought { addThought(thoughtText: \"x\") { _id } }", "mutation:AddThought"),
            ("{ users { username } }", "unnamed_operation"),
            ("query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
        ],
    )
    def test_operation_name(self, query, expected):
        assert operation_name_from_query(query) == expected

"""Unit tests for password hashing."""

from thoughtboard.auth.passwords import dummy_verify, hash_password, verify_password


class TestPasswords:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret")

        assert hashed != "s3cret"
        assert hashed.startswith("$pbkdf2-sha256$")

    def test_hash_is_salted(self):
        assert hash_password("s3cret") != hash_password("s3cret")

    def test_verify(self):
        hashed = hash_password("s3cret")

        assert verify_password("s3cret", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_verify_without_hash(self):
        assert verify_password("s3cret", None) is False
        assert verify_password("s3cret", "") is False

    def test_verify_malformed_hash(self):
        assert verify_password("s3cret", "not-a-hash") is False

    def test_dummy_verify(self):
        assert dummy_verify() is None

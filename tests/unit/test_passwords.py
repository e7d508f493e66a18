"""
Tests for password hashing.
"""
import pytest

from app.services.passwords import hash_password, verify_password


class TestPasswords:

    def test_hash_round_trip(self):
        encoded = hash_password("secret1")

        assert encoded.startswith("$argon2id$")
        assert "secret1" not in encoded
        assert verify_password("secret1", encoded)
        assert not verify_password("secret2", encoded)

    def test_salted(self):
        assert hash_password("secret1") != hash_password("secret1")

    @pytest.mark.parametrize("encoded", ["", "plain", "md5$1$salt$hash", "pbkdf2_sha256$x$salt$hash"])
    def test_malformed_hash_never_matches(self, encoded):
        assert not verify_password("secret1", encoded)

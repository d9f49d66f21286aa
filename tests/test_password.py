"""
Tests for the bcrypt password hasher.
"""

import pytest

from auth.password import PasswordHasher


class TestPasswordHasher:
    def test_verify_accepts_original_password(self, hasher):
        hashed = hasher.hash("secret123")
        assert hasher.verify("secret123", hashed) is True

    def test_verify_rejects_other_password(self, hasher):
        hashed = hasher.hash("secret123")
        assert hasher.verify("secret124", hashed) is False

    def test_hash_is_salted(self, hasher):
        first = hasher.hash("secret123")
        second = hasher.hash("secret123")
        assert first != second
        assert hasher.verify("secret123", first)
        assert hasher.verify("secret123", second)

    def test_hash_never_contains_plaintext(self, hasher):
        assert "secret123" not in hasher.hash("secret123")

    def test_cost_factor_is_embedded(self):
        hashed = PasswordHasher(rounds=9).hash("pw")
        assert hashed.startswith("$2b$09$")

    def test_rounds_below_minimum_rejected(self):
        with pytest.raises(ValueError):
            PasswordHasher(rounds=4)

    def test_garbage_hash_returns_false(self, hasher):
        assert hasher.verify("secret123", "not-a-bcrypt-hash") is False

    def test_overlong_password_rejected_on_hash(self, hasher):
        with pytest.raises(ValueError):
            hasher.hash("x" * 73)

    def test_verify_absent_is_always_false(self, hasher):
        assert hasher.verify_absent("absent-user") is False
        assert hasher.verify_absent("secret123") is False

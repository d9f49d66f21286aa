"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import bcrypt

MIN_ROUNDS = 8
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """bcrypt hasher with a fixed cost factor."""

    def __init__(self, rounds: int = 10) -> None:
        if rounds < MIN_ROUNDS:
            raise ValueError(f"bcrypt rounds must be >= {MIN_ROUNDS}, got {rounds}")
        self.rounds = rounds
        # Same cost as real hashes, so a lookup miss takes as long as a mismatch.
        self._dummy_hash = bcrypt.hashpw(b"absent-user", bcrypt.gensalt(rounds=rounds)).decode()

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt."""
        raw = password.encode()
        if len(raw) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except (ValueError, TypeError):
            return False

    def verify_absent(self, password: str) -> bool:
        """Spend one verification on a throwaway hash; always False."""
        self.verify(password, self._dummy_hash)
        return False

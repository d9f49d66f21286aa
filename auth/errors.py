"""
Authentication error taxonomy.

Domain exceptions only: none of these know about HTTP.  The mapping to
status codes lives in ``api.errors``.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for every authentication failure."""


# ── Credential workflow ────────────────────────────────────────────────


class CredentialError(AuthError):
    """Registration or login could not complete."""


class DuplicateEmail(CredentialError):
    def __init__(self, email: str) -> None:
        super().__init__(f"Email already registered: {email}")
        self.email = email


class UserNotFound(CredentialError):
    def __init__(self, email: str) -> None:
        super().__init__(f"User not found: {email}")
        self.email = email


class InvalidCredentials(CredentialError):
    def __init__(self, email: str) -> None:
        super().__init__(f"Password is incorrect for {email}")
        self.email = email


# ── Token codec ────────────────────────────────────────────────────────


class TokenError(AuthError):
    """A token could not be turned back into its payload."""


class InvalidSignature(TokenError):
    pass


class TokenExpired(TokenError):
    pass


class MalformedToken(TokenError):
    pass


# ── Session gate ───────────────────────────────────────────────────────


class Unauthorized(AuthError):
    """The request does not carry a usable session token."""


class Unauthenticated(Unauthorized):
    """No token was presented at all."""

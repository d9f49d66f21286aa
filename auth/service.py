"""
Credential service: registration and login.

The only component that handles plaintext passwords and password hashes.
Everything it hands back (and everything it signs) is the sanitized record.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from auth.errors import InvalidCredentials, UserNotFound
from auth.password import PasswordHasher
from auth.tokens import TokenCodec
from database.user_store import UserStore, sanitize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: Dict[str, Any]
    access_token: str

    def as_response_data(self) -> Dict[str, Any]:
        return {**self.user, "accessToken": self.access_token}


class CredentialService:
    def __init__(
        self,
        store: UserStore,
        codec: TokenCodec,
        hasher: PasswordHasher,
    ):
        self._store = store
        self._codec = codec
        self._hasher = hasher

    async def register(
        self,
        email: str,
        password: str,
        profile: Optional[Dict[str, Any]] = None,
    ) -> AuthResult:
        """
        Create a user and issue its first token.

        Raises ``DuplicateEmail`` (from the store) when the email is taken.
        """
        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        record = await self._store.create(email, password_hash, sanitize(profile or {}))
        result = await self._issue(record.to_public())
        logger.info("Registered user %s (%s)", record.email, record.user_id)
        return result

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Check credentials and issue a fresh token.

        Raises ``UserNotFound`` or ``InvalidCredentials``.
        """
        record = await self._store.get_by_email(email)
        if record is None:
            await asyncio.to_thread(self._hasher.verify_absent, password)
            raise UserNotFound(email)

        matches = await asyncio.to_thread(
            self._hasher.verify, password, record.password_hash
        )
        if not matches:
            raise InvalidCredentials(email)

        result = await self._issue(record.to_public())
        logger.info("Login: %s (%s)", record.email, record.user_id)
        return result

    async def _issue(self, user: Dict[str, Any]) -> AuthResult:
        token = await asyncio.to_thread(self._codec.sign, user)
        return AuthResult(user=user, access_token=token)

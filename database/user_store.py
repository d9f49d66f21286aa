"""
User store: the only persistence surface the auth core talks to.

Implementations:
- SqlUserStore: SQLAlchemy async session over the ``users`` table
- InMemoryUserStore: dict-backed, for tests and local runs
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import DuplicateEmail
from database.models import User

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = frozenset({"password", "password_hash"})


def sanitize(record: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``record`` without password material."""
    return {k: v for k, v in record.items() if k not in SENSITIVE_FIELDS}


@dataclass
class UserRecord:
    """
    A stored user as seen by the auth core.

    ``password_hash`` stays inside the credential workflow; everything that
    leaves it goes through ``to_public``.
    """
    user_id: str
    email: str
    password_hash: str
    profile: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_public(self) -> Dict[str, Any]:
        """Sanitized, JSON-ready view.  Core fields override profile keys."""
        public = sanitize(self.profile)
        public.update(
            {
                "user_id": self.user_id,
                "email": self.email,
                "created_at": self.created_at.isoformat() if self.created_at else None,
            }
        )
        return public

    @classmethod
    def from_model(cls, user: User) -> "UserRecord":
        return cls(
            user_id=str(user.user_id),
            email=user.email,
            password_hash=user.password_hash,
            profile=dict(user.profile or {}),
            created_at=user.created_at,
        )


class UserStore(ABC):
    """Port: look up and create users.  Email uniqueness is enforced here."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Return the user with ``email``, or None."""

    @abstractmethod
    async def create(
        self,
        email: str,
        password_hash: str,
        profile: Dict[str, Any],
    ) -> UserRecord:
        """
        Persist a new user.

        Raises:
            DuplicateEmail: a user with ``email`` already exists
        """


# ── SQLAlchemy ─────────────────────────────────────────────────────────


class SqlUserStore(UserStore):
    """Store backed by a request-scoped ``AsyncSession``."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        result = await self._session.execute(
            select(User).where(User.email == email)
        )
        user = result.scalar_one_or_none()
        return UserRecord.from_model(user) if user is not None else None

    async def create(
        self,
        email: str,
        password_hash: str,
        profile: Dict[str, Any],
    ) -> UserRecord:
        user = User(
            user_id=uuid.uuid4(),
            email=email,
            password_hash=password_hash,
            profile=sanitize(profile),
            created_at=datetime.now(timezone.utc),
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            # The unique index on email decides concurrent registrations.
            await self._session.rollback()
            raise DuplicateEmail(email) from exc
        return UserRecord.from_model(user)


# ── In-memory ──────────────────────────────────────────────────────────


class InMemoryUserStore(UserStore):
    """
    Dict-backed store keyed by email.

    ``create`` checks and inserts without awaiting, so two coroutines can
    never both pass the uniqueness check on one event loop.
    """

    def __init__(self):
        self._users: Dict[str, UserRecord] = {}

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        return self._users.get(email)

    async def create(
        self,
        email: str,
        password_hash: str,
        profile: Dict[str, Any],
    ) -> UserRecord:
        if email in self._users:
            raise DuplicateEmail(email)
        record = UserRecord(
            user_id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            profile=sanitize(profile),
        )
        self._users[email] = record
        logger.debug("Stored user %s in memory", record.user_id)
        return record

    def __len__(self) -> int:
        return len(self._users)

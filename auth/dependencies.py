"""
FastAPI dependencies for authentication.

Provides the credential service wiring used by the auth routes and
``require_session``, the gate in front of every protected route.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.cookies import read_session_cookie
from auth.errors import TokenError, Unauthenticated, Unauthorized
from auth.service import CredentialService
from config.settings import Settings
from database.session import get_db_session
from database.user_store import SqlUserStore, UserStore

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return SqlUserStore(session)


async def get_credential_service(
    request: Request,
    store: UserStore = Depends(get_user_store),
) -> CredentialService:
    return CredentialService(
        store=store,
        codec=request.app.state.token_codec,
        hasher=request.app.state.password_hasher,
    )


async def require_session(request: Request) -> Dict[str, Any]:
    """
    Resolve the caller's identity from the session cookie.

    On success the verified payload is stored on ``request.state.user`` and
    returned.  Every failure becomes ``Unauthorized``; the precise reason is
    only logged.
    """
    settings: Settings = request.app.state.settings
    token = read_session_cookie(request, settings.session_cookie_name)
    if token is None:
        logger.info("Rejected %s %s: no session cookie", request.method, request.url.path)
        raise Unauthenticated("No session token presented")

    codec = request.app.state.token_codec
    try:
        user = await asyncio.to_thread(codec.verify, token)
    except TokenError as exc:
        logger.warning(
            "Rejected %s %s: %s (%s)",
            request.method, request.url.path, type(exc).__name__, exc,
        )
        raise Unauthorized("Session token rejected") from exc

    request.state.user = user
    return user

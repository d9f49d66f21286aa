"""
Session cookie transport.

The access token travels in an HTTP-only cookie (``userToken`` by default)
that expires together with the token itself.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Response

from config.settings import Settings


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    expires = datetime.now(timezone.utc) + timedelta(
        seconds=settings.access_token_ttl_seconds
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        expires=expires,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )


def read_session_cookie(request: Request, cookie_name: str) -> Optional[str]:
    """Return the token from the request's Cookie header, or None if absent or empty."""
    token = request.cookies.get(cookie_name, "").strip()
    return token or None

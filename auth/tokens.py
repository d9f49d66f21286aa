"""
Access token signing and verification.

Tokens are JWTs (HS256 by default) carrying the sanitized user record under
the ``payload`` claim, plus ``iat``, ``exp`` and a random ``jti`` so that two
tokens issued in the same second still differ.  The secret is handed to the
codec explicitly; nothing here reads the environment.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from auth.errors import InvalidSignature, MalformedToken, TokenExpired

PAYLOAD_CLAIM = "payload"


class TokenCodec:
    """Signs payloads into bearer tokens and turns tokens back into payloads."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = 900,
        algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError("Access token secret is not configured")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    def sign(self, payload: Dict[str, Any], expires_in: Optional[int] = None) -> str:
        """
        Create a signed token for ``payload``.

        Args:
            payload: JSON-serialisable mapping embedded as-is
            expires_in: Override of the default TTL, in seconds
        """
        lifetime = self.ttl_seconds if expires_in is None else expires_in
        now = datetime.now(timezone.utc)
        claims = {
            PAYLOAD_CLAIM: payload,
            "iat": now,
            "exp": now + timedelta(seconds=lifetime),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify ``token`` and return its embedded payload.

        Raises:
            InvalidSignature: the signature does not match
            TokenExpired: the ``exp`` claim is in the past
            MalformedToken: anything else wrong with the token
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired("Token has expired") from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignature("Token signature does not match") from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedToken(f"Malformed token: {exc}") from exc

        payload = claims.get(PAYLOAD_CLAIM)
        if not isinstance(payload, dict):
            raise MalformedToken("Token carries no payload object")
        return payload

"""
Auth API routes: register, login.

Route prefix: /auth
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth.cookies import set_session_cookie
from auth.dependencies import get_credential_service, get_settings
from auth.password import MAX_PASSWORD_BYTES
from auth.service import CredentialService
from config.settings import Settings

router = APIRouter(prefix="/auth", tags=["auth"])


# ── Request schemas ────────────────────────────────────────────────────


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class RegisterRequest(LoginRequest):
    """Email and password plus any extra profile fields."""

    model_config = ConfigDict(extra="allow")

    @property
    def profile(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("")
async def register(
    req: RegisterRequest,
    service: CredentialService = Depends(get_credential_service),
) -> Dict[str, Any]:
    """Register a new user."""
    result = await service.register(req.email, req.password, req.profile)
    return {
        "status": True,
        "message": "User created successfully",
        "data": result.as_response_data(),
    }


@router.post("/login")
async def login(
    req: LoginRequest,
    response: Response,
    service: CredentialService = Depends(get_credential_service),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Login with email + password; the token is also set as a cookie."""
    result = await service.login(req.email, req.password)
    set_session_cookie(response, result.access_token, settings)
    return {
        "status": True,
        "message": "Account login successful",
        "data": result.as_response_data(),
    }

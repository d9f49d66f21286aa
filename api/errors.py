"""
Translation of domain errors into HTTP responses.

This is the only place where auth exceptions meet status codes.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from auth.errors import (
    CredentialError,
    DuplicateEmail,
    InvalidCredentials,
    Unauthorized,
    UserNotFound,
)

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "You are not authorized to access this resource"
LOGIN_FAILED_MESSAGE = "Invalid email or password"


def credential_error_response(exc: CredentialError) -> JSONResponse:
    if isinstance(exc, DuplicateEmail):
        message = "Email already registered"
    elif isinstance(exc, (UserNotFound, InvalidCredentials)):
        # Same answer for both so the endpoint can't be used to probe for accounts.
        message = LOGIN_FAILED_MESSAGE
    else:
        message = "Authentication failed"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": False, "message": message},
    )


def unauthorized_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"status": status.HTTP_401_UNAUTHORIZED, "error": UNAUTHORIZED_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain-error handlers to ``app``."""

    @app.exception_handler(CredentialError)
    async def handle_credential_error(request: Request, exc: CredentialError):
        logger.info(
            "%s %s failed: %s", request.method, request.url.path, type(exc).__name__
        )
        return credential_error_response(exc)

    @app.exception_handler(Unauthorized)
    async def handle_unauthorized(request: Request, exc: Unauthorized):
        return unauthorized_response()

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": False, "message": "Internal server error"},
        )

"""
Items API authentication service: application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as api_router
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.tokens import TokenCodec
from config.settings import Settings, config
from database.session import build_engine, build_session_factory, create_schema

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "asyncio", "httpx"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Process-wide, read-only state (settings, token codec, password hasher,
    database engine) is created here once and kept on ``app.state``.
    Raises ``ValueError`` when no signing secret is configured.
    """
    settings = settings or config
    configure_logging(settings)

    app = FastAPI(
        title="Items API Auth",
        version="1.0.0",
        description="Registration, login and cookie sessions for the items API.",
    )

    app.state.settings = settings
    app.state.token_codec = TokenCodec(
        secret=settings.access_token_secret,
        ttl_seconds=settings.access_token_ttl_seconds,
        algorithm=settings.token_algorithm,
    )
    app.state.password_hasher = PasswordHasher(rounds=settings.password_hash_rounds)
    app.state.engine = build_engine(settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)

    register_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(api_router)

    @app.on_event("startup")
    async def on_startup():
        if settings.database_create_schema:
            await create_schema(app.state.engine)
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.engine.dispose()

    return app


if __name__ == "__main__":
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )

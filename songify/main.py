"""Songify auth service: component assembly and FastAPI application factory.

``build_auth_components`` constructs every auth component exactly once
from a :class:`Settings` instance and an optional clock.  Nothing in the
core reads global state: the hash cache, token issuer and verifier are
owned by whoever calls this function (the app factory in production, a
fixture in tests).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from songify import __version__
from songify.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from songify.api.routes import router as api_router
from songify.config.settings import Settings
from songify.providers.cache.memory_hash_cache import MemoryHashCache
from songify.providers.session.memory_session_directory import MemorySessionDirectory
from songify.services.auth_verifier import AuthVerifier
from songify.services.daily_salt import DailySaltProvider
from songify.services.friend_key_service import FriendKeyService
from songify.services.key_hasher import KeyHasher
from songify.services.token_issuer import TokenIssuer
from songify.utils.clock import Clock, utc_now
from songify.utils.logging import configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component assembly
# ---------------------------------------------------------------------------


def build_auth_components(app_settings: Settings, clock: Clock = utc_now) -> dict[str, Any]:
    """Instantiate the auth core.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    cache = MemoryHashCache(max_entries=app_settings.hash_cache_max_entries)
    issuer = TokenIssuer(
        secret=app_settings.jwt_secret,
        admin_duration=app_settings.admin_token_duration,
        friend_duration=app_settings.friend_token_duration,
        clock=clock,
    )
    verifier = AuthVerifier(
        hasher=KeyHasher(),
        salt_provider=DailySaltProvider(clock),
        cache=cache,
        issuer=issuer,
        admin_password=app_settings.admin_portal_password,
    )
    return {
        "settings": app_settings,
        "hash_cache": cache,
        "token_issuer": issuer,
        "auth_verifier": verifier,
        "session_directory": MemorySessionDirectory(),
        "friend_key_service": FriendKeyService(max_attempts=app_settings.friend_key_max_attempts),
    }


def _warn_on_default_secrets(app_settings: Settings) -> None:
    defaults = app_settings.uses_default_secrets()
    if defaults and app_settings.is_production:
        _logger.warning("default_secrets_in_production", fields=defaults)


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    app_settings: Settings = application.state.settings
    _logger.info(
        "app_startup",
        version=__version__,
        environment=app_settings.app_env,
        admin_token_hours=app_settings.admin_token_duration.total_seconds() / 3600,
        friend_token_hours=app_settings.friend_token_duration.total_seconds() / 3600,
    )
    yield
    _logger.info("app_shutdown", cached_hashes=len(application.state.hash_cache))


def create_app(custom_settings: Settings | None = None, clock: Clock = utc_now) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = custom_settings or Settings()
    configure_logging(app_settings.log_level)
    _warn_on_default_secrets(app_settings)

    application = FastAPI(
        title="Songify Auth API",
        version=__version__,
        description=(
            "Friend-key and admin-password verification for Songify listening "
            "sessions, issuing role-scoped bearer tokens."
        ),
        lifespan=_lifespan,
    )

    for key, value in build_auth_components(app_settings, clock).items():
        setattr(application.state, key, value)

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(api_router)
    return application


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def run() -> None:
    """Serve the app with uvicorn using host/port from settings."""
    app_settings = Settings()
    uvicorn.run(
        "songify.main:create_app",
        factory=True,
        host=app_settings.app_host,
        port=app_settings.app_port,
        reload=(app_settings.app_env == "development"),
    )


if __name__ == "__main__":
    run()

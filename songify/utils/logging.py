"""Structured logging setup using structlog.

Implements a **dual-renderer pattern**: the same shared processor chain
(context vars, log level, timestamps, stack info) feeds into either a
coloured ConsoleRenderer for local development or a JSONRenderer for
production.  The renderer is selected automatically based on the ``APP_ENV``
environment variable (default ``"development"``), or forced via the
``json_output`` flag.

Standard-library ``logging`` is also rewired through the same structlog
formatter so that uvicorn and httpx produce identically formatted output.

Security events (rejected credentials, bad bearer headers, expired tokens)
go through :func:`log_security_event` so they share one event name and can
be filtered in production logs.  Callers must never pass raw keys, hashes,
passwords or signing material as fields.
"""

import logging
import sys
from enum import Enum
from typing import Any

import structlog


class SecurityEvent(str, Enum):  # noqa: UP042  StrEnum requires Python 3.11+
    """Security-relevant event types emitted by the auth core and API."""

    MISSING_AUTH = "missing_auth"
    INVALID_AUTH_FORMAT = "invalid_auth_format"
    INVALID_JWT = "invalid_jwt"
    EXPIRED_JWT = "expired_jwt"
    NON_ADMIN_ACCESS = "non_admin_access"
    BAD_JOIN_CODE = "bad_join_code"
    BAD_ADMIN_PASSWORD = "bad_admin_password"
    HASHING_FAILED = "hashing_failed"


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog with environment-appropriate rendering.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR, FATAL).
        json_output: Force JSON output. When False, uses console rendering in
                     development and JSON in production (detected via APP_ENV).

    Returns:
        A configured structlog BoundLogger.
    """
    import os

    app_env = os.environ.get("APP_ENV", "development")
    use_json = json_output or app_env == "production"

    # Order matters: contextvars first, then level/timestamps, then
    # exception formatting.
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger.

    If structlog has not been configured yet, calls configure_logging() with defaults.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)


_security_logger: structlog.BoundLogger = structlog.get_logger(logger_name="songify.security")


def log_security_event(event: SecurityEvent, message: str, **context: Any) -> None:
    """Emit a warning-level ``security_event`` log line.

    Args:
        event: The kind of security event.
        message: Short human-readable description.
        **context: Extra non-secret fields (path, role, session_id, ...).
    """
    _security_logger.warning(
        "security_event",
        security_event=event.value,
        detail=message,
        **context,
    )

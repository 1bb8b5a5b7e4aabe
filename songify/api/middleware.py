"""API middleware: request logging and error handling.

# ─── MIDDLEWARE EXECUTION ORDER ───────────────────────────────────────
#
# Starlette middleware is a stack (LIFO: last added, first executed):
#
#   In main.py:
#     app.add_middleware(ErrorHandlingMiddleware)   # added 1st → inner
#     app.add_middleware(RequestLoggingMiddleware)  # added 2nd → outermost
#
#   Request flow:
#     Client → RequestLogging → ErrorHandling → route handler
#
# So RequestLoggingMiddleware sees the *final* status code, including
# the 500 produced when ErrorHandling converts a HashingFailed.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import time

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from songify.api.schemas import ErrorResponse
from songify.utils.errors import AuthFailure, SongifyError, TokenInvalid
from songify.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


def _status_for(exc: SongifyError) -> int:
    if isinstance(exc, (AuthFailure, TokenInvalid)):
        return 401
    return 500


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch ``SongifyError`` subclasses and return structured JSON errors.

    Credential and token failures become 401 with their uniform message;
    everything else (HashingFailed, ConfigurationError, ...) becomes 500.
    Only the exception class and message are logged, never request bodies.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except SongifyError as exc:
            status_code = _status_for(exc)
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                component=exc.component,
                path=str(request.url.path),
                status=status_code,
            )
            body = ErrorResponse(
                error=type(exc).__name__,
                detail=exc.message if status_code < 500 else "Internal server error",
            )
            return JSONResponse(
                status_code=status_code,
                content=body.model_dump(),
            )

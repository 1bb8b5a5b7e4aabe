"""Utility modules for Songify.

- **errors** -- Domain exception hierarchy rooted at SongifyError; the
  auth core raises typed failures so the HTTP layer can map them to
  401/403/500 without string matching.
- **logging** -- structlog setup with a dual-renderer pattern plus the
  ``log_security_event`` helper for rejected credentials and tokens.
- **clock** -- Injectable UTC clock used for salt rotation and expiry.
"""

from songify.utils.clock import Clock, FixedClock, as_utc, utc_now
from songify.utils.errors import (
    AuthFailure,
    ConfigurationError,
    FriendKeyGenerationError,
    HashingFailed,
    SongifyError,
    TokenExpired,
    TokenInvalid,
    TokenInvalidSignature,
    TokenMalformed,
)
from songify.utils.logging import SecurityEvent, configure_logging, get_logger, log_security_event

__all__ = [
    "AuthFailure",
    "Clock",
    "ConfigurationError",
    "FixedClock",
    "FriendKeyGenerationError",
    "HashingFailed",
    "SecurityEvent",
    "SongifyError",
    "TokenExpired",
    "TokenInvalid",
    "TokenInvalidSignature",
    "TokenMalformed",
    "as_utc",
    "configure_logging",
    "get_logger",
    "log_security_event",
    "utc_now",
]

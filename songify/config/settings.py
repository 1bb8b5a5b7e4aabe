"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from TWO sources (in priority
# order):
#
#   1. **Environment variables**, e.g., JWT_SECRET=...
#      (highest priority, always wins)
#   2. **.env file**: key=value lines in the project root .env file
#      (lower priority, used for local development)
#
# Field name `admin_token_duration` maps to env var
# `ADMIN_TOKEN_DURATION`.  Duration fields accept Go-style strings
# ("168h", "1h30m", "90s"), bare seconds ("3600"), or ISO-8601
# ("P7D").  An unparseable duration fails validation at startup.
#
# The defaults for `jwt_secret` and `admin_portal_password` are
# development values only.  create_app() logs a warning when they are
# still in use with APP_ENV=production.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import re
from datetime import timedelta

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"  # noqa: S105
DEFAULT_ADMIN_PASSWORD = "admin123"  # noqa: S105

_GO_DURATION = re.compile(r"^(?:\d+(?:\.\d+)?(?:h|m|s|ms))+$")
_GO_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(h|ms|m|s)")
_GO_UNITS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}


def parse_duration(value: object) -> object:
    """Convert Go-style and bare-second duration strings to ``timedelta``.

    Anything else is returned unchanged so pydantic's own timedelta parsing
    (ISO-8601, ``HH:MM:SS``) gets a chance.
    """
    if not isinstance(value, str):
        return value
    text = value.strip().lower()
    if text.isdigit():
        return timedelta(seconds=int(text))
    if _GO_DURATION.match(text):
        seconds = sum(
            float(amount) * _GO_UNITS[unit]
            for amount, unit in _GO_DURATION_PART.findall(text)
        )
        return timedelta(seconds=seconds)
    return value


class Settings(BaseSettings):
    """Songify auth settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Token signing ===
    # Rotating the secret invalidates every token issued before the change.
    jwt_secret: str = DEFAULT_JWT_SECRET
    admin_token_duration: timedelta = timedelta(hours=168)
    friend_token_duration: timedelta = timedelta(hours=12)

    # === Admin portal ===
    admin_portal_password: str = DEFAULT_ADMIN_PASSWORD

    # === Friend keys ===
    # Upper bound on cached (key, day) hashes; stale days are pruned first.
    hash_cache_max_entries: int = 4096
    friend_key_max_attempts: int = 100

    # === App Config ===
    app_host: str = "0.0.0.0"  # noqa: S104
    app_port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"

    @field_validator("admin_token_duration", "friend_token_duration", mode="before")
    @classmethod
    def _parse_duration(cls, value: object) -> object:
        return parse_duration(value)

    @field_validator("hash_cache_max_entries", "friend_key_max_attempts")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    def uses_default_secrets(self) -> list[str]:
        """Return the names of secret fields still set to development defaults."""
        defaults: list[str] = []
        if self.jwt_secret == DEFAULT_JWT_SECRET:
            defaults.append("jwt_secret")
        if self.admin_portal_password == DEFAULT_ADMIN_PASSWORD:
            defaults.append("admin_portal_password")
        return defaults

"""Role-scoped session token issuance and validation.

# ─── TOKEN FORMAT ────────────────────────────────────────────────────
#
# Tokens are HS256 JWTs signed with the process-wide ``jwt_secret``:
#
#   {"sid": <session id or null>, "role": "admin" | "friend",
#    "iss": "songify", "iat": <epoch s>, "exp": <epoch s>}
#
# Timestamps keep sub-second precision (RFC 7519 NumericDate allows
# fractional values).
#
# ``exp`` is ``iat`` plus the role's configured duration: admin tokens
# default to 7 days (long-lived management credentials), friend tokens
# to 12 hours (they should die with the event).
#
# Tokens are self-verifying.  Nothing is stored server-side, so there is
# no revocation; rotating the secret invalidates every issued token.
#
# Expiry is checked against the injected clock rather than PyJWT's own
# wall-clock check, so tests can pin "now" on either side of ``exp``.
# ─────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import structlog

from songify.models.auth import Role, SessionToken, TokenClaims
from songify.utils.clock import Clock, as_utc, utc_now
from songify.utils.errors import (
    AuthFailure,
    ConfigurationError,
    TokenExpired,
    TokenInvalidSignature,
    TokenMalformed,
)
from songify.utils.logging import get_logger

JWT_ALGORITHM = "HS256"
TOKEN_ISSUER = "songify"

_REQUIRED_CLAIMS = ["role", "iss", "iat", "exp"]

_logger: structlog.BoundLogger = get_logger(__name__)


class TokenIssuer:
    """Mints and validates signed admin/friend session tokens.

    Constructor injection: the secret, durations and clock come from
    ``build_auth_components`` so this class never reads config globals.
    """

    def __init__(
        self,
        secret: str,
        admin_duration: timedelta,
        friend_duration: timedelta,
        clock: Clock = utc_now,
        issuer: str = TOKEN_ISSUER,
    ) -> None:
        if not secret:
            raise ConfigurationError("JWT signing secret must not be empty", component="token_issuer")
        self._secret = secret
        self._durations = {Role.ADMIN: admin_duration, Role.FRIEND: friend_duration}
        self._clock = clock
        self._issuer = issuer

    def duration_for(self, role: Role) -> timedelta:
        """Return the configured lifetime of *role* tokens."""
        return self._durations[role]

    # ------------------------------------------------------------------
    # Issuance
    # ------------------------------------------------------------------

    def issue_admin_token(self, session_id: str | None = None) -> SessionToken:
        """Issue an admin token, optionally bound to *session_id*."""
        return self._issue(Role.ADMIN, session_id)

    def issue_friend_token(self, session_id: str) -> SessionToken:
        """Issue a friend token bound to *session_id*.

        Raises
        ------
        AuthFailure
            *session_id* is empty; a friend token must name its session.
        """
        if not session_id:
            raise AuthFailure("Friend tokens require a session id", component="token_issuer")
        return self._issue(Role.FRIEND, session_id)

    def _issue(self, role: Role, session_id: str | None) -> SessionToken:
        # NumericDate may be fractional; keeping microseconds makes exp
        # exactly issued_at + duration.
        issued_at = as_utc(self._clock())
        expires_at = issued_at + self.duration_for(role)
        payload: dict[str, Any] = {
            "sid": session_id,
            "role": role.value,
            "iss": self._issuer,
            "iat": issued_at.timestamp(),
            "exp": expires_at.timestamp(),
        }
        token = jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)
        _logger.info(
            "token_issued",
            role=role.value,
            session_id=session_id,
            expires_at=expires_at.isoformat(),
        )
        return SessionToken(
            token=token,
            role=role,
            session_id=session_id,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_token(self, token: str) -> TokenClaims:
        """Verify *token*'s signature, issuer and expiry and return its claims.

        Raises
        ------
        TokenExpired
            The clock is at or past the token's ``exp``.
        TokenInvalidSignature
            The signature does not match this issuer's secret.
        TokenMalformed
            The token cannot be decoded or lacks required claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                issuer=self._issuer,
                options={"require": _REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidSignatureError as exc:
            raise TokenInvalidSignature() from exc
        except jwt.InvalidTokenError as exc:
            raise TokenMalformed(f"Token rejected: {type(exc).__name__}") from exc

        try:
            role = Role(payload["role"])
            issued_at = datetime.fromtimestamp(float(payload["iat"]), tz=timezone.utc)  # noqa: UP017
            expires_at = datetime.fromtimestamp(float(payload["exp"]), tz=timezone.utc)  # noqa: UP017
        except (TypeError, ValueError, OverflowError, OSError) as exc:
            raise TokenMalformed("Token claims are invalid") from exc

        session_id = payload.get("sid")
        if session_id is not None and not isinstance(session_id, str):
            raise TokenMalformed("Token session id is invalid")
        if role is Role.FRIEND and not session_id:
            raise TokenMalformed("Friend token is missing its session id")

        if as_utc(self._clock()) >= expires_at:
            raise TokenExpired()

        return TokenClaims(
            role=role,
            session_id=session_id,
            issued_at=issued_at,
            expires_at=expires_at,
        )

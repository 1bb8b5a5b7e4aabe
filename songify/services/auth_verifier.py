"""Friend-key and admin-password verification façade.

This is the only auth entry point the HTTP layer talks to.  It wires the
leaf components together:

    raw key ─▶ normalize_key ─▶ hash cache (miss ─▶ KeyHasher + daily salt)
            ─▶ compare with the client's hash ─▶ TokenIssuer

Failure semantics:
    - A mismatch raises :class:`AuthFailure` with the same message no matter
      which stage diverged, so a caller cannot distinguish "wrong key"
      from "wrong day".
    - :class:`HashingFailed` propagates unchanged.  It means the server
      could not check the credential, not that the credential was bad.
    - Token validation failures are logged as distinct security events
      and re-raised for the caller to map to a uniform 401.

The friend-hash comparison is a plain string comparison: the client sends
a derived hash, not the secret itself.  The admin password is a raw
secret and is compared with ``hmac.compare_digest``.
"""

from __future__ import annotations

import hmac
from collections.abc import Mapping

from songify.interfaces.hash_cache import IHashCache
from songify.models.auth import Role, SessionToken
from songify.services.daily_salt import DailySaltProvider
from songify.services.key_hasher import KeyHasher
from songify.services.key_normalizer import normalize_key
from songify.services.token_issuer import TokenIssuer
from songify.utils.errors import AuthFailure, HashingFailed, TokenExpired, TokenInvalid, TokenInvalidSignature
from songify.utils.logging import SecurityEvent, log_security_event


class AuthVerifier:
    """Turns submitted credentials into role-scoped session tokens."""

    def __init__(
        self,
        hasher: KeyHasher,
        salt_provider: DailySaltProvider,
        cache: IHashCache,
        issuer: TokenIssuer,
        admin_password: str,
    ) -> None:
        self._hasher = hasher
        self._salt_provider = salt_provider
        self._cache = cache
        self._issuer = issuer
        self._admin_password = admin_password

    # ------------------------------------------------------------------
    # Friend access
    # ------------------------------------------------------------------

    def expected_friend_hash(self, raw_key: str) -> str:
        """Return today's expected hash for *raw_key*, computing it at most once per day."""
        normalized = normalize_key(raw_key)
        salt = self._salt_provider.current_salt()
        try:
            return self._cache.get_or_compute(normalized, salt, self._hasher.derive)
        except HashingFailed:
            log_security_event(SecurityEvent.HASHING_FAILED, "friend key hash could not be computed")
            raise

    def verify_friend(self, raw_key: str, client_hash: str, session_id: str) -> SessionToken:
        """Issue a friend token for *session_id* if *client_hash* matches *raw_key*.

        Raises
        ------
        AuthFailure
            *session_id* is empty, or the submitted hash does not match
            today's expected hash.
        HashingFailed
            The expected hash could not be computed.
        """
        if not session_id:
            log_security_event(SecurityEvent.BAD_JOIN_CODE, "friend access without a session id")
            raise AuthFailure()
        expected = self.expected_friend_hash(raw_key)
        if not _hashes_match(client_hash, expected):
            log_security_event(SecurityEvent.BAD_JOIN_CODE, "friend key hash mismatch", session_id=session_id)
            raise AuthFailure()
        return self._issuer.issue_friend_token(session_id)

    def match_friend_session(self, client_hash: str, sessions: Mapping[str, str]) -> SessionToken:
        """Find the session whose friend key hashes to *client_hash* today.

        *sessions* maps session id to that session's friend key.  The first
        match in iteration order wins.  Each key's hash comes from the
        cache, so scanning many sessions costs one scrypt call per key per day.

        Raises
        ------
        AuthFailure
            No session's friend key produces *client_hash*.
        """
        for session_id, friend_key in sessions.items():
            if _hashes_match(client_hash, self.expected_friend_hash(friend_key)):
                return self._issuer.issue_friend_token(session_id)
        log_security_event(SecurityEvent.BAD_JOIN_CODE, "no session matches friend key hash")
        raise AuthFailure()

    # ------------------------------------------------------------------
    # Admin access
    # ------------------------------------------------------------------

    def verify_admin(self, password: str, session_id: str | None = None) -> SessionToken:
        """Issue an admin token if *password* equals the configured admin password.

        An empty configured password disables the admin portal entirely.
        """
        expected = self._admin_password
        if not expected or not hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8")):
            log_security_event(SecurityEvent.BAD_ADMIN_PASSWORD, "admin password rejected")
            raise AuthFailure()
        return self._issuer.issue_admin_token(session_id)

    def issue_session_admin_token(self, session_id: str) -> SessionToken:
        """Bind an already-authenticated admin to a newly created session."""
        return self._issuer.issue_admin_token(session_id)

    # ------------------------------------------------------------------
    # Bearer tokens
    # ------------------------------------------------------------------

    def validate_token(self, token: str) -> tuple[Role, str | None]:
        """Return ``(role, session_id)`` for a valid *token*.

        Raises
        ------
        TokenExpired, TokenInvalidSignature, TokenMalformed
            Logged as distinct events; callers report all of them as
            unauthorized.
        """
        try:
            claims = self._issuer.validate_token(token)
        except TokenExpired:
            log_security_event(SecurityEvent.EXPIRED_JWT, "expired token")
            raise
        except TokenInvalidSignature:
            log_security_event(SecurityEvent.INVALID_JWT, "token signature mismatch")
            raise
        except TokenInvalid as exc:
            log_security_event(SecurityEvent.INVALID_JWT, exc.message)
            raise
        return claims.role, claims.session_id


def _hashes_match(client_hash: str, expected: str) -> bool:
    # Hex digests are case-insensitive; tolerate stray whitespace from clients.
    return client_hash.strip().lower() == expected

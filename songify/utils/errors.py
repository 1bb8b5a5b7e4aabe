"""Custom exception hierarchy for Songify authentication.

All application exceptions inherit from :class:`SongifyError`, which
carries an optional ``component`` naming the part of the auth core that
raised it (e.g. "key_hasher", "token_issuer") so error handlers and log
lines can attribute the failure without inspecting the message.

The hierarchy is organized by where a failure surfaces:

    SongifyError  (base -- catch-all for any Songify error)
    +-- HashingFailed            (scrypt could not run; internal failure)
    +-- AuthFailure              (credential mismatch; uniform rejection)
    +-- TokenInvalid             (bearer token rejected)
    |   +-- TokenExpired
    |   +-- TokenInvalidSignature
    |   +-- TokenMalformed
    +-- ConfigurationError       (startup / missing config)
    +-- FriendKeyGenerationError (no unique friend key could be found)

Callers distinguish "the guest typed the wrong key" (AuthFailure) from
"the server could not check it" (HashingFailed) and map them to 401 and
500 respectively.  Token problems are reported to clients uniformly as
unauthorized, but the subclasses keep diagnostics distinct in the logs.
"""


class SongifyError(Exception):
    """Base exception for all Songify errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``component`` identifying which part of the core raised it.  The
    ``__str__`` method prefixes the component in brackets for structured
    log output, e.g. ``[key_hasher] Key derivation failed``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        component: str | None = None,
    ) -> None:
        self._message = message
        self._component = component
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def component(self) -> str | None:
        return self._component

    def __str__(self) -> str:
        if self._component:
            return f"[{self._component}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Credential verification errors
# ---------------------------------------------------------------------------

class HashingFailed(SongifyError):
    """Raised when the key derivation function cannot run.

    This is an internal failure (usually memory exhaustion), not evidence
    of a bad credential.  It is fatal to the current verification attempt
    and is never retried inside the core.
    """

    def __init__(
        self,
        message: str = "Key derivation failed",
        component: str | None = "key_hasher",
    ) -> None:
        super().__init__(message=message, component=component)


class AuthFailure(SongifyError):
    """Raised when a submitted credential does not match.

    The message is deliberately identical for every stage of the check so
    a caller cannot tell a wrong key from a wrong day.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        component: str | None = None,
    ) -> None:
        super().__init__(message=message, component=component)


# ---------------------------------------------------------------------------
# Token errors
# ---------------------------------------------------------------------------

class TokenInvalid(SongifyError):
    """Raised when a bearer token cannot be accepted."""

    def __init__(
        self,
        message: str = "Invalid token",
        component: str | None = "token_issuer",
    ) -> None:
        super().__init__(message=message, component=component)


class TokenExpired(TokenInvalid):
    """Raised when a token's ``exp`` claim has passed."""

    def __init__(
        self,
        message: str = "Token has expired",
        component: str | None = "token_issuer",
    ) -> None:
        super().__init__(message=message, component=component)


class TokenInvalidSignature(TokenInvalid):
    """Raised when a token was tampered with or signed with another secret."""

    def __init__(
        self,
        message: str = "Token signature is invalid",
        component: str | None = "token_issuer",
    ) -> None:
        super().__init__(message=message, component=component)


class TokenMalformed(TokenInvalid):
    """Raised when a token cannot be decoded or lacks required claims."""

    def __init__(
        self,
        message: str = "Token is malformed",
        component: str | None = "token_issuer",
    ) -> None:
        super().__init__(message=message, component=component)


# ---------------------------------------------------------------------------
# Startup / supporting errors
# ---------------------------------------------------------------------------

class ConfigurationError(SongifyError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        component: str | None = None,
    ) -> None:
        super().__init__(message=message, component=component)


class FriendKeyGenerationError(SongifyError):
    """Raised when no unused friend key is found within the attempt limit."""

    def __init__(
        self,
        message: str = "Failed to generate a unique friend key",
        component: str | None = "friend_key_service",
    ) -> None:
        super().__init__(message=message, component=component)

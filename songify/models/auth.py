"""Authentication models for Songify sessions.

Defines the role enum and the two frozen Pydantic v2 models that cross
the boundary between the auth core and the HTTP layer:

- :class:`SessionToken` is what a successful verification returns: the
  compact signed token string plus the claims it was minted with, so the
  caller can report the expiry without decoding its own token.
- :class:`TokenClaims` is what validating a bearer token yields.

Neither model ever holds the access key or its hash.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):  # noqa: UP042  StrEnum requires Python 3.11+
    """A user's permission level within a session."""

    ADMIN = "admin"    # Full control over session settings and song approvals
    FRIEND = "friend"  # Can only submit and view song requests


class TokenClaims(BaseModel):
    """Claims recovered from a validated session token."""

    model_config = ConfigDict(frozen=True)

    role: Role
    # Always set for friend tokens; admin tokens may be session-less.
    session_id: str | None = None
    issued_at: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class SessionToken(BaseModel):
    """A freshly issued, signed session credential."""

    model_config = ConfigDict(frozen=True)

    # Compact JWT (header.payload.signature) handed to the client as a
    # bearer credential.
    token: str
    role: Role
    session_id: str | None = None
    issued_at: datetime
    expires_at: datetime

    @property
    def claims(self) -> TokenClaims:
        return TokenClaims(
            role=self.role,
            session_id=self.session_id,
            issued_at=self.issued_at,
            expires_at=self.expires_at,
        )

"""Pydantic request/response schemas for the Songify auth API.

Convention: request schemas end with "Request", response schemas end
with "Response".  Field(...) adds constraints and descriptions for the
generated OpenAPI docs.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from songify.models.auth import Role, SessionToken


class FriendAccessRequest(BaseModel):
    """A guest proving knowledge of a specific session's friend key.

    Only the hash crosses the wire; the server checks it against the
    friend key it holds for *session_id*.
    """

    friend_key_hash: str = Field(min_length=1, description="Client-side scrypt hex digest")
    session_id: str = Field(min_length=1)


class JoinSessionRequest(BaseModel):
    """A guest joining by hash alone; the server finds the matching session."""

    friend_key_hash: str = Field(min_length=1, description="Client-side scrypt hex digest")


class AdminAccessRequest(BaseModel):
    """Admin portal login."""

    password: str
    session_id: str | None = None


class TokenResponse(BaseModel):
    """A freshly issued bearer token."""

    token: str
    role: Role
    session_id: str | None = None
    expires_at: datetime

    @classmethod
    def from_session_token(cls, session_token: SessionToken) -> TokenResponse:
        return cls(
            token=session_token.token,
            role=session_token.role,
            session_id=session_token.session_id,
            expires_at=session_token.expires_at,
        )


class WhoAmIResponse(BaseModel):
    """The identity carried by the caller's bearer token."""

    role: Role
    session_id: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class ErrorResponse(BaseModel):
    """Standard error body returned by the error handling middleware."""

    error: str
    detail: str


class CreateSessionRequest(BaseModel):
    """Admin request to open a new listening session.

    Without a display name the session gets a generated one.
    """

    display_name: str | None = Field(default=None, min_length=1, max_length=100)


class CreateSessionResponse(BaseModel):
    """A new session, its shareable friend key, and a session-bound admin token."""

    session_id: str
    display_name: str
    friend_key: str
    token: str
    expires_at: datetime

"""FastAPI routes for Songify authentication.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                    Method  Auth    Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/auth/friend         POST    -       Session id + hash → friend token
# /api/v1/auth/join           POST    -       Hash only → matching session's token
# /api/v1/auth/admin          POST    -       Admin password → admin token
# /api/v1/auth/me             GET     bearer  Role and session of the token
# /api/v1/auth/admin/check    GET     admin   403 for friend tokens
# /api/v1/sessions            POST    admin   Create session + friend key
# /api/v1/health              GET     -       Liveness
#
# Endpoints are plain ``def`` functions: scrypt is CPU-bound, so FastAPI
# runs them on its threadpool instead of blocking the event loop.
#
# DEPENDENCY INJECTION PATTERN:
# Route functions declare dependencies as Annotated params resolved via
# Depends() helpers that read from app.state (populated in main.py).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import uuid
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from songify import __version__
from songify.api.schemas import (
    AdminAccessRequest,
    CreateSessionRequest,
    CreateSessionResponse,
    FriendAccessRequest,
    HealthResponse,
    JoinSessionRequest,
    TokenResponse,
    WhoAmIResponse,
)
from songify.interfaces.session_directory import ISessionDirectory
from songify.models.auth import Role
from songify.services.auth_verifier import AuthVerifier
from songify.services.friend_key_service import FriendKeyService
from songify.utils.errors import AuthFailure, TokenInvalid
from songify.utils.logging import SecurityEvent, get_logger, log_security_event

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_verifier(request: Request) -> AuthVerifier:
    return request.app.state.auth_verifier


def _get_session_directory(request: Request) -> ISessionDirectory:
    return request.app.state.session_directory


def _get_friend_key_service(request: Request) -> FriendKeyService:
    return request.app.state.friend_key_service


VerifierDep = Annotated[AuthVerifier, Depends(_get_verifier)]
SessionDirectoryDep = Annotated[ISessionDirectory, Depends(_get_session_directory)]
FriendKeyServiceDep = Annotated[FriendKeyService, Depends(_get_friend_key_service)]


def require_token(request: Request, verifier: VerifierDep) -> WhoAmIResponse:
    """Validate the ``Authorization: Bearer <token>`` header.

    Missing and malformed headers are logged as distinct security events;
    every token failure is reported to the client as the same 401.
    """
    path = str(request.url.path)
    header = request.headers.get("authorization", "")
    if not header:
        log_security_event(SecurityEvent.MISSING_AUTH, "missing authorization header", path=path)
        raise HTTPException(status_code=401, detail="missing authorization header")

    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        log_security_event(SecurityEvent.INVALID_AUTH_FORMAT, "invalid authorization header format", path=path)
        raise HTTPException(status_code=401, detail="invalid authorization header format")

    try:
        role, session_id = verifier.validate_token(parts[1])
    except TokenInvalid:
        raise HTTPException(status_code=401, detail="invalid token") from None
    return WhoAmIResponse(role=role, session_id=session_id)


IdentityDep = Annotated[WhoAmIResponse, Depends(require_token)]


def require_admin(request: Request, identity: IdentityDep) -> WhoAmIResponse:
    """Like :func:`require_token` but rejects friend tokens with 403."""
    if identity.role is not Role.ADMIN:
        log_security_event(
            SecurityEvent.NON_ADMIN_ACCESS,
            "admin access required",
            path=str(request.url.path),
            session_id=identity.session_id,
        )
        raise HTTPException(status_code=403, detail="admin access required")
    return identity


AdminDep = Annotated[WhoAmIResponse, Depends(require_admin)]


# ---------------------------------------------------------------------------
# Credential exchange
# ---------------------------------------------------------------------------


@router.post("/auth/friend", response_model=TokenResponse)
def friend_access(
    body: FriendAccessRequest,
    verifier: VerifierDep,
    directory: SessionDirectoryDep,
) -> TokenResponse:
    """Exchange a client-computed friend key hash for a token bound to that session."""
    friend_key = directory.friend_key_for(body.session_id)
    if friend_key is None:
        log_security_event(SecurityEvent.BAD_JOIN_CODE, "unknown session", session_id=body.session_id)
        raise HTTPException(status_code=404, detail="session not found")
    try:
        token = verifier.verify_friend(friend_key, body.friend_key_hash, body.session_id)
    except AuthFailure as exc:
        raise HTTPException(status_code=401, detail=exc.message) from None
    return TokenResponse.from_session_token(token)


@router.post("/auth/join", response_model=TokenResponse)
def join_session(
    body: JoinSessionRequest,
    verifier: VerifierDep,
    directory: SessionDirectoryDep,
) -> TokenResponse:
    """Find the session whose friend key hashes to the submitted value."""
    try:
        token = verifier.match_friend_session(body.friend_key_hash, directory.friend_keys())
    except AuthFailure:
        raise HTTPException(status_code=404, detail="session not found") from None
    return TokenResponse.from_session_token(token)


@router.post("/auth/admin", response_model=TokenResponse)
def admin_access(body: AdminAccessRequest, verifier: VerifierDep) -> TokenResponse:
    """Exchange the admin portal password for an admin token."""
    try:
        token = verifier.verify_admin(body.password, body.session_id)
    except AuthFailure as exc:
        raise HTTPException(status_code=401, detail=exc.message) from None
    return TokenResponse.from_session_token(token)


# ---------------------------------------------------------------------------
# Token introspection
# ---------------------------------------------------------------------------


@router.get("/auth/me", response_model=WhoAmIResponse)
def whoami(identity: IdentityDep) -> WhoAmIResponse:
    return identity


@router.get("/auth/admin/check", response_model=WhoAmIResponse)
def admin_check(identity: AdminDep) -> WhoAmIResponse:
    return identity


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


@router.post("/sessions", response_model=CreateSessionResponse, status_code=201)
def create_session(
    body: CreateSessionRequest,
    _admin: AdminDep,
    verifier: VerifierDep,
    directory: SessionDirectoryDep,
    friend_keys: FriendKeyServiceDep,
) -> CreateSessionResponse:
    """Open a session with a fresh friend key and return a session-bound admin token."""
    friend_key = friend_keys.generate(directory.key_exists)
    display_name = body.display_name or friend_keys.generate_name()
    session_id = str(uuid.uuid4())
    directory.register(session_id, friend_key)

    # The admin already proved the portal password to reach this route;
    # re-issue their token bound to the new session.
    token = verifier.issue_session_admin_token(session_id)
    _logger.info("session_created", session_id=session_id)
    return CreateSessionResponse(
        session_id=session_id,
        display_name=display_name,
        friend_key=friend_key,
        token=token.token,
        expires_at=token.expires_at,
    )


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(version=__version__)

"""Pydantic models shared by the auth core and the HTTP layer."""

from songify.models.auth import Role, SessionToken, TokenClaims

__all__ = ["Role", "SessionToken", "TokenClaims"]

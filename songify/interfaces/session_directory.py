"""Abstract base class for the session directory.

The auth API resolves "which session does this friend-key hash belong
to", "what is this session's friend key" and "is this friend key already
taken" through this contract.  The production implementation is backed
by the sessions table; the in-memory one serves tests and single-process
deployments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ISessionDirectory(ABC):
    """Contract for looking up sessions by friend key."""

    @abstractmethod
    def register(self, session_id: str, friend_key: str) -> None:
        """Record *friend_key* as the access key for *session_id*."""

    @abstractmethod
    def friend_key_for(self, session_id: str) -> str | None:
        """Return the friend key of *session_id*, or ``None`` if unknown."""

    @abstractmethod
    def friend_keys(self) -> dict[str, str]:
        """Return a snapshot mapping session id to friend key."""

    @abstractmethod
    def key_exists(self, friend_key: str) -> bool:
        """Return ``True`` if any session already uses *friend_key*."""

"""In-memory map of session id to friend key.

The real session table lives in the storage layer.  The auth API only
needs three things from it: one session's friend key (to check a rejoin
hash), every live session's friend key (to match a join hash) and a
uniqueness check for new keys.  This provider keeps exactly that, guarded
by a lock since sync endpoints run on FastAPI's threadpool.
"""

from __future__ import annotations

import threading

from songify.interfaces.session_directory import ISessionDirectory


class MemorySessionDirectory(ISessionDirectory):
    """Thread-safe ``session_id -> friend_key`` registry."""

    def __init__(self) -> None:
        self._keys: dict[str, str] = {}
        self._lock = threading.Lock()

    def register(self, session_id: str, friend_key: str) -> None:
        with self._lock:
            self._keys[session_id] = friend_key

    def friend_key_for(self, session_id: str) -> str | None:
        with self._lock:
            return self._keys.get(session_id)

    def friend_keys(self) -> dict[str, str]:
        with self._lock:
            return dict(self._keys)

    def key_exists(self, friend_key: str) -> bool:
        with self._lock:
            return friend_key in self._keys.values()

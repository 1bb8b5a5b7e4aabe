"""In-memory friend-key hash cache backed by ``cachetools.LRUCache``.

Concurrency model: lookups and inserts happen under one lock, but the
scrypt computation runs outside it.  Two threads that miss on the same
pair may both compute; the first to finish stores its value and the
second discards its own result in favour of the stored one
(insert-if-absent).  Because the derivation is pure the values are equal
anyway, and duplicate work is bounded by the number of concurrent callers.

Retention: entries are only useful for the salt (day) they were computed
with.  Storing a value for a new salt prunes every entry for another
salt, and the LRU bound caps the cache if many distinct keys arrive in
one day.
"""

from __future__ import annotations

import threading

import structlog
from cachetools import LRUCache

from songify.interfaces.hash_cache import ComputeFn, IHashCache
from songify.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

CacheKey = tuple[str, str]


class MemoryHashCache(IHashCache):
    """Thread-safe memoization of ``(normalized_key, salt) -> hash``.

    Parameters
    ----------
    max_entries:
        Maximum number of entries before the least-recently-used one is
        evicted.
    """

    def __init__(self, max_entries: int = 4096) -> None:
        self._cache: LRUCache[CacheKey, str] = LRUCache(maxsize=max_entries)
        self._lock = threading.Lock()
        self._current_salt: str | None = None

    # ------------------------------------------------------------------
    # IHashCache implementation
    # ------------------------------------------------------------------

    def get_or_compute(self, normalized_key: str, salt: str, compute_fn: ComputeFn) -> str:
        key: CacheKey = (normalized_key, salt)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            _logger.debug("hash_cache_hit", salt=salt)
            return cached

        _logger.debug("hash_cache_miss", salt=salt)
        computed = compute_fn(normalized_key, salt)

        with self._lock:
            if salt != self._current_salt:
                self._prune_other_salts(salt)
            stored = self._cache.setdefault(key, computed)
        return stored

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._current_salt = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _prune_other_salts(self, salt: str) -> None:
        """Drop entries computed for any salt other than *salt*.

        Caller must hold ``self._lock``.
        """
        stale = [key for key in self._cache if key[1] != salt]
        for key in stale:
            del self._cache[key]
        if stale:
            _logger.info("hash_cache_pruned", removed=len(stale), salt=salt)
        self._current_salt = salt

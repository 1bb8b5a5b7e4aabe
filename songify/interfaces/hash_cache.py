"""Abstract base class for friend-key hash caches.

scrypt costs tens of milliseconds and 16 MiB per call, and every join
attempt needs the expected hash for today's salt.  A hash cache memoizes
``(normalized_key, salt) -> hash`` so repeated verifications within the
same day are a dictionary lookup.  Implementations may live in process
memory or in a shared store; the verifier only sees this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

ComputeFn = Callable[[str, str], str]


class IHashCache(ABC):
    """Contract for memoizing derived friend-key hashes.

    Implementations must be safe to call from many threads at once
    without any locking by the caller.
    """

    @abstractmethod
    def get_or_compute(self, normalized_key: str, salt: str, compute_fn: ComputeFn) -> str:
        """Return the cached hash for (*normalized_key*, *salt*).

        On a miss, call ``compute_fn(normalized_key, salt)``, store the
        result and return it.  Every caller for the same pair observes the
        same stored value.  Exceptions from *compute_fn* propagate and
        nothing is stored.
        """

    @abstractmethod
    def clear(self) -> None:
        """Drop every cached entry."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of cached entries."""

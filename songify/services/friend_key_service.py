"""Human-readable friend key and display-name generation.

Friend keys follow the pattern ``word-word-number`` (e.g.
``"apple-river-42"``): two words from the BIP39 English wordlist plus a
number from 0 to 99, picked with :mod:`secrets`.  That is
2048 × 2048 × 100 ≈ 419 million keys, which keeps offline guessing
against an observed friend-key hash expensive at scrypt's cost.

BIP39 words are lowercase ASCII, so keys are generated already
normalized: the string shown to the host is exactly what gets hashed.

Uniqueness is checked through a caller-supplied ``exists`` predicate
because sessions live in the storage layer, not here.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable

import structlog
from mnemonic import Mnemonic

from songify.utils.errors import FriendKeyGenerationError
from songify.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

WORDLIST: tuple[str, ...] = tuple(Mnemonic("english").wordlist)

_MAX_NUMBER = 100


def _pick_words() -> tuple[str, str, int]:
    return secrets.choice(WORDLIST), secrets.choice(WORDLIST), secrets.randbelow(_MAX_NUMBER)


class FriendKeyService:
    """Generates unique friend keys and random session display names."""

    def __init__(self, max_attempts: int = 100) -> None:
        self._max_attempts = max_attempts

    def generate(self, exists: Callable[[str], bool]) -> str:
        """Return a key for which ``exists(key)`` is false.

        Raises
        ------
        FriendKeyGenerationError
            If every attempt collided with an existing key.
        """
        for attempt in range(1, self._max_attempts + 1):
            first, second, number = _pick_words()
            key = f"{first}-{second}-{number}"
            if not exists(key):
                if attempt > 1:
                    _logger.debug("friend_key_collisions", attempts=attempt)
                return key
        raise FriendKeyGenerationError(
            f"Failed to generate a unique friend key after {self._max_attempts} attempts"
        )

    @staticmethod
    def generate_name() -> str:
        """Return a PascalCase display name such as ``"HappyTiger42"``."""
        first, second, number = _pick_words()
        return f"{first.capitalize()}{second.capitalize()}{number}"

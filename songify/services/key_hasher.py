"""scrypt key derivation shared with the browser client.

# ─── WHY THE PARAMETERS ARE CONSTANTS ────────────────────────────────
#
# The frontend computes scrypt(normalized_key, salt) with N=16384, r=8,
# p=1 and a 32-byte output, then sends the hex digest.  The server
# recomputes the same value and compares.  If any parameter here drifts
# from the client, every join silently fails with a mismatched hash,
# so the parameters are module constants and never read from settings.
#
# Working memory is 128 * r * N bytes = 16 MiB per derivation.  OpenSSL
# refuses to allocate beyond ``maxmem``; that refusal (or a MemoryError)
# is reported as HashingFailed, never as an empty hash.
# ─────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import hashlib

import structlog

from songify.utils.errors import HashingFailed
from songify.utils.logging import get_logger

SCRYPT_N = 16384  # 2^14, recommended for interactive logins
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_KEY_LEN = 32
SCRYPT_MAXMEM = 64 * 1024 * 1024

_logger: structlog.BoundLogger = get_logger(__name__)


class KeyHasher:
    """Deterministic scrypt derivation with fixed parameters."""

    def derive(self, input: str, salt: str) -> str:  # noqa: A002
        """Hash *input* with *salt* and return the lower-case hex digest.

        The salt is lower-cased before use.  The result is a pure function
        of (input, salt): 64 hex characters, byte-identical across calls.

        Raises
        ------
        HashingFailed
            If scrypt cannot allocate its working memory.
        """
        derived = self._derive_bytes(input.encode("utf-8"), salt.lower().encode("utf-8"))
        return derived.hex()

    @staticmethod
    def _derive_bytes(password: bytes, salt: bytes) -> bytes:
        try:
            return hashlib.scrypt(
                password,
                salt=salt,
                n=SCRYPT_N,
                r=SCRYPT_R,
                p=SCRYPT_P,
                maxmem=SCRYPT_MAXMEM,
                dklen=SCRYPT_KEY_LEN,
            )
        except (MemoryError, ValueError) as exc:
            # Only the exception type is logged; inputs are secret-bearing.
            _logger.error("scrypt_failed", error_type=type(exc).__name__)
            raise HashingFailed("scrypt key derivation failed") from exc

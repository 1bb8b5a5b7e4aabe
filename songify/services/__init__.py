"""Auth core services.

- **key_normalizer** -- canonical form of a friend key before hashing.
- **daily_salt** -- UTC day-of-month salt that rotates friend hashes daily.
- **key_hasher** -- scrypt derivation with parameters pinned to the client.
- **token_issuer** -- HS256 admin/friend session tokens.
- **auth_verifier** -- the façade the HTTP layer calls.
- **friend_key_service** -- ``word-word-NN`` key and display-name generation.
"""

from songify.services.auth_verifier import AuthVerifier
from songify.services.daily_salt import DailySaltProvider
from songify.services.friend_key_service import FriendKeyService
from songify.services.key_hasher import KeyHasher
from songify.services.key_normalizer import normalize_key
from songify.services.token_issuer import TokenIssuer

__all__ = [
    "AuthVerifier",
    "DailySaltProvider",
    "FriendKeyService",
    "KeyHasher",
    "TokenIssuer",
    "normalize_key",
]

"""Cache providers.

MemoryHashCache keeps derived friend-key hashes in process memory.  It is
not shared across worker processes; each worker pays one scrypt call per
distinct key per day.
"""

from songify.providers.cache.memory_hash_cache import MemoryHashCache

__all__ = ["MemoryHashCache"]

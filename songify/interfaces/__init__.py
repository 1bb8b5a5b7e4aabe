"""Public interface definitions for swappable auth components.

Concrete adapters implement these interfaces and are injected by
``songify.main.build_auth_components``, so unit tests can hand the
verifier and API a fresh or fake implementation.

    Interface          →  Concrete implementations (in songify/providers/)
    ───────────────────────────────────────────────────────────────────
    IHashCache         →  MemoryHashCache
    ISessionDirectory  →  MemorySessionDirectory
"""

from songify.interfaces.hash_cache import ComputeFn, IHashCache
from songify.interfaces.session_directory import ISessionDirectory

__all__ = ["ComputeFn", "IHashCache", "ISessionDirectory"]

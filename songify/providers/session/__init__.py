"""Session directory providers."""

from songify.providers.session.memory_session_directory import MemorySessionDirectory

__all__ = ["MemorySessionDirectory"]

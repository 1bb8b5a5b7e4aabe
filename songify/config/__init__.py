"""Configuration module: exports Settings and a module-level singleton."""

from songify.config.settings import Settings, parse_duration

settings = Settings()

__all__ = ["Settings", "parse_duration", "settings"]

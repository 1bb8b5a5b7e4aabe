"""Songify access-key authentication and session token issuance."""

__version__ = "0.1.0"

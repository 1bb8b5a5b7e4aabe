"""Concrete implementations of the interfaces in ``songify.interfaces``."""

"""Database package for honoka.

Only CardStore is exported as the public API.
"""

from .database import CardStore

__all__ = ["CardStore"]

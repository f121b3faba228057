"""Schema module for Easy Search Core.

The database schema (schema.sql) is the source of truth for the data model.
Domain types shared by the store and the auth layer live in `types`.
"""

from . import types

__all__ = ["types"]

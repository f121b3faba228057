"""Identifier generation utilities.

This module centralizes identifier generation for users, profiles, refresh
token records and JWT ids. It is the only module that should import uuid4.
"""

from uuid import uuid4


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())


def generate_token_id() -> str:
    """Generate a compact random JWT id (32 hex chars, no hyphens)."""
    return uuid4().hex

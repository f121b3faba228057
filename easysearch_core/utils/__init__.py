"""Utility functions for Easy Search Core.

This package provides centralized utilities for common operations.
Import convention: use module-level imports for clarity.

    from easysearch_core.utils import isodatetime, uid, durations
    timestamp = isodatetime.now()
    uuid = uid.generate_uuid()
    ttl = durations.parse_duration("15m")
"""

from . import durations, isodatetime, uid

__all__ = ["durations", "isodatetime", "uid"]

"""ISO 8601 datetime conversion utilities.

This module centralizes all transformations between Python datetime objects,
ISO 8601 strings and Unix timestamps. All date/time operations should use
these functions to ensure consistency and make usage clear across the codebase.
"""

from datetime import datetime, UTC


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def to_datetime(timestamp: str) -> datetime:
    """Convert ISO 8601 UTC timestamp string to datetime."""
    return datetime.fromisoformat(timestamp.replace('Z', '+00:00'))


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(datetime.now(UTC))


def now_datetime() -> datetime:
    """Get current UTC time as an aware datetime."""
    return datetime.now(UTC)


def now_unix() -> int:
    """Get current UTC time as integer Unix timestamp (JWT iat/exp format)."""
    return int(datetime.now(UTC).timestamp())

"""Duration parsing utilities.

Token lifetimes are configured the way most JWT deployments write them
("15m", "1h", "7d"). This module turns those strings, plain seconds and
ISO 8601 durations into timedelta objects.
"""

import re
from datetime import timedelta

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

_SHORTHAND = re.compile(r"^\s*(\d+)\s*(s|m|h|d|w)?\s*$", re.IGNORECASE)

_UNITS = {
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
}

_timedelta_adapter = TypeAdapter(timedelta)

# JWT exp is whole seconds
MIN_DURATION = timedelta(seconds=1)


def parse_duration(value: str | int | float | timedelta) -> timedelta:
    """Convert a duration setting to a timedelta of at least one second.

    Accepts:
        - timedelta instances (returned unchanged)
        - int/float seconds, or digit strings ("900")
        - shorthands: "30s", "15m", "1h", "7d", "2w"
        - ISO 8601 durations ("PT15M", "P7D")

    Raises:
        ValueError: If the value cannot be parsed or is shorter than one second
    """
    if isinstance(value, timedelta):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    elif isinstance(value, (int, float)):
        result = timedelta(seconds=value)
    else:
        match = _SHORTHAND.match(value)
        if match:
            amount, unit = match.groups()
            result = int(amount) * _UNITS[(unit or "s").lower()]
        else:
            try:
                result = _timedelta_adapter.validate_python(value.strip())
            except PydanticValidationError:
                raise ValueError(f"Invalid duration: {value!r}") from None

    if result <= timedelta(0):
        raise ValueError(f"Duration must be positive: {value!r}")
    if result < MIN_DURATION:
        raise ValueError(f"Duration must be at least 1 second: {value!r}")
    return result

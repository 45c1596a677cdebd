"""Utility functions."""
import re
from typing import Optional, Union

_LEADING_INT = re.compile(r"^\s*(\d+)")


def to_int(s: Optional[str], default: int = 0) -> int:
    """Read the leading digits of a string as an int, returning default if there are none."""
    if s is None:
        return default
    match = _LEADING_INT.match(s)
    if not match:
        return default
    return int(match.group(1))


def to_number(s: Optional[str], default: Union[int, float] = 0) -> Union[int, float]:
    """Convert a numeric token to int, or float when it has a fractional part."""
    try:
        value = float(s) if s is not None else None
    except ValueError:
        return default
    if value is None or value != value:
        return default
    return int(value) if value.is_integer() else value


def format_number(value: Union[int, float]) -> str:
    """Render a number without a trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

"""Helpers that turn raw form values into numbers the engines can use."""

from __future__ import annotations

import math
import re
from typing import Union

from .models import TimeUnit

_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


class ConversionError(ValueError):
    """Raised when a value cannot be expressed in the requested unit."""


def to_minutes(value: float, unit: TimeUnit) -> float:
    """Return ``value`` expressed in minutes.

    Only ``"minutes"``, ``"hours"`` and ``"days"`` are valid. Anything else
    means the caller passed an unchecked enum value, so it is not coerced.
    """

    if unit == "minutes":
        return value
    if unit == "hours":
        return value * MINUTES_PER_HOUR
    if unit == "days":
        return value * HOURS_PER_DAY * MINUTES_PER_HOUR
    raise ConversionError(f"Unsupported time unit: {unit!r}")


def parse_number(raw: Union[str, float, int, None]) -> float:
    """Parse a form value leniently, returning 0.0 when it is not a number.

    Text is read like a browser number field: leading whitespace is skipped and
    the longest numeric prefix wins, so ``"12abc"`` is 12 and ``"abc"`` is 0.
    """

    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _NUMERIC_PREFIX.match(str(raw))
        if not match:
            return 0.0
        value = float(match.group(0))
    if not math.isfinite(value):
        return 0.0
    return value


def parse_non_negative(raw: Union[str, float, int, None]) -> float:
    """Like :func:`parse_number` but negative values also collapse to 0.0."""
    value = parse_number(raw)
    return value if value >= 0 else 0.0

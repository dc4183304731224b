"""Lenient scalar coercion for untrusted generator output."""

import math
import re
from collections.abc import Iterable

_NON_NUMERIC = re.compile(r"[^\d.\-]")


def to_number(value: object) -> float | None:
    """Finite float from a number or numeric-looking string, else None.

    Strings are stripped of everything but digits, ``.`` and ``-`` first, so
    "0.8 (high)" reads as 0.8. Booleans are not numbers here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def first_number(*candidates: object) -> float | None:
    for candidate in candidates:
        number = to_number(candidate)
        if number is not None:
            return number
    return None


def first_string(*candidates: object) -> str | None:
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return None


def string_list(value: object) -> list[str]:
    """A string or list of strings as a list of non-empty trimmed strings."""
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, list | tuple):
        items = (str(item).strip() for item in value if item is not None)
        return [item for item in items if item]
    return []


def unique(items: Iterable[str]) -> list[str]:
    """Drop exact duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))


def round_half_up(value: float, digits: int = 2) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def clamp_unit(value: object, digits: int = 2) -> float | None:
    """Clamp into [0, 1] and round; None when the value is not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    elif isinstance(value, int | float):
        number = float(value)
    else:
        return None
    if not math.isfinite(number):
        return None
    return round_half_up(min(1.0, max(0.0, number)), digits)


def as_index(value: float | None) -> int | None:
    """Non-negative integer index, or None for fractional or negative values."""
    if value is None or not value.is_integer() or value < 0:
        return None
    return int(value)

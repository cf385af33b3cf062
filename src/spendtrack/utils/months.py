"""Month key helpers.

Month keys are ``YYYY-MM`` strings and day keys ``YYYY-MM-DD`` strings, both
zero padded so lexicographic order matches calendar order.
"""

from __future__ import annotations

import re
from datetime import date

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_MONTH_KEY_RE = re.compile(r"([0-9]{4})-(0[1-9]|1[0-2])")


def is_month_key(value: object) -> bool:
    return isinstance(value, str) and _MONTH_KEY_RE.fullmatch(value) is not None


def parse_month_key(value: str) -> tuple[int, int]:
    """Return ``(year, month)`` for a ``YYYY-MM`` key; raises ``ValueError`` otherwise."""

    match = _MONTH_KEY_RE.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid month key {value!r}; expected YYYY-MM.")
    return int(match.group(1)), int(match.group(2))


def month_key(value: date) -> str:
    """Format the month containing ``value`` as ``YYYY-MM``."""

    return f"{value.year:04d}-{value.month:02d}"


def month_bounds(key: str) -> tuple[str, str]:
    """Return the half-open day range ``[first day, first day of next month)``."""

    year, month = parse_month_key(key)
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start.isoformat(), end.isoformat()


def shift_month(key: str, offset: int) -> str:
    """Move a month key ``offset`` months forward (negative for backward)."""

    year, month = parse_month_key(key)
    index = year * 12 + (month - 1) + offset
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def month_label(key: str) -> str:
    """Short display label, e.g. ``Jun 2024``."""

    year, month = parse_month_key(key)
    return f"{MONTH_NAMES[month - 1]} {year}"


def recent_months(base: date, count: int = 12) -> list[str]:
    """Return ``count + 1`` month keys from ``base``'s month backwards."""

    current = month_key(base)
    return [shift_month(current, -offset) for offset in range(count + 1)]

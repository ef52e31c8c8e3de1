"""Worked-hours accounting for a single attendance day.

Clock times are 24-hour ``HH:MM`` strings. A clock-out at or before the
clock-in is read as a shift that crosses midnight, so ``09:00 -> 09:00`` is a
full 24-hour shift (minus break), not an empty one.
"""

from __future__ import annotations

import re
from typing import Optional

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError

_TIME_RE = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")
_LOOSE_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})(?::\d{2}(?:\.\d+)?)?")


def is_valid_time(value: Optional[str]) -> bool:
    """True iff ``value`` is a 24-hour ``HH:MM`` string (00:00 .. 23:59)."""
    return isinstance(value, str) and _TIME_RE.fullmatch(value) is not None


def normalize_clock(value) -> Optional[str]:
    """Normalize API clock values (``9:05``, ``09:05:00``) to ``HH:MM``.

    Returns None for empty or unreadable values.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    m = _LOOSE_TIME_RE.fullmatch(text)
    if not m:
        return None
    candidate = f"{int(m.group(1)):02d}:{m.group(2)}"
    return candidate if is_valid_time(candidate) else None


def to_minutes(value: str) -> int:
    """Minutes since midnight for an ``HH:MM`` value."""
    parts = value.split(":")
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except (IndexError, ValueError):
        raise ValidationError("Invalid time format")
    return hours * 60 + minutes


def compute_hours(clock_in: Optional[str], clock_out: Optional[str], break_minutes: int = 0) -> float:
    if not clock_in or not clock_out:
        return 0.0

    in_minutes = to_minutes(clock_in)
    out_minutes = to_minutes(clock_out)

    # overnight shift
    if out_minutes <= in_minutes:
        out_minutes += MINUTES_PER_DAY

    total = out_minutes - in_minutes - int(break_minutes or 0)
    return max(0.0, total / 60)

# nutriplan/services/clock.py
"""
Wall-clock helpers. All schedule math works in minutes since midnight.
"""

from __future__ import annotations

import re

MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class InvalidClockTime(ValueError):
    """Raised for anything that is not a 24-hour HH:MM string."""


def parse_clock(value: str) -> int:
    """
    "07:30" -> 450. Strict: rejects "7.30", "24:00", "07:60", "", None.
    """
    if not isinstance(value, str):
        raise InvalidClockTime(f"time must be a HH:MM string, got {value!r}")
    m = _CLOCK_RE.match(value.strip())
    if not m:
        raise InvalidClockTime(f"time must be HH:MM, got {value!r}")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidClockTime(f"time out of range: {value!r}")
    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    # wraps past midnight in both directions
    m = int(minutes) % MINUTES_PER_DAY
    return f"{m // 60:02d}:{m % 60:02d}"


def active_minutes(wake: int, sleep: int) -> int:
    """Minutes awake between wake and sleep; sleep at/before wake means next day."""
    if sleep > wake:
        return sleep - wake
    return MINUTES_PER_DAY - wake + sleep


def clamp(minutes: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, minutes))

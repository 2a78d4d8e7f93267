"""Clock-time helpers shared by the analytics components.

Times are naive local-clock values; no timezone conversion happens here.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from ..core.constants import MINUTES_PER_HOUR


def time_string_to_minutes(value: Optional[str]) -> Optional[int]:
    """Parse "HH:MM" into minutes since midnight.

    Returns None for empty or malformed input; callers treat None as
    "no schedule".
    """
    if not value:
        return None
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None
    if not (0 <= hours < 24 and 0 <= minutes < MINUTES_PER_HOUR):
        return None
    return hours * MINUTES_PER_HOUR + minutes


def minutes_to_time_string(minutes: Optional[int]) -> Optional[str]:
    if minutes is None:
        return None
    hours, mins = divmod(int(minutes), MINUTES_PER_HOUR)
    return f"{hours:02d}:{mins:02d}"


def minutes_of_day(ts: datetime) -> int:
    """Minutes since midnight of a timestamp (seconds are dropped)."""
    return ts.hour * MINUTES_PER_HOUR + ts.minute


def round_half_up(value: float, places: int = 2) -> float:
    """Round with halves going up, e.g. 0.125 -> 0.13 and 0.5 -> 1.0.

    Python's round() uses banker's rounding; report figures must not.
    """
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def minutes_to_hours(minutes: float) -> float:
    return round_half_up(minutes / MINUTES_PER_HOUR, 2)

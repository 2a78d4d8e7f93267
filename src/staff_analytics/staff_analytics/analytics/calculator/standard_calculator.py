from __future__ import annotations

from ...core.constants import DEFAULT_STANDARD_HOURS_PER_DAY, MINUTES_PER_HOUR
from .base import OvertimeCalculator


def overtime_minutes(actual_minutes: int, standard_minutes: int) -> int:
    """Minutes beyond the standard shift length, never below 0."""
    return max(0, actual_minutes - standard_minutes)


class StandardOvertimeCalculator(OvertimeCalculator):
    """Standard rule: every minute past `standard_hours_per_day` in one shift is overtime."""

    def __init__(self, standard_hours_per_day: float = DEFAULT_STANDARD_HOURS_PER_DAY):
        self._standard_minutes = int(round(float(standard_hours_per_day) * MINUTES_PER_HOUR))

    @property
    def standard_minutes(self) -> int:
        return self._standard_minutes

    def overtime_minutes(self, minutes_worked: int) -> int:
        return overtime_minutes(minutes_worked, self._standard_minutes)

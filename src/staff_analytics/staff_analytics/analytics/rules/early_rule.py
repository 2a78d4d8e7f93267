from __future__ import annotations

from typing import Optional

from ...core.enums import EventType, PatternType
from ...staff.model import StaffDirectoryEntry
from .base import DeviationRule


class EarlyDepartureRule(DeviationRule):
    """Check-out before the scheduled end."""

    event_type = EventType.CHECK_OUT
    pattern_type = PatternType.CONSECUTIVE_EARLY_DEPARTURES

    def scheduled_time(self, staff: StaffDirectoryEntry) -> Optional[str]:
        return staff.scheduled_end_time

    def deviation_minutes(self, *, actual_minutes: int, scheduled_minutes: int) -> int:
        return scheduled_minutes - actual_minutes

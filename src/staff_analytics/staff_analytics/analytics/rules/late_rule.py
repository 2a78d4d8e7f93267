from __future__ import annotations

from typing import Optional

from ...core.enums import EventType, PatternType
from ...staff.model import StaffDirectoryEntry
from .base import DeviationRule


class LateArrivalRule(DeviationRule):
    """Check-in after the scheduled start."""

    event_type = EventType.CHECK_IN
    pattern_type = PatternType.CONSECUTIVE_LATE_ARRIVALS

    def scheduled_time(self, staff: StaffDirectoryEntry) -> Optional[str]:
        return staff.scheduled_start_time

    def deviation_minutes(self, *, actual_minutes: int, scheduled_minutes: int) -> int:
        return actual_minutes - scheduled_minutes

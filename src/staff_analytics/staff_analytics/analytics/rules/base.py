from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import EventType, PatternType
from ...staff.model import StaffDirectoryEntry


class DeviationRule(ABC):
    """Strategy Pattern: how one deviation direction is measured.

    A positive deviation means "worse than scheduled" for the rule's
    direction; an event is flagged when it exceeds the grace threshold.
    """

    event_type: EventType
    pattern_type: PatternType

    @abstractmethod
    def scheduled_time(self, staff: StaffDirectoryEntry) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def deviation_minutes(self, *, actual_minutes: int, scheduled_minutes: int) -> int:
        raise NotImplementedError

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Attendance event kinds as stored by the check-in flow."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class PeriodGrouping(str, Enum):
    """Bucket granularity for hours-worked aggregation."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def parse(cls, value: "PeriodGrouping | str | None") -> "PeriodGrouping":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or cls.DAY.value).lower())
        except ValueError:
            logger.warning("Unknown period grouping %r, falling back to 'day'", value)
            return cls.DAY


class PatternType(str, Enum):
    CONSECUTIVE_LATE_ARRIVALS = "consecutive_late_arrivals"
    CONSECUTIVE_EARLY_DEPARTURES = "consecutive_early_departures"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

from __future__ import annotations

from typing import Iterable, Mapping

from ..attendance.model import AttendanceEvent
from ..common.time_utils import minutes_of_day, minutes_to_time_string, time_string_to_minutes
from ..core.constants import DEFAULT_LATE_THRESHOLD_MINUTES
from ..staff.model import StaffDirectoryEntry
from .model import DeviationRecord
from .rules.base import DeviationRule
from .rules.early_rule import EarlyDepartureRule
from .rules.late_rule import LateArrivalRule

LATE_ARRIVAL = LateArrivalRule()
EARLY_DEPARTURE = EarlyDepartureRule()


def detect_deviations(
    events: Iterable[AttendanceEvent],
    staff_by_id: Mapping[str, StaffDirectoryEntry],
    rule: DeviationRule,
    threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES,
) -> list[DeviationRecord]:
    """Single pass over the rule's event type; one record per flagged event.

    Staff without a parseable scheduled time, or missing from the directory,
    are skipped.
    """
    flagged: list[DeviationRecord] = []
    for e in events:
        if e.event_type != rule.event_type:
            continue
        staff = staff_by_id.get(e.staff_id)
        if staff is None:
            continue
        scheduled = rule.scheduled_time(staff)
        scheduled_minutes = time_string_to_minutes(scheduled)
        if scheduled_minutes is None:
            continue

        actual_minutes = minutes_of_day(e.timestamp)
        deviation = rule.deviation_minutes(actual_minutes=actual_minutes, scheduled_minutes=scheduled_minutes)
        if deviation > threshold_minutes:
            flagged.append(
                DeviationRecord(
                    staff_id=e.staff_id,
                    staff_name=staff.name,
                    work_date=e.work_date,
                    scheduled_time=scheduled,
                    actual_time=minutes_to_time_string(actual_minutes),
                    deviation_minutes=deviation,
                    event_id=e.event_id,
                )
            )
    return flagged


def detect_late_arrivals(events, staff_by_id, threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES):
    return detect_deviations(events, staff_by_id, LATE_ARRIVAL, threshold_minutes)


def detect_early_departures(events, staff_by_id, threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES):
    return detect_deviations(events, staff_by_id, EARLY_DEPARTURE, threshold_minutes)

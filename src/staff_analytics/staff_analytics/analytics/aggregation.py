"""Time-of-day averages, hours-worked buckets and overtime accumulation.

Only check-outs that carry `shift_duration_minutes` contribute to hours and
overtime. Check-outs without a duration are skipped, never counted as zero.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..common.time_utils import minutes_of_day
from ..core.enums import EventType, PeriodGrouping
from ..staff.model import StaffDirectoryEntry
from .calculator.base import OvertimeCalculator
from .model import DailyOvertime, HoursWorked, OvertimeRecord, PeriodHours, TimingAverage

logger = logging.getLogger(__name__)


def average_time_of_day(timestamps: Sequence[datetime]) -> Optional[int]:
    """Linear mean of the minutes-of-day, rounded half up to a whole minute.

    The date part is ignored and no wrap-around at midnight is applied:
    23:50 and 00:10 average to 12:00.
    """
    if not timestamps:
        return None
    total = sum(minutes_of_day(ts) for ts in timestamps)
    n = len(timestamps)
    return (2 * total + n) // (2 * n)


def average_timings(events: Iterable[AttendanceEvent]) -> dict[str, TimingAverage]:
    grouped: dict[tuple[str, EventType], list[datetime]] = defaultdict(list)
    for e in events:
        grouped[(e.staff_id, e.event_type)].append(e.timestamp)

    timings: dict[str, TimingAverage] = {}
    for (staff_id, event_type), timestamps in grouped.items():
        t = timings.setdefault(staff_id, TimingAverage())
        if event_type == EventType.CHECK_IN:
            t.avg_check_in_minutes = average_time_of_day(timestamps)
        else:
            t.avg_check_out_minutes = average_time_of_day(timestamps)
    return timings


def period_key(ts: datetime, grouping: PeriodGrouping) -> str:
    if grouping == PeriodGrouping.WEEK:
        year, week, _ = ts.isocalendar()
        return f"{year}-W{week:02d}"
    if grouping == PeriodGrouping.MONTH:
        return ts.strftime("%Y-%m")
    return ts.strftime("%Y-%m-%d")


def aggregate_hours_worked(
    events: Iterable[AttendanceEvent],
    grouping: PeriodGrouping | str = PeriodGrouping.DAY,
) -> dict[str, HoursWorked]:
    grouping = PeriodGrouping.parse(grouping)

    minutes: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
    counts: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for e in events:
        if not e.has_shift_duration:
            continue
        key = period_key(e.timestamp, grouping)
        minutes[e.staff_id][key] += int(e.shift_duration_minutes)
        counts[e.staff_id][key] += 1

    return {
        staff_id: HoursWorked(
            staff_id=staff_id,
            periods=[
                PeriodHours(period=key, total_minutes=total, shift_count=counts[staff_id][key])
                for key, total in sorted(buckets.items())
            ],
        )
        for staff_id, buckets in minutes.items()
    }


def build_overtime_report(
    events: Iterable[AttendanceEvent],
    staff_by_id: Mapping[str, StaffDirectoryEntry],
    calculator: OvertimeCalculator,
) -> dict[str, OvertimeRecord]:
    """Per-staff overtime against the calculator's standard shift length.

    Events of staff unknown to the directory are left out.
    """
    report: dict[str, OvertimeRecord] = {}
    skipped = 0
    for e in events:
        if not e.has_shift_duration:
            continue
        staff = staff_by_id.get(e.staff_id)
        if staff is None:
            skipped += 1
            continue

        record = report.get(e.staff_id)
        if record is None:
            record = OvertimeRecord(staff_id=e.staff_id, staff_name=staff.name)
            report[e.staff_id] = record

        worked = int(e.shift_duration_minutes)
        record.add_shift(
            DailyOvertime(
                work_date=e.work_date,
                minutes_worked=worked,
                overtime_minutes=calculator.overtime_minutes(worked),
            )
        )

    if skipped:
        logger.debug("Overtime: skipped %d check-outs of staff missing from the directory", skipped)
    return report

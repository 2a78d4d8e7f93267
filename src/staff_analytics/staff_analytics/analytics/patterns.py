from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Mapping, Sequence

from ..common.time_utils import round_half_up
from ..core.constants import DEFAULT_CONSECUTIVE_THRESHOLD, SEVERITY_HIGH_RATIO, SEVERITY_MEDIUM_RATIO
from ..core.enums import PatternType, Severity
from .model import DeviationRecord, ExcessiveOvertime, OvertimeRecord, Pattern

ONE_DAY = timedelta(days=1)


def detect_consecutive_pattern(dates: Iterable[date]) -> int:
    """Length of the longest run of consecutive calendar days.

    Input order does not matter and repeated dates count once.
    """
    ordered = sorted(set(dates))
    if not ordered:
        return 0

    longest = current = 1
    for prev, curr in zip(ordered, ordered[1:]):
        if curr - prev == ONE_DAY:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def severity_for(value: float, threshold: float) -> Severity:
    if threshold <= 0:
        return Severity.HIGH if value > 0 else Severity.LOW
    ratio = value / threshold
    if ratio >= SEVERITY_HIGH_RATIO:
        return Severity.HIGH
    if ratio >= SEVERITY_MEDIUM_RATIO:
        return Severity.MEDIUM
    return Severity.LOW


def exceeds_overtime_threshold(total_overtime_hours: float, threshold_hours: float) -> bool:
    return total_overtime_hours >= threshold_hours


def group_by_staff(records: Iterable[DeviationRecord]) -> dict[str, list[DeviationRecord]]:
    grouped: dict[str, list[DeviationRecord]] = defaultdict(list)
    for r in records:
        grouped[r.staff_id].append(r)
    return grouped


def find_patterns(
    records: Sequence[DeviationRecord],
    pattern_type: PatternType,
    consecutive_threshold: int = DEFAULT_CONSECUTIVE_THRESHOLD,
) -> list[Pattern]:
    patterns: list[Pattern] = []
    for staff_id, staff_records in group_by_staff(records).items():
        dates = sorted({r.work_date for r in staff_records})
        run = detect_consecutive_pattern(dates)
        if run < consecutive_threshold:
            continue
        patterns.append(
            Pattern(
                staff_id=staff_id,
                staff_name=staff_records[0].staff_name,
                pattern_type=pattern_type,
                consecutive_count=run,
                total_occurrences=len(staff_records),
                dates=dates,
                severity=severity_for(run, consecutive_threshold),
            )
        )
    return patterns


def find_excessive_overtime(
    overtime_report: Mapping[str, OvertimeRecord],
    threshold_hours: float,
) -> list[ExcessiveOvertime]:
    flagged = [
        ExcessiveOvertime(
            staff_id=r.staff_id,
            staff_name=r.staff_name,
            total_overtime_hours=r.total_overtime_hours,
            total_overtime_minutes=r.total_overtime_minutes,
            total_hours_worked=r.total_hours_worked,
            shift_count=r.shift_count,
            threshold_exceeded_by=round_half_up(r.total_overtime_hours - threshold_hours, 2),
            severity=severity_for(r.total_overtime_hours, threshold_hours),
        )
        for r in overtime_report.values()
        if exceeds_overtime_threshold(r.total_overtime_hours, threshold_hours)
    ]
    flagged.sort(key=lambda x: x.total_overtime_hours, reverse=True)
    return flagged

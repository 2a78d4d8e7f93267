import random
from datetime import date, timedelta

import pytest

from src.staff_analytics.staff_analytics.analytics.model import DailyOvertime, DeviationRecord, OvertimeRecord
from src.staff_analytics.staff_analytics.analytics.patterns import (
    detect_consecutive_pattern,
    exceeds_overtime_threshold,
    find_excessive_overtime,
    find_patterns,
    severity_for,
)
from src.staff_analytics.staff_analytics.core.enums import PatternType, Severity


def _late(staff_id, day, name="Ana"):
    return DeviationRecord(
        staff_id=staff_id,
        staff_name=name,
        work_date=day,
        scheduled_time="09:00",
        actual_time="09:10",
        deviation_minutes=10,
        event_id=f"{staff_id}-{day.isoformat()}",
    )


def _overtime(staff_id, overtime_minutes, shifts=1):
    record = OvertimeRecord(staff_id=staff_id, staff_name=staff_id.upper())
    per_shift = overtime_minutes // shifts
    for i in range(shifts):
        record.add_shift(DailyOvertime(work_date=date(2024, 3, 4 + i), minutes_worked=480 + per_shift, overtime_minutes=per_shift))
    return record


def test_longest_run_is_found_in_any_order():
    days = [date(2024, 3, d) for d in (1, 2, 3, 4, 6, 7, 9)]
    rng = random.Random(3)
    for _ in range(5):
        rng.shuffle(days)
        assert detect_consecutive_pattern(days) == 4


def test_run_spans_month_boundary():
    assert detect_consecutive_pattern([date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]) == 3


def test_duplicate_dates_count_once():
    assert detect_consecutive_pattern([date(2024, 3, 4)] * 3 + [date(2024, 3, 5)]) == 2


def test_empty_run_is_zero():
    assert detect_consecutive_pattern([]) == 0


@pytest.mark.parametrize(
    "value, threshold, expected",
    [
        (3, 3, Severity.LOW),
        (4, 3, Severity.LOW),
        (4.5, 3, Severity.MEDIUM),
        (5, 3, Severity.MEDIUM),
        (6, 3, Severity.HIGH),
        (1, 0, Severity.HIGH),
        (0, 0, Severity.LOW),
    ],
)
def test_severity_bands(value, threshold, expected):
    assert severity_for(value, threshold) == expected


def test_five_late_days_in_a_row_with_threshold_three_is_medium():
    records = [_late("s1", date(2024, 3, 4) + timedelta(days=i)) for i in range(5)]

    patterns = find_patterns(records, PatternType.CONSECUTIVE_LATE_ARRIVALS, 3)

    assert len(patterns) == 1
    p = patterns[0]
    assert p.consecutive_count == 5
    assert p.total_occurrences == 5
    assert p.severity == Severity.MEDIUM
    assert p.pattern_type == PatternType.CONSECUTIVE_LATE_ARRIVALS
    assert p.dates == [date(2024, 3, 4) + timedelta(days=i) for i in range(5)]


def test_run_below_threshold_is_not_a_pattern():
    records = [_late("s1", date(2024, 3, 4)), _late("s1", date(2024, 3, 5)), _late("s1", date(2024, 3, 7))]

    assert find_patterns(records, PatternType.CONSECUTIVE_LATE_ARRIVALS, 3) == []


def test_patterns_are_per_staff_member():
    records = [_late("s1", date(2024, 3, 4 + i)) for i in range(3)]
    records += [_late("s2", date(2024, 3, 4 + i), name="Bo") for i in range(0, 6, 2)]

    patterns = find_patterns(records, PatternType.CONSECUTIVE_LATE_ARRIVALS, 3)

    assert [p.staff_id for p in patterns] == ["s1"]


def test_excessive_overtime_is_inclusive_and_sorted():
    report = {r.staff_id: r for r in (_overtime("a", 600), _overtime("b", 1500, 3), _overtime("c", 540))}

    flagged = find_excessive_overtime(report, threshold_hours=10)

    assert [f.staff_id for f in flagged] == ["b", "a"]
    assert flagged[0].total_overtime_hours == 25
    assert flagged[0].threshold_exceeded_by == 15
    assert flagged[0].severity == Severity.HIGH
    assert flagged[0].shift_count == 3
    assert flagged[1].threshold_exceeded_by == 0
    assert flagged[1].severity == Severity.LOW


def test_excessive_overtime_medium_band():
    flagged = find_excessive_overtime({"a": _overtime("a", 960)}, threshold_hours=10)

    assert flagged[0].severity == Severity.MEDIUM


def test_three_late_weekdays_at_threshold_three_is_low():
    records = [_late("s1", date(2024, 3, 4)), _late("s1", date(2024, 3, 5)), _late("s1", date(2024, 3, 6))]

    patterns = find_patterns(records, PatternType.CONSECUTIVE_LATE_ARRIVALS, 3)

    assert [(p.consecutive_count, p.severity) for p in patterns] == [(3, Severity.LOW)]


@pytest.mark.parametrize(
    "hours, threshold, expected",
    [(9.99, 10, False), (10, 10, True), (10.01, 10, True), (0, 0, True)],
)
def test_exceeds_overtime_threshold_is_inclusive(hours, threshold, expected):
    assert exceeds_overtime_threshold(hours, threshold) is expected


def test_just_below_threshold_is_not_excessive():
    assert find_excessive_overtime({"a": _overtime("a", 599)}, threshold_hours=10) == []

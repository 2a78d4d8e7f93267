from datetime import date, datetime

import pytest

from conftest import make_staff
from src.staff_analytics.staff_analytics.analytics.deviation import (
    detect_early_departures,
    detect_late_arrivals,
)


@pytest.fixture
def directory():
    return {
        "s1": make_staff("s1", "Ana", start="09:00", end="17:00"),
        "s2": make_staff("s2", "Bo", start=None, end=None),
        "s3": make_staff("s3", "Cy", start="bogus", end="17:00"),
    }


def test_late_check_in_beyond_grace_is_flagged(ev, directory):
    check_in = ev.check_in("s1", datetime(2024, 3, 4, 9, 20))

    records = detect_late_arrivals([check_in], directory, threshold_minutes=15)

    assert len(records) == 1
    r = records[0]
    assert r.staff_name == "Ana"
    assert r.work_date == date(2024, 3, 4)
    assert r.scheduled_time == "09:00"
    assert r.actual_time == "09:20"
    assert r.deviation_minutes == 20
    assert r.event_id == check_in.event_id


@pytest.mark.parametrize("minute, flagged", [(14, False), (15, False), (16, True)])
def test_late_threshold_is_strict(ev, directory, minute, flagged):
    records = detect_late_arrivals([ev.check_in("s1", datetime(2024, 3, 4, 9, minute))], directory, 15)

    assert bool(records) is flagged


def test_on_time_or_early_check_in_is_not_late(ev, directory):
    events = [ev.check_in("s1", datetime(2024, 3, 4, 9, 0)), ev.check_in("s1", datetime(2024, 3, 5, 8, 45))]

    assert detect_late_arrivals(events, directory, 0) == []


def test_early_departure_is_flagged(ev, directory):
    check_out = ev.check_out("s1", datetime(2024, 3, 4, 16, 30), 450)

    records = detect_early_departures([check_out], directory, 0)

    assert [(r.scheduled_time, r.actual_time, r.deviation_minutes) for r in records] == [("17:00", "16:30", 30)]


def test_each_detector_only_looks_at_its_own_event_type(ev, directory):
    events = [
        ev.check_in("s1", datetime(2024, 3, 4, 16, 0)),
        ev.check_out("s1", datetime(2024, 3, 4, 10, 0), 60),
    ]

    assert [r.event_id for r in detect_late_arrivals(events, directory)] == [events[0].event_id]
    assert [r.event_id for r in detect_early_departures(events, directory)] == [events[1].event_id]


def test_staff_without_usable_schedule_are_skipped(ev, directory):
    events = [
        ev.check_in("s2", datetime(2024, 3, 4, 11, 0)),
        ev.check_in("s3", datetime(2024, 3, 4, 11, 0)),
        ev.check_in("nobody", datetime(2024, 3, 4, 11, 0)),
    ]

    assert detect_late_arrivals(events, directory) == []


def test_seconds_are_ignored(ev, directory):
    events = [ev.check_in("s1", datetime(2024, 3, 4, 9, 0, 59))]

    assert detect_late_arrivals(events, directory, 0) == []


def test_record_serializes_with_source_event_id(ev, directory):
    check_in = ev.check_in("s1", datetime(2024, 3, 4, 9, 5))

    payload = detect_late_arrivals([check_in], directory)[0].to_dict()

    assert payload == {
        "staffId": "s1",
        "staffName": "Ana",
        "date": "2024-03-04",
        "scheduledTime": "09:00",
        "actualTime": "09:05",
        "deviationMinutes": 5,
        "recordId": check_in.event_id,
    }


def test_schedule_boundaries(ev, directory):
    events = [
        ev.check_in("s1", datetime(2024, 3, 4, 9, 0)),
        ev.check_in("s1", datetime(2024, 3, 5, 9, 1)),
        ev.check_out("s1", datetime(2024, 3, 4, 17, 0), 480),
        ev.check_out("s1", datetime(2024, 3, 5, 17, 30), 509),
    ]

    late = detect_late_arrivals(events, directory, 0)
    early = detect_early_departures(events, directory, 0)

    assert [(r.work_date, r.deviation_minutes) for r in late] == [(date(2024, 3, 5), 1)]
    assert early == []


def test_late_and_early_on_the_same_day(ev, directory):
    events = [
        ev.check_in("s1", datetime(2024, 3, 4, 9, 15)),
        ev.check_out("s1", datetime(2024, 3, 4, 16, 30), 435),
    ]

    assert [r.deviation_minutes for r in detect_late_arrivals(events, directory)] == [15]
    assert [r.deviation_minutes for r in detect_early_departures(events, directory)] == [30]

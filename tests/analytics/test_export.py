import csv
import io
from datetime import datetime

from conftest import make_staff
from src.staff_analytics.staff_analytics.analytics.export import build_export_rows, format_hours, render_csv
from src.staff_analytics.staff_analytics.core.constants import CSV_HEADER

HEADER_LINE = "staffName,date,checkInTime,checkOutTime,shiftDuration,customStatus,isLate,isEarly,hasOvertime"


def _rows(events, staff_by_id, **flags):
    flags.setdefault("late_event_ids", set())
    flags.setdefault("early_event_ids", set())
    flags.setdefault("overtime_staff_ids", set())
    return build_export_rows(events, staff_by_id, **flags)


def test_header_only_when_there_are_no_events():
    assert render_csv([]) == HEADER_LINE


def test_header_matches_constant():
    assert HEADER_LINE.split(",") == list(CSV_HEADER)


def test_one_row_per_staff_per_day(ev):
    staff = {"s1": make_staff("s1", "Ana")}
    check_in = ev.check_in("s1", datetime(2024, 3, 4, 9, 12), status="on-call")
    check_out = ev.check_out("s1", datetime(2024, 3, 4, 17, 0), 450)
    events = [check_in, check_out, ev.check_in("s1", datetime(2024, 3, 5, 8, 55))]

    rows = _rows(events, staff, late_event_ids={check_in.event_id}, overtime_staff_ids={"s1"})
    text = render_csv(rows)

    assert text.split("\n") == [
        HEADER_LINE,
        "Ana,2024-03-04,09:12,17:00,7.5,on-call,Yes,No,Yes",
        "Ana,2024-03-05,08:55,,,,No,No,Yes",
    ]
    assert not text.endswith("\n")


def test_names_with_commas_and_quotes_are_escaped(ev):
    staff = {"s1": make_staff("s1", "Li, Wei"), "s2": make_staff("s2", 'Sam "Doc" Lee')}
    events = [
        ev.check_in("s1", datetime(2024, 3, 4, 9, 0)),
        ev.check_in("s2", datetime(2024, 3, 4, 9, 0)),
    ]

    text = render_csv(_rows(events, staff))
    lines = text.split("\n")

    assert lines[1].startswith('"Li, Wei",2024-03-04')
    assert lines[2].startswith('"Sam ""Doc"" Lee",2024-03-04')
    parsed = list(csv.reader(io.StringIO(text)))
    assert [r[0] for r in parsed[1:]] == ["Li, Wei", 'Sam "Doc" Lee']
    assert all(len(r) == len(CSV_HEADER) for r in parsed)


def test_unknown_staff_are_named_unknown(ev):
    rows = _rows([ev.check_in("ghost", datetime(2024, 3, 4, 9, 0))], {})

    assert rows[0].staff_name == "Unknown"


def test_check_out_status_used_when_check_in_has_none(ev):
    staff = {"s1": make_staff("s1")}
    events = [
        ev.check_in("s1", datetime(2024, 3, 4, 9, 0)),
        ev.check_out("s1", datetime(2024, 3, 4, 17, 0), 480, status="sick-leave"),
    ]

    assert _rows(events, staff)[0].custom_status == "sick-leave"


def test_format_hours():
    assert format_hours(480) == "8"
    assert format_hours(510) == "8.5"
    assert format_hours(140) == "2.33"
    assert format_hours(None) == ""


def test_line_break_in_status_stays_inside_one_field(ev):
    staff = {"s1": make_staff("s1", "Ana")}
    events = [
        ev.check_in("s1", datetime(2024, 3, 4, 9, 0), status="left early\nfamily emergency"),
        ev.check_out("s1", datetime(2024, 3, 4, 15, 0), 360),
    ]

    parsed = list(csv.reader(io.StringIO(render_csv(_rows(events, staff)))))

    assert len(parsed) == 2
    assert len(parsed[1]) == len(CSV_HEADER)
    assert parsed[1][5] == "left early\nfamily emergency"

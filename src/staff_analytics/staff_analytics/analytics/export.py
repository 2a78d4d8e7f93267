"""Flat-file (CSV) export: one row per staff member per calendar day."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import AbstractSet, Iterable, Mapping, Optional

from ..attendance.model import AttendanceEvent
from ..common.time_utils import minutes_of_day, minutes_to_hours, minutes_to_time_string
from ..core.constants import CSV_HEADER, UNKNOWN_STAFF_NAME
from ..staff.model import StaffDirectoryEntry


@dataclass
class ExportRow:
    staff_id: str
    staff_name: str
    work_date: date
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    shift_duration_minutes: Optional[int] = None
    custom_status: Optional[str] = None
    check_in_event_id: Optional[str] = None
    check_out_event_id: Optional[str] = None
    is_late: bool = False
    is_early: bool = False
    has_overtime: bool = False

    def as_csv_fields(self) -> list[str]:
        return [
            self.staff_name,
            self.work_date.isoformat(),
            self.check_in_time or "",
            self.check_out_time or "",
            format_hours(self.shift_duration_minutes),
            self.custom_status or "",
            _yes_no(self.is_late),
            _yes_no(self.is_early),
            _yes_no(self.has_overtime),
        ]


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def format_hours(minutes: Optional[int]) -> str:
    """Shift duration as hours with at most 2 decimals ("8", "8.5", "2.33")."""
    if minutes is None:
        return ""
    return f"{minutes_to_hours(minutes):.2f}".rstrip("0").rstrip(".")


def build_export_rows(
    events: Iterable[AttendanceEvent],
    staff_by_id: Mapping[str, StaffDirectoryEntry],
    *,
    late_event_ids: AbstractSet[str],
    early_event_ids: AbstractSet[str],
    overtime_staff_ids: AbstractSet[str],
) -> list[ExportRow]:
    """Group events by (staff, day) and attach the three flags.

    Rows keep the order in which their first event appears. A later event of
    the same type on the same day replaces the earlier one.
    """
    rows: dict[tuple[str, date], ExportRow] = {}
    for e in events:
        key = (e.staff_id, e.work_date)
        row = rows.get(key)
        if row is None:
            staff = staff_by_id.get(e.staff_id)
            row = ExportRow(
                staff_id=e.staff_id,
                staff_name=staff.name if staff else UNKNOWN_STAFF_NAME,
                work_date=e.work_date,
            )
            rows[key] = row

        clock = minutes_to_time_string(minutes_of_day(e.timestamp))
        if e.is_check_in:
            row.check_in_time = clock
            row.check_in_event_id = e.event_id
            if e.custom_status:
                row.custom_status = e.custom_status
        else:
            row.check_out_time = clock
            row.check_out_event_id = e.event_id
            row.shift_duration_minutes = e.shift_duration_minutes
            if e.custom_status and not row.custom_status:
                row.custom_status = e.custom_status

    for row in rows.values():
        row.is_late = row.check_in_event_id in late_event_ids
        row.is_early = row.check_out_event_id in early_event_ids
        row.has_overtime = row.staff_id in overtime_staff_ids
    return list(rows.values())


def render_csv(rows: Iterable[ExportRow]) -> str:
    """Header plus one line per row, "\\n"-separated, no trailing newline.

    Values containing a comma, a quote or a line break are quoted and inner
    quotes doubled.
    """
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow(row.as_csv_fields())
    return out.getvalue()[: -len("\n")]

from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEvent
from .repository import AttendanceEventRepository


class MySQLAttendanceEventRepository(AttendanceEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_events(
        self,
        organization_id: str,
        date_range: DateRange,
        *,
        staff_id: Optional[str] = None,
        branch_id: Optional[str] = None,
        event_type: Optional[EventType] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses = ["organization_id=%s", "event_time BETWEEN %s AND %s"]
        params: list[object] = [organization_id, date_range.start, date_range.end]

        if staff_id is not None:
            clauses.append("staff_id=%s")
            params.append(staff_id)
        if branch_id is not None:
            clauses.append("branch_id=%s")
            params.append(branch_id)
        if event_type is not None:
            clauses.append("event_type=%s")
            params.append(EventType(event_type).value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, organization_id, staff_id, branch_id, event_type,
                       event_time, shift_duration_minutes, custom_status
                FROM attendance_events
                WHERE {where}
                ORDER BY event_time ASC, event_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        return [
            AttendanceEvent(
                event_id=str(r["event_id"]),
                staff_id=str(r["staff_id"]),
                organization_id=str(r["organization_id"]),
                branch_id=str(r["branch_id"]) if r.get("branch_id") is not None else None,
                event_type=EventType(r["event_type"]),
                timestamp=r["event_time"],
                shift_duration_minutes=(
                    int(r["shift_duration_minutes"]) if r.get("shift_duration_minutes") is not None else None
                ),
                custom_status=r.get("custom_status") or None,
            )
            for r in rows
        ]

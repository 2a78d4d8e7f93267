from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import StaffDirectoryEntry
from .repository import StaffDirectoryRepository


class MySQLStaffDirectoryRepository(StaffDirectoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_staff_directory(
        self,
        organization_id: str,
        *,
        branch_id: Optional[str] = None,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[StaffDirectoryEntry]:
        clauses = ["organization_id=%s"]
        params: list[object] = [organization_id]

        if branch_id is not None:
            clauses.append("branch_id=%s")
            params.append(branch_id)
        if role is not None:
            clauses.append("role=%s")
            params.append(role)
        if is_active is not None:
            clauses.append("is_active=%s")
            params.append(1 if is_active else 0)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT staff_id, organization_id, branch_id, name, role, is_active,
                       scheduled_start_time, scheduled_end_time
                FROM staff_directory
                WHERE {" AND ".join(clauses)}
                ORDER BY name ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        return [
            StaffDirectoryEntry(
                staff_id=str(r["staff_id"]),
                name=r["name"],
                organization_id=str(r["organization_id"]),
                branch_id=str(r["branch_id"]) if r.get("branch_id") is not None else None,
                role=r.get("role"),
                is_active=bool(r.get("is_active", 1)),
                scheduled_start_time=normalize_mysql_time(r.get("scheduled_start_time")),
                scheduled_end_time=normalize_mysql_time(r.get("scheduled_end_time")),
            )
            for r in rows
        ]

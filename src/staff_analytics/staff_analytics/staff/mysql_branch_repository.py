from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Branch
from .repository import BranchRepository


class MySQLBranchRepository(BranchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_active_branches(self, organization_id: str) -> Sequence[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT branch_id, organization_id, branch_name, branch_code, is_active
                FROM branches
                WHERE organization_id=%s AND is_active=1
                ORDER BY branch_name ASC
                """,
                (organization_id,),
            )
            rows = fetchall(cur)

        return [
            Branch(
                branch_id=str(r["branch_id"]),
                organization_id=str(r["organization_id"]),
                name=r["branch_name"],
                code=r.get("branch_code"),
                is_active=bool(r["is_active"]),
            )
            for r in rows
        ]

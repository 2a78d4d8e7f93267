from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StaffDirectoryEntry:
    """Domain entity: a staff member as seen by the analytics.

    A missing scheduled start/end means the member cannot be flagged for
    late arrivals / early departures.
    """

    staff_id: str
    name: str
    organization_id: str
    branch_id: Optional[str] = None
    role: Optional[str] = None
    is_active: bool = True
    scheduled_start_time: Optional[str] = None
    scheduled_end_time: Optional[str] = None


@dataclass(frozen=True)
class Branch:
    """Domain entity: a clinic/hospital branch of an organization."""

    branch_id: str
    organization_id: str
    name: str
    code: Optional[str] = None
    is_active: bool = True

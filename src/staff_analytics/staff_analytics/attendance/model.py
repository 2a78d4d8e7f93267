from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EventType


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: a single check-in or check-out fact.

    Events are immutable. `shift_duration_minutes` is filled upstream only on
    check-outs that were paired with an earlier check-in; the analytics never
    pair events themselves.
    """

    event_id: str
    staff_id: str
    organization_id: str
    event_type: EventType
    timestamp: datetime
    branch_id: Optional[str] = None
    shift_duration_minutes: Optional[int] = None
    custom_status: Optional[str] = None

    @property
    def is_check_in(self) -> bool:
        return self.event_type == EventType.CHECK_IN

    @property
    def is_check_out(self) -> bool:
        return self.event_type == EventType.CHECK_OUT

    @property
    def has_shift_duration(self) -> bool:
        return self.is_check_out and self.shift_duration_minutes is not None

    @property
    def work_date(self) -> date:
        return self.timestamp.date()

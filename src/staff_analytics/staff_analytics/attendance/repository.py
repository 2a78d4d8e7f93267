from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import EventType
from .model import AttendanceEvent


class AttendanceEventRepository(Protocol):
    """Read-only access to the attendance event stream.

    Implementations return events inside the inclusive range, ordered by
    timestamp ascending.
    """

    def fetch_events(
        self,
        organization_id: str,
        date_range: DateRange,
        *,
        staff_id: Optional[str] = None,
        branch_id: Optional[str] = None,
        event_type: Optional[EventType] = None,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

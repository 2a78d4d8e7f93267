from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

import pytest

from src.staff_analytics.staff_analytics.analytics.service import AttendanceAnalyticsService
from src.staff_analytics.staff_analytics.attendance.model import AttendanceEvent
from src.staff_analytics.staff_analytics.common.datetime_utils import DateRange
from src.staff_analytics.staff_analytics.core.enums import EventType
from src.staff_analytics.staff_analytics.staff.model import Branch, StaffDirectoryEntry

ORG = "org-1"


class InMemoryEvents:
    def __init__(self, events=None):
        self.events: list[AttendanceEvent] = list(events or [])
        self.calls: list[dict] = []

    def fetch_events(self, organization_id, date_range: DateRange, *, staff_id=None, branch_id=None, event_type=None):
        self.calls.append(
            {
                "organization_id": organization_id,
                "date_range": date_range,
                "staff_id": staff_id,
                "branch_id": branch_id,
                "event_type": event_type,
            }
        )
        items = [
            e
            for e in self.events
            if e.organization_id == organization_id
            and date_range.contains(e.timestamp)
            and (staff_id is None or e.staff_id == staff_id)
            and (branch_id is None or e.branch_id == branch_id)
            and (event_type is None or e.event_type == event_type)
        ]
        items.sort(key=lambda e: e.timestamp)
        return items


@dataclass
class InMemoryStaff:
    entries: list[StaffDirectoryEntry] = field(default_factory=list)

    def fetch_staff_directory(self, organization_id, *, branch_id=None, role=None, is_active=None):
        return [
            s
            for s in self.entries
            if s.organization_id == organization_id
            and (branch_id is None or s.branch_id == branch_id)
            and (role is None or s.role == role)
            and (is_active is None or s.is_active == is_active)
        ]


@dataclass
class InMemoryBranches:
    branches: list[Branch] = field(default_factory=list)

    def fetch_active_branches(self, organization_id):
        return [b for b in self.branches if b.organization_id == organization_id and b.is_active]


class EventFactory:
    """Builds events with unique ids; check-outs take an optional duration."""

    def __init__(self):
        self._ids = itertools.count(1)

    def check_in(self, staff_id: str, ts: datetime, *, branch_id: Optional[str] = None, status=None):
        return self._make(staff_id, EventType.CHECK_IN, ts, branch_id=branch_id, status=status)

    def check_out(self, staff_id: str, ts: datetime, duration=None, *, branch_id: Optional[str] = None, status=None):
        return self._make(staff_id, EventType.CHECK_OUT, ts, branch_id=branch_id, duration=duration, status=status)

    def _make(self, staff_id, event_type, ts, *, branch_id=None, duration=None, status=None):
        return AttendanceEvent(
            event_id=f"ev-{next(self._ids)}",
            staff_id=staff_id,
            organization_id=ORG,
            event_type=event_type,
            timestamp=ts,
            branch_id=branch_id,
            shift_duration_minutes=duration,
            custom_status=status,
        )


def make_staff(staff_id, name=None, *, branch_id="br-1", role="nurse", start="09:00", end="17:00", is_active=True):
    return StaffDirectoryEntry(
        staff_id=staff_id,
        name=name or staff_id.upper(),
        organization_id=ORG,
        branch_id=branch_id,
        role=role,
        is_active=is_active,
        scheduled_start_time=start,
        scheduled_end_time=end,
    )


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 4, 9, 0, 0)


@pytest.fixture
def ev():
    return EventFactory()


@pytest.fixture
def march_week():
    return DateRange.of(date(2024, 3, 4), date(2024, 3, 10))


@pytest.fixture
def repos():
    return InMemoryEvents(), InMemoryStaff(), InMemoryBranches()


@pytest.fixture
def service(repos):
    events, staff, branches = repos
    return AttendanceAnalyticsService(events, staff, branches)

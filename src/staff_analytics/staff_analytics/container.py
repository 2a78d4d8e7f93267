from __future__ import annotations

from dataclasses import dataclass

from .analytics.service import AttendanceAnalyticsService
from .attendance.mysql_attendance_repository import MySQLAttendanceEventRepository
from .attendance.repository import AttendanceEventRepository
from .core.constants import (
    DEFAULT_CONSECUTIVE_THRESHOLD,
    DEFAULT_OVERTIME_THRESHOLD_HOURS,
    DEFAULT_STANDARD_HOURS_PER_DAY,
)
from .database.connection import DBConfig, DatabaseConnection
from .staff.mysql_branch_repository import MySQLBranchRepository
from .staff.mysql_staff_repository import MySQLStaffDirectoryRepository
from .staff.repository import BranchRepository, StaffDirectoryRepository


@dataclass(frozen=True)
class AnalyticsDefaults:
    """Request parameter defaults, taken from the settings module."""

    standard_hours_per_day: int = DEFAULT_STANDARD_HOURS_PER_DAY
    overtime_threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS
    consecutive_threshold: int = DEFAULT_CONSECUTIVE_THRESHOLD

    @classmethod
    def from_settings(cls, settings) -> "AnalyticsDefaults":
        return cls(
            standard_hours_per_day=int(getattr(settings, "STANDARD_HOURS_PER_DAY", DEFAULT_STANDARD_HOURS_PER_DAY)),
            overtime_threshold_hours=float(
                getattr(settings, "OVERTIME_THRESHOLD_HOURS", DEFAULT_OVERTIME_THRESHOLD_HOURS)
            ),
            consecutive_threshold=int(getattr(settings, "CONSECUTIVE_THRESHOLD", DEFAULT_CONSECUTIVE_THRESHOLD)),
        )


@dataclass(frozen=True)
class Container:
    events_repo: AttendanceEventRepository
    staff_repo: StaffDirectoryRepository
    branches_repo: BranchRepository

    analytics_service: AttendanceAnalyticsService
    analytics_defaults: AnalyticsDefaults


def build_container_from_repositories(
    *,
    events_repo: AttendanceEventRepository,
    staff_repo: StaffDirectoryRepository,
    branches_repo: BranchRepository,
    defaults: AnalyticsDefaults | None = None,
) -> Container:
    defaults = defaults or AnalyticsDefaults()
    analytics_service = AttendanceAnalyticsService(
        events_repo,
        staff_repo,
        branches_repo,
        standard_hours_per_day=defaults.standard_hours_per_day,
    )
    return Container(
        events_repo=events_repo,
        staff_repo=staff_repo,
        branches_repo=branches_repo,
        analytics_service=analytics_service,
        analytics_defaults=defaults,
    )


def build_container(*, db_config: dict, defaults: AnalyticsDefaults | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_container_from_repositories(
        events_repo=MySQLAttendanceEventRepository(conn),
        staff_repo=MySQLStaffDirectoryRepository(conn),
        branches_repo=MySQLBranchRepository(conn),
        defaults=defaults,
    )

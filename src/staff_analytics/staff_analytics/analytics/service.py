from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceEventRepository
from ..common.datetime_utils import DateRange
from ..common.time_utils import round_half_up
from ..common.validators import require_non_negative, require_positive, require_valid_range
from ..core.constants import (
    DEFAULT_CONSECUTIVE_THRESHOLD,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    DEFAULT_OVERTIME_THRESHOLD_HOURS,
    DEFAULT_STANDARD_HOURS_PER_DAY,
)
from ..core.enums import EventType, PeriodGrouping
from ..staff.model import Branch, StaffDirectoryEntry
from ..staff.repository import BranchRepository, StaffDirectoryRepository
from . import aggregation, deviation, export, patterns
from . import branches as branch_comparison
from .calculator.standard_calculator import StandardOvertimeCalculator
from .model import (
    AnalyticsReport,
    AnalyticsSummary,
    BranchComparison,
    DeviationRecord,
    ExcessiveOvertime,
    HoursWorked,
    OvertimeRecord,
    Pattern,
    TimingAverage,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Everything one request reads from the stores, fetched up front."""

    events: Sequence[AttendanceEvent]
    staff: Sequence[StaffDirectoryEntry]
    branches: Sequence[Branch]

    @property
    def staff_by_id(self) -> dict[str, StaffDirectoryEntry]:
        return {s.staff_id: s for s in self.staff}


class AttendanceAnalyticsService:
    """Derived attendance metrics for one organization over a date range.

    Every public operation validates the range, fetches what it needs and then
    runs pure computations over that data. Store failures propagate unchanged;
    nothing is retried and no partial result is returned.
    """

    def __init__(
        self,
        events: AttendanceEventRepository,
        staff: StaffDirectoryRepository,
        branches: BranchRepository,
        *,
        standard_hours_per_day: float = DEFAULT_STANDARD_HOURS_PER_DAY,
    ):
        self._events = events
        self._staff = staff
        self._branches = branches
        self._standard_hours_per_day = standard_hours_per_day

    # ------------------------------------------------------------------
    # Fetch boundary
    # ------------------------------------------------------------------

    def _fetch_events(self, org_id: str, date_range: DateRange, **filters) -> Sequence[AttendanceEvent]:
        return self._events.fetch_events(org_id, date_range, **filters)

    def _fetch_staff_by_id(self, org_id: str) -> dict[str, StaffDirectoryEntry]:
        return {s.staff_id: s for s in self._staff.fetch_staff_directory(org_id)}

    def _fetch_snapshot(self, org_id: str, date_range: DateRange) -> Snapshot:
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="analytics-fetch") as pool:
            events_f = pool.submit(self._events.fetch_events, org_id, date_range)
            staff_f = pool.submit(self._staff.fetch_staff_directory, org_id)
            branches_f = pool.submit(self._branches.fetch_active_branches, org_id)
            return Snapshot(events=events_f.result(), staff=staff_f.result(), branches=branches_f.result())

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def compute_average_timings(
        self,
        org_id: str,
        date_range: DateRange,
        *,
        staff_id: Optional[str] = None,
        branch_id: Optional[str] = None,
    ) -> dict[str, TimingAverage]:
        require_valid_range(date_range)
        events = self._fetch_events(org_id, date_range, staff_id=staff_id, branch_id=branch_id)
        return aggregation.average_timings(events)

    def compute_hours_worked(
        self,
        org_id: str,
        date_range: DateRange,
        group_by: PeriodGrouping | str = PeriodGrouping.DAY,
    ) -> dict[str, HoursWorked]:
        require_valid_range(date_range)
        events = self._fetch_events(org_id, date_range, event_type=EventType.CHECK_OUT)
        return aggregation.aggregate_hours_worked(events, group_by)

    def compute_overtime_report(
        self,
        org_id: str,
        date_range: DateRange,
        standard_hours_per_day: Optional[float] = None,
    ) -> dict[str, OvertimeRecord]:
        require_valid_range(date_range)
        calculator = self._calculator(standard_hours_per_day)
        events = self._fetch_events(org_id, date_range, event_type=EventType.CHECK_OUT)
        return aggregation.build_overtime_report(events, self._fetch_staff_by_id(org_id), calculator)

    # ------------------------------------------------------------------
    # Deviations
    # ------------------------------------------------------------------

    def detect_late_arrivals(
        self,
        org_id: str,
        date_range: DateRange,
        threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES,
    ) -> list[DeviationRecord]:
        require_valid_range(date_range)
        events = self._fetch_events(org_id, date_range, event_type=EventType.CHECK_IN)
        return deviation.detect_late_arrivals(events, self._fetch_staff_by_id(org_id), threshold_minutes)

    def detect_early_departures(
        self,
        org_id: str,
        date_range: DateRange,
        threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES,
    ) -> list[DeviationRecord]:
        require_valid_range(date_range)
        events = self._fetch_events(org_id, date_range, event_type=EventType.CHECK_OUT)
        return deviation.detect_early_departures(events, self._fetch_staff_by_id(org_id), threshold_minutes)

    # ------------------------------------------------------------------
    # Branches / patterns
    # ------------------------------------------------------------------

    def compare_branches(self, org_id: str, date_range: DateRange, *, role: Optional[str] = None) -> BranchComparison:
        require_valid_range(date_range)
        active = self._branches.fetch_active_branches(org_id)
        if not active:
            return BranchComparison()
        staff = self._staff.fetch_staff_directory(org_id, role=role, is_active=True)
        events = self._fetch_events(org_id, date_range)
        return branch_comparison.compare_branches(active, staff, events, role=role)

    def find_excessive_overtime(
        self,
        org_id: str,
        date_range: DateRange,
        threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS,
        standard_hours_per_day: Optional[float] = None,
    ) -> list[ExcessiveOvertime]:
        require_non_negative(threshold_hours, "overtimeThreshold")
        report = self.compute_overtime_report(org_id, date_range, standard_hours_per_day)
        return patterns.find_excessive_overtime(report, threshold_hours)

    def detect_patterns(
        self,
        org_id: str,
        date_range: DateRange,
        consecutive_threshold: int = DEFAULT_CONSECUTIVE_THRESHOLD,
    ) -> list[Pattern]:
        require_positive(consecutive_threshold, "consecutiveThreshold")
        late = self.detect_late_arrivals(org_id, date_range, 0)
        early = self.detect_early_departures(org_id, date_range, 0)
        return self._patterns(late, early, consecutive_threshold)

    # ------------------------------------------------------------------
    # Export / combined payload
    # ------------------------------------------------------------------

    def export_flat_file(self, org_id: str, date_range: DateRange) -> str:
        require_valid_range(date_range)
        events = self._fetch_events(org_id, date_range)
        staff_by_id = self._fetch_staff_by_id(org_id)
        rows = self._export_rows(events, staff_by_id)
        logger.info("Exported %d attendance rows for organization %s", len(rows), org_id)
        return export.render_csv(rows)

    def build_dashboard(
        self,
        org_id: str,
        date_range: DateRange,
        *,
        group_by: PeriodGrouping | str = PeriodGrouping.DAY,
        standard_hours_per_day: Optional[float] = None,
        overtime_threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS,
        consecutive_threshold: int = DEFAULT_CONSECUTIVE_THRESHOLD,
    ) -> AnalyticsReport:
        """Run every analysis over one snapshot of the stores."""
        require_valid_range(date_range)
        require_non_negative(overtime_threshold_hours, "overtimeThreshold")
        require_positive(consecutive_threshold, "consecutiveThreshold")
        calculator = self._calculator(standard_hours_per_day)

        started = time.perf_counter()
        snap = self._fetch_snapshot(org_id, date_range)
        staff_by_id = snap.staff_by_id

        late = deviation.detect_late_arrivals(snap.events, staff_by_id, 0)
        early = deviation.detect_early_departures(snap.events, staff_by_id, 0)
        overtime = aggregation.build_overtime_report(snap.events, staff_by_id, calculator)
        excessive = patterns.find_excessive_overtime(overtime, overtime_threshold_hours)
        found = self._patterns(late, early, consecutive_threshold)
        active_staff = [s for s in snap.staff if s.is_active]

        report = AnalyticsReport(
            date_range=date_range,
            average_timings=aggregation.average_timings(snap.events),
            hours_worked=aggregation.aggregate_hours_worked(snap.events, group_by),
            late_arrivals=late,
            early_departures=early,
            overtime_report=overtime,
            branch_comparison=branch_comparison.compare_branches(snap.branches, active_staff, snap.events),
            excessive_overtime=excessive,
            patterns=found,
            summary=AnalyticsSummary(
                total_late_arrivals=len(late),
                total_early_departures=len(early),
                staff_with_overtime=sum(1 for r in overtime.values() if r.total_overtime_minutes > 0),
                total_overtime_hours=round_half_up(sum(r.total_overtime_hours for r in overtime.values()), 2),
                patterns_detected=len(found),
                staff_exceeding_overtime_threshold=len(excessive),
            ),
        )
        logger.info(
            "Analytics for organization %s: %d events, %d staff, %d branches",
            org_id,
            len(snap.events),
            len(snap.staff),
            len(snap.branches),
            extra={"organization_id": org_id, "duration_ms": round((time.perf_counter() - started) * 1000, 1)},
        )
        return report

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _calculator(self, standard_hours_per_day: Optional[float]) -> StandardOvertimeCalculator:
        hours = self._standard_hours_per_day if standard_hours_per_day is None else standard_hours_per_day
        require_non_negative(hours, "standardHours")
        return StandardOvertimeCalculator(hours)

    @staticmethod
    def _patterns(
        late: Sequence[DeviationRecord],
        early: Sequence[DeviationRecord],
        consecutive_threshold: int,
    ) -> list[Pattern]:
        return patterns.find_patterns(
            late, deviation.LATE_ARRIVAL.pattern_type, consecutive_threshold
        ) + patterns.find_patterns(early, deviation.EARLY_DEPARTURE.pattern_type, consecutive_threshold)

    def _export_rows(self, events: Sequence[AttendanceEvent], staff_by_id: dict[str, StaffDirectoryEntry]):
        late = deviation.detect_late_arrivals(events, staff_by_id, 0)
        early = deviation.detect_early_departures(events, staff_by_id, 0)
        overtime = aggregation.build_overtime_report(events, staff_by_id, self._calculator(None))
        return export.build_export_rows(
            events,
            staff_by_id,
            late_event_ids={r.event_id for r in late},
            early_event_ids={r.event_id for r in early},
            overtime_staff_ids={sid for sid, r in overtime.items() if r.total_overtime_minutes > 0},
        )

"""Read-models produced by the analytics (recomputed per request, never stored)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import DateRange
from ..common.time_utils import minutes_to_hours, minutes_to_time_string, round_half_up
from ..core.enums import PatternType, Severity


@dataclass
class TimingAverage:
    avg_check_in_minutes: Optional[int] = None
    avg_check_out_minutes: Optional[int] = None

    @property
    def avg_check_in(self) -> Optional[str]:
        return minutes_to_time_string(self.avg_check_in_minutes)

    @property
    def avg_check_out(self) -> Optional[str]:
        return minutes_to_time_string(self.avg_check_out_minutes)

    def to_dict(self) -> dict:
        return {
            "avgCheckIn": self.avg_check_in_minutes,
            "avgCheckInFormatted": self.avg_check_in,
            "avgCheckOut": self.avg_check_out_minutes,
            "avgCheckOutFormatted": self.avg_check_out,
        }


@dataclass(frozen=True)
class PeriodHours:
    period: str
    total_minutes: int
    shift_count: int

    @property
    def total_hours(self) -> float:
        return minutes_to_hours(self.total_minutes)

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "totalMinutes": self.total_minutes,
            "totalHours": self.total_hours,
            "shiftCount": self.shift_count,
        }


@dataclass(frozen=True)
class HoursWorked:
    staff_id: str
    periods: list[PeriodHours] = field(default_factory=list)

    @property
    def total_minutes(self) -> int:
        return sum(p.total_minutes for p in self.periods)

    @property
    def total_hours(self) -> float:
        return minutes_to_hours(self.total_minutes)

    @property
    def total_shifts(self) -> int:
        return sum(p.shift_count for p in self.periods)

    def to_dict(self) -> dict:
        return {
            "totalMinutes": self.total_minutes,
            "totalHours": self.total_hours,
            "totalShifts": self.total_shifts,
            "periods": [p.to_dict() for p in self.periods],
        }


@dataclass(frozen=True)
class DeviationRecord:
    """A late arrival or early departure, pointing back at its source event."""

    staff_id: str
    staff_name: str
    work_date: date
    scheduled_time: str
    actual_time: str
    deviation_minutes: int
    event_id: str

    def to_dict(self) -> dict:
        return {
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "date": self.work_date.isoformat(),
            "scheduledTime": self.scheduled_time,
            "actualTime": self.actual_time,
            "deviationMinutes": self.deviation_minutes,
            "recordId": self.event_id,
        }


@dataclass(frozen=True)
class DailyOvertime:
    work_date: date
    minutes_worked: int
    overtime_minutes: int

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "minutesWorked": self.minutes_worked,
            "overtimeMinutes": self.overtime_minutes,
            "hoursWorked": minutes_to_hours(self.minutes_worked),
            "overtimeHours": minutes_to_hours(self.overtime_minutes),
        }


@dataclass
class OvertimeRecord:
    """Per-staff overtime accumulator; totals are sums of the daily records."""

    staff_id: str
    staff_name: str
    daily_records: list[DailyOvertime] = field(default_factory=list)

    def add_shift(self, day: DailyOvertime) -> None:
        self.daily_records.append(day)

    @property
    def shift_count(self) -> int:
        return len(self.daily_records)

    @property
    def total_minutes_worked(self) -> int:
        return sum(d.minutes_worked for d in self.daily_records)

    @property
    def total_overtime_minutes(self) -> int:
        return sum(d.overtime_minutes for d in self.daily_records)

    @property
    def total_hours_worked(self) -> float:
        return minutes_to_hours(self.total_minutes_worked)

    @property
    def total_overtime_hours(self) -> float:
        return minutes_to_hours(self.total_overtime_minutes)

    @property
    def average_hours_per_shift(self) -> float:
        if self.shift_count == 0:
            return 0
        return round_half_up(self.total_minutes_worked / self.shift_count / 60, 2)

    def to_dict(self) -> dict:
        return {
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "totalMinutesWorked": self.total_minutes_worked,
            "totalOvertimeMinutes": self.total_overtime_minutes,
            "totalHoursWorked": self.total_hours_worked,
            "totalOvertimeHours": self.total_overtime_hours,
            "averageHoursPerShift": self.average_hours_per_shift,
            "shiftCount": self.shift_count,
            "dailyRecords": [d.to_dict() for d in self.daily_records],
        }


@dataclass(frozen=True)
class ExcessiveOvertime:
    staff_id: str
    staff_name: str
    total_overtime_hours: float
    total_overtime_minutes: int
    total_hours_worked: float
    shift_count: int
    threshold_exceeded_by: float
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "totalOvertimeHours": self.total_overtime_hours,
            "totalOvertimeMinutes": self.total_overtime_minutes,
            "totalHoursWorked": self.total_hours_worked,
            "shiftCount": self.shift_count,
            "thresholdExceededBy": self.threshold_exceeded_by,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class BranchMetrics:
    branch_id: str
    branch_name: str
    branch_code: Optional[str]
    staff_count: int
    total_minutes_worked: int
    total_hours_worked: float
    shift_count: int
    normalized_hours: float
    normalized_shifts: float
    peak_hour: Optional[int]
    peak_check_in_count: int

    @property
    def avg_hours_per_staff(self) -> float:
        return self.normalized_hours

    @property
    def peak_hour_formatted(self) -> Optional[str]:
        if self.peak_hour is None:
            return None
        return f"{self.peak_hour:02d}:00"

    def to_dict(self) -> dict:
        return {
            "branchId": self.branch_id,
            "branchName": self.branch_name,
            "branchCode": self.branch_code,
            "staffCount": self.staff_count,
            "totalHoursWorked": self.total_hours_worked,
            "totalMinutesWorked": self.total_minutes_worked,
            "shiftCount": self.shift_count,
            "avgHoursPerStaff": self.avg_hours_per_staff,
            "peakHour": self.peak_hour,
            "peakHourFormatted": self.peak_hour_formatted,
            "peakCheckInCount": self.peak_check_in_count,
            "normalizedHours": self.normalized_hours,
            "normalizedShifts": self.normalized_shifts,
        }


@dataclass(frozen=True)
class BranchSummary:
    total_branches: int = 0
    total_staff: int = 0
    total_hours_worked: float = 0
    avg_hours_per_branch: float = 0

    def to_dict(self) -> dict:
        return {
            "totalBranches": self.total_branches,
            "totalStaff": self.total_staff,
            "totalHoursWorked": self.total_hours_worked,
            "avgHoursPerBranch": self.avg_hours_per_branch,
        }


@dataclass(frozen=True)
class BranchComparison:
    branches: list[BranchMetrics] = field(default_factory=list)
    summary: BranchSummary = field(default_factory=BranchSummary)

    def to_dict(self) -> dict:
        return {
            "branches": [b.to_dict() for b in self.branches],
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class Pattern:
    """A run of consecutive flagged days for one staff member."""

    staff_id: str
    staff_name: str
    pattern_type: PatternType
    consecutive_count: int
    total_occurrences: int
    dates: list[date]
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "patternType": self.pattern_type.value,
            "consecutiveCount": self.consecutive_count,
            "totalOccurrences": self.total_occurrences,
            "dates": [d.isoformat() for d in self.dates],
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class AnalyticsSummary:
    total_late_arrivals: int
    total_early_departures: int
    staff_with_overtime: int
    total_overtime_hours: float
    patterns_detected: int
    staff_exceeding_overtime_threshold: int

    def to_dict(self) -> dict:
        return {
            "totalLateArrivals": self.total_late_arrivals,
            "totalEarlyDepartures": self.total_early_departures,
            "staffWithOvertime": self.staff_with_overtime,
            "totalOvertimeHours": self.total_overtime_hours,
            "patternsDetected": self.patterns_detected,
            "staffExceedingOvertimeThreshold": self.staff_exceeding_overtime_threshold,
        }


@dataclass(frozen=True)
class AnalyticsReport:
    """Combined payload of every analysis over one fetched snapshot."""

    date_range: DateRange
    average_timings: dict[str, TimingAverage]
    hours_worked: dict[str, HoursWorked]
    late_arrivals: list[DeviationRecord]
    early_departures: list[DeviationRecord]
    overtime_report: dict[str, OvertimeRecord]
    branch_comparison: BranchComparison
    excessive_overtime: list[ExcessiveOvertime]
    patterns: list[Pattern]
    summary: AnalyticsSummary

    def to_dict(self) -> dict:
        return {
            "analytics": {
                "averageTimings": {k: v.to_dict() for k, v in self.average_timings.items()},
                "hoursWorked": {k: v.to_dict() for k, v in self.hours_worked.items()},
                "lateArrivals": [r.to_dict() for r in self.late_arrivals],
                "earlyDepartures": [r.to_dict() for r in self.early_departures],
                "overtimeReport": {k: v.to_dict() for k, v in self.overtime_report.items()},
                "branchComparison": self.branch_comparison.to_dict(),
                "excessiveOvertime": [r.to_dict() for r in self.excessive_overtime],
                "patterns": [p.to_dict() for p in self.patterns],
            },
            "summary": self.summary.to_dict(),
            "dateRange": self.date_range.to_dict(),
        }

"""Cross-branch comparison with per-headcount normalization.

Normalizing by staff count is what makes a 5-person branch comparable to a
50-person one: equal hours per head give equal `normalized_hours`.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..common.time_utils import minutes_to_hours, round_half_up
from ..staff.model import Branch, StaffDirectoryEntry
from .model import BranchComparison, BranchMetrics, BranchSummary


def count_branch_staff(staff: Iterable[StaffDirectoryEntry], branch_id: str, *, role: Optional[str] = None) -> int:
    return sum(
        1
        for s in staff
        if s.is_active and s.branch_id == branch_id and (role is None or s.role == role)
    )


def per_staff(value: float, staff_count: int) -> float:
    """value / staff_count rounded to 2 dp; 0 for a branch without staff."""
    if staff_count == 0:
        return 0
    return round_half_up(value / staff_count, 2)


def normalized_hours(total_hours: float, staff_count: int) -> float:
    return per_staff(total_hours, staff_count)


def peak_hour(timestamps: Iterable[datetime]) -> tuple[Optional[int], int]:
    """Hour of day with the most check-ins and its count.

    Ties keep the hour seen first; (None, 0) when there is nothing to count.
    """
    counts: dict[int, int] = {}
    for ts in timestamps:
        counts[ts.hour] = counts.get(ts.hour, 0) + 1

    best_hour: Optional[int] = None
    best_count = 0
    for hour, count in counts.items():
        if count > best_count:
            best_hour, best_count = hour, count
    return best_hour, best_count


def summarize_branches(metrics: Sequence[BranchMetrics]) -> BranchSummary:
    if not metrics:
        return BranchSummary()
    total_hours = sum(m.total_hours_worked for m in metrics)
    return BranchSummary(
        total_branches=len(metrics),
        total_staff=sum(m.staff_count for m in metrics),
        total_hours_worked=round_half_up(total_hours, 2),
        avg_hours_per_branch=round_half_up(total_hours / len(metrics), 2),
    )


def compare_branches(
    branches: Sequence[Branch],
    staff: Sequence[StaffDirectoryEntry],
    events: Iterable[AttendanceEvent],
    *,
    role: Optional[str] = None,
) -> BranchComparison:
    """Metrics for every active branch; events outside those branches are ignored."""
    active = [b for b in branches if b.is_active]
    branch_ids = {b.branch_id for b in active}

    minutes: dict[str, int] = defaultdict(int)
    shifts: dict[str, int] = defaultdict(int)
    check_ins: dict[str, list[datetime]] = defaultdict(list)
    for e in events:
        if e.branch_id not in branch_ids:
            continue
        if e.has_shift_duration:
            minutes[e.branch_id] += int(e.shift_duration_minutes)
            shifts[e.branch_id] += 1
        elif e.is_check_in:
            check_ins[e.branch_id].append(e.timestamp)

    metrics: list[BranchMetrics] = []
    for b in active:
        staff_count = count_branch_staff(staff, b.branch_id, role=role)
        total_hours = minutes_to_hours(minutes[b.branch_id])
        hour, hour_count = peak_hour(check_ins[b.branch_id])
        metrics.append(
            BranchMetrics(
                branch_id=b.branch_id,
                branch_name=b.name,
                branch_code=b.code,
                staff_count=staff_count,
                total_minutes_worked=minutes[b.branch_id],
                total_hours_worked=total_hours,
                shift_count=shifts[b.branch_id],
                normalized_hours=normalized_hours(total_hours, staff_count),
                normalized_shifts=per_staff(shifts[b.branch_id], staff_count),
                peak_hour=hour,
                peak_check_in_count=hour_count,
            )
        )

    return BranchComparison(branches=metrics, summary=summarize_branches(metrics))

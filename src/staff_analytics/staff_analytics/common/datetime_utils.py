from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_range_bound(value: str) -> datetime | date:
    """Parse a query-string bound: either YYYY-MM-DD or a full ISO datetime."""
    value = value.strip()
    if len(value) == 10:
        return parse_iso_date(value)
    return datetime.fromisoformat(value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def _as_start(value: datetime | date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _as_end(value: datetime | date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.max)


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] window of naive local timestamps.

    Plain dates widen to whole days: the start becomes 00:00 and the end
    becomes 23:59:59.999999 of the given day.
    """

    start: datetime
    end: datetime

    @classmethod
    def of(cls, start: datetime | date, end: datetime | date) -> "DateRange":
        return cls(start=_as_start(start), end=_as_end(end))

    @property
    def is_valid(self) -> bool:
        return self.end >= self.start

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end

    def to_dict(self) -> dict:
        return {"startDate": self.start.isoformat(), "endDate": self.end.isoformat()}

from __future__ import annotations

from ..core.exceptions import InvalidDateRangeError, ValidationError
from .datetime_utils import DateRange


def require_valid_range(date_range: DateRange) -> DateRange:
    if not date_range.is_valid:
        raise InvalidDateRangeError("endDate must be after startDate")
    return date_range


def require_non_negative(value: float, field_name: str) -> float:
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return value


def require_positive(value: float, field_name: str) -> float:
    if value is None or value <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return value

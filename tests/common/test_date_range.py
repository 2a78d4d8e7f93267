from datetime import date, datetime

import pytest

from src.staff_analytics.staff_analytics.common.datetime_utils import DateRange, parse_range_bound
from src.staff_analytics.staff_analytics.common.validators import require_valid_range
from src.staff_analytics.staff_analytics.core.exceptions import InvalidDateRangeError, ValidationError


def test_plain_dates_cover_whole_days():
    r = DateRange.of(date(2024, 3, 4), date(2024, 3, 5))

    assert r.contains(datetime(2024, 3, 4, 0, 0))
    assert r.contains(datetime(2024, 3, 5, 23, 59, 59))
    assert not r.contains(datetime(2024, 3, 6, 0, 0))
    assert not r.contains(datetime(2024, 3, 3, 23, 59))


def test_single_day_range_is_valid():
    assert DateRange.of(date(2024, 3, 4), date(2024, 3, 4)).is_valid


def test_end_before_start_is_rejected():
    r = DateRange.of(date(2024, 3, 5), date(2024, 3, 4))

    with pytest.raises(InvalidDateRangeError):
        require_valid_range(r)


def test_invalid_range_is_a_validation_error():
    assert issubclass(InvalidDateRangeError, ValidationError)


def test_parse_range_bound_accepts_dates_and_datetimes():
    assert parse_range_bound("2024-03-04") == date(2024, 3, 4)
    assert parse_range_bound("2024-03-04T08:30:00") == datetime(2024, 3, 4, 8, 30)

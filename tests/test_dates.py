from datetime import date, datetime, time, timezone

import pytest

from app.core.dates import day_bounds, format_day, resolve_range, to_local_day, to_local_naive


def test_day_bounds_inclusive():
    start, end = day_bounds(datetime(2025, 3, 10, 15, 42))
    assert start == datetime(2025, 3, 10, 0, 0)
    assert end == datetime.combine(date(2025, 3, 10), time.max)


def test_day_bounds_accepts_date():
    start, _ = day_bounds(date(2025, 3, 10))
    assert start == datetime(2025, 3, 10)


def test_aware_datetime_is_converted_to_local_day():
    aware = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)
    assert to_local_day(aware) == aware.astimezone().date()
    assert to_local_naive(aware).tzinfo is None


def test_resolve_range_defaults():
    today = date(2025, 3, 31)
    start, end = resolve_range(None, None, 30, today=today)
    assert start == datetime(2025, 3, 1)
    assert end.date() == today
    assert end.time() == time.max


def test_resolve_range_explicit_dates():
    start, end = resolve_range("2025-01-05", "2025-01-07", 30)
    assert start == datetime(2025, 1, 5)
    assert end == datetime.combine(date(2025, 1, 7), time.max)


def test_resolve_range_invalid():
    with pytest.raises(ValueError):
        resolve_range("not a date", None, 30)


def test_format_day_pads_year():
    assert format_day(datetime(1, 1, 1, 12, 0)) == "0001-01-01"
    assert format_day(date(2025, 3, 9)) == "2025-03-09"

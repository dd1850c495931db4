from datetime import date, datetime, timedelta

import pytest
from pydantic import TypeAdapter

from promocal.calendar.window import (
    CalendarWindow,
    WindowRequest,
    format_local_date,
    monday_of_week,
    month_window,
    normalize_date,
    parse_local_date,
    week_window,
    window_for,
)
from promocal.core.errors import WindowInvariantError


def _assert_well_formed(window: CalendarWindow, size: int) -> None:
    assert window.size == size
    assert window.first.weekday() == 0
    for previous, current in zip(window.boundary_dates, window.boundary_dates[1:]):
        assert current - previous == timedelta(days=1)


@pytest.mark.parametrize("year", [2023, 2024, 2025, 2100])
def test_month_window_always_42_monday_first(year: int):
    for month in range(1, 13):
        window = month_window(year, month)
        _assert_well_formed(window, 42)
        assert window.contains(date(year, month, 1))
        assert window.year == year and window.month == month


def test_month_window_pads_previous_month():
    window = month_window(2024, 3)  # 1 March 2024 is a Friday
    assert window.first == date(2024, 2, 26)
    assert window.boundary_dates[4] == date(2024, 3, 1)
    assert window.last == date(2024, 4, 7)


def test_month_window_starting_on_monday_and_sunday():
    assert month_window(2024, 4).first == date(2024, 4, 1)
    assert month_window(2024, 9).first == date(2024, 8, 26)


def test_leap_february_is_covered():
    window = month_window(2024, 2)
    assert date(2024, 2, 29) in window.boundary_dates
    assert sum(1 for day in window.boundary_dates if window.is_in_month(day)) == 29


def test_month_rollover_matches_next_year():
    assert month_window(2024, 13) == month_window(2025, 1)
    assert month_window(2025, 1).first == date(2024, 12, 30)
    assert month_window(2024, 0).month == 12
    assert month_window(2024, 0).year == 2023


def test_week_window_from_any_day():
    expected = tuple(date(2024, 3, 4) + timedelta(days=offset) for offset in range(7))
    for day in range(4, 11):
        window = week_window(2024, 3, day)
        _assert_well_formed(window, 7)
        assert window.boundary_dates == expected


def test_week_window_across_year_boundary():
    window = week_window(2024, 12, 31)
    assert window.first == date(2024, 12, 30)
    assert window.last == date(2025, 1, 5)


def test_week_window_rolls_over_day_overflow():
    window = week_window(2024, 2, 31)  # 2 March 2024
    assert window.first == date(2024, 2, 26)
    assert window.last == date(2024, 3, 3)


def test_normalize_date_rollover():
    assert normalize_date(2024, 13, 1) == date(2025, 1, 1)
    assert normalize_date(2024, 0, 1) == date(2023, 12, 1)
    assert normalize_date(2024, 3, 0) == date(2024, 2, 29)
    assert normalize_date(2023, 2, 29) == date(2023, 3, 1)


def test_monday_of_week():
    assert monday_of_week(date(2024, 3, 10)) == date(2024, 3, 4)
    assert monday_of_week(date(2024, 3, 4)) == date(2024, 3, 4)


def test_local_date_formatting_and_parsing():
    assert format_local_date(date(2024, 3, 4)) == "2024-03-04"
    assert parse_local_date(datetime(2024, 3, 4, 23, 59)) == date(2024, 3, 4)
    assert parse_local_date("2024-03-04T23:30:00+00:00") == date(2024, 3, 4)
    assert parse_local_date(date(2024, 3, 4)) == date(2024, 3, 4)


def test_column_lookup():
    window = week_window(2024, 3, 6)
    assert window.column_of(date(2024, 3, 4)) == 0
    assert window.column_of(date(2024, 3, 10)) == 6
    assert window.column_of(date(2024, 3, 11)) is None


def test_window_invariants_are_enforced():
    tuesday = date(2024, 3, 5)
    with pytest.raises(WindowInvariantError):
        CalendarWindow(
            kind="week",
            boundary_dates=tuple(tuesday + timedelta(days=i) for i in range(7)),
            year=2024,
            month=3,
        )
    monday = date(2024, 3, 4)
    with pytest.raises(WindowInvariantError):
        CalendarWindow(
            kind="month",
            boundary_dates=tuple(monday + timedelta(days=i) for i in range(7)),
            year=2024,
            month=3,
        )
    with pytest.raises(WindowInvariantError):
        CalendarWindow(
            kind="week",
            boundary_dates=tuple(monday + timedelta(days=2 * i) for i in range(7)),
            year=2024,
            month=3,
        )


def test_window_requests_dispatch_on_kind():
    adapter = TypeAdapter(WindowRequest)
    week_request = adapter.validate_python({"kind": "week", "year": 2024, "month": 3, "day": 6})
    month_request = adapter.validate_python({"kind": "month", "year": 2024, "month": 3})
    assert window_for(week_request).kind == "week"
    assert window_for(month_request).first == date(2024, 2, 26)

"""Visible-window date arithmetic (Monday-first month grids and week strips)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from promocal.core.errors import WindowInvariantError

MONTH_CELLS = 42
WEEK_CELLS = 7

WindowKind = Literal["month", "week"]


def normalize_date(year: int, month: int, day: int = 1) -> date:
    """Build a date with ordinary calendar rollover for out-of-range month/day values.

    ``normalize_date(2024, 13, 1)`` is 2025-01-01 and ``normalize_date(2024, 3, 0)`` is the last
    day of February 2024.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def monday_index(day: date) -> int:
    """Return the Monday-first weekday index (Monday=0 .. Sunday=6)."""
    return day.weekday()


def monday_of_week(day: date) -> date:
    return day - timedelta(days=monday_index(day))


def format_local_date(day: date) -> str:
    """Format the calendar date as ``YYYY-MM-DD`` without any UTC conversion."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_local_date(value: date | datetime | str) -> date:
    """Reduce ``value`` to its calendar-day identity."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


@dataclass(frozen=True, slots=True)
class CalendarWindow:
    """Immutable run of boundary dates making up the visible cells/columns.

    Attributes
    ----------
    kind:
        ``"month"`` (42 cells, six Monday-first weeks) or ``"week"`` (7 cells).
    boundary_dates:
        Consecutive calendar days; the first one is always a Monday.
    year, month:
        Month the window was requested for. Month-grid cells use it to flag leading/trailing days.
    """

    kind: WindowKind
    boundary_dates: tuple[date, ...]
    year: int
    month: int

    def __post_init__(self) -> None:
        expected = MONTH_CELLS if self.kind == "month" else WEEK_CELLS
        if len(self.boundary_dates) != expected:
            raise WindowInvariantError(
                f"{self.kind} window requires {expected} dates, got {len(self.boundary_dates)}"
            )
        if monday_index(self.boundary_dates[0]) != 0:
            raise WindowInvariantError(
                f"Window must start on a Monday, got {format_local_date(self.boundary_dates[0])}"
            )
        for previous, current in zip(self.boundary_dates, self.boundary_dates[1:]):
            if current - previous != timedelta(days=1):
                raise WindowInvariantError(
                    f"Window dates must be consecutive: {format_local_date(previous)} -> "
                    f"{format_local_date(current)}"
                )

    @property
    def first(self) -> date:
        return self.boundary_dates[0]

    @property
    def last(self) -> date:
        return self.boundary_dates[-1]

    @property
    def size(self) -> int:
        return len(self.boundary_dates)

    def contains(self, day: date) -> bool:
        return self.first <= day <= self.last

    def column_of(self, day: date) -> int | None:
        """Return the 0-based column of ``day`` or ``None`` when it lies outside the window."""
        if not self.contains(day):
            return None
        return (day - self.first).days

    def is_in_month(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month


def _consecutive(start: date, count: int) -> tuple[date, ...]:
    return tuple(start + timedelta(days=offset) for offset in range(count))


def month_window(year: int, month: int) -> CalendarWindow:
    """Return the 6x7 Monday-first grid covering ``year``/``month``.

    The grid is padded backwards with the trailing days of the previous month and forwards with
    the next month's days, so every month yields exactly 42 dates.
    """
    first_of_month = normalize_date(year, month, 1)
    leading = monday_index(first_of_month)
    start = first_of_month - timedelta(days=leading)
    return CalendarWindow(
        kind="month",
        boundary_dates=_consecutive(start, MONTH_CELLS),
        year=first_of_month.year,
        month=first_of_month.month,
    )


def week_window(year: int, month: int, day: int) -> CalendarWindow:
    """Return the Monday-to-Sunday strip containing the (normalised) date."""
    anchor = normalize_date(year, month, day)
    return CalendarWindow(
        kind="week",
        boundary_dates=_consecutive(monday_of_week(anchor), WEEK_CELLS),
        year=anchor.year,
        month=anchor.month,
    )


class MonthWindowRequest(BaseModel):
    kind: Literal["month"] = "month"
    year: int
    month: int


class WeekWindowRequest(BaseModel):
    kind: Literal["week"] = "week"
    year: int
    month: int
    day: int


WindowRequest = Annotated[Union[MonthWindowRequest, WeekWindowRequest], Field(discriminator="kind")]


def window_for(request: MonthWindowRequest | WeekWindowRequest) -> CalendarWindow:
    if isinstance(request, WeekWindowRequest):
        return week_window(request.year, request.month, request.day)
    return month_window(request.year, request.month)


__all__ = [
    "MONTH_CELLS",
    "WEEK_CELLS",
    "CalendarWindow",
    "MonthWindowRequest",
    "WeekWindowRequest",
    "WindowRequest",
    "format_local_date",
    "monday_index",
    "monday_of_week",
    "month_window",
    "normalize_date",
    "parse_local_date",
    "week_window",
    "window_for",
]

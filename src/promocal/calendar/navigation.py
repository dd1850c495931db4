"""Period navigation for the calendar anchor (previous/next/today)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal

from promocal.core.errors import PromoCalValueError

from .window import format_local_date, monday_of_week, normalize_date

ViewName = Literal["day", "4days", "week", "month"]

_STEP_DAYS: dict[str, int] = {"day": 1, "4days": 4, "week": 7}


@dataclass(frozen=True, slots=True)
class CalendarAnchor:
    """Year/month/day triple the views are computed from.

    ``day`` may exceed the length of ``month`` after a month step (e.g. 31 carried into
    February); window builders roll it over with :func:`normalize_date`.
    """

    year: int
    month: int
    day: int = 1

    def to_date(self) -> date:
        return normalize_date(self.year, self.month, self.day)


def today_anchor(today: date | None = None) -> CalendarAnchor:
    current = today or date.today()
    return CalendarAnchor(current.year, current.month, current.day)


def shift_anchor(view: ViewName, anchor: CalendarAnchor, steps: int = 1) -> CalendarAnchor:
    """Move ``anchor`` by ``steps`` whole periods of ``view`` (negative steps go back)."""
    if view == "month":
        moved = normalize_date(anchor.year, anchor.month + steps, 1)
        return CalendarAnchor(moved.year, moved.month, anchor.day)
    if view not in _STEP_DAYS:
        available = ", ".join(sorted([*_STEP_DAYS, "month"]))
        raise PromoCalValueError(f"Unknown view '{view}'. Available: {available}")
    moved = anchor.to_date() + timedelta(days=_STEP_DAYS[view] * steps)
    return CalendarAnchor(moved.year, moved.month, moved.day)


def week_start_for(anchor: CalendarAnchor) -> str:
    """ISO date of the Monday starting the anchor's week (used for share links)."""
    return format_local_date(monday_of_week(anchor.to_date()))


__all__ = ["CalendarAnchor", "ViewName", "shift_anchor", "today_anchor", "week_start_for"]

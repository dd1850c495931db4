"""Assemble windows, per-day buckets and lane assignments into view projections."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from promocal.calendar.index import (
    campaigns_in_window,
    index_by_date,
    weather_by_date,
)
from promocal.calendar.models import (
    CampaignInterval,
    CampaignStatus,
    ContextEvent,
    WeatherForecast,
)
from promocal.calendar.window import (
    CalendarWindow,
    MonthWindowRequest,
    WeekWindowRequest,
    format_local_date,
    month_window,
    week_window,
)
from promocal.core.errors import PromoCalValueError

from .lanes import LaneAssignment, assert_no_collisions, max_rows, place_campaigns

__all__ = [
    "WEEKDAY_NAMES_ES",
    "WEEKDAY_NAMES_EN",
    "MonthCell",
    "WeekDay",
    "LaneBlock",
    "WeekProjection",
    "campaign_progress",
    "month_grid",
    "project",
    "selection_range",
    "week_projection",
]

WEEKDAY_NAMES_ES: tuple[str, ...] = ("Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom")
WEEKDAY_NAMES_EN: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _forecast_dict(forecast: WeatherForecast | None) -> dict[str, object] | None:
    if forecast is None:
        return None
    return forecast.model_dump(mode="json")


@dataclass(slots=True)
class MonthCell:
    """One of the 42 cells of a month grid."""

    date: date
    is_current_month: bool
    is_today: bool
    campaigns: list[CampaignInterval] = field(default_factory=list)
    events: list[ContextEvent] = field(default_factory=list)
    weather: WeatherForecast | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "date": format_local_date(self.date),
            "is_current_month": self.is_current_month,
            "is_today": self.is_today,
            "campaigns": [campaign.id for campaign in self.campaigns],
            "events": [event.id for event in self.events],
            "weather": _forecast_dict(self.weather),
        }


@dataclass(slots=True)
class WeekDay:
    """Column header data for the week strip."""

    date: date
    day_name: str
    day_number: int
    is_today: bool
    is_past: bool
    campaigns: list[CampaignInterval] = field(default_factory=list)
    events: list[ContextEvent] = field(default_factory=list)
    weather: WeatherForecast | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "date": format_local_date(self.date),
            "day_name": self.day_name,
            "day_number": self.day_number,
            "is_today": self.is_today,
            "is_past": self.is_past,
            "campaigns": [campaign.id for campaign in self.campaigns],
            "events": [event.id for event in self.events],
            "weather": _forecast_dict(self.weather),
        }


@dataclass(slots=True)
class LaneBlock:
    """A lane assignment joined with its campaign and presentation-only flags.

    ``starts_before_window``/``ends_after_window`` tell the renderer the block was clipped, so it
    can draw an open edge instead of a rounded one.
    """

    campaign: CampaignInterval
    assignment: LaneAssignment
    starts_before_window: bool
    ends_after_window: bool
    progress: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            **self.assignment.to_dict(),
            "status": self.campaign.status.value,
            "name": self.campaign.name,
            "starts_before_window": self.starts_before_window,
            "ends_after_window": self.ends_after_window,
            "progress": round(self.progress, 2),
        }


@dataclass(slots=True)
class WeekProjection:
    """Lane-organised week view: headers, assignments and the lane count to draw."""

    window: CalendarWindow
    week_days: list[WeekDay]
    lane_assignments: list[LaneAssignment]
    blocks: list[LaneBlock]
    max_rows: int

    def to_dict(self) -> dict[str, object]:
        return {
            "window_start": format_local_date(self.window.first),
            "window_end": format_local_date(self.window.last),
            "week_days": [day.to_dict() for day in self.week_days],
            "lane_assignments": [block.to_dict() for block in self.blocks],
            "max_rows": self.max_rows,
        }


def campaign_progress(campaign: CampaignInterval, today: date) -> float:
    """Share (0-100) of an active campaign's inclusive day range already elapsed by ``today``."""
    if campaign.status != CampaignStatus.ACTIVE:
        return 0.0
    if today < campaign.start_date:
        return 0.0
    if today > campaign.end_date:
        return 100.0
    elapsed = (today - campaign.start_date).days
    return min(100.0, max(0.0, elapsed / campaign.duration_days * 100.0))


def selection_range(
    window: CalendarWindow, anchor_column: int, current_column: int
) -> tuple[date, date] | None:
    """Translate a column drag into an ordered inclusive date range.

    A drag that starts and ends on the same column is a plain click and yields ``None``.
    """
    for column in (anchor_column, current_column):
        if not 0 <= column < window.size:
            raise PromoCalValueError(
                f"Column {column} outside window of {window.size} columns"
            )
    start, end = sorted((anchor_column, current_column))
    if start == end:
        return None
    return window.boundary_dates[start], window.boundary_dates[end]


def month_grid(
    year: int,
    month: int,
    campaigns: Sequence[CampaignInterval],
    events: Sequence[ContextEvent],
    weather: Sequence[WeatherForecast] = (),
    *,
    today: date | None = None,
) -> list[MonthCell]:
    """Build the 42 month-grid cells with their campaign, event and weather buckets."""
    window = month_window(year, month)
    today = today or date.today()
    campaigns_by_date = index_by_date(window.boundary_dates, campaigns)
    events_by_date = index_by_date(window.boundary_dates, events)
    forecasts = weather_by_date(weather)
    return [
        MonthCell(
            date=day,
            is_current_month=window.is_in_month(day),
            is_today=day == today,
            campaigns=campaigns_by_date[day],
            events=events_by_date[day],
            weather=forecasts.get(day),
        )
        for day in window.boundary_dates
    ]


def week_projection(
    year: int,
    month: int,
    day: int,
    campaigns: Sequence[CampaignInterval],
    events: Sequence[ContextEvent],
    weather: Sequence[WeatherForecast] = (),
    *,
    today: date | None = None,
    weekday_names: Sequence[str] = WEEKDAY_NAMES_ES,
) -> WeekProjection:
    """Build the week strip: day headers, lane assignments and ``max_rows``."""
    if len(weekday_names) != 7:
        raise PromoCalValueError("weekday_names must provide exactly seven labels")
    window = week_window(year, month, day)
    today = today or date.today()

    visible = campaigns_in_window(window, campaigns)
    campaigns_by_date = index_by_date(window.boundary_dates, visible)
    events_by_date = index_by_date(window.boundary_dates, events)
    forecasts = weather_by_date(weather)
    week_days = [
        WeekDay(
            date=current,
            day_name=weekday_names[column],
            day_number=current.day,
            is_today=current == today,
            is_past=current < today,
            campaigns=campaigns_by_date[current],
            events=events_by_date[current],
            weather=forecasts.get(current),
        )
        for column, current in enumerate(window.boundary_dates)
    ]

    placed = place_campaigns(window, visible)
    assignments = [assignment for _, assignment in placed]
    assert_no_collisions(assignments)
    blocks = [
        LaneBlock(
            campaign=campaign,
            assignment=assignment,
            starts_before_window=campaign.start_date < window.first,
            ends_after_window=campaign.end_date > window.last,
            progress=campaign_progress(campaign, today),
        )
        for campaign, assignment in placed
    ]
    return WeekProjection(
        window=window,
        week_days=week_days,
        lane_assignments=assignments,
        blocks=blocks,
        max_rows=max_rows(assignments),
    )


def project(
    request: MonthWindowRequest | WeekWindowRequest,
    campaigns: Sequence[CampaignInterval],
    events: Sequence[ContextEvent],
    weather: Sequence[WeatherForecast] = (),
    *,
    today: date | None = None,
) -> list[MonthCell] | WeekProjection:
    """Dispatch a window request to :func:`month_grid` or :func:`week_projection`."""
    if isinstance(request, WeekWindowRequest):
        return week_projection(
            request.year,
            request.month,
            request.day,
            campaigns,
            events,
            weather,
            today=today,
        )
    return month_grid(request.year, request.month, campaigns, events, weather, today=today)

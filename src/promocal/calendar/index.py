"""Per-day bucketing of date-ranged items against a window's boundary dates."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Protocol, TypeVar

from .models import CampaignInterval, ContextEvent, WeatherForecast
from .window import CalendarWindow


class DateRanged(Protocol):
    def is_active_on(self, day: date) -> bool: ...


ItemT = TypeVar("ItemT", bound=DateRanged)


def index_by_date(boundary_dates: Iterable[date], items: Sequence[ItemT]) -> dict[date, list[ItemT]]:
    """Map every boundary date to the items active on it.

    Each boundary date receives an entry, empty when nothing is active, so consumers can look up
    any visible cell without checking for presence. Buckets keep the input order of ``items``.
    """
    return {day: [item for item in items if item.is_active_on(day)] for day in boundary_dates}


def index_campaigns_by_date(
    window: CalendarWindow, campaigns: Sequence[CampaignInterval]
) -> dict[date, list[CampaignInterval]]:
    return index_by_date(window.boundary_dates, campaigns)


def index_events_by_date(
    window: CalendarWindow, events: Sequence[ContextEvent]
) -> dict[date, list[ContextEvent]]:
    return index_by_date(window.boundary_dates, events)


def campaigns_in_window(
    window: CalendarWindow, campaigns: Iterable[CampaignInterval]
) -> list[CampaignInterval]:
    """Return campaigns sharing at least one day with the window, in input order."""
    return [campaign for campaign in campaigns if campaign.overlaps(window.first, window.last)]


def weather_by_date(forecasts: Iterable[WeatherForecast]) -> dict[date, WeatherForecast]:
    """Index forecasts by date; a later forecast for the same date replaces an earlier one."""
    lookup: dict[date, WeatherForecast] = {}
    for forecast in forecasts:
        lookup[forecast.date] = forecast
    return lookup


__all__ = [
    "DateRanged",
    "campaigns_in_window",
    "index_by_date",
    "index_campaigns_by_date",
    "index_events_by_date",
    "weather_by_date",
]

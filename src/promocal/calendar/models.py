"""Pydantic models describing calendar inputs (campaigns, context events, weather)."""

from __future__ import annotations

import datetime as dt
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from promocal.core.errors import DateRangeError


class CampaignStatus(str, Enum):
    """Lifecycle state of a campaign; carried through untouched for the rendering layer."""

    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EventCategory(str, Enum):
    """Closed set of contextual event categories."""

    HOLIDAY = "holiday"
    SPORTS = "sports"
    ENTERTAINMENT = "entertainment"
    COMMERCIAL = "commercial"


def validate_date_range(start: date, end: date, *, item_id: str | None = None) -> None:
    """Fail fast when ``start`` falls after ``end`` instead of reordering the pair."""
    if start > end:
        label = f"'{item_id}' " if item_id else ""
        raise DateRangeError(
            f"Item {label}has start date {start.isoformat()} after end date {end.isoformat()}"
        )


class CampaignInterval(BaseModel):
    """Promotional campaign spanning an inclusive calendar-date range.

    Attributes
    ----------
    id:
        Identifier that stays stable across recomputation.
    start_date, end_date:
        Inclusive calendar dates; ISO ``YYYY-MM-DD`` strings are accepted.
    status:
        Lifecycle state, only consumed by the presentation layer (and by
        :func:`promocal.layout.projection.campaign_progress`).
    name, platform, campaign_type, restaurant_id:
        Descriptive fields from the data-access layer, carried through unchanged.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    start_date: date
    end_date: date
    status: CampaignStatus = CampaignStatus.SCHEDULED
    name: str | None = None
    platform: str | None = None
    campaign_type: str | None = None
    restaurant_id: str | None = None

    @field_validator("end_date")
    @classmethod
    def _end_not_before_start(cls, value: date, info: ValidationInfo) -> date:
        start = info.data.get("start_date")
        if start is not None and value < start:
            raise ValueError("end_date must be >= start_date")
        return value

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def is_active_on(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, first: date, last: date) -> bool:
        """Return ``True`` when the campaign shares at least one day with ``[first, last]``."""
        return self.start_date <= last and self.end_date >= first


class ContextEvent(BaseModel):
    """Holiday, fixture or other contextual event; listed per day, never laid out in lanes."""

    model_config = ConfigDict(frozen=True)

    id: str
    event_date: date
    end_date: date | None = None
    category: EventCategory
    name: str | None = None

    @field_validator("end_date")
    @classmethod
    def _end_not_before_event(cls, value: date | None, info: ValidationInfo) -> date | None:
        start = info.data.get("event_date")
        if value is not None and start is not None and value < start:
            raise ValueError("end_date must be >= event_date")
        return value

    @property
    def last_date(self) -> date:
        return self.end_date if self.end_date is not None else self.event_date

    def is_active_on(self, day: date) -> bool:
        if self.end_date is not None:
            return self.event_date <= day <= self.end_date
        return self.event_date == day


class WeatherForecast(BaseModel):
    """Daily forecast (or historical observation when ``is_historical``) attached to a cell."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    temperature_max: float
    temperature_min: float
    weather_code: int
    precipitation_probability: float = 0.0
    description: str = ""
    icon: str | None = None
    is_historical: bool = False

    @field_validator("precipitation_probability")
    @classmethod
    def _probability_range(cls, value: float) -> float:
        if not 0 <= value <= 100:
            raise ValueError("precipitation_probability must be within [0, 100]")
        return value


__all__ = [
    "CampaignStatus",
    "EventCategory",
    "CampaignInterval",
    "ContextEvent",
    "WeatherForecast",
    "validate_date_range",
]

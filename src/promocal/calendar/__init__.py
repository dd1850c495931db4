"""Calendar inputs, visible windows and per-day indexing."""

from .index import (
    campaigns_in_window,
    index_by_date,
    index_campaigns_by_date,
    index_events_by_date,
    weather_by_date,
)
from .models import (
    CampaignInterval,
    CampaignStatus,
    ContextEvent,
    EventCategory,
    WeatherForecast,
    validate_date_range,
)
from .navigation import CalendarAnchor, shift_anchor, today_anchor, week_start_for
from .window import (
    CalendarWindow,
    MonthWindowRequest,
    WeekWindowRequest,
    WindowRequest,
    format_local_date,
    monday_of_week,
    month_window,
    normalize_date,
    parse_local_date,
    week_window,
    window_for,
)

__all__ = [
    "CampaignInterval",
    "CampaignStatus",
    "ContextEvent",
    "EventCategory",
    "WeatherForecast",
    "validate_date_range",
    "CalendarWindow",
    "MonthWindowRequest",
    "WeekWindowRequest",
    "WindowRequest",
    "format_local_date",
    "parse_local_date",
    "normalize_date",
    "monday_of_week",
    "month_window",
    "week_window",
    "window_for",
    "index_by_date",
    "index_campaigns_by_date",
    "index_events_by_date",
    "campaigns_in_window",
    "weather_by_date",
    "CalendarAnchor",
    "shift_anchor",
    "today_anchor",
    "week_start_for",
]

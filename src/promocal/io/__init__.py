"""Calendar bundle IO helpers."""

from .loaders import CalendarBundle, load_bundle, load_campaigns, load_events, load_weather, read_csv

__all__ = [
    "CalendarBundle",
    "load_bundle",
    "load_campaigns",
    "load_events",
    "load_weather",
    "read_csv",
]

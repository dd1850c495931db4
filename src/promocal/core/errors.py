"""Common promocal-specific exceptions."""

class PromoCalValueError(ValueError):
    """Raised when promocal detects invalid caller-provided data."""


class DateRangeError(PromoCalValueError):
    """Raised when an item's start date falls after its end date."""


class WindowInvariantError(PromoCalValueError):
    """Raised when a calendar window is not a run of consecutive days starting on Monday."""


class LaneCollisionError(PromoCalValueError):
    """Raised when two lane assignments share a row and a column."""


__all__ = [
    "PromoCalValueError",
    "DateRangeError",
    "WindowInvariantError",
    "LaneCollisionError",
]

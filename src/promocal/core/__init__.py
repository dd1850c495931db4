"""Core utilities shared across promocal modules."""

from .errors import DateRangeError, LaneCollisionError, PromoCalValueError, WindowInvariantError

__all__ = ["PromoCalValueError", "DateRangeError", "WindowInvariantError", "LaneCollisionError"]

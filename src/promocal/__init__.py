"""Layout engine for promotional campaign calendars (month grids and week lanes)."""

__version__ = "0.1.0"

"""Lane assignment and view projections built on top of calendar windows."""

from .lanes import (
    LaneAssignment,
    assert_no_collisions,
    assign_lanes,
    clip_columns,
    max_rows,
    place_campaigns,
)
from .projection import (
    WEEKDAY_NAMES_EN,
    WEEKDAY_NAMES_ES,
    LaneBlock,
    MonthCell,
    WeekDay,
    WeekProjection,
    campaign_progress,
    month_grid,
    project,
    selection_range,
    week_projection,
)

__all__ = [
    "LaneAssignment",
    "assign_lanes",
    "assert_no_collisions",
    "clip_columns",
    "max_rows",
    "place_campaigns",
    "WEEKDAY_NAMES_EN",
    "WEEKDAY_NAMES_ES",
    "LaneBlock",
    "MonthCell",
    "WeekDay",
    "WeekProjection",
    "campaign_progress",
    "month_grid",
    "project",
    "selection_range",
    "week_projection",
]

"""Greedy lane assignment for multi-day campaigns inside a visible window."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from promocal.calendar.models import CampaignInterval
from promocal.calendar.window import CalendarWindow
from promocal.core.errors import LaneCollisionError

__all__ = [
    "LaneAssignment",
    "assign_lanes",
    "assert_no_collisions",
    "clip_columns",
    "lane_sort_key",
    "max_rows",
    "place_campaigns",
]


@dataclass(frozen=True, slots=True)
class LaneAssignment:
    """Placement of one campaign within one window.

    Attributes
    ----------
    campaign_id:
        Identifier of the placed campaign.
    start_column, end_column:
        Inclusive 0-based column range, clamped to the window.
    row:
        0-based lane index.
    """

    campaign_id: str
    start_column: int
    end_column: int
    row: int

    def columns(self) -> range:
        return range(self.start_column, self.end_column + 1)

    def shares_column(self, other: "LaneAssignment") -> bool:
        return self.start_column <= other.end_column and other.start_column <= self.end_column

    def to_dict(self) -> dict[str, object]:
        return {
            "campaign_id": self.campaign_id,
            "start_column": self.start_column,
            "end_column": self.end_column,
            "row": self.row,
        }


def clip_columns(window: CalendarWindow, campaign: CampaignInterval) -> tuple[int, int] | None:
    """Return the clamped ``(start_column, end_column)`` or ``None`` outside the window."""
    if not campaign.overlaps(window.first, window.last):
        return None
    start_column = window.column_of(campaign.start_date)
    end_column = window.column_of(campaign.end_date)
    return (
        0 if start_column is None else start_column,
        window.size - 1 if end_column is None else end_column,
    )


def lane_sort_key(campaign: CampaignInterval) -> tuple:
    # Longer campaigns first on a shared start day; id keeps the order input-independent.
    return (campaign.start_date, -campaign.duration_days, campaign.id)


def _fits(occupancy: list[bool], start_column: int, end_column: int) -> bool:
    return not any(occupancy[start_column : end_column + 1])


def place_campaigns(
    window: CalendarWindow, campaigns: Iterable[CampaignInterval]
) -> list[tuple[CampaignInterval, LaneAssignment]]:
    """Same placement as :func:`assign_lanes`, keeping each campaign next to its assignment."""
    clipped: list[tuple[CampaignInterval, tuple[int, int]]] = []
    for campaign in campaigns:
        span = clip_columns(window, campaign)
        if span is not None:
            clipped.append((campaign, span))
    clipped.sort(key=lambda item: lane_sort_key(item[0]))

    occupancy: list[list[bool]] = []
    placed: list[tuple[CampaignInterval, LaneAssignment]] = []
    for campaign, (start_column, end_column) in clipped:
        row = 0
        while row < len(occupancy) and not _fits(occupancy[row], start_column, end_column):
            row += 1
        if row == len(occupancy):
            occupancy.append([False] * window.size)
        for column in range(start_column, end_column + 1):
            occupancy[row][column] = True
        placed.append(
            (
                campaign,
                LaneAssignment(
                    campaign_id=campaign.id,
                    start_column=start_column,
                    end_column=end_column,
                    row=row,
                ),
            )
        )
    return placed


def assign_lanes(
    window: CalendarWindow, campaigns: Iterable[CampaignInterval]
) -> list[LaneAssignment]:
    """Place overlapping campaigns into rows so no two campaigns sharing a column share a row.

    Campaigns are processed by start date, then longest duration first, then id (``sorted`` is
    stable, so duplicate ids keep their input order). Campaigns with identical ranges are
    therefore ordered by id rather than by input position. Each one takes the lowest row whose
    columns in its clipped range are all free; a new row is opened when none fits. Campaigns
    that do not intersect the window are left out of the result.

    Returns
    -------
    list[LaneAssignment]
        Assignments in processing order.
    """
    return [assignment for _, assignment in place_campaigns(window, campaigns)]


def max_rows(assignments: Sequence[LaneAssignment]) -> int:
    """Number of lanes to draw; never below 1 so the rendering layer keeps a visible height."""
    return max((assignment.row + 1 for assignment in assignments), default=1)


def assert_no_collisions(assignments: Sequence[LaneAssignment]) -> None:
    """Raise :class:`LaneCollisionError` when two assignments share a row and a column."""
    by_row: dict[int, list[LaneAssignment]] = {}
    for assignment in assignments:
        for other in by_row.get(assignment.row, []):
            if assignment.shares_column(other):
                raise LaneCollisionError(
                    f"Campaigns '{other.campaign_id}' and '{assignment.campaign_id}' "
                    f"collide on row {assignment.row}"
                )
        by_row.setdefault(assignment.row, []).append(assignment)

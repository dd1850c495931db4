import random
from datetime import date, timedelta

import pytest

from promocal.calendar.models import CampaignInterval
from promocal.calendar.window import month_window, week_window
from promocal.core.errors import LaneCollisionError
from promocal.layout.lanes import (
    LaneAssignment,
    assert_no_collisions,
    assign_lanes,
    clip_columns,
    max_rows,
)


def _campaign(campaign_id: str, start: str, end: str) -> CampaignInterval:
    return CampaignInterval(id=campaign_id, start_date=start, end_date=end)


def _by_id(assignments: list[LaneAssignment]) -> dict[str, LaneAssignment]:
    return {assignment.campaign_id: assignment for assignment in assignments}


def _random_campaigns(rng: random.Random, count: int, first: date, span: int) -> list[CampaignInterval]:
    campaigns = []
    for index in range(count):
        start = first + timedelta(days=rng.randint(-5, span))
        end = start + timedelta(days=rng.randint(0, 10))
        campaigns.append(
            CampaignInterval(id=f"C{index:03d}", start_date=start, end_date=end)
        )
    return campaigns


def test_clipped_overlap_scenario():
    window = week_window(2024, 3, 6)
    a = _campaign("A", "2024-03-01", "2024-03-06")
    b = _campaign("B", "2024-03-05", "2024-03-05")
    result = _by_id(assign_lanes(window, [a, b]))
    assert result["A"] == LaneAssignment("A", start_column=0, end_column=2, row=0)
    assert result["B"] == LaneAssignment("B", start_column=1, end_column=1, row=1)


def test_disjoint_campaigns_share_row_zero():
    window = week_window(2024, 3, 6)
    result = assign_lanes(
        window,
        [_campaign("mon-tue", "2024-03-04", "2024-03-05"), _campaign("wed-thu", "2024-03-06", "2024-03-07")],
    )
    assert [assignment.row for assignment in result] == [0, 0]
    assert max_rows(result) == 1


def test_three_full_week_campaigns_need_three_rows():
    window = week_window(2024, 3, 6)
    campaigns = [_campaign(name, "2024-03-04", "2024-03-10") for name in ("x", "y", "z")]
    result = assign_lanes(window, campaigns)
    assert sorted(assignment.row for assignment in result) == [0, 1, 2]
    assert all((a.start_column, a.end_column) == (0, 6) for a in result)
    assert max_rows(result) == 3


def test_longer_campaign_wins_the_lower_row_on_shared_start():
    window = week_window(2024, 3, 6)
    short = _campaign("short", "2024-03-04", "2024-03-04")
    long = _campaign("long", "2024-03-04", "2024-03-08")
    tuesday = _campaign("tuesday", "2024-03-05", "2024-03-05")
    result = _by_id(assign_lanes(window, [short, tuesday, long]))
    assert result["long"].row == 0
    assert result["short"].row == 1
    assert result["tuesday"].row == 1


def test_campaigns_outside_window_are_excluded():
    window = week_window(2024, 3, 6)
    before = _campaign("before", "2024-02-20", "2024-03-03")
    after = _campaign("after", "2024-03-11", "2024-03-11")
    assert assign_lanes(window, [before, after]) == []
    assert clip_columns(window, before) is None


def test_clipping_to_window_edges():
    window = month_window(2024, 3)
    spanning = _campaign("spanning", "2024-01-15", "2024-05-01")
    exact = _campaign("exact", "2024-02-26", "2024-04-07")
    tail = _campaign("tail", "2024-04-05", "2024-04-30")
    result = _by_id(assign_lanes(window, [spanning, exact, tail]))
    assert (result["spanning"].start_column, result["spanning"].end_column) == (0, 41)
    assert (result["exact"].start_column, result["exact"].end_column) == (0, 41)
    assert (result["tail"].start_column, result["tail"].end_column) == (39, 41)


def test_empty_input_gives_default_height():
    window = week_window(2024, 3, 6)
    assert assign_lanes(window, []) == []
    assert max_rows([]) == 1


def test_identical_ranges_are_ordered_by_id():
    window = week_window(2024, 3, 6)
    first = _campaign("a", "2024-03-05", "2024-03-06")
    second = _campaign("b", "2024-03-05", "2024-03-06")
    for ordering in ([first, second], [second, first]):
        result = _by_id(assign_lanes(window, ordering))
        assert result["a"].row == 0
        assert result["b"].row == 1


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_assignment_is_independent_of_input_order(seed: int):
    rng = random.Random(seed)
    window = month_window(2024, 3)
    campaigns = _random_campaigns(rng, 30, window.first, 41)
    baseline = _by_id(assign_lanes(window, campaigns))
    for _ in range(5):
        shuffled = campaigns[:]
        rng.shuffle(shuffled)
        assert _by_id(assign_lanes(window, shuffled)) == baseline
    assert assign_lanes(window, campaigns) == assign_lanes(window, campaigns)


@pytest.mark.parametrize("seed", [3, 11, 2024])
def test_rows_never_exceed_peak_overlap(seed: int):
    rng = random.Random(seed)
    window = week_window(2024, 3, 6)
    campaigns = _random_campaigns(rng, 25, window.first, 6)
    result = assign_lanes(window, campaigns)
    assert_no_collisions(result)
    peak = max(
        sum(1 for campaign in campaigns if campaign.is_active_on(day))
        for day in window.boundary_dates
    )
    assert max_rows(result) <= max(peak, 1)


def test_collision_check_flags_shared_columns():
    clash = [
        LaneAssignment("a", start_column=0, end_column=3, row=0),
        LaneAssignment("b", start_column=3, end_column=4, row=0),
    ]
    with pytest.raises(LaneCollisionError, match="'a' and 'b'"):
        assert_no_collisions(clash)
    assert_no_collisions([clash[0], LaneAssignment("b", 3, 4, row=1)])

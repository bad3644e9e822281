"""
Tests for the calendar grid builder and tile model.
"""

from datetime import date

import numpy as np
import pytest

from git_streak.streak_core.contributions import ContributionDay
from git_streak.streak_core.date_utils import (
    day_of_week,
    format_display_date,
    generate_last_365_days,
    one_year_ago,
    week_number,
)
from git_streak.streak_core.grid import (
    GRID_WEEKS,
    Tile,
    are_all_tiles_collected,
    commits_matrix,
    create_grid,
    empty_grid,
    find_first_collectable_tile,
    get_collectable_count,
    get_contribution_level,
    get_grid_dimensions,
    get_max_score,
    get_tile,
    is_collectable,
    level_matrix,
    reset_collected,
    update_tile,
)
from git_streak.streak_core.snake import Position

# 2025-01-15 (the anchor) is a Wednesday
TODAY = date(2026, 1, 15)


@pytest.fixture
def grid():
    return create_grid([
        {"date": "2025-01-15", "count": 4},
        {"date": "2025-01-22", "count": 2},
        ("2025-06-01", 11),
    ], today=TODAY)


class TestDateUtils:
    """Test calendar arithmetic."""

    def test_anchor_is_365_days_back(self):
        assert one_year_ago(TODAY) == date(2025, 1, 15)

    def test_day_of_week_starts_sunday(self):
        assert day_of_week("2026-01-18") == 0  # Sunday
        assert day_of_week("2026-01-15") == 4  # Thursday
        assert day_of_week("2026-01-17") == 6  # Saturday

    def test_week_number_floors(self):
        start = one_year_ago(TODAY)
        assert week_number("2025-01-15", start) == 0
        assert week_number("2025-01-21", start) == 0
        assert week_number("2025-01-22", start) == 1
        assert week_number("2025-01-14", start) == -1

    def test_last_365_days(self):
        days = generate_last_365_days(TODAY)
        assert len(days) == 365
        assert days[0] == "2025-01-15"
        assert days[-1] == "2026-01-14"

    def test_display_date(self):
        assert format_display_date("2026-01-15") == "Jan 15, 2026"


class TestCreateGrid:
    """Test mapping contribution records onto the grid."""

    def test_fixed_dimensions(self, grid):
        assert get_grid_dimensions(grid) == (GRID_WEEKS, 7)

    def test_anchor_lands_in_week_zero(self, grid):
        assert grid[0][3] == Tile(date="2025-01-15", commits=4, is_collected=False)
        assert grid[1][3].commits == 2

    def test_unfilled_cells_are_empty(self, grid):
        assert grid[0][0] == Tile()
        assert grid[0][0].date == ""

    def test_out_of_window_dropped(self):
        grid = create_grid([
            ContributionDay("2025-01-14", 5),   # week -1
            ContributionDay("2026-01-21", 5),   # week 53
        ], today=TODAY)
        assert get_collectable_count(grid) == 0

    def test_today_lands_in_last_week(self):
        grid = create_grid([ContributionDay("2026-01-15", 3)], today=TODAY)
        assert grid[52][4].commits == 3

    def test_last_write_wins(self):
        grid = create_grid([
            ContributionDay("2025-03-03", 1),
            ContributionDay("2025-03-03", 9),
        ], today=TODAY)
        assert get_max_score(grid) == 9

    def test_deterministic(self):
        records = [ContributionDay("2025-02-02", 3), ContributionDay("2025-09-09", 7)]
        assert create_grid(records, today=TODAY) == create_grid(records, today=TODAY)

    def test_malformed_record_raises(self):
        with pytest.raises(ValueError):
            create_grid([{"date": "not-a-date", "count": 1}], today=TODAY)


class TestTileModel:
    """Test tile queries and updates."""

    def test_get_tile_uses_row_as_day(self, grid):
        assert get_tile(grid, 3, 0) is grid[0][3]

    @pytest.mark.parametrize("row,col", [(-1, 0), (7, 0), (0, -1), (0, GRID_WEEKS)])
    def test_get_tile_out_of_bounds(self, grid, row, col):
        assert get_tile(grid, row, col) is None

    def test_update_tile_replaces_one_tile(self, grid):
        updated = update_tile(grid, 3, 0, is_collected=True)

        assert updated[0][3].is_collected
        assert updated[0][3].commits == 4
        assert not grid[0][3].is_collected
        # Other weeks are shared untouched
        assert updated[1] is grid[1]
        assert updated[0][2] is grid[0][2]

    def test_update_tile_out_of_bounds_is_noop(self, grid):
        assert update_tile(grid, 9, 0, is_collected=True) is grid

    def test_is_collectable(self):
        assert is_collectable(Tile("2025-01-15", 1, False))
        assert not is_collectable(Tile("2025-01-15", 1, True))
        assert not is_collectable(Tile("2025-01-15", 0, False))
        assert not is_collectable(Tile())

    def test_cells_outside_window_not_collectable(self, grid):
        for week in grid:
            for tile in week:
                if not tile.date:
                    assert tile.commits == 0
                    assert not is_collectable(tile)

    def test_find_first_collectable_scans_weeks_first(self):
        grid = update_tile(empty_grid(), 0, 1, commits=1)
        grid = update_tile(grid, 5, 0, commits=1)
        assert find_first_collectable_tile(grid) == Position(row=5, col=0)

    def test_find_first_collectable_none(self):
        assert find_first_collectable_tile(empty_grid()) is None

    def test_all_collected(self, grid):
        assert not are_all_tiles_collected(grid)
        for col, week in enumerate(grid):
            for row, tile in enumerate(week):
                if is_collectable(tile):
                    grid = update_tile(grid, row, col, is_collected=True)
        assert are_all_tiles_collected(grid)
        assert get_collectable_count(grid) == 0

    def test_reset_collected_keeps_commits(self, grid):
        collected = update_tile(grid, 3, 0, is_collected=True)
        assert reset_collected(collected) == grid

    def test_max_score(self, grid):
        assert get_max_score(grid) == 17


class TestContributionLevels:
    """Test display level thresholds."""

    @pytest.mark.parametrize("count,level", [
        (0, 0), (1, 1), (3, 1), (4, 2), (6, 2), (7, 3), (9, 3), (10, 4), (50, 4),
    ])
    def test_levels(self, count, level):
        assert get_contribution_level(count) == level

    def test_level_matrix_matches_scalar(self, grid):
        levels = level_matrix(grid)
        commits = commits_matrix(grid)
        assert levels.shape == (GRID_WEEKS, 7)
        for (week, day), count in np.ndenumerate(commits):
            assert levels[week, day] == get_contribution_level(int(count))

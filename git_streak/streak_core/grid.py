"""
Contribution Grid
=================

Builds the 53-week x 7-day calendar grid and provides tile queries.

The grid is stored ``grid[week][day]`` as nested tuples, so every update
returns a new grid and untouched weeks are shared with the old one.
Positions name the axes the other way round (row = day, col = week);
``get_tile`` is the one place that bridges the two.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np

from git_streak.streak_core.contributions import contributions_from_records
from git_streak.streak_core.date_utils import day_of_week, one_year_ago, week_number
from git_streak.streak_core.snake import DAYS_PER_WEEK, Position

# 53 weeks cover any 365-day span
GRID_WEEKS = 53


@dataclass(frozen=True)
class Tile:
    """
    A single calendar day.

    An empty ``date`` marks a cell outside the data window. ``create_grid``
    leaves such cells at zero commits, so they are never collectable.
    """
    date: str = ""
    commits: int = 0
    is_collected: bool = False


Grid = Tuple[Tuple[Tile, ...], ...]

EMPTY_TILE = Tile()


def empty_grid(weeks: int = GRID_WEEKS) -> Grid:
    """Grid of empty tiles."""
    return tuple(
        tuple(EMPTY_TILE for _ in range(DAYS_PER_WEEK))
        for _ in range(weeks)
    )


def create_grid(contributions: Iterable[Any], today: Optional[date] = None) -> Grid:
    """
    Lay contribution records onto the calendar grid.

    Week 0 starts 365 days before ``today``. Records falling outside the
    53-week window are dropped; if two records land on the same cell the
    later one wins.

    Args:
        contributions: ContributionDay values, ``{date, count}`` mappings or
            ``(date, count)`` pairs.
        today: Anchor date. Defaults to the current date.

    Returns:
        Grid indexed ``grid[week][day]``.
    """
    start = one_year_ago(today)
    cells: List[List[Tile]] = [
        [EMPTY_TILE] * DAYS_PER_WEEK for _ in range(GRID_WEEKS)
    ]

    for day in contributions_from_records(contributions):
        week = week_number(day.date, start)
        if 0 <= week < GRID_WEEKS:
            cells[week][day_of_week(day.date)] = Tile(
                date=day.date,
                commits=day.count,
                is_collected=False
            )

    return tuple(tuple(week) for week in cells)


def get_tile(grid: Grid, row: int, col: int) -> Optional[Tile]:
    """
    Tile at ``row`` (day) and ``col`` (week), or None if out of bounds.
    """
    if row < 0 or row >= DAYS_PER_WEEK or col < 0 or col >= len(grid):
        return None
    week = grid[col]
    if row >= len(week):
        return None
    return week[row]


def update_tile(grid: Grid, row: int, col: int, **updates: Any) -> Grid:
    """
    Return a new grid with one tile's fields replaced.

    Out-of-bounds coordinates return ``grid`` unchanged.
    """
    if get_tile(grid, row, col) is None:
        return grid
    week = grid[col]
    new_week = week[:row] + (replace(week[row], **updates),) + week[row + 1:]
    return grid[:col] + (new_week,) + grid[col + 1:]


def reset_collected(grid: Grid) -> Grid:
    """Clear every ``is_collected`` flag, keeping dates and commits."""
    return tuple(
        tuple(replace(tile, is_collected=False) if tile.is_collected else tile for tile in week)
        for week in grid
    )


def is_collectable(tile: Tile) -> bool:
    """Tile has commits and has not been collected yet."""
    return tile.commits > 0 and not tile.is_collected


def get_collectable_count(grid: Grid) -> int:
    return sum(1 for week in grid for tile in week if is_collectable(tile))


def get_max_score(grid: Grid) -> int:
    """Sum of all commits (the score of a full clear)."""
    return sum(tile.commits for week in grid for tile in week)


def are_all_tiles_collected(grid: Grid) -> bool:
    return not any(is_collectable(tile) for week in grid for tile in week)


def get_grid_dimensions(grid: Grid) -> Tuple[int, int]:
    """(weeks, days) of the grid."""
    return len(grid), (len(grid[0]) if grid else 0)


def find_first_collectable_tile(grid: Grid) -> Optional[Position]:
    """First collectable tile scanning week by week, then day by day."""
    for col, week in enumerate(grid):
        for row, tile in enumerate(week):
            if is_collectable(tile):
                return Position(row=row, col=col)
    return None


def get_contribution_level(count: int) -> int:
    """
    Map a commit count to a display level 0-4.

    0 -> 0, 1-3 -> 1, 4-6 -> 2, 7-9 -> 3, 10+ -> 4.
    """
    if count <= 0:
        return 0
    if count <= 3:
        return 1
    if count <= 6:
        return 2
    if count <= 9:
        return 3
    return 4


def commits_matrix(grid: Grid) -> np.ndarray:
    """(weeks, 7) int32 array of commit counts."""
    return np.array(
        [[tile.commits for tile in week] for week in grid],
        dtype=np.int32
    ).reshape(len(grid), DAYS_PER_WEEK)


def collected_matrix(grid: Grid) -> np.ndarray:
    """(weeks, 7) bool array of collected flags."""
    return np.array(
        [[tile.is_collected for tile in week] for week in grid],
        dtype=bool
    ).reshape(len(grid), DAYS_PER_WEEK)


def level_matrix(grid: Grid) -> np.ndarray:
    """(weeks, 7) int8 array of contribution levels."""
    commits = commits_matrix(grid)
    levels = np.zeros(commits.shape, dtype=np.int8)
    levels[commits > 0] = 1
    levels[commits > 3] = 2
    levels[commits > 6] = 3
    levels[commits > 9] = 4
    return levels

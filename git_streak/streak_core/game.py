"""
Core Game
=========

Tick-based state machine combining the snake and the contribution grid.

Every transition takes a GameState and returns a GameState; none of them
mutate their input or raise. A terminal state (``is_game_over``) is
returned unchanged by ``tick`` and ``handle_direction_change`` until a
restart or new game replaces it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from git_streak.streak_core.grid import (
    Grid,
    are_all_tiles_collected,
    find_first_collectable_tile,
    get_tile,
    is_collectable,
    reset_collected,
    update_tile,
)
from git_streak.streak_core.snake import (
    RIGHT,
    Position,
    Snake,
    change_direction,
    check_self_collision,
    check_wall_collision,
    create_snake,
    is_next_move_valid,
    move_snake,
)


@dataclass(frozen=True)
class GameState:
    """
    Complete game state for one session.

    ``growth_every`` is the opt-in growth policy: when positive, the snake
    grows one segment on the move after every ``growth_every`` collected
    tiles. Zero keeps the length constant for the whole game.
    """
    grid: Grid
    snake: Snake
    score: int
    is_game_over: bool
    is_win: bool
    tiles_collected_since_growth: int = 0
    growth_every: int = 0


@dataclass(frozen=True)
class GameStats:
    """Derived counters for score panels."""
    score: int
    tiles_collected: int
    tiles_remaining: int
    snake_length: int


def initialize_game(grid: Grid, growth_every: int = 0) -> GameState:
    """
    Build a fresh state with the snake on the first collectable tile.

    The snake always starts heading RIGHT, so a restart reproduces the
    initial state exactly.

    If the grid has nothing to collect, the snake is placed at (0, 0) and
    the game starts already lost.
    """
    growth_every = max(0, int(growth_every))
    start = find_first_collectable_tile(grid)

    if start is None:
        return GameState(
            grid=grid,
            snake=create_snake(Position(0, 0), RIGHT),
            score=0,
            is_game_over=True,
            is_win=False,
            growth_every=growth_every
        )

    return GameState(
        grid=grid,
        snake=create_snake(start, RIGHT),
        score=0,
        is_game_over=False,
        is_win=False,
        growth_every=growth_every
    )


def handle_direction_change(state: GameState, direction: str) -> GameState:
    """Apply a direction change; ignored once the game is over."""
    if state.is_game_over:
        return state

    snake = change_direction(state.snake, direction)
    if snake is state.snake:
        return state
    return replace(state, snake=snake)


def _collect_tile(grid: Grid, position: Position) -> Tuple[Grid, int]:
    """Collect the tile at ``position`` if possible; returns (grid, points)."""
    tile = get_tile(grid, position.row, position.col)
    if tile is None or not is_collectable(tile):
        return grid, 0
    return update_tile(grid, position.row, position.col, is_collected=True), tile.commits


def tick(state: GameState) -> GameState:
    """
    Advance the game by one step.

    1. Lose without moving if the next head cell is a wall or body.
    2. Move the snake (growing only under the growth policy).
    3. Lose if the moved snake collides anyway.
    4. Every cell under the body collects its tile and scores its commits.
    5. Win once nothing collectable is left.
    """
    if state.is_game_over:
        return state

    grow = (
        state.growth_every > 0
        and state.tiles_collected_since_growth >= state.growth_every
    )

    if not is_next_move_valid(state.snake, state.grid, growing=grow):
        return replace(state, is_game_over=True, is_win=False)

    moved = move_snake(state.snake, grow)

    # Re-check after the move; kept even though step 1 should prevent it
    if check_wall_collision(moved, state.grid) or check_self_collision(moved):
        return replace(state, snake=moved, is_game_over=True, is_win=False)

    grid = state.grid
    points = 0
    collected = 0
    for position in moved.body:
        grid, tile_points = _collect_tile(grid, position)
        if tile_points:
            points += tile_points
            collected += 1

    since_growth = state.tiles_collected_since_growth
    if grow:
        since_growth -= state.growth_every
    if state.growth_every > 0:
        since_growth += collected

    has_won = are_all_tiles_collected(grid)

    return GameState(
        grid=grid,
        snake=moved,
        score=state.score + points,
        is_game_over=has_won,
        is_win=has_won,
        tiles_collected_since_growth=since_growth,
        growth_every=state.growth_every
    )


def restart_game(state: GameState) -> GameState:
    """Replay the same grid: clear collected flags and re-initialize."""
    return initialize_game(
        reset_collected(state.grid),
        growth_every=state.growth_every
    )


def start_new_game(grid: Grid, growth_every: int = 0) -> GameState:
    """Start over on a different grid."""
    return initialize_game(grid, growth_every=growth_every)


def is_game_playing(state: GameState) -> bool:
    return not state.is_game_over


def get_game_stats(state: GameState) -> GameStats:
    """Count collected vs remaining active tiles."""
    tiles_collected = 0
    tiles_remaining = 0
    for week in state.grid:
        for tile in week:
            if tile.commits > 0:
                if tile.is_collected:
                    tiles_collected += 1
                else:
                    tiles_remaining += 1

    return GameStats(
        score=state.score,
        tiles_collected=tiles_collected,
        tiles_remaining=tiles_remaining,
        snake_length=len(state.snake.body)
    )

"""
Game Actions
============

Events accepted by the engine and the reducer that applies them.

``game_reducer`` is the only way callers change a GameState. It is pure:
the same (state, action) pair always yields the same result, and nothing
is mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from git_streak.streak_core.game import (
    GameState,
    handle_direction_change,
    restart_game,
    start_new_game,
    tick,
)
from git_streak.streak_core.grid import Grid


@dataclass(frozen=True)
class Tick:
    """Advance one step."""


@dataclass(frozen=True)
class ChangeDirection:
    """Steer the snake."""
    direction: str


@dataclass(frozen=True)
class Restart:
    """Replay the current grid from scratch."""


@dataclass(frozen=True)
class NewGame:
    """Start over on a different grid."""
    grid: Grid


GameAction = Union[Tick, ChangeDirection, Restart, NewGame]


def game_reducer(state: GameState, action: GameAction) -> GameState:
    """
    Apply one action to a state.

    Unknown actions return ``state`` unchanged. ``NewGame`` keeps the
    current growth policy.
    """
    if isinstance(action, Tick):
        return tick(state)

    if isinstance(action, ChangeDirection):
        return handle_direction_change(state, action.direction)

    if isinstance(action, Restart):
        return restart_game(state)

    if isinstance(action, NewGame):
        return start_new_game(action.grid, growth_every=state.growth_every)

    return state

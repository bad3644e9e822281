"""
Game Session
============

Stateful holder for one GameState, for drivers that prefer an object.

The session owns no timers. Drivers call ``tick()`` on their own schedule
(``config.timing.tick_interval_ms``) and forward input through
``change_direction()``; both go through ``game_reducer`` in call order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from git_streak.streak_core.actions import (
    ChangeDirection,
    GameAction,
    NewGame,
    Restart,
    Tick,
    game_reducer,
)
from git_streak.streak_core.config_loader import GameConfig, get_config
from git_streak.streak_core.game import GameState, GameStats, get_game_stats, initialize_game
from git_streak.streak_core.grid import Grid, get_max_score
from git_streak.streak_core.state_snapshot import GameSnapshot, SnapshotBuilder


@dataclass
class StepResult:
    """Result of a single session step (optional turn + one tick)."""
    state: GameState
    terminated: bool
    is_win: bool
    delta_score: int


class GameSession:
    """
    Serial event loop around ``game_reducer``.

    Example:
        session = GameSession(create_grid(contributions))
        while not session.is_over:
            session.step(direction_from_input())
    """

    def __init__(
        self,
        grid: Grid,
        config: Optional[GameConfig] = None,
        debug: bool = False
    ):
        """
        Initialize session.

        Args:
            grid: Starting grid.
            config: Game configuration. Uses default if None.
            debug: If True, print each transition.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._debug = debug
        self._snapshot_builder = SnapshotBuilder(config)
        self._state = initialize_game(grid, growth_every=config.snake.growth_every)
        self._ticks = 0

        if self._debug:
            stats = get_game_stats(self._state)
            print(f"[DEBUG] GameSession initialized")
            print(f"[DEBUG]   Collectable tiles: {stats.tiles_remaining}")
            print(f"[DEBUG]   Max score: {get_max_score(grid)}")
            print(f"[DEBUG]   Tick interval: {config.timing.tick_interval_ms}ms")

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def state(self) -> GameState:
        """Current game state."""
        return self._state

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def is_over(self) -> bool:
        """True if game has ended."""
        return self._state.is_game_over

    @property
    def is_win(self) -> bool:
        return self._state.is_win

    @property
    def ticks(self) -> int:
        """Ticks applied since the last (re)start."""
        return self._ticks

    @property
    def stats(self) -> GameStats:
        return get_game_stats(self._state)

    def dispatch(self, action: GameAction) -> GameState:
        """Apply one action and return the new state."""
        previous = self._state
        self._state = game_reducer(previous, action)

        if isinstance(action, Tick):
            if not previous.is_game_over:
                self._ticks += 1
        elif isinstance(action, (Restart, NewGame)):
            self._ticks = 0

        if self._debug and self._state is not previous:
            print(f"[DEBUG] {type(action).__name__}: score={self._state.score}, "
                  f"head={self._state.snake.body[0]}, "
                  f"direction={self._state.snake.direction}")
            if self._state.is_game_over and not previous.is_game_over:
                print(f"[DEBUG] GAME OVER: {'win' if self._state.is_win else 'loss'}")

        return self._state

    def tick(self) -> GameState:
        return self.dispatch(Tick())

    def change_direction(self, direction: str) -> GameState:
        return self.dispatch(ChangeDirection(direction))

    def restart(self) -> GameState:
        return self.dispatch(Restart())

    def new_game(self, grid: Grid) -> GameState:
        return self.dispatch(NewGame(grid))

    def step(self, direction: Optional[str] = None) -> StepResult:
        """
        Optionally turn, then advance one tick.

        Args:
            direction: New direction, or None to keep heading.

        Returns:
            StepResult with the new state and score gained this step.
        """
        score_before = self._state.score
        if direction is not None:
            self.change_direction(direction)
        state = self.tick()

        return StepResult(
            state=state,
            terminated=state.is_game_over,
            is_win=state.is_win,
            delta_score=state.score - score_before
        )

    def build_snapshot(self) -> GameSnapshot:
        """Numpy snapshot of the current state."""
        return self._snapshot_builder.build(self._state)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        stats = get_game_stats(self._state)
        return {
            "score": stats.score,
            "tiles_collected": stats.tiles_collected,
            "tiles_remaining": stats.tiles_remaining,
            "snake_length": stats.snake_length,
            "ticks": self._ticks,
            "is_win": self._state.is_win,
            "direction": self._state.snake.direction,
        }

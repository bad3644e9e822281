"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for observations and
rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from git_streak.streak_core.config_loader import GameConfig, get_config
from git_streak.streak_core.game import GameState, get_game_stats
from git_streak.streak_core.grid import collected_matrix, commits_matrix, level_matrix
from git_streak.streak_core.snake import DIRECTIONS


@dataclass
class GameSnapshot:
    """
    Complete game state snapshot.

    Grid arrays are indexed [week, day] like the grid itself. Snake arrays
    are fixed-size, padded with -1 and masked.
    """
    # Core state
    score: int
    snake_length: int
    direction: int                    # Index into DIRECTIONS
    is_game_over: bool
    is_win: bool
    tiles_collected: int
    tiles_remaining: int

    # Grid arrays
    commits: np.ndarray               # (weeks, 7) int32
    collected: np.ndarray             # (weeks, 7) bool
    level: np.ndarray                 # (weeks, 7) int8

    # Snake arrays (fixed size, padded)
    snake_row: np.ndarray             # (MAX_LEN,) int16
    snake_col: np.ndarray             # (MAX_LEN,) int16
    snake_mask: np.ndarray            # (MAX_LEN,) bool

    @property
    def head(self) -> Optional[tuple]:
        """(row, col) of the head."""
        if not self.snake_mask[0]:
            return None
        return int(self.snake_row[0]), int(self.snake_col[0])

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            # Core state
            "score": np.array(self.score, dtype=np.int64),
            "snake_length": np.array(self.snake_length, dtype=np.int32),
            "direction": np.array(self.direction, dtype=np.int32),
            "is_game_over": np.array(self.is_game_over, dtype=np.int8),
            "is_win": np.array(self.is_win, dtype=np.int8),
            "tiles_collected": np.array(self.tiles_collected, dtype=np.int32),
            "tiles_remaining": np.array(self.tiles_remaining, dtype=np.int32),

            # Grid arrays
            "commits": self.commits,
            "collected": self.collected.astype(np.int8),
            "level": self.level,

            # Snake arrays
            "snake_row": self.snake_row,
            "snake_col": self.snake_col,
            "snake_mask": self.snake_mask.astype(np.int8),
        }


class SnapshotBuilder:
    """Builds game state snapshots."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_snake_length = config.observation.max_snake_length

    @property
    def max_snake_length(self) -> int:
        return self._max_snake_length

    def build(self, state: GameState) -> GameSnapshot:
        """Build a snapshot from a game state."""
        snake_row = np.full(self._max_snake_length, -1, dtype=np.int16)
        snake_col = np.full(self._max_snake_length, -1, dtype=np.int16)
        snake_mask = np.zeros(self._max_snake_length, dtype=bool)

        body = state.snake.body[:self._max_snake_length]
        for i, segment in enumerate(body):
            snake_row[i] = segment.row
            snake_col[i] = segment.col
            snake_mask[i] = True

        stats = get_game_stats(state)

        return GameSnapshot(
            score=state.score,
            snake_length=len(state.snake.body),
            direction=DIRECTIONS.index(state.snake.direction),
            is_game_over=state.is_game_over,
            is_win=state.is_win,
            tiles_collected=stats.tiles_collected,
            tiles_remaining=stats.tiles_remaining,
            commits=commits_matrix(state.grid),
            collected=collected_matrix(state.grid),
            level=level_matrix(state.grid),
            snake_row=snake_row,
            snake_col=snake_col,
            snake_mask=snake_mask
        )

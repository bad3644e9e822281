"""
Streak Core - The game engine behind git-streak.

This module provides the calendar grid builder, snake rules, the tick-based
engine with its action reducer, and supporting tools (mock datasets,
snapshots, rendering, Gymnasium wrapper).

Main exports:
- create_grid: Build the 53x7 grid from (date, count) records
- initialize_game / tick / game_reducer: Functional engine
- GameSession: Stateful driver helper around the reducer
- StreakEnv: Gymnasium environment
- GameConfig: Configuration loaded from game_config.yaml
"""

from git_streak.streak_core.config_loader import GameConfig, load_config
from git_streak.streak_core.contributions import (
    ContributionDay,
    contributions_from_calendar,
    contributions_from_records,
)
from git_streak.streak_core.grid import Grid, Tile, create_grid
from git_streak.streak_core.snake import DIRECTIONS, DOWN, LEFT, RIGHT, UP, Position, Snake
from git_streak.streak_core.game import (
    GameState,
    GameStats,
    get_game_stats,
    initialize_game,
    restart_game,
    start_new_game,
    tick,
)
from git_streak.streak_core.actions import (
    ChangeDirection,
    NewGame,
    Restart,
    Tick,
    game_reducer,
)
from git_streak.streak_core.session import GameSession, StepResult
from git_streak.streak_core.mock_contributions import (
    MockContributionGenerator,
    get_mock_contributions,
)
from git_streak.streak_core.env_gym import StreakEnv

__all__ = [
    "GameConfig",
    "load_config",
    "ContributionDay",
    "contributions_from_calendar",
    "contributions_from_records",
    "Grid",
    "Tile",
    "create_grid",
    "DIRECTIONS",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "Position",
    "Snake",
    "GameState",
    "GameStats",
    "get_game_stats",
    "initialize_game",
    "restart_game",
    "start_new_game",
    "tick",
    "ChangeDirection",
    "NewGame",
    "Restart",
    "Tick",
    "game_reducer",
    "GameSession",
    "StepResult",
    "MockContributionGenerator",
    "get_mock_contributions",
    "StreakEnv",
]

"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the git-streak snake game.
Reward is the score gained on the step (the commits swept up).
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from git_streak.streak_core.config_loader import GameConfig, load_config
from git_streak.streak_core.grid import GRID_WEEKS, Grid, create_grid, get_grid_dimensions
from git_streak.streak_core.mock_contributions import DEFAULT_DATASET, get_mock_contributions
from git_streak.streak_core.render_solid import SolidRenderer
from git_streak.streak_core.session import GameSession
from git_streak.streak_core.snake import DAYS_PER_WEEK, DIRECTIONS


class StreakEnv(gym.Env):
    """
    Contribution-calendar snake as a Gymnasium environment.

    Action Space:
        Discrete(4): 0=UP, 1=DOWN, 2=LEFT, 3=RIGHT.
        Each step applies the direction change, then one tick. Reversals
        are ignored by the engine as usual.

    Observation Space:
        Dict of grid arrays (commits, collected, level), padded snake
        coordinates and scalar counters.

    Reward:
        Score gained this step.

    Info:
        Contains score, delta_score, tiles_collected, tiles_remaining, etc.
    """

    metadata = {
        "render_modes": ["rgb_array"],
        "render_fps": 7,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        dataset: str = DEFAULT_DATASET,
        today: Optional[date] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "rgb_array" for numpy frames, None for headless.
            dataset: Mock activity profile used on reset.
            today: Anchor date for generated grids. Current date if None.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        # Load config
        self._config = load_config(config_path)

        self.render_mode = render_mode
        self._dataset = dataset
        self._today = today
        self._debug = debug

        self._session: Optional[GameSession] = None
        self._renderer: Optional[SolidRenderer] = None

        self.action_space = spaces.Discrete(len(DIRECTIONS))
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] StreakEnv initialized")
            print(f"[DEBUG]   Grid: {GRID_WEEKS}x{DAYS_PER_WEEK}")
            print(f"[DEBUG]   Dataset: {self._dataset}")
            print(f"[DEBUG]   Max ticks: {self._config.caps.max_ticks}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_len = self._config.observation.max_snake_length
        grid_shape = (GRID_WEEKS, DAYS_PER_WEEK)

        return spaces.Dict({
            # Core state
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "snake_length": spaces.Box(low=1, high=max_len, shape=(), dtype=np.int32),
            "direction": spaces.Box(low=0, high=len(DIRECTIONS) - 1, shape=(), dtype=np.int32),
            "is_game_over": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "is_win": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "tiles_collected": spaces.Box(low=0, high=GRID_WEEKS * DAYS_PER_WEEK, shape=(), dtype=np.int32),
            "tiles_remaining": spaces.Box(low=0, high=GRID_WEEKS * DAYS_PER_WEEK, shape=(), dtype=np.int32),

            # Grid arrays
            "commits": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=grid_shape, dtype=np.int32),
            "collected": spaces.Box(low=0, high=1, shape=grid_shape, dtype=np.int8),
            "level": spaces.Box(low=0, high=4, shape=grid_shape, dtype=np.int8),

            # Snake arrays
            "snake_row": spaces.Box(low=-1, high=DAYS_PER_WEEK, shape=(max_len,), dtype=np.int16),
            "snake_col": spaces.Box(low=-1, high=GRID_WEEKS, shape=(max_len,), dtype=np.int16),
            "snake_mask": spaces.Box(low=0, high=1, shape=(max_len,), dtype=np.int8),
        })

    def _build_grid(self, options: Dict[str, Any]) -> Grid:
        """Pick the grid for a new episode from reset options."""
        if "grid" in options:
            grid = options["grid"]
            dims = get_grid_dimensions(grid)
            if dims != (GRID_WEEKS, DAYS_PER_WEEK):
                raise ValueError(
                    f"Grid must be {GRID_WEEKS}x{DAYS_PER_WEEK} (weeks x days), got {dims[0]}x{dims[1]}"
                )
            return grid

        today = options.get("today", self._today)
        if "contributions" in options:
            return create_grid(options["contributions"], today=today)

        dataset = options.get("dataset", self._dataset)
        dataset_seed = int(self.np_random.integers(0, 2**31 - 1))
        contributions = get_mock_contributions(
            dataset, seed=dataset_seed, today=today, config=self._config
        )
        return create_grid(contributions, today=today)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for the generated dataset.
            options: Optional "grid", "contributions", "dataset" or "today".

        Returns:
            (observation, info) tuple.

        Raises:
            ValueError: If options["grid"] is not 53 weeks by 7 days.
        """
        super().reset(seed=seed)

        grid = self._build_grid(options or {})
        self._session = GameSession(grid, config=self._config)

        obs = self._session.build_snapshot().to_obs_dict()
        info = self._session.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: Direction index into (UP, DOWN, LEFT, RIGHT).

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if self._session is None:
            raise RuntimeError("Call reset() before step()")

        if isinstance(action, np.ndarray):
            action = int(action.item())
        direction = DIRECTIONS[int(action)]

        result = self._session.step(direction)

        obs = self._session.build_snapshot().to_obs_dict()
        reward = float(result.delta_score)
        terminated = result.terminated
        truncated = (not terminated) and self._session.ticks >= self._config.caps.max_ticks

        info = self._session.get_info()
        info["delta_score"] = result.delta_score

        if self._debug:
            print(f"[DEBUG] Step: action={direction}, delta_score={result.delta_score}, "
                  f"remaining={info['tiles_remaining']}")
            if terminated:
                print(f"[DEBUG] TERMINATED: {'win' if result.is_win else 'collision'}")

        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode != "rgb_array" or self._session is None:
            return None

        if self._renderer is None:
            self._renderer = SolidRenderer(self._config)
        return self._renderer.render(self._session.state)

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None

    @property
    def session(self) -> Optional[GameSession]:
        """Access to underlying session (for debugging/tools)."""
        return self._session

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

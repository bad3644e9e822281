"""
Tests for Gymnasium environment API.
"""

from datetime import date
from pathlib import Path

import pytest
import numpy as np
import yaml

from git_streak.streak_core.config_loader import load_config
from git_streak.streak_core.contributions import ContributionDay
from git_streak.streak_core.env_gym import StreakEnv
from git_streak.streak_core.grid import empty_grid, update_tile
from git_streak.streak_core.render_solid import SolidRenderer

TODAY = date(2026, 1, 15)
DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "git_streak" / "game_config.yaml"

UP, DOWN, LEFT, RIGHT = range(4)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def env():
    env = StreakEnv(today=TODAY)
    yield env
    env.close()


@pytest.fixture
def small_grid():
    grid = empty_grid()
    for row, col, commits in [(0, 1, 2), (0, 2, 3), (6, 50, 7)]:
        grid = update_tile(grid, row, col, date="2025-06-01", commits=commits)
    return grid


class TestStreakEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)
        assert info["delta_score"] == 0
        assert info["ticks"] == 0

    def test_step_returns_five_tuple(self, env):
        env.reset(seed=42)
        result = env.step(RIGHT)

        assert len(result) == 5
        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert isinstance(reward, float)
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert "delta_score" in info

    def test_step_before_reset_raises(self, env):
        with pytest.raises(RuntimeError):
            env.step(RIGHT)

    def test_observation_in_space(self, env):
        obs, _ = env.reset(seed=7)
        assert env.observation_space.contains(obs)

        obs, *_ = env.step(DOWN)
        assert env.observation_space.contains(obs)

    def test_seeded_reset_is_deterministic(self):
        env_a = StreakEnv(today=TODAY)
        env_b = StreakEnv(today=TODAY)

        obs_a, _ = env_a.reset(seed=123)
        obs_b, _ = env_b.reset(seed=123)

        for key in obs_a:
            np.testing.assert_array_equal(obs_a[key], obs_b[key])

        for action in [RIGHT, DOWN, DOWN, LEFT, UP]:
            step_a = env_a.step(action)
            step_b = env_b.step(action)
            assert step_a[1] == step_b[1]
            np.testing.assert_array_equal(step_a[0]["snake_row"], step_b[0]["snake_row"])

    def test_reward_is_delta_score(self, env, small_grid):
        env.reset(options={"grid": small_grid})
        _, reward, terminated, _, info = env.step(RIGHT)

        assert reward == 3.0
        assert info["delta_score"] == 3
        assert info["score"] == 3
        assert not terminated

    def test_collision_terminates(self, env, small_grid):
        env.reset(options={"grid": small_grid})
        _, reward, terminated, truncated, info = env.step(UP)

        assert terminated
        assert not truncated
        assert reward == 0.0
        assert not info["is_win"]

    def test_win_terminates(self, env):
        """Snake starts on the only tile, steps off it, then turns back."""
        grid = update_tile(empty_grid(), 0, 1, date="2025-06-01", commits=4)
        env.reset(options={"grid": grid})

        _, reward, terminated, _, info = env.step(RIGHT)
        assert reward == 0.0
        assert not terminated

        _, reward, terminated, _, info = env.step(LEFT)
        assert reward == 4.0
        assert terminated
        assert info["is_win"]
        assert info["tiles_remaining"] == 0

    def test_reset_from_contributions(self, env):
        obs, info = env.reset(options={
            "contributions": [ContributionDay("2025-01-15", 6)],
        })

        assert obs["commits"][0, 3] == 6
        assert info["tiles_remaining"] == 1
        assert obs["snake_row"][0] == 3
        assert obs["snake_col"][0] == 0

    def test_truncation_at_max_ticks(self, tmp_path, small_grid):
        raw = yaml.safe_load(DEFAULT_CONFIG.read_text())
        raw["caps"]["max_ticks"] = 2
        path = tmp_path / "game_config.yaml"
        path.write_text(yaml.safe_dump(raw))

        env = StreakEnv(config_path=str(path), today=TODAY)
        env.reset(options={"grid": small_grid})

        # Walk along row 0 which has room to the right
        _, _, terminated, truncated, _ = env.step(RIGHT)
        assert not truncated
        _, _, terminated, truncated, _ = env.step(RIGHT)
        assert not terminated
        assert truncated
        env.close()

    @pytest.mark.parametrize("weeks", [10, 54])
    def test_reset_rejects_wrong_grid_size(self, env, weeks):
        grid = update_tile(empty_grid(weeks), 0, 1, date="2025-06-01", commits=2)
        with pytest.raises(ValueError):
            env.reset(options={"grid": grid})

    def test_numpy_action_accepted(self, env):
        env.reset(seed=42)
        obs, *_ = env.step(np.array(RIGHT))
        assert "score" in obs

    def test_render_rgb_array(self, config):
        env = StreakEnv(render_mode="rgb_array", today=TODAY)
        env.reset(seed=1)
        frame = env.render()

        width, height = SolidRenderer(config).native_size(53)

        assert frame.shape == (height, width, 3)
        assert frame.dtype == np.uint8
        env.close()

    def test_render_headless_returns_none(self, env):
        env.reset(seed=1)
        assert env.render() is None

    def test_debug_output(self, capsys):
        env = StreakEnv(today=TODAY, debug=True)
        env.reset(seed=3)
        env.step(RIGHT)

        out = capsys.readouterr().out
        assert "[DEBUG] StreakEnv initialized" in out
        assert "[DEBUG] Step:" in out
        env.close()

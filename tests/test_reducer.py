"""
Tests for the action reducer and the game session wrapper.
"""

import pytest

from git_streak.streak_core.actions import (
    ChangeDirection,
    NewGame,
    Restart,
    Tick,
    game_reducer,
)
from git_streak.streak_core.config_loader import load_config
from git_streak.streak_core.game import initialize_game
from git_streak.streak_core.grid import empty_grid, update_tile
from git_streak.streak_core.session import GameSession
from git_streak.streak_core.snake import DOWN, LEFT, RIGHT, UP, Position


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def grid():
    grid = empty_grid()
    for row, col, commits in [(0, 1, 2), (0, 2, 3), (6, 50, 7)]:
        grid = update_tile(grid, row, col, date="2025-06-01", commits=commits)
    return grid


class TestReducer:
    """Test action dispatch."""

    def test_tick(self, grid):
        state = initialize_game(grid)
        after = game_reducer(state, Tick())
        assert after.snake.body == (Position(0, 2),)
        assert after.score == 3

    def test_change_direction(self, grid):
        state = initialize_game(grid)
        after = game_reducer(state, ChangeDirection(DOWN))
        assert after.snake.direction == DOWN
        assert after.snake.body == state.snake.body
        assert state.snake.direction == RIGHT

    def test_restart(self, grid):
        state = game_reducer(initialize_game(grid), Tick())
        restarted = game_reducer(state, Restart())
        assert restarted == initialize_game(grid)

    def test_new_game(self, grid):
        state = initialize_game(grid, growth_every=2)
        other = update_tile(empty_grid(), 4, 4, commits=1)
        after = game_reducer(state, NewGame(other))

        assert after.grid is other
        assert after.snake.body == (Position(4, 4),)
        assert after.growth_every == 2

    def test_unknown_action_is_noop(self, grid):
        state = initialize_game(grid)
        assert game_reducer(state, object()) is state

    def test_events_applied_in_order(self, grid):
        """Turn-then-tick and tick-then-turn give different results."""
        state = initialize_game(grid)
        a = game_reducer(game_reducer(state, ChangeDirection(DOWN)), Tick())
        b = game_reducer(game_reducer(state, Tick()), ChangeDirection(DOWN))

        assert a.snake.body == (Position(1, 1),)
        assert b.snake.body == (Position(0, 2),)

    def test_terminal_absorbs_tick_and_turn(self):
        state = initialize_game(empty_grid())
        assert game_reducer(state, Tick()) is state
        assert game_reducer(state, ChangeDirection(UP)) is state


class TestSession:
    """Test the stateful session wrapper."""

    def test_step_reports_delta(self, grid, config):
        session = GameSession(grid, config=config)
        result = session.step()

        assert result.delta_score == 3
        assert not result.terminated
        assert session.score == 3
        assert session.ticks == 1

    def test_step_with_direction(self, grid, config):
        session = GameSession(grid, config=config)
        session.step(LEFT)  # length 1, reversal allowed
        assert session.state.snake.body == (Position(0, 0),)

    def test_loss_and_restart(self, grid, config):
        session = GameSession(grid, config=config)
        result = session.step(UP)

        assert result.terminated
        assert not result.is_win
        assert session.is_over

        # Ticks after the end don't count
        session.tick()
        assert session.ticks == 1

        session.restart()
        assert not session.is_over
        assert session.ticks == 0
        assert session.score == 0

    def test_growth_policy_from_config(self, grid, config):
        session = GameSession(grid, config=config)
        assert session.state.growth_every == config.snake.growth_every

    def test_info(self, grid, config):
        session = GameSession(grid, config=config)
        info = session.get_info()

        assert info["score"] == 0
        assert info["tiles_remaining"] == 3
        assert info["tiles_collected"] == 0
        assert info["snake_length"] == 1
        assert info["direction"] == RIGHT

    def test_debug_output(self, grid, config, capsys):
        session = GameSession(grid, config=config, debug=True)
        session.step(UP)

        out = capsys.readouterr().out
        assert "[DEBUG] GameSession initialized" in out
        assert "GAME OVER: loss" in out

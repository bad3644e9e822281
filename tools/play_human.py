"""
Human Play Mode
================

Play git-streak interactively on a synthetic or saved contribution year.

Controls:
    - Arrow keys / WASD: Steer (bindings come from game_config.yaml)
    - R: Restart on the same grid
    - N: New random dataset
    - ESC: Quit

Usage:
    python -m tools.play_human [--dataset light|medium|heavy] [--seed SEED]
    python -m tools.play_human --contributions my_year.json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from git_streak.streak_core.config_loader import GameConfig, load_config
from git_streak.streak_core.contributions import (
    contributions_from_calendar,
    contributions_from_records,
)
from git_streak.streak_core.date_utils import format_display_date
from git_streak.streak_core.grid import Grid, create_grid, get_tile
from git_streak.streak_core.mock_contributions import MockContributionGenerator, get_mock_datasets
from git_streak.streak_core.render_solid import SolidRenderer
from git_streak.streak_core.session import GameSession


class HumanPlayer:
    """
    Keyboard-driven game loop with a fixed tick interval.

    Direction keys are forwarded immediately; ticks fire every
    ``timing.tick_interval_ms``. Both go through the same session in the
    order they happen.
    """

    def __init__(
        self,
        grid: Grid,
        config: Optional[GameConfig] = None,
        dataset: str = "medium",
        seed: Optional[int] = None,
        scale: int = 2,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._dataset = dataset
        self._generator = MockContributionGenerator(config, seed)
        self._target_fps = target_fps

        self._session = GameSession(grid, config=config)
        self._renderer = SolidRenderer(config)
        self._key_map = config.key_map

        board_w, board_h = self._renderer.native_size(len(grid))
        self._board_size = (board_w * scale, board_h * scale)
        self._panel_height = 40

        pygame.init()
        self._screen = pygame.display.set_mode(
            (self._board_size[0], self._board_size[1] + self._panel_height)
        )
        pygame.display.set_caption("git-streak")
        self._clock = pygame.time.Clock()
        self._font = pygame.font.Font(None, 26)

        self._running = True
        self._tick_ms = config.timing.tick_interval_ms
        self._elapsed_ms = 0

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== git-streak ===")
        print("Arrows/WASD to steer, R to restart, N for a new dataset, ESC to quit")
        print()

        while self._running:
            self._handle_events()

            self._elapsed_ms += self._clock.tick(self._target_fps)
            if self._elapsed_ms >= self._tick_ms:
                self._elapsed_ms = 0
                self._tick()

            self._render()

        pygame.quit()
        return self._session.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._session.restart()
                    self._elapsed_ms = 0
                    print("\n=== Game Restarted ===\n")
                elif event.key == pygame.K_n:
                    self._session.new_game(create_grid(self._generator.generate(self._dataset)))
                    self._elapsed_ms = 0
                    print(f"\n=== New {self._dataset} dataset ===\n")
                else:
                    direction = self._key_map.get(pygame.key.name(event.key))
                    if direction is not None:
                        self._session.change_direction(direction)

    def _tick(self) -> None:
        """Advance the game one step while playing."""
        if self._session.is_over:
            return

        score_before = self._session.score
        self._session.tick()

        delta = self._session.score - score_before
        if delta > 0:
            print(f"  +{delta} (Total: {self._session.score})")
        if self._session.is_over:
            if self._session.is_win:
                print(f"\nALL TILES COLLECTED - Score: {self._session.score}")
            else:
                print(f"\nGAME OVER - Score: {self._session.score}")

    def _render(self) -> None:
        """Render the board and the score panel."""
        frame = self._renderer.render(
            self._session.state,
            width=self._board_size[0],
            height=self._board_size[1]
        )
        surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))

        self._screen.fill(self._config.render.background_color)
        self._screen.blit(surface, (0, 0))

        stats = self._session.stats
        text = (f"Score: {stats.score}   Collected: {stats.tiles_collected}   "
                f"Remaining: {stats.tiles_remaining}   Length: {stats.snake_length}")
        head = self._session.state.snake.body[0]
        tile = get_tile(self._session.state.grid, head.row, head.col)
        if tile is not None and tile.date:
            text += f"   {format_display_date(tile.date)}: {tile.commits}"
        if self._session.is_over:
            text += "   WIN!" if self._session.is_win else "   GAME OVER (R to restart)"
        label = self._font.render(text, True, (230, 237, 243))
        self._screen.blit(label, (10, self._board_size[1] + 12))

        pygame.display.flip()


def _load_contributions(path: str):
    """Read contributions from a JSON list or a contribution calendar."""
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return contributions_from_calendar(data)
    return contributions_from_records(data)


def main():
    parser = argparse.ArgumentParser(description="Play git-streak interactively")
    parser.add_argument("--dataset", type=str, default="medium",
                        help="Mock dataset: light, medium or heavy")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--contributions", type=str, default=None,
                        help="JSON file with [{date, count}] records or a contribution calendar")
    parser.add_argument("--scale", type=int, default=2, help="Pixel scale (default: 2)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--list-datasets", action="store_true",
                        help="Print the mock dataset profiles and exit")

    args = parser.parse_args()

    try:
        config = load_config()
        if args.list_datasets:
            for info in get_mock_datasets(config):
                print(f"{info['type']:<8} {info['label']:<18} {info['description']}")
            return 0

        if args.contributions:
            contributions = _load_contributions(args.contributions)
        else:
            contributions = MockContributionGenerator(config, args.seed).generate(args.dataset)

        player = HumanPlayer(
            grid=create_grid(contributions),
            config=config,
            dataset=args.dataset,
            seed=args.seed,
            scale=args.scale,
            target_fps=args.fps
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except (ImportError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Solid Renderer
==============

Fast numpy-based renderer that draws the contribution calendar as solid
squares, with the snake on top.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from git_streak.streak_core.config_loader import GameConfig, get_config
from git_streak.streak_core.game import GameState
from git_streak.streak_core.grid import collected_matrix, level_matrix
from git_streak.streak_core.snake import DAYS_PER_WEEK


class SolidRenderer:
    """
    Renders the calendar grid to an RGB array.

    Weeks run left to right and days top to bottom, as on a contribution
    graph. Tile colour follows the contribution level; collected tiles are
    greyed out.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        render = config.render

        self._cell = render.cell_size
        self._gap = render.cell_gap
        self._bg_color = np.array(render.background_color, dtype=np.uint8)
        self._collected_color = np.array(render.collected_color, dtype=np.uint8)
        self._head_color = np.array(render.snake_head_color, dtype=np.uint8)
        self._body_color = np.array(render.snake_body_color, dtype=np.uint8)
        self._level_colors = np.array(render.level_colors, dtype=np.uint8)

    def native_size(self, weeks: int) -> Tuple[int, int]:
        """(width, height) in pixels at configured cell size."""
        pitch = self._cell + self._gap
        return weeks * pitch + self._gap, DAYS_PER_WEEK * pitch + self._gap

    def render(
        self,
        state: GameState,
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            state: State to draw.
            width: Output image width. Native width if None.
            height: Output image height. Native height if None.

        Returns:
            (height, width, 3) uint8 array.
        """
        weeks = len(state.grid)
        native_w, native_h = self.native_size(weeks)

        img = np.zeros((native_h, native_w, 3), dtype=np.uint8)
        img[:] = self._bg_color

        # Tiles
        colors = self._level_colors[level_matrix(state.grid)]
        colors[collected_matrix(state.grid)] = self._collected_color
        for col in range(weeks):
            for row in range(DAYS_PER_WEEK):
                self._fill_cell(img, row, col, colors[col, row])

        # Snake, tail first so the head is drawn last
        body = state.snake.body
        for i in range(len(body) - 1, -1, -1):
            segment = body[i]
            if 0 <= segment.row < DAYS_PER_WEEK and 0 <= segment.col < weeks:
                color = self._head_color if i == 0 else self._body_color
                self._fill_cell(img, segment.row, segment.col, color, inset=1)

        if width is None and height is None:
            return img
        return self._resize(img, width or native_w, height or native_h)

    def _fill_cell(
        self,
        img: np.ndarray,
        row: int,
        col: int,
        color: np.ndarray,
        inset: int = 0
    ) -> None:
        """Fill one calendar cell."""
        pitch = self._cell + self._gap
        x0 = self._gap + col * pitch + inset
        y0 = self._gap + row * pitch + inset
        size = max(1, self._cell - 2 * inset)
        img[y0:y0 + size, x0:x0 + size] = color

    @staticmethod
    def _resize(img: np.ndarray, width: int, height: int) -> np.ndarray:
        """Nearest-neighbour resize."""
        src_h, src_w = img.shape[:2]
        ys = (np.arange(height) * src_h // height).clip(0, src_h - 1)
        xs = (np.arange(width) * src_w // width).clip(0, src_w - 1)
        return img[ys][:, xs]

    def close(self) -> None:
        """Clean up resources (no-op for solid renderer)."""
        pass

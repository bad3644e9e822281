"""
Snake Model
===========

Positional and directional snake state plus its transition rules.

Positions use ``row`` for the day-of-week axis (0-6) and ``col`` for the
week axis (0-52), while the grid itself is stored as ``grid[week][day]``.
Bounds and movement math here rely on that naming, so it must not be
transposed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from git_streak.streak_core.grid import Grid

# Directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"

DIRECTIONS: Tuple[str, ...] = (UP, DOWN, LEFT, RIGHT)

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Calendar rows (days per week)
DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class Position:
    """Cell position: row = day of week, col = week."""
    row: int
    col: int


@dataclass(frozen=True)
class Snake:
    """Snake body (head first) and current heading."""
    body: Tuple[Position, ...]
    direction: str

    def __len__(self) -> int:
        return len(self.body)


def create_snake(start_position: Position, direction: str = RIGHT) -> Snake:
    """Create a length-1 snake at the given position."""
    return Snake(body=(start_position,), direction=direction)


def get_snake_head(snake: Snake) -> Position:
    return snake.body[0]


def get_snake_tail(snake: Snake) -> Position:
    return snake.body[-1]


def get_snake_length(snake: Snake) -> int:
    return len(snake.body)


def is_opposite_direction(current: str, new: str) -> bool:
    """True if ``new`` is the exact reverse of ``current``."""
    return OPPOSITES.get(current) == new


def adjacent_position(position: Position, direction: str) -> Position:
    """Shift a position one cell in ``direction``."""
    if direction == UP:
        return Position(position.row - 1, position.col)
    if direction == DOWN:
        return Position(position.row + 1, position.col)
    if direction == LEFT:
        return Position(position.row, position.col - 1)
    return Position(position.row, position.col + 1)


def is_in_bounds(position: Position, grid_weeks: int) -> bool:
    """True if the position lies inside a 7 x ``grid_weeks`` calendar."""
    return (
        0 <= position.row < DAYS_PER_WEEK
        and 0 <= position.col < grid_weeks
    )


def manhattan_distance(a: Position, b: Position) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


def change_direction(snake: Snake, new_direction: str) -> Snake:
    """
    Change heading, refusing an immediate 180-degree turn.

    A length-1 snake may reverse since there is no body to run into.
    Unknown directions are ignored. The same snake is returned
    whenever nothing changes.
    """
    if new_direction not in OPPOSITES:
        return snake
    if len(snake.body) > 1 and is_opposite_direction(snake.direction, new_direction):
        return snake
    if new_direction == snake.direction:
        return snake
    return replace(snake, direction=new_direction)


def get_next_head_position(snake: Snake) -> Position:
    """Head position after one step, without moving."""
    return adjacent_position(get_snake_head(snake), snake.direction)


def move_snake(snake: Snake, grow: bool = False) -> Snake:
    """
    Advance one cell in the current direction.

    Args:
        snake: Snake to move.
        grow: If True the tail stays put and the body gains a segment.

    Returns:
        New Snake with the shifted body.
    """
    new_head = get_next_head_position(snake)
    body = (new_head,) + snake.body
    if not grow:
        body = body[:-1]
    return replace(snake, body=body)


def check_wall_collision(snake: Snake, grid: "Grid") -> bool:
    """True if the head is outside the grid."""
    return not is_in_bounds(get_snake_head(snake), len(grid))


def check_self_collision(snake: Snake) -> bool:
    """True if the head overlaps any other segment."""
    head = get_snake_head(snake)
    return head in snake.body[1:]


def is_snake_at_position(snake: Snake, position: Position) -> bool:
    return position in snake.body


def is_body_at_position(snake: Snake, position: Position) -> bool:
    """True if a non-head segment occupies ``position``."""
    return position in snake.body[1:]


def is_next_move_valid(snake: Snake, grid: "Grid", growing: bool = False) -> bool:
    """
    Check the next step for wall and body collisions without moving.

    The tail is ignored when not growing because it vacates its cell on the
    same step the head arrives.

    Args:
        snake: Current snake.
        grid: Grid whose width bounds the move.
        growing: True if the coming move keeps the tail in place.

    Returns:
        False if the move would hit a wall or the body.
    """
    next_head = get_next_head_position(snake)

    if not is_in_bounds(next_head, len(grid)):
        return False

    end = len(snake.body) if growing else len(snake.body) - 1
    for i in range(1, end):
        if snake.body[i] == next_head:
            return False

    return True

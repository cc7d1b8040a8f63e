"""Heading changes and one-step moves."""

from __future__ import annotations

from snake_arena.domain.entities import Snake
from snake_arena.domain.geometry import Direction, Position


def apply_direction(snake: Snake, direction: Direction) -> bool:
    """Request a new heading; reversals are ignored and return False."""
    return snake.apply_direction(direction)


def get_next_head_position(snake: Snake) -> Position:
    return snake.next_head_position()


def move_snake(snake: Snake, grow: bool) -> None:
    snake.move(grow)

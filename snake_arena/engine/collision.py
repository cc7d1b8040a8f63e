"""Collision predicates.

Out-of-bounds cells count as walls. Snake checks only consider alive snakes;
callers decide whether a vacating tail is excluded.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

from snake_arena.domain.entities import Snake
from snake_arena.domain.geometry import Position, in_bounds
from snake_arena.domain.state import GameState


def collides_with_wall(
    pos: Position, state: GameState, walls: Collection[Position] | None = None
) -> bool:
    if not in_bounds(pos, state.width, state.height):
        return True
    return pos in (state.walls if walls is None else walls)


def collides_with_snake(
    pos: Position,
    snakes: Iterable[Snake],
    exclude_id: int | None = None,
    exclude_head: bool = False,
) -> bool:
    """True when *pos* lies on a segment of any alive snake.

    The snake named by *exclude_id* is skipped entirely, or with
    *exclude_head* set only its head segment is skipped.
    """
    for snake in snakes:
        if not snake.alive:
            continue
        segments = snake.segments
        if snake.snake_id == exclude_id:
            if not exclude_head:
                continue
            segments = segments[1:]
        if pos in segments:
            return True
    return False


def self_collision(snake: Snake) -> bool:
    """True when the head overlaps another of the snake's own segments."""
    head = snake.head
    return any(seg == head for seg in snake.segments[1:])

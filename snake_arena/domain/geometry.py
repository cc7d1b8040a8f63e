"""Grid coordinates, headings and distance helpers.

The board origin is the top-left corner: ``UP`` decreases ``y`` and
``DOWN`` increases it.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class Position(NamedTuple):
    """Integer grid coordinate."""

    x: int
    y: int


class Direction(str, Enum):
    """Cardinal heading of a snake."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Candidate order used by the evaluator and by flood fills.
CLOCKWISE: tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)


def is_reverse_direction(current: Direction, requested: Direction) -> bool:
    """Return True when *requested* points straight back along *current*."""
    return _OPPOSITES[current] is requested


def next_head_position(head: Position, direction: Direction) -> Position:
    """Cell one step from *head* along *direction*."""
    dx, dy = _DELTAS[direction]
    return Position(head.x + dx, head.y + dy)


def in_bounds(pos: Position, width: int, height: int) -> bool:
    return 0 <= pos.x < width and 0 <= pos.y < height


def chebyshev(a: Position, b: Position) -> int:
    """King-move distance between two cells."""
    return max(abs(a.x - b.x), abs(a.y - b.y))


def orthogonal_neighbors(pos: Position) -> list[Position]:
    """Four edge-adjacent cells in clockwise order starting above."""
    return [next_head_position(pos, d) for d in CLOCKWISE]

"""Board projection: a ``height x width`` grid of cell markers.

The board is derived from entity collections and is never edited by hand;
walls are painted first, then food, then snake segments.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from snake_arena.domain.entities import Food, Snake
from snake_arena.domain.geometry import Position, in_bounds


class CellContent(str, Enum):
    EMPTY = " "
    FOOD = "&"
    WALL = "*"
    SNAKE = "#"


Board = list[list[CellContent]]


def create_empty_board(width: int, height: int) -> Board:
    if width < 0 or height < 0:
        raise ValueError("board dimensions must be >= 0")
    return [[CellContent.EMPTY] * width for _ in range(height)]


def build_board(
    width: int,
    height: int,
    walls: Iterable[Position],
    foods: Iterable[Food],
    snakes: Iterable[Snake],
) -> Board:
    """Project entities onto a fresh board; out-of-bounds cells are skipped."""
    board = create_empty_board(width, height)
    for wall in walls:
        if in_bounds(wall, width, height):
            board[wall.y][wall.x] = CellContent.WALL
    for food in foods:
        if in_bounds(food.position, width, height):
            board[food.position.y][food.position.x] = CellContent.FOOD
    for snake in snakes:
        for seg in snake.segments:
            if in_bounds(seg, width, height):
                board[seg.y][seg.x] = CellContent.SNAKE
    return board


def board_to_text(board: Board) -> str:
    """Render rows as text lines, handy in test failure output."""
    return "\n".join("".join(cell.value for cell in row) for row in board)

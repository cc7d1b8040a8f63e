"""Tests for snake_arena.domain.state module."""

from __future__ import annotations

from snake_arena.domain.board import CellContent
from snake_arena.domain.entities import Food, FoodKind, Snake
from snake_arena.domain.geometry import Direction, Position
from snake_arena.domain.state import GameState


def _state() -> GameState:
    return GameState(
        width=6,
        height=4,
        snakes=[
            Snake(0, "a", [Position(1, 1), Position(0, 1)], Direction.RIGHT),
            Snake(1, "b", [Position(4, 2)], Direction.LEFT, alive=False),
        ],
        foods=[Food(FoodKind.APPLE, Position(3, 3))],
        walls=[Position(5, 0)],
    )


class TestGameState:
    def test_board_defaults_to_empty_grid(self) -> None:
        state = GameState(width=4, height=2)
        assert len(state.board) == 2
        assert state.board[0] == [CellContent.EMPTY] * 4

    def test_lookups(self) -> None:
        state = _state()
        assert state.food_at(Position(3, 3)) == 0
        assert state.food_at(Position(0, 0)) is None
        assert state.snake_by_id(1).name == "b"
        assert state.snake_by_id(7) is None
        assert [s.snake_id for s in state.alive_snakes()] == [0]

    def test_rebuild_board_projects_entities(self) -> None:
        state = _state()
        state.rebuild_board()
        assert state.board[0][5] is CellContent.WALL
        assert state.board[3][3] is CellContent.FOOD
        assert state.board[1][1] is CellContent.SNAKE
        assert state.board[2][4] is CellContent.SNAKE

    def test_terminal_flags(self) -> None:
        state = _state()
        assert not state.is_terminal
        state.level_complete = True
        assert state.is_terminal

    def test_snapshot_tracks_changes(self) -> None:
        a, b = _state(), _state()
        assert a.snapshot() == b.snapshot()
        b.foods[0].tick_lifecycle()
        assert a.snapshot() != b.snapshot()

"""Tests for snake_arena.engine.level module."""

from __future__ import annotations

from snake_arena.config.types import GameSettings
from snake_arena.domain.entities import Snake
from snake_arena.domain.geometry import Direction, Position
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext
from snake_arena.engine.level import (
    award_food_points,
    can_advance,
    check_level_complete,
    level_winner,
    overall_winner,
)


def _snake(snake_id: int, score: int = 0, levels_won: int = 0, alive: bool = True) -> Snake:
    return Snake(
        snake_id,
        f"s{snake_id}",
        [Position(snake_id, 0)],
        Direction.DOWN,
        alive=alive,
        score=score,
        levels_won=levels_won,
    )


def _ctx() -> EngineContext:
    return EngineContext.seeded(1, GameSettings(target_score_coeff=0.0, target_score_base=5.0))


class TestCheckLevelComplete:
    def test_single_snake_target(self) -> None:
        state = GameState(width=10, height=10, level=2, snakes=[_snake(0, score=9)])
        assert not check_level_complete(state, _ctx())
        award_food_points(state.snakes[0], 1)
        assert check_level_complete(state, _ctx())

    def test_single_snake_death(self) -> None:
        state = GameState(width=10, height=10, snakes=[_snake(0, alive=False)])
        assert check_level_complete(state, _ctx())

    def test_multi_snake_last_survivor(self) -> None:
        state = GameState(
            width=10, height=10, level_time_left=60, snakes=[_snake(0), _snake(1, alive=False)]
        )
        assert check_level_complete(state, _ctx())

    def test_multi_snake_timer(self) -> None:
        state = GameState(width=10, height=10, level_time_left=60, snakes=[_snake(0), _snake(1)])
        assert not check_level_complete(state, _ctx())
        state.level_time_left = 0
        assert check_level_complete(state, _ctx())

    def test_score_does_not_end_multi_snake_level(self) -> None:
        state = GameState(
            width=10, height=10, level_time_left=60, snakes=[_snake(0, score=999), _snake(1)]
        )
        assert not check_level_complete(state, _ctx())


class TestWinners:
    def test_level_winner(self) -> None:
        state = GameState(width=10, height=10, snakes=[_snake(0, alive=False), _snake(1)])
        assert level_winner(state) == 1
        state.snakes[1].die("x")
        assert level_winner(state) is None

    def test_level_winner_draw_when_several_alive(self) -> None:
        state = GameState(width=10, height=10, snakes=[_snake(0), _snake(1)])
        assert level_winner(state) is None

    def test_overall_prefers_levels_won(self) -> None:
        snakes = [_snake(0, score=50, levels_won=1), _snake(1, score=10, levels_won=2)]
        assert overall_winner(snakes) is snakes[1]

    def test_overall_score_breaks_tie(self) -> None:
        snakes = [_snake(0, score=5, levels_won=1), _snake(1, score=8, levels_won=1)]
        assert overall_winner(snakes) is snakes[1]

    def test_overall_exact_tie_is_draw(self) -> None:
        snakes = [_snake(0, score=5, levels_won=1), _snake(1, score=5, levels_won=1)]
        assert overall_winner(snakes) is None

    def test_overall_single_and_empty(self) -> None:
        only = _snake(0)
        assert overall_winner([only]) is only
        assert overall_winner([]) is None


class TestCanAdvance:
    def test_single_snake_must_live(self) -> None:
        state = GameState(width=10, height=10, snakes=[_snake(0)])
        assert can_advance(state)
        state.snakes[0].die("x")
        assert not can_advance(state)

    def test_multi_snake_needs_a_survivor(self) -> None:
        state = GameState(width=10, height=10, snakes=[_snake(0, alive=False), _snake(1)])
        assert can_advance(state)
        state.snakes[1].die("x")
        assert not can_advance(state)

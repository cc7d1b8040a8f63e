"""Tests for snake_arena.engine.hunger module."""

from __future__ import annotations

from snake_arena.config.types import GameSettings
from snake_arena.domain.entities import Snake
from snake_arena.domain.geometry import Direction, Position
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext
from snake_arena.engine.hunger import STARVED, hunger_system, process_hunger


def _snake(length: int, hunger: int = 0, snake_id: int = 0) -> Snake:
    segments = [Position(10 - i, 5 + snake_id) for i in range(length)]
    return Snake(snake_id, "s", segments, Direction.RIGHT, ticks_without_food=hunger)


def _ctx() -> EngineContext:
    return EngineContext.seeded(1, GameSettings(hunger_threshold=5, min_snake_length=2))


class TestProcessHunger:
    def test_below_threshold_only_counts(self) -> None:
        snake = _snake(4, hunger=4)
        assert process_hunger(snake, _ctx()) is False
        assert snake.ticks_without_food == 5
        assert len(snake) == 4

    def test_at_threshold_loses_tail_and_resets(self) -> None:
        snake = _snake(4, hunger=5)
        assert process_hunger(snake, _ctx()) is False
        assert len(snake) == 3
        assert snake.ticks_without_food == 0
        assert snake.alive

    def test_starves_below_min_length(self) -> None:
        snake = _snake(2, hunger=5)
        assert process_hunger(snake, _ctx()) is True
        assert not snake.alive
        assert snake.death_reason == STARVED

    def test_dead_snake_untouched(self) -> None:
        snake = _snake(3, hunger=2)
        snake.die("crash")
        assert process_hunger(snake, _ctx()) is False
        assert snake.ticks_without_food == 2


class TestHungerSystem:
    def test_fed_snakes_skipped(self) -> None:
        fed = _snake(3, hunger=0, snake_id=0)
        hungry = _snake(3, hunger=1, snake_id=1)
        state = GameState(width=20, height=20, snakes=[fed, hungry])
        assert hunger_system(state, _ctx(), fed_ids={0}) == []
        assert fed.ticks_without_food == 0
        assert hungry.ticks_without_food == 2

    def test_reports_starved_ids(self) -> None:
        state = GameState(
            width=20,
            height=20,
            snakes=[_snake(2, hunger=5, snake_id=0), _snake(5, hunger=5, snake_id=1)],
        )
        assert hunger_system(state, _ctx()) == [0]
        assert state.snakes[1].alive

"""Tests for snake_arena.domain.entities module."""

from __future__ import annotations

from snake_arena.config.types import GameSettings
from snake_arena.domain.entities import (
    Food,
    FoodKind,
    FoodPhase,
    FoodReward,
    Snake,
    food_kind_for_level,
    food_phase,
    food_reward,
    is_adult,
)
from snake_arena.domain.geometry import Direction, Position


def _snake() -> Snake:
    return Snake(0, "s", [Position(3, 1), Position(2, 1), Position(1, 1)], Direction.RIGHT)


class TestSnake:
    def test_move_keeps_length(self) -> None:
        snake = _snake()
        snake.move(grow=False)
        assert snake.segments == [Position(4, 1), Position(3, 1), Position(2, 1)]

    def test_move_with_growth_keeps_tail(self) -> None:
        snake = _snake()
        snake.move(grow=True)
        assert len(snake) == 4
        assert snake.tail == Position(1, 1)

    def test_grow_by_repeats_tail(self) -> None:
        snake = _snake()
        snake.grow_by(2)
        assert snake.segments[-3:] == [Position(1, 1)] * 3
        snake.grow_by(0)
        assert len(snake) == 5

    def test_first_death_reason_wins(self) -> None:
        snake = _snake()
        snake.die("first")
        snake.die("second")
        assert not snake.alive
        assert snake.death_reason == "first"

    def test_hunger_counter(self) -> None:
        snake = _snake()
        snake.increment_hunger()
        snake.increment_hunger()
        assert snake.ticks_without_food == 2
        snake.reset_hunger()
        assert snake.ticks_without_food == 0


class TestFood:
    def test_newborn_clock_matches_age(self) -> None:
        food = Food.newborn(FoodKind.APPLE, Position(0, 0), age=7)
        assert food.age == 7
        assert food.clock == 7
        assert food.reproduction_count == 0

    def test_tick_lifecycle_and_reset(self) -> None:
        food = Food.newborn(FoodKind.APPLE, Position(0, 0))
        food.tick_lifecycle()
        food.tick_lifecycle()
        assert (food.age, food.clock) == (2, 2)
        food.reset_reproduction_clock()
        food.increment_reproduction_count()
        assert (food.age, food.clock, food.reproduction_count) == (2, 0, 1)

    def test_phase_boundaries(self) -> None:
        settings = GameSettings(food_young_age=5, food_adult_age=15)
        phases = {
            age: food_phase(Food(FoodKind.APPLE, Position(0, 0), age=age), settings)
            for age in (0, 4, 5, 14, 15, 100)
        }
        assert phases == {
            0: FoodPhase.YOUNG,
            4: FoodPhase.YOUNG,
            5: FoodPhase.ADULT,
            14: FoodPhase.ADULT,
            15: FoodPhase.OLD,
            100: FoodPhase.OLD,
        }
        assert is_adult(Food(FoodKind.APPLE, Position(0, 0), age=5), settings)


class TestFoodReward:
    def test_adult_apple_pays_extra(self) -> None:
        settings = GameSettings(adult_apple_points=3, adult_apple_growth=2)
        food = Food(FoodKind.APPLE, Position(0, 0), age=settings.food_young_age)
        assert food_reward(food, settings) == FoodReward(3, 2)

    def test_young_and_old_apples_pay_one(self) -> None:
        settings = GameSettings()
        assert food_reward(Food(FoodKind.APPLE, Position(0, 0), age=0), settings) == FoodReward(1, 1)
        old = Food(FoodKind.APPLE, Position(0, 0), age=settings.food_adult_age)
        assert food_reward(old, settings) == FoodReward(1, 1)

    def test_adult_rabbit_pays_one(self) -> None:
        settings = GameSettings()
        rabbit = Food(FoodKind.RABBIT, Position(0, 0), age=settings.food_young_age)
        assert food_reward(rabbit, settings) == FoodReward(1, 1)

    def test_kind_for_level(self) -> None:
        settings = GameSettings(rabbit_from_level=3)
        assert food_kind_for_level(2, settings) is FoodKind.APPLE
        assert food_kind_for_level(3, settings) is FoodKind.RABBIT

"""Snakes and food items.

Both are mutable records owned by a single ``GameState``; the engine systems
mutate them in place during a tick.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

from snake_arena.domain.geometry import (
    Direction,
    Position,
    is_reverse_direction,
    next_head_position,
)

if TYPE_CHECKING:
    from snake_arena.config.types import GameSettings


@dataclass
class Snake:
    """A snake; ``segments[0]`` is the head."""

    snake_id: int
    name: str
    segments: list[Position]
    direction: Direction
    alive: bool = True
    score: int = 0
    levels_won: int = 0
    ticks_without_food: int = 0
    is_bot: bool = False
    death_reason: str | None = None

    @property
    def head(self) -> Position:
        return self.segments[0]

    @property
    def tail(self) -> Position:
        return self.segments[-1]

    def __len__(self) -> int:
        return len(self.segments)

    def apply_direction(self, direction: Direction) -> bool:
        """Turn towards *direction*; a 180-degree reversal is ignored.

        Returns True when the heading was accepted.
        """
        if is_reverse_direction(self.direction, direction):
            return False
        self.direction = direction
        return True

    def next_head_position(self) -> Position:
        return next_head_position(self.head, self.direction)

    def move(self, grow: bool) -> None:
        """Advance one cell; the tail is kept when *grow* is set."""
        self.segments.insert(0, self.next_head_position())
        if not grow:
            self.segments.pop()

    def grow_by(self, extra: int) -> None:
        """Append *extra* copies of the tail cell."""
        if extra <= 0 or not self.segments:
            return
        self.segments.extend([self.segments[-1]] * extra)

    def trim_tail(self) -> None:
        if self.segments:
            self.segments.pop()

    def increment_score(self, points: int) -> None:
        self.score += points

    def increment_hunger(self) -> None:
        self.ticks_without_food += 1

    def reset_hunger(self) -> None:
        self.ticks_without_food = 0

    def die(self, reason: str) -> None:
        """Mark dead; the first recorded reason wins."""
        if not self.alive:
            return
        self.alive = False
        self.death_reason = reason


class FoodKind(str, Enum):
    APPLE = "apple"
    RABBIT = "rabbit"


class FoodPhase(str, Enum):
    YOUNG = "young"
    ADULT = "adult"
    OLD = "old"


class FoodReward(NamedTuple):
    points: int
    growth: int


@dataclass
class Food:
    """A food item; ``clock`` counts ticks since it last reproduced."""

    kind: FoodKind
    position: Position
    age: int = 0
    clock: int = 0
    reproduction_count: int = field(default=0)

    @classmethod
    def newborn(cls, kind: FoodKind, position: Position, age: int = 0) -> Food:
        """Create a fresh item whose reproduction clock starts at *age*."""
        return cls(kind=kind, position=position, age=age, clock=age)

    def tick_lifecycle(self) -> None:
        self.age += 1
        self.clock += 1

    def reset_reproduction_clock(self) -> None:
        self.clock = 0

    def increment_reproduction_count(self) -> None:
        self.reproduction_count += 1


def food_phase(food: Food, settings: GameSettings) -> FoodPhase:
    if food.age < settings.food_young_age:
        return FoodPhase.YOUNG
    if food.age < settings.food_adult_age:
        return FoodPhase.ADULT
    return FoodPhase.OLD


def is_adult(food: Food, settings: GameSettings) -> bool:
    return food_phase(food, settings) is FoodPhase.ADULT


def food_reward(food: Food, settings: GameSettings) -> FoodReward:
    """Points and growth for eating *food*; only adult apples pay extra."""
    if food.kind is FoodKind.APPLE and is_adult(food, settings):
        return FoodReward(settings.adult_apple_points, settings.adult_apple_growth)
    return FoodReward(1, 1)


def food_kind_for_level(level: int, settings: GameSettings) -> FoodKind:
    return FoodKind.RABBIT if level >= settings.rabbit_from_level else FoodKind.APPLE

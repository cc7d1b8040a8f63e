"""Immutable domain events emitted by the tick pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from snake_arena.domain.geometry import Position


@dataclass(frozen=True)
class SnakeDied:
    snake_id: int
    reason: str


@dataclass(frozen=True)
class FoodEaten:
    snake_id: int
    position: Position
    new_score: int


@dataclass(frozen=True)
class FoodBorn:
    parent_position: Position
    child_position: Position


@dataclass(frozen=True)
class LevelCompleted:
    reason: str
    winner_id: int | None = None


@dataclass(frozen=True)
class GameOver:
    """Terminal signal; paired with ``LevelCompleted`` in the same tick."""


DomainEvent = Union[SnakeDied, FoodEaten, FoodBorn, LevelCompleted, GameOver]


@dataclass(frozen=True)
class TickResult:
    events: tuple[DomainEvent, ...] = field(default=())

    def of_type(self, event_type: type) -> list[DomainEvent]:
        return [e for e in self.events if isinstance(e, event_type)]

"""Domain layer: geometry, entities, board projection, state and events."""

from snake_arena.domain.board import Board, CellContent, build_board, create_empty_board
from snake_arena.domain.entities import (
    Food,
    FoodKind,
    FoodPhase,
    FoodReward,
    Snake,
    food_phase,
    food_reward,
)
from snake_arena.domain.events import (
    DomainEvent,
    FoodBorn,
    FoodEaten,
    GameOver,
    LevelCompleted,
    SnakeDied,
    TickResult,
)
from snake_arena.domain.geometry import (
    Direction,
    Position,
    chebyshev,
    in_bounds,
    is_reverse_direction,
    next_head_position,
)
from snake_arena.domain.random_port import RandomPort, SeededRandom, SystemRandomPort
from snake_arena.domain.state import GameState

__all__ = [
    "Board",
    "CellContent",
    "Direction",
    "DomainEvent",
    "Food",
    "FoodBorn",
    "FoodEaten",
    "FoodKind",
    "FoodPhase",
    "FoodReward",
    "GameOver",
    "GameState",
    "LevelCompleted",
    "Position",
    "RandomPort",
    "SeededRandom",
    "Snake",
    "SnakeDied",
    "SystemRandomPort",
    "TickResult",
    "build_board",
    "chebyshev",
    "create_empty_board",
    "food_phase",
    "food_reward",
    "in_bounds",
    "is_reverse_direction",
    "next_head_position",
]

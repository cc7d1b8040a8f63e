"""Simulation engine: context, systems, tick pipeline and level/session driver."""

from snake_arena.engine.collision import collides_with_snake, collides_with_wall, self_collision
from snake_arena.engine.context import EngineContext
from snake_arena.engine.game import GameEngine, GameSession, start_slots, sync_level_clock
from snake_arena.engine.level import (
    award_food_points,
    can_advance,
    check_level_complete,
    level_winner,
    overall_winner,
)
from snake_arena.engine.movement import apply_direction, get_next_head_position, move_snake
from snake_arena.engine.pipeline import run_tick_pipeline
from snake_arena.engine.spawning import generate_walls, spawn_food, validate_walls

__all__ = [
    "EngineContext",
    "GameEngine",
    "GameSession",
    "apply_direction",
    "award_food_points",
    "can_advance",
    "check_level_complete",
    "collides_with_snake",
    "collides_with_wall",
    "generate_walls",
    "get_next_head_position",
    "level_winner",
    "move_snake",
    "overall_winner",
    "run_tick_pipeline",
    "self_collision",
    "spawn_food",
    "start_slots",
    "sync_level_clock",
    "validate_walls",
]

"""Food construction per level and scarcity-driven replenishment."""

from __future__ import annotations

import logging

from snake_arena.config.types import GameSettings
from snake_arena.domain.entities import Food, FoodPhase, food_kind_for_level
from snake_arena.domain.geometry import Position, chebyshev
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext

logger = logging.getLogger(__name__)


def create_level_food(
    level: int,
    pos: Position,
    settings: GameSettings,
    phase: FoodPhase = FoodPhase.YOUNG,
) -> Food:
    """Food of the level's kind, aged to the start of *phase*."""
    if phase is FoodPhase.YOUNG:
        age = 0
    elif phase is FoodPhase.ADULT:
        age = settings.food_young_age
    else:
        age = settings.food_adult_age
    return Food.newborn(food_kind_for_level(level, settings), pos, age=age)


def find_farthest_food_position(state: GameState) -> Position | None:
    """Free cell farthest from every alive head.

    Maximises the minimum Chebyshev distance to the heads; ties prefer a
    smaller spread between the farthest and nearest head, then scan order.
    """
    heads = [s.head for s in state.snakes if s.alive]
    if not heads:
        return None

    occupied: set[Position] = set(state.walls)
    for snake in state.snakes:
        occupied.update(snake.segments)
    occupied.update(food.position for food in state.foods)

    best: Position | None = None
    best_min = -1
    best_spread = float("inf")
    for y in range(state.height):
        for x in range(state.width):
            pos = Position(x, y)
            if pos in occupied:
                continue
            distances = [chebyshev(head, pos) for head in heads]
            nearest = min(distances)
            spread = max(distances) - nearest
            if nearest > best_min or (nearest == best_min and spread < best_spread):
                best, best_min, best_spread = pos, nearest, spread
    return best


def auto_replenish_food(state: GameState, ctx: EngineContext) -> Food | None:
    """Add one adult food when alive snakes outnumber food items.

    Spawns at most once per ``hunger_threshold`` ticks.
    """
    settings = ctx.settings
    if not settings.auto_replenish_food:
        return None
    alive = state.alive_snakes()
    if not alive or len(state.foods) >= len(alive):
        return None
    if (
        state.last_auto_food_spawn_tick > 0
        and state.tick_count - state.last_auto_food_spawn_tick < settings.hunger_threshold
    ):
        return None

    pos = find_farthest_food_position(state)
    if pos is None:
        return None
    food = create_level_food(state.level, pos, settings, FoodPhase.ADULT)
    state.foods.append(food)
    state.last_auto_food_spawn_tick = state.tick_count
    logger.debug("replenished food at %s on tick %d", pos, state.tick_count)
    return food

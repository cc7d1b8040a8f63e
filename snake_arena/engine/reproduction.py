"""Food aging, density-limited reproduction and expiry."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple

from snake_arena.config import constants as C
from snake_arena.domain.entities import Food, is_adult
from snake_arena.domain.geometry import Position, chebyshev, in_bounds
from snake_arena.domain.random_port import RandomPort
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext

logger = logging.getLogger(__name__)

# Offsets at Chebyshev distance 1 or 2, x-major.
_OFFSPRING_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dx in range(-2, 3) for dy in range(-2, 3) if (dx, dy) != (0, 0)
)


class FoodBirth(NamedTuple):
    parent_position: Position
    child: Food


def count_nearby_food(
    pos: Position, foods: Sequence[Food], radius: int, exclude: Food | None = None
) -> int:
    return sum(1 for f in foods if f is not exclude and chebyshev(pos, f.position) <= radius)


def is_valid_food_position(
    pos: Position,
    state: GameState,
    pending: Sequence[Food] = (),
    min_distance: int = C.FOOD_MIN_DISTANCE,
) -> bool:
    """In bounds, off walls and alive snakes, and at least *min_distance* from any food."""
    if not in_bounds(pos, state.width, state.height):
        return False
    if pos in state.walls:
        return False
    for snake in state.snakes:
        if snake.alive and pos in snake.segments:
            return False
    for food in (*state.foods, *pending):
        if chebyshev(pos, food.position) < min_distance:
            return False
    return True


def reproduction_probability(clock: int, neighbors: int, base: float, penalty: float) -> float:
    """``base * clock * (1 - penalty * neighbors)`` clamped into [0, 1]."""
    return min(1.0, max(0.0, base * clock * (1.0 - penalty * neighbors)))


def shuffled_offsets(rng: RandomPort) -> list[tuple[int, int]]:
    """Fisher-Yates shuffle of the 24 offspring offsets."""
    offsets = list(_OFFSPRING_OFFSETS)
    for i in range(len(offsets) - 1, 0, -1):
        j = rng.next_int(i + 1)
        offsets[i], offsets[j] = offsets[j], offsets[i]
    return offsets


def _try_spawn_offspring(
    parent: Food, state: GameState, pending: Sequence[Food], rng: RandomPort, min_distance: int
) -> Food | None:
    for dx, dy in shuffled_offsets(rng):
        candidate = Position(parent.position.x + dx, parent.position.y + dy)
        if is_valid_food_position(candidate, state, pending, min_distance):
            return Food.newborn(parent.kind, candidate)
    return None


def process_food_lifecycle(state: GameState, ctx: EngineContext) -> list[FoodBirth]:
    """Age all food, roll reproduction for eligible adults, purge expired food.

    Births are appended after every parent has rolled; a birth placed this
    tick still blocks later siblings from landing next to it.
    """
    settings = ctx.settings
    for food in state.foods:
        food.tick_lifecycle()

    births: list[FoodBirth] = []
    pending: list[Food] = []
    for parent in state.foods:
        if not is_adult(parent, settings):
            continue
        if parent.clock < settings.reproduction_min_cooldown:
            continue
        if parent.reproduction_count >= settings.max_reproductions:
            continue
        neighbors = count_nearby_food(
            parent.position, state.foods, settings.neighbor_reproduction_radius, parent
        )
        if neighbors >= settings.max_reproduction_neighbors:
            continue

        probability = reproduction_probability(
            parent.clock,
            neighbors,
            settings.reproduction_probability_base,
            settings.neighbor_reproduction_penalty,
        )
        if ctx.rng.next() >= probability:
            continue
        child = _try_spawn_offspring(parent, state, pending, ctx.rng, ctx.settings.food_min_distance)
        if child is None:
            continue
        births.append(FoodBirth(parent.position, child))
        pending.append(child)
        parent.reset_reproduction_clock()
        parent.increment_reproduction_count()

    state.foods.extend(pending)
    before = len(state.foods)
    state.foods = [f for f in state.foods if f.age < settings.food_max_age]
    if births or len(state.foods) != before:
        logger.debug(
            "tick %d: %d births, %d expired", state.tick_count, len(births), before - len(state.foods)
        )
    return births

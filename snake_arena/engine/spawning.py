"""Procedural level content: wall clusters and initial food placement."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Collection, Sequence

from snake_arena.config import constants as C
from snake_arena.domain.entities import Food, FoodPhase
from snake_arena.domain.formulas import wall_safety_radius
from snake_arena.domain.geometry import Position, chebyshev, in_bounds, orthogonal_neighbors
from snake_arena.domain.random_port import RandomPort
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext
from snake_arena.engine.food import create_level_food

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Walls
# ---------------------------------------------------------------------------


def _inside_exclusion_zone(pos: Position, zones: Sequence[Position], radius: int) -> bool:
    return any(chebyshev(pos, zone) <= radius for zone in zones)


def _is_interior(pos: Position, width: int, height: int) -> bool:
    return 0 < pos.x < width - 1 and 0 < pos.y < height - 1


def _generate_wall_clusters(
    width: int,
    height: int,
    cluster_count: int,
    length: int,
    exclusion_zones: Sequence[Position],
    safe_radius: int,
    branch_probability: float,
    rng: RandomPort,
) -> list[Position]:
    walls: list[Position] = []
    wall_set: set[Position] = set()

    def placeable(pos: Position) -> bool:
        return _is_interior(pos, width, height) and not _inside_exclusion_zone(
            pos, exclusion_zones, safe_radius
        )

    def add_wall(pos: Position) -> bool:
        if pos in wall_set or not placeable(pos):
            return False
        walls.append(pos)
        wall_set.add(pos)
        return True

    for _ in range(cluster_count):
        current = Position(2 + rng.next_int(width - 4), 2 + rng.next_int(height - 4))
        if not add_wall(current):
            continue

        for step in range(1, length):
            candidates = [
                Position(current.x + 1, current.y),
                Position(current.x - 1, current.y),
                Position(current.x, current.y + 1),
                Position(current.x, current.y - 1),
            ]
            valid = [pos for pos in candidates if placeable(pos)]
            if not valid:
                break

            next_pos = valid[rng.next_int(len(valid))]
            add_wall(next_pos)

            if rng.next() < branch_probability and step < length - 1:
                add_wall(valid[rng.next_int(len(valid))])

            current = next_pos

    return walls


def validate_walls(walls: Collection[Position], width: int, height: int) -> bool:
    """Return True when every free cell is reachable from every other.

    A board without any free cell is invalid.
    """
    wall_set = set(walls)
    start = next(
        (Position(x, y) for y in range(height) for x in range(width) if Position(x, y) not in wall_set),
        None,
    )
    if start is None:
        return False

    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in orthogonal_neighbors(current):
            if (
                in_bounds(neighbor, width, height)
                and neighbor not in wall_set
                and neighbor not in visited
            ):
                visited.add(neighbor)
                queue.append(neighbor)

    in_bounds_walls = sum(1 for w in wall_set if in_bounds(w, width, height))
    return len(visited) == width * height - in_bounds_walls


def generate_walls(
    width: int,
    height: int,
    cluster_count: int,
    length: int,
    exclusion_zones: Sequence[Position],
    ctx: EngineContext,
) -> list[Position]:
    """Generate random-walk wall clusters that leave the free area connected.

    Falls back to no walls when ``wall_max_attempts`` layouts all fail
    validation.
    """
    settings = ctx.settings
    safe_radius = wall_safety_radius(settings, C.WALL_SAFETY_RADIUS_FACTOR)
    for attempt in range(settings.wall_max_attempts):
        walls = _generate_wall_clusters(
            width,
            height,
            cluster_count,
            length,
            exclusion_zones,
            safe_radius,
            settings.wall_branch_probability,
            ctx.rng,
        )
        if validate_walls(walls, width, height):
            if attempt:
                logger.debug("wall layout accepted after %d retries", attempt)
            return walls
    logger.debug(
        "no connected wall layout in %d attempts (%dx%d, %d clusters); using none",
        settings.wall_max_attempts,
        width,
        height,
        cluster_count,
    )
    return []


# ---------------------------------------------------------------------------
# Food
# ---------------------------------------------------------------------------


def spawn_food(count: int, state: GameState, ctx: EngineContext) -> list[Food]:
    """Randomly place up to *count* food items on free, well-spaced cells.

    The first ``len(state.snakes)`` items start adult, the rest young.
    May return fewer items when the attempt budget runs out.
    """
    occupied: set[Position] = set(state.walls)
    for snake in state.snakes:
        occupied.update(snake.segments)

    foods: list[Food] = []
    adult_quota = len(state.snakes)
    max_attempts = count * C.SPAWN_ATTEMPTS_PER_ITEM
    min_distance = ctx.settings.food_min_distance
    attempts = 0
    while len(foods) < count and attempts < max_attempts:
        attempts += 1
        candidate = Position(ctx.rng.next_int(state.width), ctx.rng.next_int(state.height))
        if candidate in occupied:
            continue
        if any(chebyshev(candidate, food.position) < min_distance for food in foods):
            continue
        phase = FoodPhase.ADULT if len(foods) < adult_quota else FoodPhase.YOUNG
        foods.append(create_level_food(state.level, candidate, ctx.settings, phase))
        occupied.add(candidate)

    if len(foods) < count:
        logger.debug("placed %d of %d food items after %d attempts", len(foods), count, attempts)
    return foods

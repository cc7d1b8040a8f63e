"""Greedy one-step board evaluator.

Each legal heading is scored from the cell it lands on: reachable area
(flood fill), free neighbouring cells, attraction to the nearest food, an
immediate-eat bonus, a trap penalty when the reachable area cannot hold the
snake, and a fear term for nearby rival bodies. The best heading wins;
ties keep evaluation order (up, right, down, left).
"""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Collection
from typing import NamedTuple

from snake_arena.config.types import BotProfileSettings, GameSettings
from snake_arena.domain.entities import Snake, food_reward
from snake_arena.domain.geometry import (
    CLOCKWISE,
    Direction,
    Position,
    chebyshev,
    in_bounds,
    is_reverse_direction,
    next_head_position,
    orthogonal_neighbors,
)
from snake_arena.domain.state import GameState

NEG_INF = float("-inf")


class DirectionEvaluation(NamedTuple):
    direction: Direction
    score: float


class SkillProfile(NamedTuple):
    profile_id: str
    weights: BotProfileSettings


def skill_profile(settings: GameSettings, profile_id: str) -> SkillProfile:
    try:
        return SkillProfile(profile_id, settings.bot_profiles[profile_id])
    except KeyError:
        raise ValueError(f"unknown bot profile: {profile_id}") from None


def profile_for_difficulty(difficulty_level: int, settings: GameSettings) -> SkillProfile:
    if difficulty_level <= 3:
        return skill_profile(settings, "rookie")
    if difficulty_level <= 6:
        return skill_profile(settings, "basic")
    if difficulty_level <= 8:
        return skill_profile(settings, "solid")
    return skill_profile(settings, "wise")


def candidate_directions(current: Direction) -> list[Direction]:
    return [d for d in CLOCKWISE if not is_reverse_direction(current, d)]


# ---------------------------------------------------------------------------
# Board queries
# ---------------------------------------------------------------------------


def blocked_cells(state: GameState, snake: Snake, growing: bool) -> set[Position]:
    """Walls plus alive snake bodies; the own tail is free unless growing."""
    blocked: set[Position] = set(state.walls)
    for other in state.snakes:
        if not other.alive:
            continue
        if other.snake_id == snake.snake_id and not growing:
            blocked.update(other.segments[:-1])
        else:
            blocked.update(other.segments)
    return blocked


def flood_fill_area(start: Position, width: int, height: int, blocked: Collection[Position]) -> int:
    """Size of the free region containing *start*; 0 when *start* is blocked."""
    if not in_bounds(start, width, height) or start in blocked:
        return 0
    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in orthogonal_neighbors(current):
            if neighbor in visited or neighbor in blocked:
                continue
            if not in_bounds(neighbor, width, height):
                continue
            visited.add(neighbor)
            queue.append(neighbor)
    return len(visited)


def count_free_neighbors(pos: Position, width: int, height: int, blocked: Collection[Position]) -> int:
    return sum(
        1 for n in orthogonal_neighbors(pos) if in_bounds(n, width, height) and n not in blocked
    )


def _nearest_food(origin: Position, state: GameState, settings: GameSettings) -> tuple[float, int]:
    """Distance to the nearest food and its point value (first found on ties)."""
    nearest = math.inf
    points = 1
    for food in state.foods:
        distance = chebyshev(origin, food.position)
        if distance < nearest:
            nearest = distance
            points = food_reward(food, settings).points
    return nearest, points


def _nearest_other_snake(origin: Position, state: GameState, snake_id: int) -> float:
    nearest = math.inf
    for other in state.snakes:
        if not other.alive or other.snake_id == snake_id:
            continue
        for seg in other.segments:
            nearest = min(nearest, chebyshev(origin, seg))
    return nearest


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def evaluate_direction(
    state: GameState,
    snake: Snake,
    settings: GameSettings,
    direction: Direction,
    profile: SkillProfile,
) -> float:
    """Score of turning *snake* towards *direction*; ``-inf`` when fatal."""
    weights = profile.weights
    next_head = next_head_position(snake.head, direction)
    if not in_bounds(next_head, state.width, state.height):
        return NEG_INF
    walls = state.wall_set
    if next_head in walls:
        return NEG_INF

    food_index = state.food_at(next_head)
    reward = food_reward(state.foods[food_index], settings) if food_index is not None else None
    growing = reward is not None and reward.growth > 0

    blocked = blocked_cells(state, snake, growing)
    if next_head in blocked:
        return NEG_INF
    blocked.discard(next_head)

    area = flood_fill_area(next_head, state.width, state.height, blocked)
    if area <= 0:
        return NEG_INF

    escapes = count_free_neighbors(next_head, state.width, state.height, blocked)
    min_safe_area = len(snake.segments) + 2
    trap = (min_safe_area - area) * weights.trap_penalty if area < min_safe_area else 0.0

    food_distance, food_points = _nearest_food(next_head, state, settings)
    food_score = 0.0 if math.isinf(food_distance) else food_points * weights.food_weight / (food_distance + 1)
    suppression = (
        weights.long_snake_food_penalty if len(snake.segments) >= weights.long_snake_threshold else 0.0
    )

    rival_distance = _nearest_other_snake(next_head, state, snake.snake_id)
    fear = 0.0 if math.isinf(rival_distance) else weights.fear_weight / (rival_distance + 1)

    immediate = reward.points * weights.immediate_eat_weight if reward is not None else 0.0

    return (
        area * weights.area_weight
        + escapes * weights.escape_weight
        + food_score * (1 - suppression)
        + immediate
        - trap
        - fear
    )


def rank_directions(
    state: GameState,
    snake: Snake,
    settings: GameSettings,
    profile: SkillProfile | None = None,
) -> list[DirectionEvaluation]:
    """Candidate headings sorted best first; equal scores keep candidate order."""
    profile = profile or skill_profile(settings, "wise")
    evaluations = [
        DirectionEvaluation(d, evaluate_direction(state, snake, settings, d, profile))
        for d in candidate_directions(snake.direction)
    ]
    return sorted(evaluations, key=lambda e: e.score, reverse=True)


def pick_mistake(
    ranked: list[DirectionEvaluation],
    tick_count: int,
    snake: Snake,
    profile: SkillProfile,
) -> DirectionEvaluation | None:
    """Deterministic blunder: on scheduled ticks take a lower-ranked safe move."""
    weights = profile.weights
    if weights.mistake_period <= 0 or len(ranked) < 2:
        return None
    if (tick_count + snake.snake_id * 3) % weights.mistake_period != 0:
        return None
    non_fatal = [e for e in ranked if e.score != NEG_INF]
    if len(non_fatal) < 2:
        return None
    index = min(len(non_fatal) - 1, math.floor((len(non_fatal) - 1) * weights.bad_move_bias / 2))
    return non_fatal[index]


def choose_direction_by_profile(
    state: GameState, snake: Snake, settings: GameSettings, profile: SkillProfile
) -> Direction:
    """Best heading under *profile*; keeps the current heading when stuck."""
    ranked = rank_directions(state, snake, settings, profile)
    mistake = pick_mistake(ranked, state.tick_count, snake, profile)
    if mistake is not None:
        return mistake.direction
    if not ranked or ranked[0].score == NEG_INF:
        return snake.direction
    return ranked[0].direction


def choose_wise_direction(state: GameState, snake: Snake, settings: GameSettings) -> Direction:
    return choose_direction_by_profile(state, snake, settings, skill_profile(settings, "wise"))


def choose_direction_by_difficulty(state: GameState, snake: Snake, settings: GameSettings) -> Direction:
    profile = profile_for_difficulty(state.difficulty_level, settings)
    return choose_direction_by_profile(state, snake, settings, profile)

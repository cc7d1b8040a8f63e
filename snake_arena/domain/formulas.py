"""Pure level-derived quantities.

Every result is floored and clamped at zero.
"""

from __future__ import annotations

import math

from snake_arena.config.types import GameSettings


def _floor_nonneg(value: float) -> int:
    return max(0, math.floor(value))


def target_score(level: int, settings: GameSettings) -> int:
    """Score a single snake must gain during *level*."""
    return _floor_nonneg(settings.target_score_coeff * level + settings.target_score_base)


def cumulative_target_score(level: int, settings: GameSettings) -> int:
    """Running total of per-level targets through *level*."""
    return sum(target_score(lv, settings) for lv in range(1, level + 1))


def wall_cluster_count(level: int, settings: GameSettings) -> int:
    return _floor_nonneg(settings.wall_cluster_coeff * level + settings.wall_cluster_base)


def wall_length(difficulty_level: int, settings: GameSettings) -> int:
    return _floor_nonneg(settings.wall_length_coeff * difficulty_level + settings.wall_length_base)


def initial_food_count(snake_count: int, difficulty_level: int, settings: GameSettings) -> int:
    return _floor_nonneg(
        settings.food_count_per_snake_coeff * snake_count
        + settings.food_count_base
        - difficulty_level
    )


def wall_safety_radius(settings: GameSettings, factor: float) -> int:
    """Chebyshev exclusion radius kept clear of walls around spawn cells."""
    return math.ceil(factor * settings.initial_snake_length)

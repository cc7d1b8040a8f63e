"""Bot steering: board evaluator, algorithm registry, vision matrix."""

from snake_arena.heuristic.bots import decide_bot_directions
from snake_arena.heuristic.evaluator import (
    DirectionEvaluation,
    SkillProfile,
    choose_direction_by_difficulty,
    choose_direction_by_profile,
    choose_wise_direction,
    evaluate_direction,
    flood_fill_area,
    profile_for_difficulty,
    rank_directions,
    skill_profile,
)
from snake_arena.heuristic.registry import (
    HeuristicAlgorithm,
    algorithm_ids,
    algorithm_options,
    get_algorithm,
)
from snake_arena.heuristic.vision import generate_vision, rotate_to_world

__all__ = [
    "DirectionEvaluation",
    "HeuristicAlgorithm",
    "SkillProfile",
    "algorithm_ids",
    "algorithm_options",
    "choose_direction_by_difficulty",
    "choose_direction_by_profile",
    "choose_wise_direction",
    "decide_bot_directions",
    "evaluate_direction",
    "flood_fill_area",
    "generate_vision",
    "get_algorithm",
    "profile_for_difficulty",
    "rank_directions",
    "rotate_to_world",
    "skill_profile",
]

"""Named steering algorithms selectable per arena participant."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from snake_arena.config import constants as C
from snake_arena.config.types import GameSettings
from snake_arena.domain.entities import Snake
from snake_arena.domain.geometry import Direction
from snake_arena.domain.state import GameState
from snake_arena.heuristic.evaluator import choose_direction_by_profile, skill_profile
from snake_arena.heuristic.vision import choose_vision_direction

logger = logging.getLogger(__name__)

ChooseDirection = Callable[[GameState, Snake, GameSettings], Direction]


@dataclass(frozen=True)
class HeuristicAlgorithm:
    algorithm_id: str
    label: str
    choose: ChooseDirection

    def choose_direction(self, state: GameState, snake: Snake, settings: GameSettings) -> Direction:
        return self.choose(state, snake, settings)


def _by_profile(profile_id: str, state: GameState, snake: Snake, settings: GameSettings) -> Direction:
    return choose_direction_by_profile(state, snake, settings, skill_profile(settings, profile_id))


def _constant(direction: Direction, state: GameState, snake: Snake, settings: GameSettings) -> Direction:
    return direction


def _keep_direction(state: GameState, snake: Snake, settings: GameSettings) -> Direction:
    return snake.direction


_ALGORITHMS: tuple[HeuristicAlgorithm, ...] = (
    HeuristicAlgorithm("wise", "Wise (difficulty 9-10)", partial(_by_profile, "wise")),
    HeuristicAlgorithm("solid", "Solid (difficulty 7-8)", partial(_by_profile, "solid")),
    HeuristicAlgorithm("basic", "Basic (difficulty 4-6)", partial(_by_profile, "basic")),
    HeuristicAlgorithm("rookie", "Rookie (difficulty 1-3)", partial(_by_profile, "rookie")),
    HeuristicAlgorithm("vision", "Vision matrix (local signals)", choose_vision_direction),
    HeuristicAlgorithm("keep-direction", "Never turns", _keep_direction),
    HeuristicAlgorithm("always-up", "Always up", partial(_constant, Direction.UP)),
    HeuristicAlgorithm("always-down", "Always down", partial(_constant, Direction.DOWN)),
    HeuristicAlgorithm("always-left", "Always left", partial(_constant, Direction.LEFT)),
    HeuristicAlgorithm("always-right", "Always right", partial(_constant, Direction.RIGHT)),
)

_REGISTRY: dict[str, HeuristicAlgorithm] = {a.algorithm_id: a for a in _ALGORITHMS}


def algorithm_ids() -> list[str]:
    return [a.algorithm_id for a in _ALGORITHMS]


def algorithm_options() -> list[tuple[str, str]]:
    """``(id, label)`` pairs in display order."""
    return [(a.algorithm_id, a.label) for a in _ALGORITHMS]


def get_algorithm(algorithm_id: str, strict: bool = False) -> HeuristicAlgorithm:
    """Look up *algorithm_id*; unknown ids fall back to the default unless *strict*."""
    algorithm = _REGISTRY.get(algorithm_id)
    if algorithm is not None:
        return algorithm
    if strict:
        raise ValueError(
            f"unknown algorithm id {algorithm_id!r}; expected one of {', '.join(algorithm_ids())}"
        )
    logger.debug("unknown algorithm %r, using %s", algorithm_id, C.DEFAULT_ALGORITHM_ID)
    return _REGISTRY[C.DEFAULT_ALGORITHM_ID]

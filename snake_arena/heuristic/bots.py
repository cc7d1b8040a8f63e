"""Bot controller: headings for every alive bot snake in a state."""

from __future__ import annotations

from collections.abc import Mapping

from snake_arena.config.types import GameSettings
from snake_arena.domain.geometry import Direction
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext
from snake_arena.heuristic.evaluator import choose_direction_by_difficulty


def decide_bot_directions(state: GameState, settings: GameSettings) -> dict[int, Direction]:
    """Pick a heading per alive bot using the difficulty-mapped profile.

    Reads *state* only; applying the headings is up to the caller.
    """
    return {
        snake.snake_id: choose_direction_by_difficulty(state, snake, settings)
        for snake in state.snakes
        if snake.is_bot and snake.alive
    }


def bot_chooser(state: GameState, ctx: EngineContext) -> Mapping[int, Direction]:
    """Adapter matching ``GameSession``'s chooser signature."""
    return decide_bot_directions(state, ctx.settings)

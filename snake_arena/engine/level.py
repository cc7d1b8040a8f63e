"""Level completion, winners and scoring."""

from __future__ import annotations

from collections.abc import Sequence

from snake_arena.domain.entities import Snake
from snake_arena.domain.formulas import cumulative_target_score
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext

TARGET_REACHED = "target reached"
SNAKE_DIED = "snake died"
LAST_SURVIVOR = "last survivor"
EVERYONE_DIED = "everyone died"
TIME_EXPIRED = "time expired"


def award_food_points(snake: Snake, points: int) -> None:
    snake.increment_score(points)


def check_level_complete(state: GameState, ctx: EngineContext) -> bool:
    """Single snake: cumulative target reached or dead.

    Several snakes: at most one alive, or the level clock has run out.
    """
    if len(state.snakes) == 1:
        snake = state.snakes[0]
        target = cumulative_target_score(state.level, ctx.settings)
        return snake.score >= target or not snake.alive
    alive = state.alive_snakes()
    return len(alive) <= 1 or state.level_time_left <= 0


def level_winner(state: GameState) -> int | None:
    """Id of the only alive snake, else None (draw)."""
    alive = state.alive_snakes()
    return alive[0].snake_id if len(alive) == 1 else None


def overall_winner(snakes: Sequence[Snake]) -> Snake | None:
    """Most levels won, then highest score; an exact tie yields None."""
    if not snakes:
        return None
    if len(snakes) == 1:
        return snakes[0]
    ranked = sorted(snakes, key=lambda s: (s.levels_won, s.score), reverse=True)
    first, second = ranked[0], ranked[1]
    if (first.levels_won, first.score) == (second.levels_won, second.score):
        return None
    return first


def can_advance(state: GameState) -> bool:
    """Whether the session may continue to the next level."""
    if len(state.snakes) == 1:
        return state.snakes[0].alive
    return bool(state.alive_snakes())

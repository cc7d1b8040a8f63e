"""Starvation: unfed snakes shrink and eventually die."""

from __future__ import annotations

from collections.abc import Collection

from snake_arena.domain.entities import Snake
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext

STARVED = "starved"


def process_hunger(snake: Snake, ctx: EngineContext) -> bool:
    """Advance *snake*'s hunger by one tick; return True if it starved.

    A snake already at ``hunger_threshold`` loses one tail segment and its
    counter restarts at 0; dropping below ``min_snake_length`` kills it.
    """
    if not snake.alive:
        return False
    settings = ctx.settings
    if snake.ticks_without_food >= settings.hunger_threshold:
        snake.trim_tail()
        snake.reset_hunger()
        if len(snake.segments) < settings.min_snake_length:
            snake.die(STARVED)
            return True
        return False
    snake.increment_hunger()
    return False


def hunger_system(state: GameState, ctx: EngineContext, fed_ids: Collection[int] = ()) -> list[int]:
    """Apply hunger to every alive snake not in *fed_ids*; return starved ids."""
    starved: list[int] = []
    for snake in state.snakes:
        if not snake.alive or snake.snake_id in fed_ids:
            continue
        if process_hunger(snake, ctx):
            starved.append(snake.snake_id)
    return starved

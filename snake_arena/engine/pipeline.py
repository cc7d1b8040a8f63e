"""One simulation step as a fixed sequence of systems.

Order: movement (with collisions and eating), hunger, food lifecycle,
board rebuild, level completion. Each system mutates ``state`` in place and
appends events to the shared list; later systems never undo earlier ones.
"""

from __future__ import annotations

import logging

from snake_arena.domain.entities import Snake, food_reward
from snake_arena.domain.events import (
    DomainEvent,
    FoodBorn,
    FoodEaten,
    GameOver,
    LevelCompleted,
    SnakeDied,
)
from snake_arena.domain.state import GameState
from snake_arena.engine.collision import collides_with_snake, collides_with_wall, self_collision
from snake_arena.engine.context import EngineContext
from snake_arena.engine.food import auto_replenish_food
from snake_arena.engine.hunger import STARVED, hunger_system
from snake_arena.engine.level import (
    EVERYONE_DIED,
    LAST_SURVIVOR,
    SNAKE_DIED,
    TARGET_REACHED,
    TIME_EXPIRED,
    award_food_points,
    check_level_complete,
)
from snake_arena.engine.movement import move_snake
from snake_arena.engine.reproduction import process_food_lifecycle

logger = logging.getLogger(__name__)

CRASHED_INTO_WALL = "crashed into a wall"
COLLIDED_WITH_SNAKE = "collided with another snake"
ATE_ITSELF = "ate itself"


def run_tick_pipeline(state: GameState, ctx: EngineContext, events: list[DomainEvent]) -> None:
    fed_ids = movement_system(state, ctx, events)
    hunger_phase(state, ctx, events, fed_ids)
    reproduction_system(state, ctx, events)
    state.rebuild_board()
    level_check_system(state, ctx, events)


def _kill(snake: Snake, reason: str, events: list[DomainEvent]) -> None:
    snake.die(reason)
    events.append(SnakeDied(snake.snake_id, reason))
    logger.debug("snake %d died: %s", snake.snake_id, reason)


def movement_system(state: GameState, ctx: EngineContext, events: list[DomainEvent]) -> set[int]:
    """Move every alive snake in id order; return ids of snakes that ate.

    Snakes move sequentially, so a later mover sees earlier movers at their
    new positions.
    """
    walls = state.wall_set
    fed: set[int] = set()
    for snake in state.snakes:
        if not snake.alive:
            continue
        next_head = snake.next_head_position()

        if collides_with_wall(next_head, state, walls):
            _kill(snake, CRASHED_INTO_WALL, events)
            continue
        if collides_with_snake(next_head, state.snakes, exclude_id=snake.snake_id):
            _kill(snake, COLLIDED_WITH_SNAKE, events)
            continue

        food_index = state.food_at(next_head)
        reward = food_reward(state.foods[food_index], ctx.settings) if food_index is not None else None
        growth = reward.growth if reward is not None else 0

        move_snake(snake, grow=growth > 0)
        if growth > 1:
            snake.grow_by(growth - 1)

        if self_collision(snake):
            _kill(snake, ATE_ITSELF, events)
            continue

        if food_index is not None and reward is not None:
            eaten = state.foods.pop(food_index)
            award_food_points(snake, reward.points)
            snake.reset_hunger()
            fed.add(snake.snake_id)
            events.append(FoodEaten(snake.snake_id, eaten.position, snake.score))
    return fed


def hunger_phase(
    state: GameState, ctx: EngineContext, events: list[DomainEvent], fed_ids: set[int]
) -> None:
    for snake_id in hunger_system(state, ctx, fed_ids):
        events.append(SnakeDied(snake_id, STARVED))
        logger.debug("snake %d died: %s", snake_id, STARVED)


def reproduction_system(state: GameState, ctx: EngineContext, events: list[DomainEvent]) -> None:
    for birth in process_food_lifecycle(state, ctx):
        events.append(FoodBorn(birth.parent_position, birth.child.position))
    auto_replenish_food(state, ctx)


def level_check_system(state: GameState, ctx: EngineContext, events: list[DomainEvent]) -> None:
    if not check_level_complete(state, ctx):
        return
    state.level_complete = True
    alive = state.alive_snakes()

    if len(state.snakes) == 1:
        if alive:
            events.append(LevelCompleted(TARGET_REACHED))
        else:
            state.game_over = True
            events.append(GameOver())
            events.append(LevelCompleted(SNAKE_DIED))
        logger.debug("level %d complete on tick %d", state.level, state.tick_count)
        return

    winner_id: int | None = None
    if len(alive) == 1:
        reason = LAST_SURVIVOR
        winner_id = alive[0].snake_id
        alive[0].levels_won += 1
    elif not alive:
        reason = EVERYONE_DIED
    else:
        reason = TIME_EXPIRED
    events.append(LevelCompleted(reason, winner_id))
    logger.debug("level %d complete on tick %d: %s", state.level, state.tick_count, reason)

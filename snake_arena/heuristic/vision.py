"""Heading-relative vision matrix for bots.

The matrix is centred on the head and rotated so the heading points to
row 0. Obstacles (walls, off-board cells, alive snake bodies) contribute
negative signals and food positive ones, both fading with Chebyshev
distance from the head.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from snake_arena.config import constants as C
from snake_arena.config.types import GameSettings
from snake_arena.domain.entities import Snake
from snake_arena.domain.geometry import Direction, Position, in_bounds
from snake_arena.domain.state import GameState


class BotDecision(str, Enum):
    FRONT = "front"
    LEFT = "left"
    RIGHT = "right"


_TURNS: dict[Direction, dict[BotDecision, Direction]] = {
    Direction.UP: {
        BotDecision.FRONT: Direction.UP,
        BotDecision.LEFT: Direction.LEFT,
        BotDecision.RIGHT: Direction.RIGHT,
    },
    Direction.DOWN: {
        BotDecision.FRONT: Direction.DOWN,
        BotDecision.LEFT: Direction.RIGHT,
        BotDecision.RIGHT: Direction.LEFT,
    },
    Direction.LEFT: {
        BotDecision.FRONT: Direction.LEFT,
        BotDecision.LEFT: Direction.DOWN,
        BotDecision.RIGHT: Direction.UP,
    },
    Direction.RIGHT: {
        BotDecision.FRONT: Direction.RIGHT,
        BotDecision.LEFT: Direction.UP,
        BotDecision.RIGHT: Direction.DOWN,
    },
}


def rotate_to_world(rel_x: int, rel_y: int, direction: Direction, head: Position) -> Position:
    """Map a vision offset (heading = up) to a board cell."""
    if direction is Direction.UP:
        return Position(head.x + rel_x, head.y + rel_y)
    if direction is Direction.DOWN:
        return Position(head.x - rel_x, head.y - rel_y)
    if direction is Direction.LEFT:
        return Position(head.x + rel_y, head.y - rel_x)
    return Position(head.x - rel_y, head.y + rel_x)


def obstacle_signal(distance: int, settings: GameSettings) -> int:
    if distance <= 0:
        return settings.obstacle_signal_close
    signal = settings.obstacle_signal_close + settings.obstacle_signal_decay * distance
    return min(signal, C.OBSTACLE_SIGNAL_CAP)


def food_signal(distance: int, settings: GameSettings) -> int:
    if distance <= 0:
        return settings.food_signal_close
    signal = settings.food_signal_close - settings.food_signal_decay * distance
    return max(signal, settings.food_signal_min)


def generate_vision(
    head: Position,
    direction: Direction,
    state: GameState,
    settings: GameSettings,
    size: int | None = None,
) -> np.ndarray:
    """Return a ``size x size`` int matrix of summed signals around *head*."""
    size = settings.vision_size if size is None else size
    half = size // 2
    vision = np.zeros((size, size), dtype=np.int64)

    walls = state.wall_set
    bodies = [set(s.segments) for s in state.snakes if s.alive]
    food_cells = {f.position for f in state.foods}

    for vy in range(size):
        for vx in range(size):
            rel_x, rel_y = vx - half, vy - half
            world = rotate_to_world(rel_x, rel_y, direction, head)
            distance = max(abs(rel_x), abs(rel_y))
            if not in_bounds(world, state.width, state.height):
                vision[vy, vx] = obstacle_signal(distance, settings)
                continue
            signal = 0
            if world in walls:
                signal += obstacle_signal(distance, settings)
            for body in bodies:
                if world in body:
                    signal += obstacle_signal(distance, settings)
            if world in food_cells:
                signal += food_signal(distance, settings)
            vision[vy, vx] = signal
    return vision


def decide_from_vision(vision: np.ndarray) -> BotDecision:
    """Pick the relative move whose adjacent cell carries the highest signal.

    Front wins ties, then left.
    """
    rows, cols = vision.shape
    center = rows // 2
    targets = {
        BotDecision.FRONT: (center - 1, center),
        BotDecision.LEFT: (center, center - 1),
        BotDecision.RIGHT: (center, center + 1),
    }
    best = BotDecision.FRONT
    best_score = float("-inf")
    for decision, (row, col) in targets.items():
        if not (0 <= row < rows and 0 <= col < cols):
            continue
        score = float(vision[row, col])
        if score > best_score:
            best, best_score = decision, score
    return best


def bot_direction(current: Direction, decision: BotDecision) -> Direction:
    return _TURNS[current][decision]


def choose_vision_direction(state: GameState, snake: Snake, settings: GameSettings) -> Direction:
    vision = generate_vision(snake.head, snake.direction, state, settings)
    return bot_direction(snake.direction, decide_from_vision(vision))

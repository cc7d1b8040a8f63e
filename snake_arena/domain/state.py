"""Root aggregate of one level in play."""

from __future__ import annotations

from dataclasses import dataclass, field

from snake_arena.config.types import GameMode
from snake_arena.domain.board import Board, build_board, create_empty_board
from snake_arena.domain.entities import Food, Snake
from snake_arena.domain.geometry import Position


@dataclass
class GameState:
    """Mutable world state, owned by exactly one driver at a time.

    ``board`` is a projection rebuilt from ``walls``, ``foods`` and ``snakes``;
    the entity collections are the source of truth.
    """

    width: int
    height: int
    level: int = 1
    game_mode: GameMode = GameMode.CLASSIC
    difficulty_level: int = 1
    snakes: list[Snake] = field(default_factory=list)
    foods: list[Food] = field(default_factory=list)
    walls: list[Position] = field(default_factory=list)
    board: Board = field(default_factory=list)
    tick_count: int = 0
    last_auto_food_spawn_tick: int = 0
    level_time_left: int = 0
    game_over: bool = False
    level_complete: bool = False

    def __post_init__(self) -> None:
        if not self.board:
            self.board = create_empty_board(self.width, self.height)

    @property
    def is_terminal(self) -> bool:
        return self.game_over or self.level_complete

    @property
    def wall_set(self) -> frozenset[Position]:
        return frozenset(self.walls)

    def alive_snakes(self) -> list[Snake]:
        return [s for s in self.snakes if s.alive]

    def snake_by_id(self, snake_id: int) -> Snake | None:
        for snake in self.snakes:
            if snake.snake_id == snake_id:
                return snake
        return None

    def food_at(self, pos: Position) -> int | None:
        """Index of the food item at *pos*, or None."""
        for i, food in enumerate(self.foods):
            if food.position == pos:
                return i
        return None

    def rebuild_board(self) -> None:
        self.board = build_board(self.width, self.height, self.walls, self.foods, self.snakes)

    def snapshot(self) -> tuple:
        """Hashable summary of the entity state, for determinism checks."""
        return (
            self.tick_count,
            tuple(
                (s.snake_id, tuple(s.segments), s.direction.value, s.alive, s.score, s.ticks_without_food)
                for s in self.snakes
            ),
            tuple((f.kind.value, f.position, f.age, f.clock, f.reproduction_count) for f in self.foods),
            tuple(self.walls),
            self.level_time_left,
            self.game_over,
            self.level_complete,
        )

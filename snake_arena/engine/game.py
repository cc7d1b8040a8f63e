"""Level setup, tick entry point and multi-level session progression."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import NamedTuple

from snake_arena.config.types import GameConfig, GameMode, GameSettings
from snake_arena.domain.entities import Snake
from snake_arena.domain.events import DomainEvent, TickResult
from snake_arena.domain.formulas import initial_food_count, wall_cluster_count, wall_length
from snake_arena.domain.geometry import Direction, Position
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext
from snake_arena.engine.level import can_advance
from snake_arena.engine.pipeline import run_tick_pipeline
from snake_arena.engine.spawning import generate_walls, spawn_food

logger = logging.getLogger(__name__)

_COLOR_NAMES: dict[str, str] = {
    "#ff0000": "Red",
    "#00ff00": "Green",
    "#0000ff": "Blue",
    "#ffff00": "Yellow",
    "#ff00ff": "Purple",
    "#ff8800": "Orange",
    "#88ff88": "Lime",
}


class StartSlot(NamedTuple):
    position: Position
    direction: Direction


def start_slots(width: int, height: int, count: int, settings: GameSettings) -> list[StartSlot]:
    """First *count* of the six fixed spawn points, each facing inward."""
    margin = settings.initial_snake_length + 2
    slots = [
        StartSlot(Position(margin, height // 2), Direction.RIGHT),
        StartSlot(Position(width - margin - 1, height // 2), Direction.LEFT),
        StartSlot(Position(width // 2, margin), Direction.DOWN),
        StartSlot(Position(width // 2, height - margin - 1), Direction.UP),
        StartSlot(Position(margin, margin), Direction.RIGHT),
        StartSlot(Position(width - margin - 1, height - margin - 1), Direction.LEFT),
    ]
    return slots[:count]


def initial_segments(head: Position, direction: Direction, length: int) -> list[Position]:
    """Body laid out behind *head*, opposite to the heading."""
    dx, dy = direction.opposite().delta
    return [Position(head.x + dx * i, head.y + dy * i) for i in range(length)]


def bot_color_name(snake_id: int, settings: GameSettings) -> str:
    """Display name for a bot derived from its palette color."""
    fallback = f"Bot {snake_id + 1}"
    palette = settings.snake_colors
    if not palette:
        return fallback
    color = palette[snake_id % len(palette)].lower()
    if color in _COLOR_NAMES:
        return _COLOR_NAMES[color]
    if len(color) != 7 or not color.startswith("#"):
        return fallback
    try:
        r, g, b = (int(color[i : i + 2], 16) for i in (1, 3, 5))
    except ValueError:
        return fallback
    if b >= 170 and g >= 140 and r <= 90:
        return "Blue"
    if g >= 170 and r <= 120 and b <= 120:
        return "Green"
    if r >= 170 and g >= 120 and b <= 90:
        return "Orange"
    if r >= 170 and g >= 170 and b <= 110:
        return "Yellow"
    if r >= 150 and b >= 150 and g <= 130:
        return "Purple"
    if r >= 170 and g <= 110 and b <= 110:
        return "Red"
    return fallback


def sync_level_clock(state: GameState, settings: GameSettings, tick: int | None = None) -> None:
    """Set the level countdown from the simulated time elapsed at *tick*.

    *tick* defaults to ``state.tick_count``. Drivers call this before
    ``process_tick`` with the upcoming tick so that tick's level check sees
    the current countdown.
    """
    if tick is None:
        tick = state.tick_count
    elapsed_seconds = tick * settings.tick_interval_ms // 1000
    state.level_time_left = max(0, settings.level_time_limit - elapsed_seconds)


class GameEngine:
    """Builds levels and advances them one tick at a time.

    The engine holds the base context; each level runs with that context's
    settings patched by the level's overrides.
    """

    def __init__(self, context: EngineContext) -> None:
        self.context = context
        self._level_contexts: dict[int, EngineContext] = {}

    def context_for_level(self, level: int) -> EngineContext:
        ctx = self._level_contexts.get(level)
        if ctx is None:
            ctx = self.context.with_settings(self.context.settings.for_level(level))
            self._level_contexts[level] = ctx
        return ctx

    def create_game_state(self, config: GameConfig, level: int) -> GameState:
        if level < 1:
            raise ValueError("level must be >= 1")
        settings = self.context_for_level(level).settings
        width, height = settings.board_size(level)
        return GameState(
            width=width,
            height=height,
            level=level,
            game_mode=config.game_mode,
            difficulty_level=config.difficulty_level,
            level_time_left=settings.level_time_limit,
        )

    def init_level(self, state: GameState, config: GameConfig) -> None:
        """Generate walls, snakes and food for ``state.level``."""
        ctx = self.context_for_level(state.level)
        settings = ctx.settings
        total = config.snake_count
        slots = start_slots(state.width, state.height, total, settings)

        exclusion_zones = [
            seg
            for slot in slots
            for seg in initial_segments(slot.position, slot.direction, settings.initial_snake_length)
        ]
        override = settings.level_override(state.level)
        clusters = (
            override.wall_clusters
            if override.wall_clusters is not None
            else wall_cluster_count(state.level, settings)
        )
        length = (
            override.wall_length
            if override.wall_length is not None
            else wall_length(state.difficulty_level, settings)
        )
        state.walls = generate_walls(state.width, state.height, clusters, length, exclusion_zones, ctx)

        state.snakes = []
        for i, slot in enumerate(slots):
            is_bot = i >= config.player_count
            if is_bot:
                name = bot_color_name(i, settings)
            elif i < len(config.player_names) and config.player_names[i]:
                name = config.player_names[i]
            else:
                name = f"Player {i + 1}"
            snake = self.create_snake(
                i, name, slot.position, slot.direction, is_bot, settings.initial_snake_length
            )
            state.snakes.append(snake)

        food_count = (
            override.food_count
            if override.food_count is not None
            else initial_food_count(total, state.difficulty_level, settings)
        )
        state.foods = spawn_food(food_count, state, ctx)

        state.rebuild_board()
        state.tick_count = 0
        state.last_auto_food_spawn_tick = 0
        state.level_time_left = settings.level_time_limit
        state.level_complete = False
        state.game_over = False
        logger.debug(
            "level %d ready: %dx%d, %d walls, %d snakes, %d food",
            state.level,
            state.width,
            state.height,
            len(state.walls),
            len(state.snakes),
            len(state.foods),
        )

    def new_level(self, config: GameConfig, level: int = 1) -> GameState:
        state = self.create_game_state(config, level)
        self.init_level(state, config)
        return state

    def create_snake(
        self,
        snake_id: int,
        name: str,
        head: Position,
        direction: Direction,
        is_bot: bool,
        length: int | None = None,
    ) -> Snake:
        if length is None:
            length = self.context.settings.initial_snake_length
        return Snake(
            snake_id=snake_id,
            name=name,
            segments=initial_segments(head, direction, length),
            direction=direction,
            is_bot=is_bot,
        )

    def process_tick(self, state: GameState) -> TickResult:
        """Advance *state* by one tick; a terminal state is left untouched."""
        if state.is_terminal:
            return TickResult()
        events: list[DomainEvent] = []
        state.tick_count += 1
        run_tick_pipeline(state, self.context_for_level(state.level), events)
        return TickResult(tuple(events))

    def advance_to_next_level(self, state: GameState, config: GameConfig) -> GameState:
        """Build the next level, carrying score and levels won by snake index."""
        next_state = self.new_level(config, state.level + 1)
        for previous, current in zip(state.snakes, next_state.snakes):
            current.score = previous.score
            current.levels_won = previous.levels_won
        return next_state


DirectionChooser = Callable[[GameState, EngineContext], Mapping[int, Direction]]


class GameSession:
    """Drives one game across levels: bot decisions, ticks and the level clock.

    *bot_chooser* returns headings keyed by snake id; when omitted, bots keep
    their current heading.
    """

    def __init__(
        self,
        engine: GameEngine,
        config: GameConfig,
        level: int = 1,
        bot_chooser: DirectionChooser | None = None,
    ) -> None:
        self.engine = engine
        self.config = config
        self.bot_chooser = bot_chooser
        self.state = engine.new_level(config, level)

    @property
    def settings(self) -> GameSettings:
        return self.engine.context_for_level(self.state.level).settings

    def step(self, player_directions: Mapping[int, Direction] | None = None) -> TickResult:
        """Apply queued headings, run one tick and update the level clock."""
        state = self.state
        if state.is_terminal:
            return TickResult()
        for snake_id, direction in (player_directions or {}).items():
            snake = state.snake_by_id(snake_id)
            if snake is not None and snake.alive and not snake.is_bot:
                snake.apply_direction(direction)
        if self.bot_chooser is not None:
            ctx = self.engine.context_for_level(state.level)
            for snake_id, direction in self.bot_chooser(state, ctx).items():
                snake = state.snake_by_id(snake_id)
                if snake is not None and snake.alive:
                    snake.apply_direction(direction)
        sync_level_clock(state, self.settings, state.tick_count + 1)
        return self.engine.process_tick(state)

    def run_level(self, max_ticks: int) -> list[TickResult]:
        """Step until the level ends or *max_ticks* ticks have run."""
        results: list[TickResult] = []
        while not self.state.is_terminal and self.state.tick_count < max_ticks:
            results.append(self.step())
        return results

    def should_auto_continue(self) -> bool:
        """Survival mode moves a lone surviving snake on without a pause."""
        state = self.state
        return (
            state.level_complete
            and state.game_mode is GameMode.SURVIVAL
            and len(state.snakes) == 1
            and state.snakes[0].alive
        )

    def can_advance(self) -> bool:
        return self.state.level_complete and can_advance(self.state)

    def advance(self) -> GameState:
        """Move on to the next level; otherwise the current state is kept."""
        if not self.can_advance():
            logger.debug("advance ignored at level %d: level not complete or no survivor", self.state.level)
            return self.state
        self.state = self.engine.advance_to_next_level(self.state, self.config)
        return self.state

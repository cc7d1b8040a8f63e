"""Configuration dataclasses for the simulation core and the arena runner.

All frozen dataclasses that parameterise a game (settings table, level
overrides, bot skill profiles, game setup) and arena runs live here.
Settings are immutable: per-level patches produce a new instance.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from enum import Enum

from snake_arena.config import constants as C

__all__ = [
    "ArenaBatchConfig",
    "ArenaParticipant",
    "ArenaRunConfig",
    "BOT_PROFILE_IDS",
    "BotProfileSettings",
    "GameConfig",
    "GameMode",
    "GameSettings",
    "LevelOverride",
    "default_bot_profiles",
]

BOT_PROFILE_IDS: tuple[str, ...] = ("rookie", "basic", "solid", "wise")
"""Skill tiers, weakest first."""


class GameMode(Enum):
    """Session flavour chosen at the menu."""

    CLASSIC = "classic"
    SURVIVAL = "survival"


# ---------------------------------------------------------------------------
# Bot skill profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BotProfileSettings:
    """Tunable weights of the greedy board evaluator for one skill tier."""

    trap_penalty: float
    area_weight: float
    escape_weight: float
    food_weight: float
    immediate_eat_weight: float
    fear_weight: float
    long_snake_threshold: int
    long_snake_food_penalty: float
    mistake_period: int
    bad_move_bias: float

    def __post_init__(self) -> None:
        if self.trap_penalty < 0:
            raise ValueError("trap_penalty must be >= 0")
        if self.long_snake_threshold < 1:
            raise ValueError("long_snake_threshold must be >= 1")
        if not 0.0 <= self.long_snake_food_penalty <= 1.0:
            raise ValueError("long_snake_food_penalty must be in [0.0, 1.0]")
        if self.mistake_period < 0:
            raise ValueError("mistake_period must be >= 0")
        if self.bad_move_bias < 0:
            raise ValueError("bad_move_bias must be >= 0")


def default_bot_profiles() -> dict[str, BotProfileSettings]:
    """Return the built-in rookie/basic/solid/wise profiles."""
    return {
        "rookie": BotProfileSettings(
            trap_penalty=5.0,
            area_weight=0.2,
            escape_weight=2.0,
            food_weight=30.0,
            immediate_eat_weight=10.0,
            fear_weight=0.0,
            long_snake_threshold=30,
            long_snake_food_penalty=0.5,
            mistake_period=4,
            bad_move_bias=1.0,
        ),
        "basic": BotProfileSettings(
            trap_penalty=15.0,
            area_weight=0.5,
            escape_weight=4.0,
            food_weight=45.0,
            immediate_eat_weight=20.0,
            fear_weight=4.0,
            long_snake_threshold=40,
            long_snake_food_penalty=0.4,
            mistake_period=7,
            bad_move_bias=0.7,
        ),
        "solid": BotProfileSettings(
            trap_penalty=30.0,
            area_weight=0.8,
            escape_weight=5.0,
            food_weight=55.0,
            immediate_eat_weight=30.0,
            fear_weight=8.0,
            long_snake_threshold=50,
            long_snake_food_penalty=0.35,
            mistake_period=13,
            bad_move_bias=0.4,
        ),
        "wise": BotProfileSettings(
            trap_penalty=40.0,
            area_weight=1.0,
            escape_weight=6.0,
            food_weight=60.0,
            immediate_eat_weight=40.0,
            fear_weight=10.0,
            long_snake_threshold=60,
            long_snake_food_penalty=0.3,
            mistake_period=0,
            bad_move_bias=0.0,
        ),
    }


# ---------------------------------------------------------------------------
# Level overrides
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LevelOverride:
    """Sparse per-level patch over formula-derived generation parameters.

    ``settings`` patches arbitrary ``GameSettings`` fields for that level only.
    """

    wall_clusters: int | None = None
    wall_length: int | None = None
    food_count: int | None = None
    settings: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("wall_clusters", "wall_length", "food_count"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} override must be >= 0")
        unknown = set(self.settings) - _OVERRIDABLE_FIELDS
        if unknown:
            raise ValueError(f"unknown settings override keys: {', '.join(sorted(unknown))}")


# ---------------------------------------------------------------------------
# Settings table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GameSettings:
    """Flat table of tunable coefficients read by every engine system."""

    # Snake
    hunger_threshold: int = C.HUNGER_THRESHOLD
    min_snake_length: int = C.MIN_SNAKE_LENGTH
    initial_snake_length: int = C.INITIAL_SNAKE_LENGTH

    # Food lifecycle
    food_young_age: int = C.FOOD_YOUNG_AGE
    food_adult_age: int = C.FOOD_ADULT_AGE
    food_max_age: int = C.FOOD_MAX_AGE
    food_min_distance: int = C.FOOD_MIN_DISTANCE

    # Food reproduction
    reproduction_min_cooldown: int = C.REPRODUCTION_MIN_COOLDOWN
    reproduction_probability_base: float = C.REPRODUCTION_PROBABILITY_BASE
    max_reproductions: int = C.MAX_REPRODUCTIONS
    neighbor_reproduction_radius: int = C.NEIGHBOR_REPRODUCTION_RADIUS
    neighbor_reproduction_penalty: float = C.NEIGHBOR_REPRODUCTION_PENALTY
    max_reproduction_neighbors: int = C.MAX_REPRODUCTION_NEIGHBORS

    # Food rewards and kinds
    adult_apple_points: int = C.ADULT_APPLE_POINTS
    adult_apple_growth: int = C.ADULT_APPLE_GROWTH
    rabbit_from_level: int = C.RABBIT_FROM_LEVEL
    auto_replenish_food: bool = True

    # Food count formula
    food_count_per_snake_coeff: float = C.FOOD_COUNT_PER_SNAKE_COEFF
    food_count_base: float = C.FOOD_COUNT_BASE

    # Walls
    wall_cluster_coeff: float = C.WALL_CLUSTER_COEFF
    wall_cluster_base: float = C.WALL_CLUSTER_BASE
    wall_length_coeff: float = C.WALL_LENGTH_COEFF
    wall_length_base: float = C.WALL_LENGTH_BASE
    wall_branch_probability: float = C.WALL_BRANCH_PROBABILITY
    wall_max_attempts: int = C.WALL_MAX_ATTEMPTS

    # Scoring
    target_score_coeff: float = C.TARGET_SCORE_COEFF
    target_score_base: float = C.TARGET_SCORE_BASE

    # Board and timing
    base_width: int = C.BASE_WIDTH
    base_height: int = C.BASE_HEIGHT
    level_size_increment: int = C.LEVEL_SIZE_INCREMENT
    level_time_limit: int = C.LEVEL_TIME_LIMIT
    tick_interval_ms: int = C.TICK_INTERVAL_MS

    # Bot vision
    vision_size: int = C.VISION_SIZE
    obstacle_signal_close: int = C.OBSTACLE_SIGNAL_CLOSE
    obstacle_signal_decay: int = C.OBSTACLE_SIGNAL_DECAY
    food_signal_close: int = C.FOOD_SIGNAL_CLOSE
    food_signal_decay: int = C.FOOD_SIGNAL_DECAY
    food_signal_min: int = C.FOOD_SIGNAL_MIN

    # Colors
    color_bg: str = "#000000"
    color_grid: str = "#cccccc"
    color_wall: str = "#FFFFFF"
    color_food_young: str = "#FF8888"
    color_food_adult: str = "#FF0000"
    color_food_old: str = "#880000"
    color_head_stroke: str = "#FFFFFF"
    snake_colors: tuple[str, ...] = (
        "#00FF00",
        "#00CCFF",
        "#FFFF00",
        "#FF00FF",
        "#FF8800",
        "#88FF88",
    )

    bot_profiles: Mapping[str, BotProfileSettings] = field(default_factory=default_bot_profiles)
    level_overrides: Mapping[int, LevelOverride] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.base_width < 5 or self.base_height < 5:
            raise ValueError("base board dimensions must be >= 5")
        if self.level_size_increment < 0:
            raise ValueError("level_size_increment must be >= 0")
        if self.hunger_threshold < 1:
            raise ValueError("hunger_threshold must be >= 1")
        if self.min_snake_length < 1:
            raise ValueError("min_snake_length must be >= 1")
        if self.initial_snake_length < 1:
            raise ValueError("initial_snake_length must be >= 1")
        if not 0 <= self.food_young_age <= self.food_adult_age:
            raise ValueError("food ages must satisfy 0 <= food_young_age <= food_adult_age")
        if self.food_min_distance < 1:
            raise ValueError("food_min_distance must be >= 1")
        if self.food_max_age < 1:
            raise ValueError("food_max_age must be >= 1")
        if self.reproduction_min_cooldown < 0:
            raise ValueError("reproduction_min_cooldown must be >= 0")
        if self.reproduction_probability_base < 0:
            raise ValueError("reproduction_probability_base must be >= 0")
        if self.max_reproductions < 0:
            raise ValueError("max_reproductions must be >= 0")
        if self.neighbor_reproduction_radius < 0:
            raise ValueError("neighbor_reproduction_radius must be >= 0")
        if self.neighbor_reproduction_penalty < 0:
            raise ValueError("neighbor_reproduction_penalty must be >= 0")
        if self.adult_apple_points < 0 or self.adult_apple_growth < 0:
            raise ValueError("adult apple rewards must be >= 0")
        if not 0.0 <= self.wall_branch_probability <= 1.0:
            raise ValueError("wall_branch_probability must be in [0.0, 1.0]")
        if self.wall_max_attempts < 1:
            raise ValueError("wall_max_attempts must be >= 1")
        if self.level_time_limit < 0:
            raise ValueError("level_time_limit must be >= 0")
        if self.tick_interval_ms < 1:
            raise ValueError("tick_interval_ms must be >= 1")
        if self.vision_size < 1:
            raise ValueError("vision_size must be >= 1")
        missing = [pid for pid in BOT_PROFILE_IDS if pid not in self.bot_profiles]
        if missing:
            raise ValueError(f"bot_profiles missing tiers: {', '.join(missing)}")
        if any(level < 1 for level in self.level_overrides):
            raise ValueError("level_overrides keys must be >= 1")

    def level_override(self, level: int) -> LevelOverride:
        """Return the override for *level*, or an empty one."""
        return self.level_overrides.get(level) or LevelOverride()

    def for_level(self, level: int) -> GameSettings:
        """Return settings with the level's ``settings`` patch applied."""
        patch = self.level_override(level).settings
        if not patch:
            return self
        return replace(self, **patch)  # type: ignore[arg-type]

    def board_size(self, level: int) -> tuple[int, int]:
        """Return ``(width, height)`` of the board at *level*."""
        growth = (level - 1) * self.level_size_increment
        return self.base_width + growth, self.base_height + growth


_OVERRIDABLE_FIELDS = frozenset(
    f.name for f in fields(GameSettings) if f.name not in {"bot_profiles", "level_overrides"}
)


# ---------------------------------------------------------------------------
# Game setup
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GameConfig:
    """Menu-level setup consumed once per level initialisation."""

    player_count: int = 1
    bot_count: int = 0
    player_names: tuple[str, ...] = ()
    difficulty_level: int = 1
    game_mode: GameMode = GameMode.CLASSIC

    def __post_init__(self) -> None:
        if not 0 <= self.player_count <= 2:
            raise ValueError("player_count must be in [0, 2]")
        if not 0 <= self.bot_count <= C.MAX_START_SLOTS:
            raise ValueError(f"bot_count must be in [0, {C.MAX_START_SLOTS}]")
        total = self.player_count + self.bot_count
        if not 1 <= total <= C.MAX_START_SLOTS:
            raise ValueError(f"total snake count must be in [1, {C.MAX_START_SLOTS}]")
        if not 1 <= self.difficulty_level <= 10:
            raise ValueError("difficulty_level must be in [1, 10]")

    @property
    def snake_count(self) -> int:
        return self.player_count + self.bot_count


# ---------------------------------------------------------------------------
# Arena
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArenaParticipant:
    """One arena seat: display name plus the algorithm steering it."""

    name: str
    algorithm_id: str = C.DEFAULT_ALGORITHM_ID


@dataclass(frozen=True)
class ArenaRunConfig:
    """Parameters of a single seeded headless arena run."""

    participants: tuple[ArenaParticipant, ...]
    max_ticks: int = 1000
    level: int = 1
    difficulty_level: int = 1
    game_mode: GameMode = GameMode.CLASSIC
    seed: int = 1
    settings: GameSettings = field(default_factory=GameSettings)

    def __post_init__(self) -> None:
        if not self.participants:
            raise ValueError("participants must not be empty")
        if len(self.participants) > C.MAX_START_SLOTS:
            raise ValueError(f"at most {C.MAX_START_SLOTS} participants are supported")
        if self.max_ticks < 1:
            raise ValueError("max_ticks must be >= 1")
        if self.level < 1:
            raise ValueError("level must be >= 1")
        if not 1 <= self.difficulty_level <= 10:
            raise ValueError("difficulty_level must be in [1, 10]")

    def game_config(self) -> GameConfig:
        """Arena seats are all bots; there are no human players."""
        return GameConfig(
            player_count=0,
            bot_count=len(self.participants),
            difficulty_level=self.difficulty_level,
            game_mode=self.game_mode,
        )


@dataclass(frozen=True)
class ArenaBatchConfig:
    """Repeated arena runs over consecutive seeds starting at ``seed_base``."""

    participants: tuple[ArenaParticipant, ...]
    simulations: int = 1
    max_ticks: int = 1000
    seed_base: int = 1
    level: int = 1
    difficulty_level: int = 1
    game_mode: GameMode = GameMode.CLASSIC
    settings: GameSettings = field(default_factory=GameSettings)
    workers: int = 1

    def __post_init__(self) -> None:
        if self.simulations < 1:
            raise ValueError("simulations must be >= 1")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        # Validate the shared per-run fields once up front.
        self.run_config(self.seed_base)

    def run_config(self, seed: int) -> ArenaRunConfig:
        """Build the per-run config for *seed*."""
        return ArenaRunConfig(
            participants=self.participants,
            max_ticks=self.max_ticks,
            level=self.level,
            difficulty_level=self.difficulty_level,
            game_mode=self.game_mode,
            seed=seed,
            settings=self.settings,
        )

    def seeds(self) -> list[int]:
        return [self.seed_base + i for i in range(self.simulations)]

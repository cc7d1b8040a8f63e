"""Configuration layer: constants, typed config dataclasses and JSON loading."""

from snake_arena.config.loader import load_settings, settings_from_mapping
from snake_arena.config.types import (
    BOT_PROFILE_IDS,
    ArenaBatchConfig,
    ArenaParticipant,
    ArenaRunConfig,
    BotProfileSettings,
    GameConfig,
    GameMode,
    GameSettings,
    LevelOverride,
    default_bot_profiles,
)

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
    "load_settings",
    "settings_from_mapping",
]

"""JSON loading and strict value coercion for ``GameSettings``.

Unknown keys are rejected rather than ignored so that typos in a config
file surface immediately instead of silently running with defaults.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import MISSING, fields, replace
from pathlib import Path

from snake_arena.config.types import BotProfileSettings, GameSettings, LevelOverride

_NESTED_FIELDS = {"bot_profiles", "level_overrides", "snake_colors"}


def coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from None
    raise ValueError(f"{key} must be an integer value")


def coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{key} must be a float value, got {raw!r}") from None
    raise ValueError(f"{key} must be a float value")


def coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _coerce_like(default: object, raw: object, key: str) -> object:
    """Coerce *raw* to the type of a scalar field default."""
    if isinstance(default, bool):
        return coerce_bool(raw, key)
    if isinstance(default, int):
        return coerce_int(raw, key)
    if isinstance(default, float):
        return coerce_float(raw, key)
    return coerce_str(raw, key)


def _require_mapping(raw: object, key: str) -> Mapping[str, object]:
    if not isinstance(raw, Mapping):
        raise ValueError(f"{key} must be a JSON object")
    return raw


def _scalar_defaults() -> dict[str, object]:
    defaults: dict[str, object] = {}
    for f in fields(GameSettings):
        if f.name in _NESTED_FIELDS:
            continue
        if f.default is MISSING:
            raise AssertionError(f"scalar settings field {f.name} needs a default")
        defaults[f.name] = f.default
    return defaults


_SCALAR_DEFAULTS = _scalar_defaults()


def coerce_settings_patch(raw: Mapping[str, object], key: str = "settings") -> dict[str, object]:
    """Coerce a flat ``field -> value`` patch of scalar ``GameSettings`` fields."""
    patch: dict[str, object] = {}
    for name, value in raw.items():
        if name == "snake_colors":
            patch[name] = _coerce_colors(value, f"{key}.{name}")
            continue
        if name not in _SCALAR_DEFAULTS:
            raise ValueError(f"unknown settings key: {key}.{name}")
        patch[name] = _coerce_like(_SCALAR_DEFAULTS[name], value, f"{key}.{name}")
    return patch


def _coerce_colors(raw: object, key: str) -> tuple[str, ...]:
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ValueError(f"{key} must be a non-empty list of color strings")
    return tuple(coerce_str(item, f"{key}[{i}]") for i, item in enumerate(raw))


def _coerce_bot_profiles(
    raw: object, base: Mapping[str, BotProfileSettings]
) -> dict[str, BotProfileSettings]:
    """Merge profile patches over *base*; new profile ids must give every field."""
    profiles = dict(base)
    for profile_id, body in _require_mapping(raw, "bot_profiles").items():
        key = f"bot_profiles.{profile_id}"
        body_map = _require_mapping(body, key)
        known = {f.name: f for f in fields(BotProfileSettings)}
        unknown = set(body_map) - set(known)
        if unknown:
            raise ValueError(f"unknown keys in {key}: {', '.join(sorted(unknown))}")
        values: dict[str, object] = {}
        for name, value in body_map.items():
            if name in {"long_snake_threshold", "mistake_period"}:
                values[name] = coerce_int(value, f"{key}.{name}")
            else:
                values[name] = coerce_float(value, f"{key}.{name}")
        existing = profiles.get(profile_id)
        if existing is not None:
            profiles[profile_id] = replace(existing, **values)  # type: ignore[arg-type]
        else:
            missing = set(known) - set(values)
            if missing:
                raise ValueError(f"{key} is missing fields: {', '.join(sorted(missing))}")
            profiles[profile_id] = BotProfileSettings(**values)  # type: ignore[arg-type]
    return profiles


def _coerce_level_overrides(raw: object) -> dict[int, LevelOverride]:
    overrides: dict[int, LevelOverride] = {}
    for level_key, body in _require_mapping(raw, "level_overrides").items():
        level = coerce_int(level_key, "level_overrides key")
        key = f"level_overrides.{level}"
        body_map = _require_mapping(body, key)
        unknown = set(body_map) - {"wall_clusters", "wall_length", "food_count", "settings"}
        if unknown:
            raise ValueError(f"unknown keys in {key}: {', '.join(sorted(unknown))}")
        counts: dict[str, int | None] = {}
        for name in ("wall_clusters", "wall_length", "food_count"):
            value = body_map.get(name)
            counts[name] = None if value is None else coerce_int(value, f"{key}.{name}")
        settings_raw = body_map.get("settings", {})
        patch = coerce_settings_patch(_require_mapping(settings_raw, f"{key}.settings"), key)
        overrides[level] = LevelOverride(settings=patch, **counts)
    return overrides


def settings_from_mapping(raw: Mapping[str, object]) -> GameSettings:
    """Build ``GameSettings`` from a decoded JSON object, defaults filling gaps."""
    raw = _require_mapping(raw, "settings")
    scalar = {k: v for k, v in raw.items() if k not in _NESTED_FIELDS}
    kwargs: dict[str, object] = coerce_settings_patch(scalar)
    if "snake_colors" in raw:
        kwargs["snake_colors"] = _coerce_colors(raw["snake_colors"], "snake_colors")
    base = GameSettings()
    if "bot_profiles" in raw:
        kwargs["bot_profiles"] = _coerce_bot_profiles(raw["bot_profiles"], base.bot_profiles)
    if "level_overrides" in raw:
        kwargs["level_overrides"] = _coerce_level_overrides(raw["level_overrides"])
    return replace(base, **kwargs)  # type: ignore[arg-type]


def load_settings(path: Path) -> GameSettings:
    """Read a JSON settings file.

    Raises:
        FileNotFoundError: when *path* does not exist.
        json.JSONDecodeError: when the file is not valid JSON.
        ValueError: when the content does not describe valid settings.
    """
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return settings_from_mapping(payload)

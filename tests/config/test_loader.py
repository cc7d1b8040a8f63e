"""Tests for snake_arena.config.loader module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from snake_arena.config.loader import (
    coerce_bool,
    coerce_float,
    coerce_int,
    coerce_str,
    load_settings,
    settings_from_mapping,
)


class TestCoercion:
    def test_bool(self) -> None:
        assert coerce_bool(True, "k") is True
        assert coerce_bool("yes", "k") is True
        assert coerce_bool(" Off ", "k") is False
        with pytest.raises(ValueError):
            coerce_bool("maybe", "k")
        with pytest.raises(ValueError):
            coerce_bool(1, "k")

    def test_int(self) -> None:
        assert coerce_int(7, "k") == 7
        assert coerce_int("7", "k") == 7
        assert coerce_int(2.0, "k") == 2
        with pytest.raises(ValueError):
            coerce_int(2.5, "k")
        with pytest.raises(ValueError):
            coerce_int(True, "k")
        with pytest.raises(ValueError):
            coerce_int("seven", "k")

    def test_float(self) -> None:
        assert coerce_float(1, "k") == 1.0
        assert coerce_float("0.25", "k") == 0.25
        with pytest.raises(ValueError):
            coerce_float(False, "k")

    def test_str(self) -> None:
        assert coerce_str("a", "k") == "a"
        assert coerce_str(Path("x/y"), "k") == str(Path("x/y"))
        with pytest.raises(ValueError):
            coerce_str(None, "k")


class TestSettingsFromMapping:
    def test_empty_mapping_gives_defaults(self) -> None:
        settings = settings_from_mapping({})
        assert settings.hunger_threshold == 15

    def test_scalars_are_coerced(self) -> None:
        settings = settings_from_mapping(
            {"hunger_threshold": "20", "auto_replenish_food": "false", "food_count_base": 4}
        )
        assert settings.hunger_threshold == 20
        assert settings.auto_replenish_food is False
        assert settings.food_count_base == 4.0

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="hunger_treshold"):
            settings_from_mapping({"hunger_treshold": 3})

    def test_invalid_value_rejected(self) -> None:
        with pytest.raises(ValueError):
            settings_from_mapping({"hunger_threshold": 0})

    def test_snake_colors(self) -> None:
        settings = settings_from_mapping({"snake_colors": ["#FF0000", "#0000FF"]})
        assert settings.snake_colors == ("#FF0000", "#0000FF")
        with pytest.raises(ValueError):
            settings_from_mapping({"snake_colors": []})

    def test_bot_profile_patch_merges(self) -> None:
        settings = settings_from_mapping({"bot_profiles": {"wise": {"food_weight": 99}}})
        wise = settings.bot_profiles["wise"]
        assert wise.food_weight == 99.0
        assert wise.trap_penalty == 40.0

    def test_new_bot_profile_needs_all_fields(self) -> None:
        with pytest.raises(ValueError, match="missing"):
            settings_from_mapping({"bot_profiles": {"custom": {"food_weight": 1}}})

    def test_bot_profile_unknown_field_rejected(self) -> None:
        with pytest.raises(ValueError):
            settings_from_mapping({"bot_profiles": {"wise": {"courage": 1}}})

    def test_level_overrides(self) -> None:
        settings = settings_from_mapping(
            {"level_overrides": {"2": {"wall_clusters": 0, "settings": {"food_max_age": 50}}}}
        )
        override = settings.level_override(2)
        assert override.wall_clusters == 0
        assert override.food_count is None
        assert settings.for_level(2).food_max_age == 50

    def test_level_override_unknown_key_rejected(self) -> None:
        with pytest.raises(ValueError):
            settings_from_mapping({"level_overrides": {"1": {"walls": 3}}})


class TestLoadSettings:
    def test_reads_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"base_width": 30, "base_height": 25}))
        settings = load_settings(path)
        assert settings.board_size(1) == (30, 25)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            load_settings(path)

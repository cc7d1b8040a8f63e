"""CLI entrypoint for arena batches.

This module owns CLI argument parsing and dispatch. Domain logic lives in:

- ``snake_arena.config``          – settings dataclasses and JSON loading
- ``snake_arena.arena.runner``    – seeded runs and aggregation
- ``snake_arena.arena.persistence`` – Parquet/JSON artifacts
- ``snake_arena.viz.render``      – optional PNG output
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Mapping
from pathlib import Path

from snake_arena.arena.persistence import persist_arena_batch
from snake_arena.arena.runner import run_arena_batch, run_arena_simulation
from snake_arena.config.loader import (
    coerce_bool,
    coerce_int,
    coerce_str,
    load_settings,
    settings_from_mapping,
)
from snake_arena.config.types import ArenaBatchConfig, ArenaParticipant, GameMode, GameSettings
from snake_arena.heuristic.registry import algorithm_options, get_algorithm
from snake_arena.io.paths import algorithm_chart_path, final_board_png_path

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

DEFAULT_PARTICIPANTS = "Wise:wise,Solid:solid,Basic:basic,Rookie:rookie"
"""Participant list used when neither CLI nor config file name any."""

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _get_val(cli_val: object, key: str, file_cfg: Mapping[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: Mapping[str, object], default: bool) -> bool:
    return coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: Mapping[str, object], default: int) -> int:
    return coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: Mapping[str, object], default: str) -> str:
    return coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _parse_participants(raw: object) -> tuple[ArenaParticipant, ...]:
    """Parse ``name:algorithm`` CSV or a JSON list of ``{name, algorithm_id}``."""
    if isinstance(raw, str):
        entries: list[tuple[str, str]] = []
        for part in (p.strip() for p in raw.split(",")):
            if not part:
                continue
            name, sep, algorithm_id = part.partition(":")
            entries.append((name.strip(), algorithm_id.strip() if sep else name.strip()))
    elif isinstance(raw, list):
        entries = []
        for i, item in enumerate(raw):
            if not isinstance(item, Mapping):
                raise ValueError(f"participants[{i}] must be an object")
            name = coerce_str(item.get("name", f"Bot {i + 1}"), f"participants[{i}].name")
            algorithm_id = coerce_str(
                item.get("algorithm_id", item.get("algorithm", name)), f"participants[{i}].algorithm_id"
            )
            entries.append((name, algorithm_id))
    else:
        raise ValueError("participants must be a string or a list of objects")

    if not entries:
        raise ValueError("participants must not be empty")
    participants = []
    for name, algorithm_id in entries:
        if not name:
            raise ValueError("participant names must not be empty")
        get_algorithm(algorithm_id, strict=True)
        participants.append(ArenaParticipant(name=name, algorithm_id=algorithm_id))
    return tuple(participants)


def _parse_game_mode(raw: str) -> GameMode:
    try:
        return GameMode(raw)
    except ValueError as exc:
        valid = ", ".join(mode.value for mode in GameMode)
        raise ValueError(f"game-mode must be one of {valid}") from exc


def _resolve_settings(cli_path: Path | None, file_cfg: Mapping[str, object]) -> GameSettings:
    """``--settings`` file, else an inline ``settings`` object, else defaults."""
    if cli_path is not None:
        return load_settings(cli_path)
    inline = file_cfg.get("settings")
    if inline is None:
        return GameSettings()
    if isinstance(inline, str):
        return load_settings(Path(inline))
    if not isinstance(inline, Mapping):
        raise ValueError("settings must be a JSON object or a path")
    return settings_from_mapping(inline)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run headless snake arena batches")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--settings", type=Path, default=None, help="JSON GameSettings file")
    parser.add_argument(
        "--participants",
        type=str,
        default=None,
        help="Comma-separated name:algorithm pairs, e.g. 'A:wise,B:rookie'",
    )
    parser.add_argument("--simulations", type=int, default=None)
    parser.add_argument("--max-ticks", type=int, default=None)
    parser.add_argument("--seed-base", type=int, default=None)
    parser.add_argument("--level", type=int, default=None)
    parser.add_argument("--difficulty", type=int, default=None)
    parser.add_argument(
        "--game-mode",
        type=str,
        choices=[mode.value for mode in GameMode],
        default=None,
    )
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--trace",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Also write a per-tick trace Parquet file",
    )
    parser.add_argument(
        "--render",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Render the first run's final board and the algorithm chart as PNG",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    parser.add_argument(
        "--list-algorithms",
        action="store_true",
        help="Print available algorithm ids and exit",
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for arena batches.

    Supports ``--config path/to/config.json`` for reproducibility. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.list_algorithms:
        print(json.dumps(dict(algorithm_options()), ensure_ascii=False, indent=2))
        return

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            loaded = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(loaded, dict):
            parser.error(f"Config file must contain a JSON object: {args.config}")
        file_cfg = loaded

    try:
        log_level = _get_str(args.log_level, "log_level", file_cfg, "INFO").upper()
        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        settings = _resolve_settings(args.settings, file_cfg)
        participants = _parse_participants(
            _get_val(args.participants, "participants", file_cfg, DEFAULT_PARTICIPANTS)
        )
        out_dir = Path(_get_str(args.out_dir, "out_dir", file_cfg, "data/arena"))
        record_trace = _get_bool(args.trace, "trace", file_cfg, False)
        render = _get_bool(args.render, "render", file_cfg, False)
        batch_config = ArenaBatchConfig(
            participants=participants,
            simulations=_get_int(args.simulations, "simulations", file_cfg, 10),
            max_ticks=_get_int(args.max_ticks, "max_ticks", file_cfg, 1000),
            seed_base=_get_int(args.seed_base, "seed_base", file_cfg, 1),
            level=_get_int(args.level, "level", file_cfg, 1),
            difficulty_level=_get_int(args.difficulty, "difficulty", file_cfg, 1),
            game_mode=_parse_game_mode(
                _get_str(args.game_mode, "game_mode", file_cfg, GameMode.CLASSIC.value)
            ),
            settings=settings,
            workers=_get_int(args.workers, "workers", file_cfg, 1),
        )
    except FileNotFoundError as exc:
        parser.error(f"Settings file not found: {exc.filename}")
    except json.JSONDecodeError as exc:
        parser.error(f"Settings file is not valid JSON: {exc}")
    except ValueError as exc:
        parser.error(str(exc))

    result = run_arena_batch(batch_config, record_trace=record_trace)
    written = persist_arena_batch(result, out_dir)

    if render:
        from snake_arena.viz.render import render_algorithm_summary

        render_algorithm_summary(result.summary_by_algorithm, algorithm_chart_path(out_dir))
        written["algorithm_chart"] = algorithm_chart_path(out_dir)
        first_seed = batch_config.seed_base
        board_path = final_board_png_path(out_dir, first_seed)
        _render_final_board(batch_config, first_seed, board_path)
        written["final_board"] = board_path

    summary = result.to_summary_dict()
    summary["artifacts"] = {name: str(path) for name, path in written.items()}
    print(json.dumps(summary, ensure_ascii=False, indent=2))


def _render_final_board(config: ArenaBatchConfig, seed: int, output_path: Path) -> None:
    """Replay *seed* and render its final board."""
    from snake_arena.viz.render import render_board

    run_config = config.run_config(seed)
    state = run_arena_simulation(run_config, keep_state=True).final_state
    if state is not None:
        render_board(state, run_config.settings.for_level(run_config.level), output_path)


if __name__ == "__main__":
    main()

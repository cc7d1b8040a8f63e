"""Parquet/JSON artifacts for an arena batch."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from snake_arena.arena.runner import ArenaBatchResult, ArenaRunResult
from snake_arena.io.paths import (
    algorithm_summary_path,
    arena_runs_path,
    arena_summary_json_path,
    logs_dir,
    tick_trace_path,
)
from snake_arena.io.schemas import (
    ALGORITHM_SUMMARY_SCHEMA,
    ARENA_RUNS_SCHEMA,
    ARENA_SCHEMA_VERSION,
    TICK_TRACE_SCHEMA,
)

logger = logging.getLogger(__name__)


def run_rows(runs: tuple[ArenaRunResult, ...] | list[ArenaRunResult]) -> list[dict[str, object]]:
    """Flatten runs into one row per (run, snake)."""
    rows: list[dict[str, object]] = []
    for run in runs:
        for snake in run.snakes:
            rows.append(
                {
                    "schema_version": ARENA_SCHEMA_VERSION,
                    "seed": run.seed,
                    "ticks_executed": run.ticks_executed,
                    "elapsed_ms": run.elapsed_ms,
                    "level_complete": run.level_complete,
                    "game_over": run.game_over,
                    "snake_id": snake.snake_id,
                    "name": snake.name,
                    "algorithm_id": snake.algorithm_id,
                    "score": snake.score,
                    "levels_won": snake.levels_won,
                    "survived_ticks": snake.survived_ticks,
                    "survived_ms": snake.survived_ms,
                    "alive_at_end": snake.alive_at_end,
                    "death_reason": snake.death_reason,
                }
            )
    return rows


def summary_rows(result: ArenaBatchResult) -> list[dict[str, object]]:
    return [
        {
            "schema_version": ARENA_SCHEMA_VERSION,
            "algorithm_id": algorithm_id,
            "runs": s.runs,
            "avg_score": s.avg_score,
            "avg_survived_ticks": s.avg_survived_ticks,
            "avg_survived_ms": s.avg_survived_ms,
            "survival_rate": s.survival_rate,
        }
        for algorithm_id, s in result.summary_by_algorithm.items()
    ]


def persist_arena_batch(result: ArenaBatchResult, out_dir: Path) -> dict[str, Path]:
    """Write runs, per-algorithm summary, JSON summary and any tick trace.

    Returns the written paths keyed by artifact name.
    """
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}

    runs_path = arena_runs_path(out_dir)
    pq.write_table(pa.Table.from_pylist(run_rows(result.runs), schema=ARENA_RUNS_SCHEMA), runs_path)
    written["arena_runs"] = runs_path

    summary_path = algorithm_summary_path(out_dir)
    pq.write_table(
        pa.Table.from_pylist(summary_rows(result), schema=ALGORITHM_SUMMARY_SCHEMA), summary_path
    )
    written["algorithm_summary"] = summary_path

    json_path = arena_summary_json_path(out_dir)
    json_path.write_text(json.dumps(result.to_summary_dict(), ensure_ascii=False, indent=2))
    written["arena_summary"] = json_path

    trace = [row for run in result.runs for row in run.trace]
    if trace:
        trace_path = tick_trace_path(out_dir)
        pq.write_table(pa.Table.from_pylist(trace, schema=TICK_TRACE_SCHEMA), trace_path)
        written["tick_trace"] = trace_path

    logger.info("wrote arena artifacts to %s", logs_dir(out_dir))
    return written

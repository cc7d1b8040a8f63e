"""Parquet schema definitions for arena artifacts.

All Arrow schemas used for persisting arena runs, per-algorithm summaries
and tick traces are centralised here so that writers and readers agree on
the same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

ARENA_SCHEMA_VERSION = 1

ARENA_RUNS_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("seed", pa.int64()),
        ("ticks_executed", pa.int64()),
        ("elapsed_ms", pa.int64()),
        ("level_complete", pa.bool_()),
        ("game_over", pa.bool_()),
        ("snake_id", pa.int64()),
        ("name", pa.string()),
        ("algorithm_id", pa.string()),
        ("score", pa.int64()),
        ("levels_won", pa.int64()),
        ("survived_ticks", pa.int64()),
        ("survived_ms", pa.int64()),
        ("alive_at_end", pa.bool_()),
        ("death_reason", pa.string()),
    ]
)

ALGORITHM_SUMMARY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("algorithm_id", pa.string()),
        ("runs", pa.int64()),
        ("avg_score", pa.float64()),
        ("avg_survived_ticks", pa.float64()),
        ("avg_survived_ms", pa.float64()),
        ("survival_rate", pa.float64()),
    ]
)

TICK_TRACE_SCHEMA = pa.schema(
    [
        ("seed", pa.int64()),
        ("tick", pa.int64()),
        ("snake_id", pa.int64()),
        ("head_x", pa.int64()),
        ("head_y", pa.int64()),
        ("length", pa.int64()),
        ("score", pa.int64()),
        ("alive", pa.bool_()),
        ("food_count", pa.int64()),
    ]
)

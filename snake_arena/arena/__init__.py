"""Arena layer: headless seeded runs, batch aggregation and artifacts."""

from snake_arena.arena.persistence import persist_arena_batch
from snake_arena.arena.runner import (
    AlgorithmSummary,
    ArenaBatchResult,
    ArenaRunResult,
    ArenaSnakeStats,
    aggregate_by_algorithm,
    run_arena_batch,
    run_arena_simulation,
)

__all__ = [
    "AlgorithmSummary",
    "ArenaBatchResult",
    "ArenaRunResult",
    "ArenaSnakeStats",
    "aggregate_by_algorithm",
    "persist_arena_batch",
    "run_arena_batch",
    "run_arena_simulation",
]

"""Headless arena: seeded runs of bot-only games and per-algorithm aggregation.

Each run owns a fresh ``GameState`` and ``EngineContext`` built from its
seed, so runs are independent and may execute in separate processes.
"""

from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import asdict, dataclass, field

from snake_arena.config.types import ArenaBatchConfig, ArenaRunConfig
from snake_arena.domain.events import SnakeDied, TickResult
from snake_arena.domain.state import GameState
from snake_arena.engine.context import EngineContext
from snake_arena.engine.game import GameEngine, sync_level_clock
from snake_arena.heuristic.registry import HeuristicAlgorithm, get_algorithm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArenaSnakeStats:
    snake_id: int
    name: str
    algorithm_id: str
    score: int
    levels_won: int
    survived_ticks: int
    survived_ms: int
    alive_at_end: bool
    death_reason: str | None


@dataclass(frozen=True)
class ArenaRunResult:
    seed: int
    ticks_executed: int
    elapsed_ms: int
    level_complete: bool
    game_over: bool
    snakes: tuple[ArenaSnakeStats, ...]
    trace: tuple[dict[str, object], ...] = field(default=(), compare=False, repr=False)
    final_state: GameState | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class AlgorithmSummary:
    runs: int
    avg_score: float
    avg_survived_ticks: float
    avg_survived_ms: float
    survival_rate: float


@dataclass(frozen=True)
class ArenaBatchResult:
    runs: tuple[ArenaRunResult, ...]
    summary_by_algorithm: dict[str, AlgorithmSummary]

    def to_summary_dict(self) -> dict[str, object]:
        """JSON-ready batch summary."""
        return {
            "simulations": len(self.runs),
            "seeds": [run.seed for run in self.runs],
            "mean_ticks_executed": (
                sum(run.ticks_executed for run in self.runs) / len(self.runs) if self.runs else 0.0
            ),
            "summary_by_algorithm": {
                algorithm_id: asdict(summary)
                for algorithm_id, summary in self.summary_by_algorithm.items()
            },
        }


# ---------------------------------------------------------------------------
# Single run
# ---------------------------------------------------------------------------


def _resolve_algorithms(config: ArenaRunConfig) -> list[HeuristicAlgorithm]:
    return [get_algorithm(p.algorithm_id) for p in config.participants]


def _trace_rows(seed: int, state: GameState) -> list[dict[str, object]]:
    return [
        {
            "seed": seed,
            "tick": state.tick_count,
            "snake_id": snake.snake_id,
            "head_x": snake.head.x if snake.segments else None,
            "head_y": snake.head.y if snake.segments else None,
            "length": len(snake.segments),
            "score": snake.score,
            "alive": snake.alive,
            "food_count": len(state.foods),
        }
        for snake in state.snakes
    ]


def _collect_death_ticks(result: TickResult, tick: int, death_ticks: dict[int, int]) -> None:
    for event in result.events:
        if isinstance(event, SnakeDied):
            death_ticks.setdefault(event.snake_id, tick)


def run_arena_simulation(
    config: ArenaRunConfig, record_trace: bool = False, keep_state: bool = False
) -> ArenaRunResult:
    """Play one seeded game until it ends or ``config.max_ticks`` ticks ran.

    Participant ``i`` steers snake ``i`` and lends it its name. With
    *keep_state* the final ``GameState`` is attached to the result.
    """
    engine = GameEngine(EngineContext.seeded(config.seed, config.settings))
    game_config = config.game_config()
    state = engine.new_level(game_config, config.level)
    settings = engine.context_for_level(config.level).settings
    algorithms = _resolve_algorithms(config)

    for snake, participant in zip(state.snakes, config.participants):
        snake.name = participant.name

    death_ticks: dict[int, int] = {}
    trace: list[dict[str, object]] = []
    while not state.is_terminal and state.tick_count < config.max_ticks:
        for snake, algorithm in zip(state.snakes, algorithms):
            if snake.alive:
                snake.apply_direction(algorithm.choose_direction(state, snake, settings))
        sync_level_clock(state, settings, state.tick_count + 1)
        result = engine.process_tick(state)
        _collect_death_ticks(result, state.tick_count, death_ticks)
        if record_trace:
            trace.extend(_trace_rows(config.seed, state))

    ticks = state.tick_count
    stats = tuple(
        ArenaSnakeStats(
            snake_id=snake.snake_id,
            name=snake.name,
            algorithm_id=algorithm.algorithm_id,
            score=snake.score,
            levels_won=snake.levels_won,
            survived_ticks=death_ticks.get(snake.snake_id, ticks),
            survived_ms=death_ticks.get(snake.snake_id, ticks) * settings.tick_interval_ms,
            alive_at_end=snake.alive,
            death_reason=snake.death_reason,
        )
        for snake, algorithm in zip(state.snakes, algorithms)
    )
    return ArenaRunResult(
        seed=config.seed,
        ticks_executed=ticks,
        elapsed_ms=ticks * settings.tick_interval_ms,
        level_complete=state.level_complete,
        game_over=state.game_over,
        snakes=stats,
        trace=tuple(trace),
        final_state=state if keep_state else None,
    )


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------


def aggregate_by_algorithm(runs: list[ArenaRunResult] | tuple[ArenaRunResult, ...]) -> dict[str, AlgorithmSummary]:
    """Average per-snake stats grouped by algorithm id, in first-seen order."""
    totals: dict[str, list[float]] = {}
    for run in runs:
        for snake in run.snakes:
            bucket = totals.setdefault(snake.algorithm_id, [0, 0.0, 0.0, 0.0, 0.0])
            bucket[0] += 1
            bucket[1] += snake.score
            bucket[2] += snake.survived_ticks
            bucket[3] += snake.survived_ms
            bucket[4] += 1 if snake.alive_at_end else 0
    return {
        algorithm_id: AlgorithmSummary(
            runs=int(count),
            avg_score=score / count,
            avg_survived_ticks=ticks / count,
            avg_survived_ms=ms / count,
            survival_rate=alive / count,
        )
        for algorithm_id, (count, score, ticks, ms, alive) in totals.items()
    }


def _run_seed(args: tuple[ArenaBatchConfig, int, bool]) -> ArenaRunResult:
    config, seed, record_trace = args
    return run_arena_simulation(config.run_config(seed), record_trace=record_trace)


def run_arena_batch(config: ArenaBatchConfig, record_trace: bool = False) -> ArenaBatchResult:
    """Run ``config.simulations`` games over seeds ``seed_base + i``.

    With ``workers > 1`` runs execute in a process pool; results stay in seed
    order either way.
    """
    jobs = [(config, seed, record_trace) for seed in config.seeds()]
    logger.info(
        "arena batch: %d simulations, %d participants, workers=%d",
        config.simulations,
        len(config.participants),
        config.workers,
    )
    if config.workers > 1 and len(jobs) > 1:
        max_workers = min(config.workers, len(jobs))
        with concurrent.futures.ProcessPoolExecutor(max_workers=max_workers) as executor:
            runs = list(executor.map(_run_seed, jobs))
    else:
        runs = []
        for job in jobs:
            runs.append(_run_seed(job))
            logger.info("seed %d finished after %d ticks", job[1], runs[-1].ticks_executed)

    summary = aggregate_by_algorithm(runs)
    for algorithm_id, s in summary.items():
        logger.info(
            "%s: avg_score=%.2f avg_survived_ticks=%.1f survival_rate=%.2f",
            algorithm_id,
            s.avg_score,
            s.avg_survived_ticks,
            s.survival_rate,
        )
    return ArenaBatchResult(runs=tuple(runs), summary_by_algorithm=summary)

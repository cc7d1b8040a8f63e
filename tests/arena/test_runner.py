"""Tests for snake_arena.arena.runner module."""

from __future__ import annotations

import pyarrow as pa

from snake_arena.arena.runner import (
    AlgorithmSummary,
    ArenaRunResult,
    ArenaSnakeStats,
    aggregate_by_algorithm,
    run_arena_batch,
    run_arena_simulation,
)
from snake_arena.config.types import (
    ArenaBatchConfig,
    ArenaParticipant,
    ArenaRunConfig,
    GameSettings,
)
from snake_arena.domain.state import GameState
from snake_arena.io.schemas import TICK_TRACE_SCHEMA

_PAIR = (ArenaParticipant("Alpha", "wise"), ArenaParticipant("Beta", "rookie"))


def _stats(
    snake_id: int, algorithm_id: str, score: int, ticks: int, alive: bool
) -> ArenaSnakeStats:
    return ArenaSnakeStats(
        snake_id=snake_id,
        name=f"s{snake_id}",
        algorithm_id=algorithm_id,
        score=score,
        levels_won=0,
        survived_ticks=ticks,
        survived_ms=ticks * 150,
        alive_at_end=alive,
        death_reason=None if alive else "starved",
    )


class TestRunArenaSimulation:
    def test_basic_run(self) -> None:
        result = run_arena_simulation(ArenaRunConfig(participants=_PAIR, max_ticks=30, seed=3))
        assert 1 <= result.ticks_executed <= 30
        assert result.elapsed_ms == result.ticks_executed * 150
        assert [s.name for s in result.snakes] == ["Alpha", "Beta"]
        assert [s.algorithm_id for s in result.snakes] == ["wise", "rookie"]
        assert all(s.survived_ticks <= result.ticks_executed for s in result.snakes)
        assert result.trace == ()
        assert result.final_state is None

    def test_same_seed_same_result(self) -> None:
        config = ArenaRunConfig(participants=_PAIR, max_ticks=25, seed=9)
        assert run_arena_simulation(config) == run_arena_simulation(config)

    def test_same_seed_same_tick_sequence(self) -> None:
        config = ArenaRunConfig(participants=_PAIR, max_ticks=20, seed=13)
        first = run_arena_simulation(config, record_trace=True)
        second = run_arena_simulation(config, record_trace=True)
        assert first.trace == second.trace

    def test_trace_and_final_state(self) -> None:
        config = ArenaRunConfig(participants=_PAIR, max_ticks=10, seed=2)
        result = run_arena_simulation(config, record_trace=True, keep_state=True)
        assert len(result.trace) == result.ticks_executed * 2
        assert result.trace[0]["tick"] == 1
        assert isinstance(result.final_state, GameState)
        assert result.final_state.tick_count == result.ticks_executed

    def test_straight_runner_dies(self) -> None:
        runner = ArenaParticipant("Up", "always-up")
        config = ArenaRunConfig(participants=(runner,), max_ticks=60, seed=4)
        result = run_arena_simulation(config)
        (snake,) = result.snakes
        assert not snake.alive_at_end
        assert snake.death_reason is not None
        assert snake.survived_ticks <= 21
        assert result.game_over

    def test_unknown_algorithm_falls_back(self) -> None:
        config = ArenaRunConfig(participants=(ArenaParticipant("X", "mystery"),), max_ticks=5)
        result = run_arena_simulation(config)
        assert result.snakes[0].algorithm_id == "wise"

    def test_multi_snake_level_ends_when_clock_hits_zero(self) -> None:
        settings = GameSettings(tick_interval_ms=1000, level_time_limit=3)
        idle = (ArenaParticipant("A", "keep-direction"), ArenaParticipant("B", "keep-direction"))
        config = ArenaRunConfig(participants=idle, max_ticks=50, seed=1, settings=settings)
        result = run_arena_simulation(config)
        assert result.ticks_executed == 3
        assert result.level_complete
        assert all(s.alive_at_end for s in result.snakes)

    def test_trace_survives_snake_starved_to_nothing(self) -> None:
        settings = GameSettings(
            initial_snake_length=1,
            min_snake_length=1,
            hunger_threshold=1,
            food_count_per_snake_coeff=0.0,
            food_count_base=0.0,
            auto_replenish_food=False,
        )
        idle = (ArenaParticipant("A", "keep-direction"), ArenaParticipant("B", "keep-direction"))
        config = ArenaRunConfig(participants=idle, max_ticks=10, seed=1, settings=settings)
        result = run_arena_simulation(config, record_trace=True)
        assert result.ticks_executed == 2
        assert [s.death_reason for s in result.snakes] == ["starved", "starved"]
        final_rows = [row for row in result.trace if row["tick"] == 2]
        heads = [(r["head_x"], r["head_y"], r["length"]) for r in final_rows]
        assert heads == [(None, None, 0), (None, None, 0)]
        table = pa.Table.from_pylist(list(result.trace), schema=TICK_TRACE_SCHEMA)
        assert table.column("head_x").null_count == 2


class TestAggregation:
    def test_averages_per_algorithm(self) -> None:
        runs = [
            ArenaRunResult(
                1, 100, 15000, True, False,
                (_stats(0, "wise", 4, 100, True), _stats(1, "rookie", 1, 40, False)),
            ),
            ArenaRunResult(
                2, 80, 12000, True, False,
                (_stats(0, "wise", 2, 60, False), _stats(1, "rookie", 3, 80, True)),
            ),
        ]
        summary = aggregate_by_algorithm(runs)
        assert list(summary) == ["wise", "rookie"]
        assert summary["wise"] == AlgorithmSummary(
            runs=2,
            avg_score=3.0,
            avg_survived_ticks=80.0,
            avg_survived_ms=12000.0,
            survival_rate=0.5,
        )
        assert summary["rookie"].avg_score == 2.0
        assert summary["rookie"].avg_survived_ticks == 60.0

    def test_empty(self) -> None:
        assert aggregate_by_algorithm([]) == {}


class TestRunArenaBatch:
    def test_runs_each_seed(self) -> None:
        config = ArenaBatchConfig(participants=_PAIR, simulations=2, max_ticks=15, seed_base=5)
        result = run_arena_batch(config)
        assert [r.seed for r in result.runs] == [5, 6]
        assert set(result.summary_by_algorithm) == {"wise", "rookie"}
        assert result.summary_by_algorithm["wise"].runs == 2

    def test_summary_dict(self) -> None:
        config = ArenaBatchConfig(participants=_PAIR, simulations=1, max_ticks=10, seed_base=1)
        summary = run_arena_batch(config).to_summary_dict()
        assert summary["simulations"] == 1
        assert summary["seeds"] == [1]
        assert set(summary["summary_by_algorithm"]) == {"wise", "rookie"}
        assert set(summary["summary_by_algorithm"]["wise"]) == {
            "runs",
            "avg_score",
            "avg_survived_ticks",
            "avg_survived_ms",
            "survival_rate",
        }

    def test_process_pool_matches_serial(self) -> None:
        serial = ArenaBatchConfig(participants=_PAIR, simulations=2, max_ticks=10, seed_base=3)
        pooled = ArenaBatchConfig(
            participants=_PAIR, simulations=2, max_ticks=10, seed_base=3, workers=2
        )
        assert run_arena_batch(serial).runs == run_arena_batch(pooled).runs

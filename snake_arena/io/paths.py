"""Path construction helpers for arena output directories.

Centralises the directory/file naming conventions used by the arena runner
and the CLI.
"""

from __future__ import annotations

from pathlib import Path


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def plots_dir(out_dir: Path) -> Path:
    """Return path to the plots subdirectory within an output directory."""
    return out_dir / "plots"


def arena_runs_path(out_dir: Path) -> Path:
    """Return path to the per-run, per-snake Parquet file."""
    return logs_dir(out_dir) / "arena_runs.parquet"


def algorithm_summary_path(out_dir: Path) -> Path:
    """Return path to the per-algorithm summary Parquet file."""
    return logs_dir(out_dir) / "algorithm_summary.parquet"


def arena_summary_json_path(out_dir: Path) -> Path:
    """Return path to the JSON batch summary."""
    return logs_dir(out_dir) / "arena_summary.json"


def tick_trace_path(out_dir: Path) -> Path:
    """Return path to the optional per-tick trace Parquet file."""
    return logs_dir(out_dir) / "tick_trace.parquet"


def final_board_png_path(out_dir: Path, seed: int) -> Path:
    """Return path to the rendered final board of the run with *seed*."""
    return plots_dir(out_dir) / f"board_seed_{seed}.png"


def algorithm_chart_path(out_dir: Path) -> Path:
    """Return path to the per-algorithm bar chart."""
    return plots_dir(out_dir) / "algorithm_summary.png"

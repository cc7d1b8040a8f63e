"""Visualization layer: offline PNG rendering."""

from snake_arena.viz.render import build_board_array, render_algorithm_summary, render_board

__all__ = ["build_board_array", "render_algorithm_summary", "render_board"]

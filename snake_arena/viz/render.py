"""Matplotlib-based offline rendering of boards and arena summaries."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import BoundaryNorm, ListedColormap  # noqa: E402
from matplotlib.image import AxesImage  # noqa: E402
from matplotlib.patches import Patch, Rectangle  # noqa: E402

from snake_arena.arena.runner import AlgorithmSummary  # noqa: E402
from snake_arena.config.types import GameSettings  # noqa: E402
from snake_arena.domain.entities import FoodPhase, food_phase  # noqa: E402
from snake_arena.domain.geometry import in_bounds  # noqa: E402
from snake_arena.domain.state import GameState  # noqa: E402

EMPTY = 0
WALL = 1
FOOD_YOUNG = 2
FOOD_ADULT = 3
FOOD_OLD = 4
SNAKE_BASE = 5

_FOOD_CODES = {
    FoodPhase.YOUNG: FOOD_YOUNG,
    FoodPhase.ADULT: FOOD_ADULT,
    FoodPhase.OLD: FOOD_OLD,
}


# ---------------------------------------------------------------------------
# Board grid
# ---------------------------------------------------------------------------


def build_board_array(state: GameState, settings: GameSettings) -> np.ndarray:
    """Return (H, W) int array of cell codes.

    Walls, then food by phase, then snakes (``SNAKE_BASE + palette index``),
    later layers overwriting earlier ones. Dead snakes are drawn too.
    """
    n_colors = max(1, len(settings.snake_colors))
    grid = np.full((state.height, state.width), EMPTY, dtype=int)
    for wall in state.walls:
        if in_bounds(wall, state.width, state.height):
            grid[wall.y, wall.x] = WALL
    for food in state.foods:
        if in_bounds(food.position, state.width, state.height):
            grid[food.position.y, food.position.x] = _FOOD_CODES[food_phase(food, settings)]
    for index, snake in enumerate(state.snakes):
        for seg in snake.segments:
            if in_bounds(seg, state.width, state.height):
                grid[seg.y, seg.x] = SNAKE_BASE + index % n_colors
    return grid


def _board_cmap(settings: GameSettings) -> tuple[ListedColormap, BoundaryNorm]:
    colors = [
        settings.color_bg,
        settings.color_wall,
        settings.color_food_young,
        settings.color_food_adult,
        settings.color_food_old,
        *(settings.snake_colors or ("#00FF00",)),
    ]
    cmap = ListedColormap(colors)
    norm = BoundaryNorm(np.arange(-0.5, len(colors) + 0.5, 1.0), cmap.N)
    return cmap, norm


def _draw_board(ax: plt.Axes, grid: np.ndarray, settings: GameSettings) -> AxesImage:
    cmap, norm = _board_cmap(settings)
    img = ax.imshow(grid, cmap=cmap, norm=norm, origin="upper", aspect="equal")
    h, w = grid.shape
    for x in range(w + 1):
        ax.axvline(x - 0.5, color=settings.color_grid, linewidth=0.2)
    for y in range(h + 1):
        ax.axhline(y - 0.5, color=settings.color_grid, linewidth=0.2)
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_facecolor(settings.color_bg)
    return img


def render_board(state: GameState, settings: GameSettings, output_path: Path, title: str | None = None) -> None:
    """Render a PNG snapshot of *state* with outlined heads of alive snakes."""
    grid = build_board_array(state, settings)
    fig, ax = plt.subplots(figsize=(6, 6 * state.height / max(1, state.width)))
    fig.patch.set_facecolor(settings.color_bg)
    _draw_board(ax, grid, settings)

    palette = settings.snake_colors or ("#00FF00",)
    handles = []
    for index, snake in enumerate(state.snakes):
        color = palette[index % len(palette)]
        if snake.alive and in_bounds(snake.head, state.width, state.height):
            ax.add_patch(
                Rectangle(
                    (snake.head.x - 0.5, snake.head.y - 0.5),
                    1,
                    1,
                    fill=False,
                    edgecolor=settings.color_head_stroke,
                    linewidth=1.0,
                )
            )
        status = "" if snake.alive else " (dead)"
        handles.append(Patch(facecolor=color, label=f"{snake.name}: {snake.score}{status}"))

    ax.set_title(title or f"Level {state.level}, tick {state.tick_count}", color="white", fontsize=10)
    if handles:
        fig.legend(
            handles=handles,
            loc="lower center",
            ncol=min(3, len(handles)),
            fontsize=7,
            frameon=False,
            labelcolor="white",
        )
    fig.tight_layout(rect=(0, 0.08, 1, 1))
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, facecolor=fig.get_facecolor())
    plt.close(fig)


# ---------------------------------------------------------------------------
# Arena summary
# ---------------------------------------------------------------------------


def render_algorithm_summary(summary: Mapping[str, AlgorithmSummary], output_path: Path) -> None:
    """Bar chart of average score and survival rate per algorithm."""
    if not summary:
        raise ValueError("summary must contain at least one algorithm")
    ids = list(summary)
    positions = np.arange(len(ids))
    scores = [summary[i].avg_score for i in ids]
    survival = [summary[i].survival_rate for i in ids]

    fig, (ax_score, ax_surv) = plt.subplots(1, 2, figsize=(max(6, 1.6 * len(ids)), 3.5))
    ax_score.bar(positions, scores, color="#4C72B0")
    ax_score.set_title("Average score")
    ax_surv.bar(positions, survival, color="#55A868")
    ax_surv.set_title("Survival rate")
    ax_surv.set_ylim(0, 1)
    for ax in (ax_score, ax_surv):
        ax.set_xticks(positions)
        ax.set_xticklabels(ids, rotation=30, ha="right", fontsize=8)

    fig.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)

"""Strategy heat maps for trained node tables.

    build_strategy_matrix(trainer, keys)       — (n_keys, max_actions) matrix + row labels
    plot_strategy_heatmap(matrix, rows, cols)  — matplotlib figure of the matrix

Matrix convention:
    Rows   : information sets, in ``keys`` order (node-table order by default)
    Cols   : action positions 0..max_actions-1
    Values : average-strategy probability in [0, 1]; np.nan where a node has
             fewer actions than the widest row, or the key was never trained
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import matplotlib
import matplotlib.axes
import matplotlib.colors
import matplotlib.figure
import matplotlib.image
import matplotlib.pyplot as plt
import numpy as np

from cfr_solver.engine.game import InfoKey
from cfr_solver.solvers.trainer import Trainer

_NAN_COLOR: str = "#cccccc"


def _make_cmap() -> matplotlib.colors.Colormap:
    """Viridis gradient with grey for absent cells."""
    cmap = matplotlib.colormaps["viridis"].copy()
    cmap.set_bad(color=_NAN_COLOR)
    return cmap


_CMAP: matplotlib.colors.Colormap = _make_cmap()


def build_strategy_matrix(
    trainer: Trainer,
    keys: Iterable[InfoKey] | None = None,
) -> tuple[np.ndarray, list[str]]:
    """Stack average strategies into a NaN-padded matrix.

    Args:
        trainer: Trained solver.
        keys:    Information sets to include, in row order. Defaults to every
                 trained key.

    Returns:
        (matrix, row_labels); labels come from ``game.describe_key``.
    """
    keys = list(trainer.nodes) if keys is None else list(keys)
    width = max(
        (trainer.nodes[k].num_actions for k in keys if k in trainer.nodes),
        default=0,
    )
    matrix = np.full((len(keys), width), np.nan)
    for row, key in enumerate(keys):
        node = trainer.nodes.get(key)
        if node is not None:
            matrix[row, : node.num_actions] = node.average()
    labels = [trainer.game.describe_key(k) for k in keys]
    return matrix, labels


def _render(ax: matplotlib.axes.Axes, matrix: np.ndarray) -> matplotlib.image.AxesImage:
    masked = np.ma.masked_invalid(matrix)
    im = ax.imshow(masked, cmap=_CMAP, vmin=0.0, vmax=1.0, aspect="auto")
    for (r, c), value in np.ndenumerate(matrix):
        if not np.isnan(value):
            color = "black" if value > 0.6 else "white"
            ax.text(c, r, f"{value:.2f}", ha="center", va="center", fontsize=8, color=color)
    return im


def plot_strategy_heatmap(
    matrix: np.ndarray,
    row_labels: Sequence[str],
    col_labels: Sequence[str] | None = None,
    title: str = "Average strategy",
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot an information-set × action probability heat map.

    Args:
        matrix:     (n_rows, n_actions) array, NaN for absent cells.
        row_labels: One label per row.
        col_labels: One label per action column; defaults to a0, a1, ...
        title:      Figure title.
        show:       If True, call plt.show() after rendering.
        save_path:  If not None, save the figure to this path before showing.

    Returns:
        matplotlib.figure.Figure.
    """
    n_rows, n_cols = matrix.shape
    if col_labels is None:
        col_labels = [f"a{i}" for i in range(n_cols)]

    fig, ax = plt.subplots(figsize=(1.2 * n_cols + 3, 0.35 * n_rows + 1.5))
    ax.set_title(title, fontsize=12, fontweight="bold")
    im = _render(ax, matrix)

    ax.set_xticks(range(n_cols))
    ax.set_xticklabels(col_labels, fontsize=9)
    ax.set_yticks(range(n_rows))
    ax.set_yticklabels(row_labels, fontsize=8)
    ax.set_xlabel("Action", fontsize=9)
    ax.set_ylabel("Information set", fontsize=9)
    plt.colorbar(im, ax=ax, label="P(action)", fraction=0.046, pad=0.04)

    plt.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig

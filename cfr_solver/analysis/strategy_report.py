"""Strategy report for trained CFR+/MCCFR node tables.

    strategy_frame(trainer, action_labels)        — pandas DataFrame, one row per node
    print_training_summary(summary)               — iterations, nodes, root values
    print_strategy_table(trainer, limit, labels)  — average strategies by visits
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from cfr_solver.solvers.trainer import Trainer, TrainingSummary

_RULE: str = "=" * 56


def _column_names(width: int, action_labels: Sequence[str] | None) -> list[str]:
    if action_labels is not None and len(action_labels) >= width:
        return [str(label) for label in action_labels[:width]]
    return [f"a{i}" for i in range(width)]


def strategy_frame(
    trainer: Trainer,
    action_labels: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Tabulate the average strategy of every node.

    Columns: ``info_key`` (as described by the game), ``n_actions``,
    ``visits`` (total strategy mass), then one probability column per action
    position. Nodes with fewer actions than the widest node are NaN-padded.

    Args:
        trainer:       Trained solver.
        action_labels: Optional names for the action columns; ignored when
                       shorter than the widest node.

    Returns:
        DataFrame sorted by descending ``visits``.
    """
    width = max((node.num_actions for node in trainer.nodes.values()), default=0)
    columns = _column_names(width, action_labels)

    rows = []
    for key, node in trainer.nodes.items():
        probs = np.full(width, np.nan)
        probs[: node.num_actions] = node.average()
        row = {
            "info_key": trainer.game.describe_key(key),
            "n_actions": node.num_actions,
            "visits": float(node.strat_sum.sum()),
        }
        row.update(zip(columns, probs.tolist()))
        rows.append(row)

    frame = pd.DataFrame(rows, columns=["info_key", "n_actions", "visits", *columns])
    return frame.sort_values("visits", ascending=False, kind="stable").reset_index(drop=True)


def print_training_summary(summary: TrainingSummary) -> None:
    """Print the statistics of one training run."""
    print(_RULE)
    print("Training Summary")
    print(_RULE)
    print(f"  Iterations:      {summary.iterations}")
    print(f"  Root states:     {summary.n_roots}")
    print(f"  Nodes:           {summary.n_nodes}")
    print(f"  Elapsed:         {summary.elapsed_s:.2f}s")
    for seat, value in enumerate(summary.mean_root_utility):
        print(f"  Seat {seat} value:    {value:+.4f}")
    if summary.depth_cutoffs:
        print(f"  Depth cutoffs:   {summary.depth_cutoffs}  (values near the cutoff unverified)")
    print()


def print_strategy_table(
    trainer: Trainer,
    limit: int = 20,
    action_labels: Sequence[str] | None = None,
) -> None:
    """Print the most-visited nodes' average strategies.

    Args:
        trainer:       Trained solver.
        limit:         Maximum number of rows to print.
        action_labels: Optional names for the action columns.
    """
    frame = strategy_frame(trainer, action_labels)
    print(_RULE)
    print(f"Average Strategies  ({len(frame)} nodes, top {min(limit, len(frame))})")
    print(_RULE)
    if frame.empty:
        print("  (no nodes trained)")
        print()
        return
    prob_columns = list(frame.columns[3:])
    header = f"  {'Info set':<16}{'Visits':>10}" + "".join(f"{c:>9}" for c in prob_columns)
    print(header)
    for row in frame.head(limit).itertuples(index=False):
        cells = "".join(
            f"{'':>9}" if np.isnan(p) else f"{p:>9.3f}" for p in row[3:]
        )
        print(f"  {row.info_key:<16}{row.visits:>10.2f}{cells}")
    print()

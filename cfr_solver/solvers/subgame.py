"""Subgame re-solving and node-table merging.

``resolve_subgame`` refines one region of the tree (typically late-street
decisions) by training a fresh, independent trainer rooted there and folding
its average strategies into the main table. The same ``merge_nodes`` step
combines node tables trained independently on separate shards of roots.
"""

from __future__ import annotations

import logging

import numpy as np

from cfr_solver.engine.game import GameState, InfoKey
from cfr_solver.solvers.node import Node
from cfr_solver.solvers.trainer import Trainer, TrainingSummary

logger = logging.getLogger(__name__)


def merge_nodes(target: dict[InfoKey, Node], source: dict[InfoKey, Node]) -> int:
    """Merge ``source`` into ``target`` in place.

    Keys present in both have their strategy sums added (Node.merge); keys
    only in ``source`` are inserted as copies (regret included).

    Args:
        target: Node table that receives the strategies.
        source: Node table to fold in. Left unchanged; unseen keys are
                inserted as copies, so ``source`` can keep training and be
                merged again.

    Returns:
        Number of keys newly inserted into ``target``.

    Raises:
        ValueError: If a shared key has a different action count on each side.
    """
    inserted = 0
    for key, node in source.items():
        existing = target.get(key)
        if existing is None:
            target[key] = node.copy()
            inserted += 1
        else:
            existing.merge(node)
    return inserted


def resolve_subgame(
    trainer: Trainer,
    root_state: GameState,
    extra_iterations: int,
    rng: np.random.Generator | None = None,
) -> TrainingSummary:
    """Train a fresh subgame solver at ``root_state`` and merge it into ``trainer``.

    The subgame trainer is an exhaustive ``Trainer`` over the same game and
    config; regrets start from zero and are discarded after the merge.

    Args:
        trainer:          Main trainer whose node table is refined.
        root_state:       Root of the subgame.
        extra_iterations: Iterations to spend on the subgame.
        rng:              Chance-node generator for the subgame run; defaults
                          to the main trainer's.

    Returns:
        TrainingSummary of the subgame run.
    """
    logger.info("subgame re-solve started: %d extra iteration(s)", extra_iterations)

    if rng is None:
        rng = trainer.rng
    sub_trainer = Trainer(trainer.game, trainer.config)
    summary = sub_trainer.run([root_state], extra_iterations, rng=rng)

    inserted = merge_nodes(trainer.nodes, sub_trainer.nodes)
    logger.info(
        "subgame merged: %d node(s) trained, %d new, %d total",
        len(sub_trainer.nodes),
        inserted,
        len(trainer.nodes),
    )
    return summary

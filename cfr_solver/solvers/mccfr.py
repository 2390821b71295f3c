"""Monte Carlo CFR+ trainer with strategy-ranked action sampling.

Identical to the exhaustive ``Trainer`` except at player nodes: only the
``ceil(n · sample_rate)`` actions with the highest current strategy weight
are expanded (ties keep action order). Unsampled actions contribute nothing
to the node value or to the regret/strategy update of that visit; they stay
eligible on later visits because the strategy is recomputed each time.

Selection is deterministic top-K, not sampling proportional to σ as in
outcome or external sampling MCCFR. That biases the estimator, so results
should be checked against the exhaustive trainer on small trees before being
trusted on large ones. With ``sample_rate = 1.0`` every action is expanded
and the trainer matches ``Trainer`` exactly.

Sampling cuts the branching factor, so the depth guard is relaxed to 50.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from cfr_solver.config import SolverConfig
from cfr_solver.engine.game import Game
from cfr_solver.solvers.trainer import Trainer

MIN_SAMPLE_RATE: float = 0.1
MAX_SAMPLE_RATE: float = 1.0


class MCCFRTrainer(Trainer):
    """Sampled CFR+ trainer.

    Args:
        game:        Game implementation to solve.
        sample_rate: Fraction of actions to expand per node, clamped into
                     [0.1, 1.0]. Defaults to ``config.sample_rate``.
        config:      Solver settings; defaults to ``SolverConfig()``.
        max_depth:   Recursion cutoff override (class default 50).
    """

    MAX_DEPTH: int = 50

    def __init__(
        self,
        game: Game,
        sample_rate: float | None = None,
        config: SolverConfig | None = None,
        *,
        max_depth: int | None = None,
    ) -> None:
        super().__init__(game, config, max_depth=max_depth)
        if sample_rate is None:
            sample_rate = self.config.sample_rate
        self.sample_rate: float = float(np.clip(sample_rate, MIN_SAMPLE_RATE, MAX_SAMPLE_RATE))

    def describe(self) -> str:
        return f"MCCFR ({self.sample_rate:.0%} sampling)"

    def sample_size(self, n_actions: int) -> int:
        """Number of actions expanded at a node with ``n_actions`` actions.

        Examples:
            >>> from cfr_solver.engine.kuhn import KuhnPoker
            >>> MCCFRTrainer(KuhnPoker(), 0.3).sample_size(10)
            3
            >>> MCCFRTrainer(KuhnPoker(), 0.5).sample_size(3)
            2
        """
        # Rounding first keeps 10 × 0.3 from ceiling to 4.
        return max(1, math.ceil(round(n_actions * self.sample_rate, 9)))

    def _select_actions(self, strategy: np.ndarray) -> Sequence[int]:
        ranked = sorted(range(len(strategy)), key=lambda i: -strategy[i])
        return ranked[: self.sample_size(len(strategy))]

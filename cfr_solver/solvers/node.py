"""Per-information-set accumulators and regret matching+ (CFR+).

A Node stores three float64 vectors aligned by action index:

    regret_sum   cumulative counterfactual regret, floored at 0 after every
                 update (the CFR+ clamp)
    strat_sum    reach-weighted strategy mass; only used for the average
    delta_prefs  fixed per-action prior blended into the current strategy

Current strategy (regret matching+ with a δ-uniform floor)::

    pos = max(regret_sum, 0)
    if sum(pos) > 0:  σ = (1 - ε) · pos / sum(pos) + ε · prefs / sum(prefs)
    else:             σ = prefs / sum(prefs)

The floor keeps every action with a positive prior above ε-weight, so the
trainer keeps exploring actions that look bad early. ``average()`` is the
strategy to report; ``strategy()`` is only the current-iteration policy.
"""

from __future__ import annotations

import numpy as np

# Mixing weight of the prior term in strategy().
EXPLORATION_EPSILON: float = 0.1


class Node:
    """Regret and strategy accumulators for one information set.

    Args:
        n_actions:   Number of legal actions at the information set.
        delta_prefs: Non-negative per-action prior weights. Defaults to ones
                     (a uniform prior).

    Raises:
        ValueError: If ``n_actions < 1``, the prior has the wrong length,
                    contains a negative weight or sums to zero.

    Examples:
        >>> node = Node(2)
        >>> node.strategy().tolist()
        [0.5, 0.5]
        >>> node.update_regret(0, 3.0)
        >>> node.strategy().round(3).tolist()
        [0.95, 0.05]
    """

    __slots__ = ("regret_sum", "strat_sum", "delta_prefs")

    def __init__(self, n_actions: int, delta_prefs: np.ndarray | list[float] | None = None) -> None:
        if n_actions < 1:
            raise ValueError(f"A node needs at least one action, got {n_actions}.")
        if delta_prefs is None:
            prefs = np.ones(n_actions, dtype=np.float64)
        else:
            prefs = np.asarray(delta_prefs, dtype=np.float64).copy()
            if prefs.shape != (n_actions,):
                raise ValueError(
                    f"delta_prefs has shape {prefs.shape}, expected ({n_actions},)."
                )
            if np.any(prefs < 0.0) or prefs.sum() <= 0.0:
                raise ValueError("delta_prefs must be non-negative with a positive sum.")
        self.regret_sum: np.ndarray = np.zeros(n_actions, dtype=np.float64)
        self.strat_sum: np.ndarray = np.zeros(n_actions, dtype=np.float64)
        self.delta_prefs: np.ndarray = prefs

    @property
    def num_actions(self) -> int:
        return len(self.regret_sum)

    def __len__(self) -> int:
        return len(self.regret_sum)

    def __repr__(self) -> str:
        avg = np.array2string(self.average(), precision=3, separator=", ")
        return f"Node(n_actions={self.num_actions}, average={avg})"

    # ─── Strategies ──────────────────────────────────────────────────────────

    def strategy(self, epsilon: float = EXPLORATION_EPSILON) -> np.ndarray:
        """Current mixed strategy from positive regrets, floored by the prior.

        Args:
            epsilon: Weight of the prior term when some regret is positive.

        Returns:
            Probability vector of length ``num_actions``.

        Raises:
            ValueError: If ``epsilon`` is outside [0, 1].
        """
        if not 0.0 <= epsilon <= 1.0:
            raise ValueError(f"epsilon must be in [0, 1], got {epsilon}.")
        prior = self.delta_prefs / self.delta_prefs.sum()
        positive = np.maximum(self.regret_sum, 0.0)
        total = positive.sum()
        if total <= 0.0:
            return prior
        return (1.0 - epsilon) * (positive / total) + epsilon * prior

    def average(self) -> np.ndarray:
        """Normalised strategy sum; uniform if the node was never updated.

        Examples:
            >>> Node(4).average().tolist()
            [0.25, 0.25, 0.25, 0.25]
        """
        total = self.strat_sum.sum()
        if total <= 0.0:
            return np.full(self.num_actions, 1.0 / self.num_actions)
        return self.strat_sum / total

    def avg_strategy(self) -> np.ndarray:
        """Alias of average()."""
        return self.average()

    # ─── Updates ─────────────────────────────────────────────────────────────

    def update_regret(self, action_idx: int, value: float) -> None:
        """Add ``value`` to the regret of one action and clamp at zero (CFR+)."""
        assert 0 <= action_idx < self.num_actions, f"action index {action_idx} out of range"
        self.regret_sum[action_idx] = max(0.0, self.regret_sum[action_idx] + value)

    def update_strategy(self, action_idx: int, value: float) -> None:
        """Add reach-weighted probability mass to one action's strategy sum."""
        assert 0 <= action_idx < self.num_actions, f"action index {action_idx} out of range"
        self.strat_sum[action_idx] += value

    def merge(self, other: Node) -> None:
        """Add another node's strategy sum into this one.

        Only ``strat_sum`` is merged: merging combines independently trained
        average strategies, it does not pool regret histories.

        Raises:
            ValueError: If the nodes have different action counts.
        """
        if other.num_actions != self.num_actions:
            raise ValueError(
                f"Cannot merge a {other.num_actions}-action node into a "
                f"{self.num_actions}-action node."
            )
        self.strat_sum += other.strat_sum

    def copy(self) -> Node:
        clone = Node(self.num_actions, self.delta_prefs)
        clone.regret_sum = self.regret_sum.copy()
        clone.strat_sum = self.strat_sum.copy()
        return clone

"""Exhaustive CFR+ trainer over any game implementing the Game contract.

Algorithm
~~~~~~~~~
``run(roots, iterations)`` is self-play: every iteration walks every root
once per seat, with that seat as the *hero*. Opponent strategies are read
live from the shared node table, so each walk sees the strategies left by
the previous one.

Walk at a state (``reach`` is the product of strategy probabilities along the
path, chance excluded):

    depth > max_depth   → 0.0 (depth guard, counted and reported)
    player node         → σ = node.strategy(); recurse into every action with
                          reach·σ[a]; v = Σ σ[a]·u[a]. If the actor is the
                          hero: R[a] = max(0, R[a] + reach·(u[a] − v)) and
                          S[a] += reach·σ[a]. Return v.
    player node, no actions → util(state, hero)
    terminal            → util(state, hero)
    chance              → recurse once into apply_chance(state, rng)

Chance outcomes are sampled, not enumerated: one outcome per visit, reach
unchanged. Regret only needs to be correct up to a common scale per visit.

Depth guard
~~~~~~~~~~~
The cutoff (15 here) stops games whose betting can cycle from recursing
forever. It is an approximation, not cycle detection: a run that hits it
logs a warning, and strategies near the cutoff should be treated as
unverified.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from cfr_solver.config import SolverConfig
from cfr_solver.engine.game import Game, GameState, InfoKey
from cfr_solver.solvers.node import Node

logger = logging.getLogger(__name__)


# ─── Result type ───────────────────────────────────────────────────────────────


@dataclass
class TrainingSummary:
    """Statistics of one ``run`` call.

    Attributes:
        iterations:        Iterations completed.
        n_roots:           Number of root states walked per iteration.
        n_nodes:           Size of the node table after the run.
        mean_root_utility: Per-seat mean value returned by the root walks
                           (averaged over iterations × roots).
        depth_cutoffs:     Times the depth guard fired during the run.
        elapsed_s:         Wall-clock duration in seconds.
    """

    iterations: int
    n_roots: int
    n_nodes: int
    mean_root_utility: list[float]
    depth_cutoffs: int
    elapsed_s: float


# ─── Trainer ───────────────────────────────────────────────────────────────────


class Trainer:
    """Full-width CFR+ trainer.

    Args:
        game:      Game implementation to solve.
        config:    Solver settings; defaults to ``SolverConfig()``.
        max_depth: Recursion cutoff. Overrides ``config.max_depth``; when both
                   are None the class default ``MAX_DEPTH`` is used.

    Example:
        >>> from cfr_solver.engine.kuhn import KuhnPoker
        >>> game = KuhnPoker()
        >>> trainer = Trainer(game, SolverConfig(seed=0))
        >>> summary = trainer.run([game.initial_state()], 100)
        >>> summary.n_nodes
        12
    """

    MAX_DEPTH: int = 15

    def __init__(
        self,
        game: Game,
        config: SolverConfig | None = None,
        *,
        max_depth: int | None = None,
    ) -> None:
        self.game = game
        self.config = config if config is not None else SolverConfig()
        if max_depth is None:
            max_depth = self.config.max_depth
        self.max_depth: int = self.MAX_DEPTH if max_depth is None else max_depth
        self.nodes: dict[InfoKey, Node] = {}
        self.rng: np.random.Generator = np.random.default_rng(self.config.seed)
        self._depth_cutoffs: int = 0

    def describe(self) -> str:
        return "CFR+"

    # ─── Training ────────────────────────────────────────────────────────────

    def run(
        self,
        roots: Iterable[GameState],
        iterations: int,
        rng: np.random.Generator | None = None,
    ) -> TrainingSummary:
        """Train in place from every root, once per seat, for ``iterations`` rounds.

        Args:
            roots:      Starting states (scenarios) to train from.
            iterations: Number of self-play rounds.
            rng:        Chance-node generator; defaults to the trainer's own.

        Returns:
            TrainingSummary for this call.

        Raises:
            ValueError: If ``iterations`` is negative.
        """
        if iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {iterations}.")
        roots = list(roots)
        if rng is None:
            rng = self.rng

        n_players = self.game.N_PLAYERS
        log_every = max(1, self.config.log_every)
        totals = np.zeros(n_players, dtype=np.float64)
        self._depth_cutoffs = 0
        start = time.perf_counter()

        logger.info(
            "%s training started: %d root(s), %d iteration(s)",
            self.describe(),
            len(roots),
            iterations,
        )

        for iteration in range(iterations):
            if iteration % log_every == 0 or iteration == iterations - 1:
                logger.debug(
                    "iteration %d/%d (nodes: %d)", iteration + 1, iterations, len(self.nodes)
                )
            for root in roots:
                for hero in range(n_players):
                    totals[hero] += self._walk(root, hero, 1.0, rng, 0)

        elapsed = time.perf_counter() - start
        n_walks = iterations * len(roots)
        if n_walks:
            mean_root_utility = (totals / n_walks).tolist()
        else:
            mean_root_utility = [0.0] * n_players

        if self._depth_cutoffs:
            logger.warning(
                "depth limit %d reached %d time(s); strategies near the cutoff are unverified",
                self.max_depth,
                self._depth_cutoffs,
            )
        logger.info(
            "%s training finished: %d node(s) in %.2fs",
            self.describe(),
            len(self.nodes),
            elapsed,
        )

        return TrainingSummary(
            iterations=iterations,
            n_roots=len(roots),
            n_nodes=len(self.nodes),
            mean_root_utility=mean_root_utility,
            depth_cutoffs=self._depth_cutoffs,
            elapsed_s=elapsed,
        )

    def _walk(
        self,
        state: GameState,
        hero: int,
        reach: float,
        rng: np.random.Generator,
        depth: int,
    ) -> float:
        """Recursive CFR+ walk; returns the hero's expected value at ``state``."""
        if depth > self.max_depth:
            self._depth_cutoffs += 1
            return 0.0

        game = self.game
        player = game.current_player(state)

        if player is not None:
            actions = game.legal_actions(state)
            if not actions:
                return game.util(state, hero)

            node = self._node_for(game.info_key(state, player), len(actions))
            strategy = node.strategy(self.config.exploration_epsilon)
            selected = self._select_actions(strategy)

            utilities = np.zeros(len(actions), dtype=np.float64)
            node_util = 0.0
            for i in selected:
                child = game.next_state(state, actions[i])
                utilities[i] = self._walk(child, hero, reach * strategy[i], rng, depth + 1)
                node_util += strategy[i] * utilities[i]

            if player == hero:
                for i in selected:
                    node.update_regret(i, reach * (utilities[i] - node_util))
                    node.update_strategy(i, reach * strategy[i])

            return float(node_util)

        if state.is_terminal():
            return game.util(state, hero)

        return self._walk(game.apply_chance(state, rng), hero, reach, rng, depth + 1)

    def _select_actions(self, strategy: np.ndarray) -> Sequence[int]:
        """Indices of the actions to expand at a player node (all of them)."""
        return range(len(strategy))

    def _node_for(self, key: InfoKey, n_actions: int) -> Node:
        node = self.nodes.get(key)
        if node is None:
            node = Node(n_actions)
            self.nodes[key] = node
        else:
            assert node.num_actions == n_actions, (
                f"info key {key!r} was created with {node.num_actions} actions "
                f"but now has {n_actions}"
            )
        return node

    # ─── Strategy lookup ─────────────────────────────────────────────────────

    def average_strategy(self, key: InfoKey) -> np.ndarray | None:
        """Average strategy stored for ``key``, or None if never visited."""
        node = self.nodes.get(key)
        if node is None:
            return None
        return node.average()

    def average_strategies(self) -> dict[InfoKey, np.ndarray]:
        """Average strategy of every trained information set."""
        return {key: node.average() for key, node in self.nodes.items()}

    def strategy_for(self, state: GameState, player: int | None = None) -> np.ndarray:
        """Average strategy at a decision state, aligned with its legal actions.

        Falls back to a uniform distribution when the information set was never
        visited during training.

        Raises:
            ValueError: If ``state`` is not a decision point.
        """
        if player is None:
            player = self.game.current_player(state)
        actions = self.game.legal_actions(state)
        if player is None or not actions:
            raise ValueError("strategy_for() needs a state with a player to act.")
        avg = self.average_strategy(self.game.info_key(state, player))
        if avg is None:
            return np.full(len(actions), 1.0 / len(actions))
        return avg

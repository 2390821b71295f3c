"""
Monte Carlo playout of trained average strategies.

Plays complete games in which every seat samples its action from the
trainer's average strategy (uniform at information sets never trained) and
chance events are resolved by the game's own ``apply_chance``. Per-game
payoffs for one observer are aggregated into a mean with a normal-theory 95%
confidence interval.

Primary use: sanity-check a trained table against a known game value (e.g.
Kuhn poker, -1/18 for the first seat) and compare trainers.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from scipy import stats

from cfr_solver.engine.game import Game, GameState
from cfr_solver.solvers.trainer import Trainer

# ─── Result type ──────────────────────────────────────────────────────────────


@dataclass
class SimulationResult:
    """Aggregate statistics from a Monte Carlo playout run.

    Attributes:
        n_games:     Number of games simulated.
        observer:    Seat whose payoff was recorded.
        mean_util:   Mean payoff per game.
        std_util:    Sample standard deviation of per-game payoffs.
        ci_95_low:   Lower bound of the 95% confidence interval for mean_util.
        ci_95_high:  Upper bound of the 95% confidence interval for mean_util.
        n_truncated: Games stopped by ``max_steps`` before a terminal state
                     (scored 0.0).
        payouts:     Raw per-game payoff array, or None if not requested.
    """

    n_games: int
    observer: int
    mean_util: float
    std_util: float
    ci_95_low: float
    ci_95_high: float
    n_truncated: int
    payouts: np.ndarray | None = None

    def __str__(self) -> str:
        return (
            f"Games: {self.n_games:,} | Seat {self.observer} "
            f"EV: {self.mean_util:+.4f} | "
            f"95% CI: [{self.ci_95_low:+.4f}, {self.ci_95_high:+.4f}] | "
            f"Truncated: {self.n_truncated}"
        )


# ─── Playout ──────────────────────────────────────────────────────────────────


def play_game(
    game: Game,
    trainer: Trainer,
    root: GameState,
    observer: int,
    rng: np.random.Generator,
    max_steps: int = 200,
) -> tuple[float, bool]:
    """Play one game from ``root`` with every seat on its average strategy.

    Returns:
        (payoff for ``observer``, truncated flag). A game still running after
        ``max_steps`` transitions returns (0.0, True).
    """
    state = root
    for _ in range(max_steps):
        player = game.current_player(state)
        if player is not None:
            actions = game.legal_actions(state)
            if not actions:
                return game.util(state, observer), False
            probs = trainer.strategy_for(state, player)
            idx = int(rng.choice(len(actions), p=probs))
            state = game.next_state(state, actions[idx])
        elif state.is_terminal():
            return game.util(state, observer), False
        else:
            state = game.apply_chance(state, rng)
    return 0.0, True


def simulate_games(
    game: Game,
    trainer: Trainer,
    roots: Iterable[GameState],
    n_games: int,
    observer: int = 0,
    seed: int | None = None,
    max_steps: int = 200,
    return_payouts: bool = True,
) -> SimulationResult:
    """Simulate ``n_games`` playouts, cycling through ``roots``.

    Args:
        game:           Game implementation.
        trainer:        Trained solver supplying average strategies.
        roots:          Starting states; game ``i`` starts at roots[i % len].
        n_games:        Number of games to play.
        observer:       Seat whose payoff is recorded.
        seed:           Seed for action and chance sampling.
        max_steps:      Transition budget per game.
        return_payouts: Keep the raw payoff array on the result.

    Returns:
        SimulationResult.

    Raises:
        ValueError: If ``n_games < 1`` or ``roots`` is empty.
    """
    roots = list(roots)
    if n_games < 1:
        raise ValueError(f"n_games must be at least 1, got {n_games}.")
    if not roots:
        raise ValueError("simulate_games() needs at least one root state.")

    rng = np.random.default_rng(seed)
    payouts = np.empty(n_games, dtype=np.float64)
    n_truncated = 0
    for g in range(n_games):
        payoff, truncated = play_game(game, trainer, roots[g % len(roots)], observer, rng, max_steps)
        payouts[g] = payoff
        n_truncated += truncated

    mean = float(payouts.mean())
    std = float(payouts.std(ddof=1)) if n_games > 1 else 0.0
    half_width = float(stats.norm.ppf(0.975)) * std / math.sqrt(n_games)

    return SimulationResult(
        n_games=n_games,
        observer=observer,
        mean_util=mean,
        std_util=std,
        ci_95_low=mean - half_width,
        ci_95_high=mean + half_width,
        n_truncated=n_truncated,
        payouts=payouts if return_payouts else None,
    )

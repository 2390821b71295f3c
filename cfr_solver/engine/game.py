"""
Game contract consumed by the CFR+ and MCCFR trainers.

The solver is game-agnostic: it walks any tree exposed through the six
methods of ``Game`` plus the two-predicate ``GameState`` classifier. Hand
evaluation, card bucketing and payoff bookkeeping live entirely inside a
concrete game's ``util`` and ``info_key``.

Contract summary
----------------
    current_player(state)      -> player index, or None at terminal/chance
    legal_actions(state)       -> ordered actions (order stable per InfoKey)
    next_state(state, action)  -> successor state (caller's state untouched)
    apply_chance(state, rng)   -> state after exactly one random event
    util(state, observer)      -> observer's payoff at a terminal state
    info_key(state, observer)  -> hashable information-set identifier

Two states sharing an InfoKey must expose the same number of legal actions:
node vectors are indexed positionally by action order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Sequence
from typing import Any

import numpy as np

# ─── Type aliases ──────────────────────────────────────────────────────────────

InfoKey = Hashable


# ─── State classifier ─────────────────────────────────────────────────────────


class GameState(ABC):
    """Two-predicate classifier every concrete state must answer."""

    @abstractmethod
    def is_terminal(self) -> bool:
        """True when the hand is over and ``Game.util`` is defined."""

    @abstractmethod
    def is_chance_node(self) -> bool:
        """True when a random event (e.g. a deal) must be resolved next."""


# ─── Game contract ────────────────────────────────────────────────────────────


class Game(ABC):
    """Abstract game the trainers depend on.

    Subclasses set ``N_PLAYERS`` and implement the six methods below. All
    methods must be free of side effects on the states passed in.
    """

    N_PLAYERS: int = 2

    def initial_state(self) -> GameState:
        """Canonical root state, for games that have one."""
        raise NotImplementedError(f"{type(self).__name__} has no default root state.")

    @abstractmethod
    def current_player(self, state: GameState) -> int | None:
        """Index of the player to act, or None at terminal and chance nodes."""

    @abstractmethod
    def legal_actions(self, state: GameState) -> Sequence[Any]:
        """Actions available at a decision point, in a stable order."""

    @abstractmethod
    def next_state(self, state: GameState, action: Any) -> GameState:
        """Return the state reached by playing ``action``."""

    @abstractmethod
    def apply_chance(self, state: GameState, rng: np.random.Generator) -> GameState:
        """Resolve one random event using the injected generator."""

    @abstractmethod
    def util(self, state: GameState, observer: int) -> float:
        """Payoff for ``observer`` at a terminal state."""

    @abstractmethod
    def info_key(self, state: GameState, observer: int) -> InfoKey:
        """Information-set key of ``state`` as seen by ``observer``."""

    def describe_key(self, key: Any) -> str:
        """Human-readable label for an InfoKey (used by reports)."""
        return str(key)

"""
Matching pennies as a one-ply sequential tree.

Player 0 chooses HEADS or TAILS, then player 1 chooses without seeing that
choice (both of player 1's states share one information set). Player 0 wins
one unit on a match and loses one unit otherwise. The unique equilibrium is
0.5/0.5 for both players.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

import numpy as np

from .game import Game, GameState


class Coin(Enum):
    HEADS = auto()
    TAILS = auto()


_ACTIONS: tuple[Coin, ...] = (Coin.HEADS, Coin.TAILS)


@dataclass(frozen=True)
class PenniesState(GameState):
    """Choices made so far, in seat order."""

    choices: tuple[Coin, ...] = ()

    def is_terminal(self) -> bool:
        return len(self.choices) == 2

    def is_chance_node(self) -> bool:
        return False


class MatchingPennies(Game):
    N_PLAYERS = 2

    def initial_state(self) -> PenniesState:
        return PenniesState()

    def current_player(self, state: PenniesState) -> int | None:
        if state.is_terminal():
            return None
        return len(state.choices)

    def legal_actions(self, state: PenniesState) -> tuple[Coin, ...]:
        if state.is_terminal():
            return ()
        return _ACTIONS

    def next_state(self, state: PenniesState, action: Coin) -> PenniesState:
        return PenniesState(choices=state.choices + (action,))

    def apply_chance(self, state: PenniesState, rng: np.random.Generator) -> PenniesState:
        # No chance events in this game.
        return state

    def util(self, state: PenniesState, observer: int) -> float:
        first, second = state.choices
        payoff = 1.0 if first == second else -1.0
        return payoff if observer == 0 else -payoff

    def info_key(self, state: PenniesState, observer: int) -> str:
        # Player 1 never observes player 0's coin.
        return f"p{observer}"

"""
Three-card Kuhn poker.

Rules
-----
    Deck:     Jack < Queen < King, one card dealt to each of two players.
    Ante:     1 unit each.
    Actions:  PASS or BET (bet size 1) at every decision point. Facing a bet,
              PASS folds and BET calls.
    Terminal histories ("p" = PASS, "b" = BET):
        pp   showdown for the antes        (winner +1)
        bp   player 1 folds                (player 0 +1)
        bb   showdown after bet and call   (winner +2)
        pbp  player 0 folds                (player 1 +1)
        pbb  showdown after bet and call   (winner +2)

The root state is a chance node: ``apply_chance`` deals both cards in one
event. Information sets are (own card, betting history).

Known equilibrium value for player 0: -1/18 units per hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .game import Game, GameState

# ─── Constants ─────────────────────────────────────────────────────────────────

JACK: int = 0
QUEEN: int = 1
KING: int = 2

CARD_NAMES: dict[int, str] = {JACK: "J", QUEEN: "Q", KING: "K"}

GAME_VALUE: float = -1.0 / 18.0

_TERMINAL_HISTORIES: frozenset[str] = frozenset({"pp", "bp", "bb", "pbp", "pbb"})


class KuhnAction(Enum):
    PASS = "p"
    BET = "b"


_ACTIONS: tuple[KuhnAction, ...] = (KuhnAction.PASS, KuhnAction.BET)


# ─── State ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class KuhnState(GameState):
    """Immutable Kuhn hand: dealt cards (empty before the deal) and history."""

    cards: tuple[int, ...] = ()
    history: str = ""

    def is_terminal(self) -> bool:
        return self.history in _TERMINAL_HISTORIES

    def is_chance_node(self) -> bool:
        return not self.cards


# ─── Game ──────────────────────────────────────────────────────────────────────


class KuhnPoker(Game):
    N_PLAYERS = 2

    def initial_state(self) -> KuhnState:
        return KuhnState()

    def current_player(self, state: KuhnState) -> int | None:
        if state.is_chance_node() or state.is_terminal():
            return None
        return len(state.history) % 2

    def legal_actions(self, state: KuhnState) -> tuple[KuhnAction, ...]:
        if state.is_chance_node() or state.is_terminal():
            return ()
        return _ACTIONS

    def next_state(self, state: KuhnState, action: KuhnAction) -> KuhnState:
        return KuhnState(cards=state.cards, history=state.history + action.value)

    def apply_chance(self, state: KuhnState, rng: np.random.Generator) -> KuhnState:
        deal = rng.permutation(3)[:2]
        return KuhnState(cards=(int(deal[0]), int(deal[1])), history=state.history)

    def util(self, state: KuhnState, observer: int) -> float:
        """Net units won by ``observer``.

        Examples:
            >>> KuhnPoker().util(KuhnState(cards=(2, 0), history="bb"), 0)
            2.0
            >>> KuhnPoker().util(KuhnState(cards=(2, 0), history="pbp"), 0)
            -1.0
        """
        history = state.history
        if history == "bp":
            winner, stake = 0, 1.0
        elif history == "pbp":
            winner, stake = 1, 1.0
        else:
            winner = 0 if state.cards[0] > state.cards[1] else 1
            stake = 2.0 if history.endswith("bb") else 1.0
        return stake if observer == winner else -stake

    def info_key(self, state: KuhnState, observer: int) -> str:
        return f"{CARD_NAMES[state.cards[observer]]}:{state.history}"

    def describe_key(self, key: str) -> str:
        card, history = key.split(":")
        return f"{card} [{history or '-'}]"

"""Tests for the Game contract and the reference games (cfr_solver/engine/)."""

from __future__ import annotations

import numpy as np
import pytest

from cfr_solver.engine.game import Game
from cfr_solver.engine.kuhn import (
    JACK,
    KING,
    QUEEN,
    KuhnAction,
    KuhnPoker,
    KuhnState,
)
from cfr_solver.engine.matching_pennies import Coin, MatchingPennies, PenniesState
from tests.synthetic_games import EndlessChance


# ─── Contract defaults ────────────────────────────────────────────────────────


class TestContract:
    def test_game_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Game()  # type: ignore[abstract]

    def test_initial_state_optional(self) -> None:
        with pytest.raises(NotImplementedError):
            Game.initial_state(EndlessChance())

    def test_describe_key_defaults_to_str(self) -> None:
        assert MatchingPennies().describe_key("p0") == "p0"
        assert EndlessChance().describe_key(("a", 1)) == "('a', 1)"


# ─── Kuhn poker ───────────────────────────────────────────────────────────────


class TestKuhnStates:
    def test_root_is_chance(self, kuhn: KuhnPoker) -> None:
        root = kuhn.initial_state()
        assert root.is_chance_node()
        assert not root.is_terminal()
        assert kuhn.current_player(root) is None
        assert kuhn.legal_actions(root) == ()

    def test_deal(self, kuhn: KuhnPoker, rng: np.random.Generator) -> None:
        dealt = kuhn.apply_chance(kuhn.initial_state(), rng)
        assert len(dealt.cards) == 2
        assert dealt.cards[0] != dealt.cards[1]
        assert set(dealt.cards) <= {JACK, QUEEN, KING}
        assert not dealt.is_chance_node()

    def test_every_deal_reachable(self, kuhn: KuhnPoker, rng: np.random.Generator) -> None:
        deals = {kuhn.apply_chance(kuhn.initial_state(), rng).cards for _ in range(500)}
        assert len(deals) == 6

    @pytest.mark.parametrize(
        "history, player",
        [("", 0), ("p", 1), ("b", 1), ("pb", 0)],
    )
    def test_player_to_act(self, kuhn: KuhnPoker, history: str, player: int) -> None:
        assert kuhn.current_player(KuhnState(cards=(0, 1), history=history)) == player

    @pytest.mark.parametrize("history", ["pp", "bp", "bb", "pbp", "pbb"])
    def test_terminal_histories(self, kuhn: KuhnPoker, history: str) -> None:
        state = KuhnState(cards=(0, 1), history=history)
        assert state.is_terminal()
        assert kuhn.current_player(state) is None
        assert kuhn.legal_actions(state) == ()

    def test_next_state_leaves_input_untouched(self, kuhn: KuhnPoker) -> None:
        state = KuhnState(cards=(0, 1), history="p")
        child = kuhn.next_state(state, KuhnAction.BET)
        assert child.history == "pb"
        assert state.history == "p"
        assert child.cards == state.cards


class TestKuhnUtil:
    @pytest.mark.parametrize(
        "cards, history, expected",
        [
            ((KING, JACK), "pp", 1.0),
            ((JACK, KING), "pp", -1.0),
            ((JACK, KING), "bp", 1.0),
            ((KING, JACK), "pbp", -1.0),
            ((QUEEN, JACK), "bb", 2.0),
            ((QUEEN, KING), "pbb", -2.0),
        ],
    )
    def test_seat_zero_payoff(self, kuhn: KuhnPoker, cards: tuple[int, int], history: str, expected: float) -> None:
        assert kuhn.util(KuhnState(cards=cards, history=history), 0) == expected

    @pytest.mark.parametrize("history", ["pp", "bp", "bb", "pbp", "pbb"])
    def test_zero_sum(self, kuhn: KuhnPoker, history: str) -> None:
        state = KuhnState(cards=(QUEEN, KING), history=history)
        assert kuhn.util(state, 0) == -kuhn.util(state, 1)


class TestKuhnInfoKeys:
    def test_key_hides_opponent_card(self, kuhn: KuhnPoker) -> None:
        a = KuhnState(cards=(KING, JACK), history="p")
        b = KuhnState(cards=(KING, QUEEN), history="p")
        assert kuhn.info_key(a, 0) == kuhn.info_key(b, 0) == "K:p"

    def test_key_per_observer(self, kuhn: KuhnPoker) -> None:
        state = KuhnState(cards=(KING, JACK), history="b")
        assert kuhn.info_key(state, 1) == "J:b"

    def test_describe_key(self, kuhn: KuhnPoker) -> None:
        assert kuhn.describe_key("Q:pb") == "Q [pb]"
        assert kuhn.describe_key("K:") == "K [-]"

    def test_actions_stable(self, kuhn: KuhnPoker) -> None:
        assert kuhn.legal_actions(KuhnState(cards=(0, 1))) == (KuhnAction.PASS, KuhnAction.BET)


# ─── Matching pennies ─────────────────────────────────────────────────────────


class TestMatchingPennies:
    def test_no_chance(self, pennies: MatchingPennies, rng: np.random.Generator) -> None:
        root = pennies.initial_state()
        assert not root.is_chance_node()
        assert pennies.apply_chance(root, rng) is root

    def test_turn_order(self, pennies: MatchingPennies) -> None:
        assert pennies.current_player(PenniesState()) == 0
        assert pennies.current_player(PenniesState((Coin.HEADS,))) == 1
        assert pennies.current_player(PenniesState((Coin.HEADS, Coin.TAILS))) is None

    def test_second_player_does_not_see_the_coin(self, pennies: MatchingPennies) -> None:
        heads = PenniesState((Coin.HEADS,))
        tails = PenniesState((Coin.TAILS,))
        assert pennies.info_key(heads, 1) == pennies.info_key(tails, 1)

    @pytest.mark.parametrize(
        "first, second, expected",
        [
            (Coin.HEADS, Coin.HEADS, 1.0),
            (Coin.TAILS, Coin.TAILS, 1.0),
            (Coin.HEADS, Coin.TAILS, -1.0),
            (Coin.TAILS, Coin.HEADS, -1.0),
        ],
    )
    def test_util(self, pennies: MatchingPennies, first: Coin, second: Coin, expected: float) -> None:
        state = PenniesState((first, second))
        assert pennies.util(state, 0) == expected
        assert pennies.util(state, 1) == -expected

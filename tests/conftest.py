"""
Shared pytest fixtures for the CFR solver tests.

Provides seeded generators, the reference games and the synthetic games in
tests/synthetic_games.py.
"""

from __future__ import annotations

import numpy as np
import pytest

from cfr_solver.engine.kuhn import KuhnPoker
from cfr_solver.engine.matching_pennies import MatchingPennies
from tests.synthetic_games import DominantActionGame, SingleActionGame, TinyTree


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible chance sampling."""
    return np.random.default_rng(12345)


@pytest.fixture
def kuhn() -> KuhnPoker:
    return KuhnPoker()


@pytest.fixture
def pennies() -> MatchingPennies:
    return MatchingPennies()


@pytest.fixture
def single_action() -> SingleActionGame:
    return SingleActionGame()


@pytest.fixture
def dominant() -> DominantActionGame:
    return DominantActionGame()


@pytest.fixture
def tiny() -> TinyTree:
    return TinyTree()

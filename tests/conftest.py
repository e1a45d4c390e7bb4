"""Pytest fixtures for blackjack trainer tests."""

import pytest
from decimal import Decimal
from random import Random

from bjtrainer.cards import cards_from_string
from bjtrainer.config import GameSettings
from bjtrainer.counting import HiLoSystem, HiOpt2System, KOSystem, Omega2System, ZenSystem
from bjtrainer.game import GameEngine
from bjtrainer.hand import HandState
from bjtrainer.shoe import Shoe


def make_hand(cards: str, bet: int = 10, **flags) -> HandState:
    """Build a hand from a card string like 'AS KH'."""
    return HandState(cards=cards_from_string(cards), bet=bet, **flags)


@pytest.fixture
def hand_from():
    """Factory building a HandState from a card string."""
    return make_hand


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    return Shoe(num_decks=6, penetration=0.75, rng=rng)


@pytest.fixture
def settings():
    """Default table rules, independent of the environment."""
    return GameSettings(
        number_of_decks=6,
        penetration=0.75,
        hit_soft_17=True,
        minimum_bet=10,
        maximum_bet=500,
        starting_bankroll=Decimal("1000"),
    )


@pytest.fixture
def make_engine(settings, rng):
    """
    Factory for engines whose shoe deals the given cards first.

    With one seat the deal order is player, dealer upcard, player, dealer
    hole card, then any hits.
    """

    def _make(cards: str = "", **overrides) -> GameEngine:
        engine = GameEngine(settings.with_overrides(**overrides), rng=rng)
        if cards:
            engine.shoe.stack(cards_from_string(cards))
        return engine

    return _make


@pytest.fixture
def engine(make_engine):
    """A single-seat engine with a shuffled shoe."""
    return make_engine()


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return HandState()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand("AS KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return make_hand("AS 6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand("10S 6H")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return make_hand("8S 8H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("10S 6H KC")


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


@pytest.fixture
def ko():
    """KO counting system."""
    return KOSystem()


@pytest.fixture
def hiopt2():
    """Hi-Opt II counting system."""
    return HiOpt2System()


@pytest.fixture
def omega2():
    """Omega II counting system."""
    return Omega2System()


@pytest.fixture
def zen():
    """Zen counting system."""
    return ZenSystem()

"""Play strategies for the tracked seat in a simulation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from bjtrainer.cards import Card
from bjtrainer.config import GameSettings
from bjtrainer.counting import COUNTING_SYSTEMS, CountingSystem, create_counting_system
from bjtrainer.hand import Action, get_hand_total, is_soft
from bjtrainer.strategy.basic import get_basic_strategy_action
from bjtrainer.strategy.deviations import get_strategy_action


@dataclass(frozen=True)
class PlayContext:
    """Table information a play strategy may consult."""

    settings: GameSettings
    shoe_true_count: float


class PlayStrategy(ABC):
    """
    Abstract base for play strategies.

    A strategy picks an action from the available set for the tracked hand.
    Counting strategies also take insurance at a true count of +3.
    """

    name: str = ""
    uses_count: bool = False
    sits_out: bool = False

    @abstractmethod
    def choose(
        self,
        cards: Sequence[Card],
        dealer_upcard: Card,
        available: list[Action],
        ctx: PlayContext,
    ) -> Action:
        """Return the action to play."""
        ...

    def create_counter(self) -> CountingSystem | None:
        """Return a parallel counter, or None when the shoe's Hi-Lo count is used."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class BasicPlay(PlayStrategy):
    name = "basic"

    def choose(self, cards, dealer_upcard, available, ctx):
        return get_basic_strategy_action(cards, dealer_upcard, available)


class HiLoPlay(PlayStrategy):
    """Basic strategy plus index plays keyed on the shoe's Hi-Lo true count."""

    name = "hilo"
    uses_count = True

    def choose(self, cards, dealer_upcard, available, ctx):
        return get_strategy_action(cards, dealer_upcard, available, ctx.shoe_true_count)


class WongingPlay(HiLoPlay):
    """Hi-Lo play that sits out rounds below the wong threshold."""

    name = "wonging"
    sits_out = True


class CountedBasicPlay(PlayStrategy):
    """
    Basic strategy with a parallel count from another system.

    The index plays are calibrated for Hi-Lo, so this count only drives
    betting and insurance.
    """

    uses_count = True

    def __init__(self, name: str) -> None:
        if name not in COUNTING_SYSTEMS:
            raise ValueError(f"Unknown counting system: {name}")
        self.name = name

    def create_counter(self) -> CountingSystem:
        return create_counting_system(self.name)

    def choose(self, cards, dealer_upcard, available, ctx):
        return get_basic_strategy_action(cards, dealer_upcard, available)


class MimicDealer(PlayStrategy):
    """Play the dealer's rule: never double, split or surrender."""

    name = "mimic"

    def choose(self, cards, dealer_upcard, available, ctx):
        best = get_hand_total(cards).best
        if best < 17 or (best == 17 and is_soft(cards) and ctx.settings.hit_soft_17):
            return Action.HIT
        return Action.STAND


class NeverBust(PlayStrategy):
    """Stand on any hard 12 or more; basic strategy otherwise."""

    name = "never_bust"

    def choose(self, cards, dealer_upcard, available, ctx):
        if not is_soft(cards) and get_hand_total(cards).best >= 12:
            return Action.STAND
        return get_basic_strategy_action(cards, dealer_upcard, available)


PLAY_STRATEGIES: dict[str, PlayStrategy] = {
    strategy.name: strategy
    for strategy in (
        BasicPlay(),
        HiLoPlay(),
        WongingPlay(),
        *(CountedBasicPlay(name) for name in COUNTING_SYSTEMS),
        MimicDealer(),
        NeverBust(),
    )
}


def get_play_strategy(name: str) -> PlayStrategy:
    """Look up a play strategy by name."""
    try:
        return PLAY_STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown play strategy: {name}") from None

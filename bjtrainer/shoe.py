"""Multi-deck shoe with Hi-Lo running count tracking."""

import logging
import math
from dataclasses import dataclass
from random import Random
from typing import Iterator

from bjtrainer.cards import Card, standard_deck
from bjtrainer.counting.hilo import HiLoSystem

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52

# True count divides by at least this many decks
MIN_DECKS_REMAINING = 0.5


def round_half_up(value: float, places: int = 1) -> float:
    """Round to ``places`` decimals with halves going towards +infinity."""
    factor = 10**places
    return math.floor(value * factor + 0.5) / factor


@dataclass(frozen=True)
class CountInfo:
    """Snapshot of the shoe's Hi-Lo count."""

    running_count: int
    true_count: float
    cards_dealt: int
    cards_remaining: int
    decks_remaining: float


@dataclass(frozen=True)
class ShoeState:
    """Snapshot of the shoe as exposed to consumers."""

    total_cards: int
    cards_dealt: int
    penetration: float  # fraction of the shoe dealt so far
    needs_reshuffle: bool
    count_info: CountInfo
    shuffle_count: int


class Shoe:
    """
    A multi-deck shoe for blackjack.

    Cards are dealt from the tail of the shuffled sequence. The running
    count only sees cards dealt face up; a hole card is counted through
    ``update_count_for_reveal`` when it is turned over.
    """

    def __init__(
        self,
        num_decks: int = 6,
        penetration: float = 0.75,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize and shuffle a shoe with multiple decks.

        Args:
            num_decks: Number of decks in the shoe (typically 6 or 8)
            penetration: Fraction of shoe dealt before reshuffle (0.0-1.0)
            rng: Random number generator for shuffling
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")
        if not 0.0 < penetration <= 1.0:
            raise ValueError("Penetration must be between 0 and 1")

        self._num_decks = num_decks
        self._penetration = penetration
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self._dealt: list[Card] = []
        self._counter = HiLoSystem()
        self._shuffle_count = 0
        self.shuffle()

    def shuffle(self) -> None:
        """Rebuild every deck, shuffle, and reset the dealt log and count."""
        self._cards = [card for _ in range(self._num_decks) for card in standard_deck()]
        self._rng.shuffle(self._cards)
        self._dealt = []
        self._counter.reset()
        self._shuffle_count += 1
        logger.debug("Shoe shuffled (%d decks, shuffle #%d)", self._num_decks, self._shuffle_count)

    def deal(self, face_up: bool = True) -> Card:
        """
        Deal one card from the tail of the shoe.

        An empty shoe is reshuffled first, so dealing never fails.
        """
        if not self._cards:
            logger.debug("Shoe exhausted mid-round, reshuffling")
            self.shuffle()
        card = self._cards.pop()
        if not face_up:
            card = card.face_down()
        self._dealt.append(card)
        if face_up:
            self._counter.count_card(card)
        return card

    def stack(self, cards: list[Card]) -> None:
        """
        Move the given cards to the top of the shoe, first card dealt first.

        Each card is taken out of the undealt cards, so the shoe composition
        is unchanged. Used to set up drill scenarios and deterministic tests.

        Raises:
            ValueError: If a card is not among the undealt cards
        """
        for card in cards:
            self._cards.remove(card)
        self._cards.extend(reversed(cards))

    def update_count_for_reveal(self, card: Card) -> None:
        """Count a hole card at the moment it is turned face up."""
        self._counter.count_card(card)

    def needs_reshuffle(self) -> bool:
        """Check if the penetration threshold has been reached."""
        return len(self._dealt) / self.total_cards >= self._penetration

    @property
    def running_count(self) -> int:
        """Return the Hi-Lo running count."""
        return int(self._counter.running_count)

    @property
    def decks_remaining(self) -> float:
        """Return decks left in the shoe, floored at half a deck."""
        return max(len(self._cards) / CARDS_PER_DECK, MIN_DECKS_REMAINING)

    @property
    def true_count(self) -> float:
        """Return the running count per remaining deck, to one decimal."""
        return round_half_up(self._counter.running_count / self.decks_remaining)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def cards_dealt(self) -> int:
        """Return the number of cards dealt since the last shuffle."""
        return len(self._dealt)

    @property
    def dealt_cards(self) -> tuple[Card, ...]:
        """Return the cards dealt since the last shuffle, in order."""
        return tuple(self._dealt)

    @property
    def total_cards(self) -> int:
        """Return the total number of cards in a full shoe."""
        return self._num_decks * CARDS_PER_DECK

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    @property
    def penetration(self) -> float:
        """Return the configured penetration."""
        return self._penetration

    @property
    def shuffle_count(self) -> int:
        """Return how many times this shoe has been shuffled."""
        return self._shuffle_count

    def get_count_info(self) -> CountInfo:
        return CountInfo(
            running_count=self.running_count,
            true_count=self.true_count,
            cards_dealt=self.cards_dealt,
            cards_remaining=self.cards_remaining,
            decks_remaining=round_half_up(self.decks_remaining),
        )

    def get_state(self) -> ShoeState:
        dealt_fraction = self.cards_dealt / self.total_cards
        return ShoeState(
            total_cards=self.total_cards,
            cards_dealt=self.cards_dealt,
            penetration=round_half_up(dealt_fraction, 2),
            needs_reshuffle=self.needs_reshuffle(),
            count_info=self.get_count_info(),
            shuffle_count=self._shuffle_count,
        )

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

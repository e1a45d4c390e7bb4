"""Abstract base class for card counting systems."""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping

from bjtrainer.cards import Card, Rank

# Below this many decks remaining a balanced true count is reported as zero.
MIN_DECKS_FOR_TRUE_COUNT = 0.25


class CountingSystem(ABC):
    """
    Abstract base class for card counting systems.

    All counting systems track a running count and can compute a true count
    based on decks remaining.
    """

    def __init__(self) -> None:
        """Initialize the counting system."""
        self._running_count: float = 0.0

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the counting system."""
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, float]:
        """
        Return the tag value mapping for this system.

        Maps each Rank to its count value.
        """
        ...

    @property
    @abstractmethod
    def is_balanced(self) -> bool:
        """
        Return whether this is a balanced counting system.

        A balanced system sums to 0 over a complete deck.
        An unbalanced system does not.
        """
        ...

    def tag(self, card: Card) -> float:
        """Return the tag value of a card without counting it."""
        return self.tag_values[card.rank]

    def tally(self, cards: Iterable[Card]) -> float:
        """Return the summed tag values of ``cards`` without counting them."""
        return sum(self.tag_values[card.rank] for card in cards)

    def count_card(self, card: Card) -> float:
        """
        Count a single card and update the running count.

        Args:
            card: The card to count

        Returns:
            The tag value of the card
        """
        tag_value = self.tag_values[card.rank]
        self._running_count += tag_value
        return tag_value

    def count_cards(self, cards: Iterable[Card]) -> float:
        """
        Count multiple cards.

        Returns:
            The total tag value of all cards
        """
        total = 0.0
        for card in cards:
            total += self.count_card(card)
        return total

    @property
    def running_count(self) -> float:
        """Return the current running count."""
        return self._running_count

    def true_count(self, decks_remaining: float) -> float:
        """
        Calculate the true count.

        Args:
            decks_remaining: Number of decks remaining in the shoe

        Returns:
            The running count divided by decks remaining, or 0 once fewer
            than a quarter deck remains.
        """
        if decks_remaining <= MIN_DECKS_FOR_TRUE_COUNT:
            return 0.0
        return self._running_count / decks_remaining

    def reset(self) -> None:
        """Reset the count to zero."""
        self._running_count = 0.0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(running_count={self._running_count})"

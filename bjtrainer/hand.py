"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterator, NamedTuple, Sequence

from bjtrainer.cards import Card


class Action(str, Enum):
    """Possible player actions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"
    SURRENDER = "surrender"

    def __str__(self) -> str:
        return self.value


class HandResult(str, Enum):
    """Outcome of a resolved hand."""

    BLACKJACK = "blackjack"
    WIN = "win"
    LOSS = "loss"
    PUSH = "push"
    SURRENDER = "surrender"
    PENDING = "pending"

    def __str__(self) -> str:
        return self.value


class HandTotal(NamedTuple):
    """Hard, soft and best totals of a set of cards."""

    hard: int
    soft: int
    best: int


def get_hand_total(cards: Sequence[Card]) -> HandTotal:
    """
    Total a hand.

    ``hard`` counts every ace as 1, ``soft`` counts one ace as 11 when that
    keeps the hand at 21 or under, and ``best`` is the soft total unless it
    busts.
    """
    hard = 0
    has_ace = False
    for card in cards:
        if card.is_ace:
            has_ace = True
            hard += 1
        else:
            hard += card.value

    soft = hard + 10 if has_ace and hard + 10 <= 21 else hard
    best = soft if soft <= 21 else hard
    return HandTotal(hard, soft, best)


def is_blackjack(cards: Sequence[Card]) -> bool:
    """Check for 21 with exactly two cards."""
    return len(cards) == 2 and get_hand_total(cards).best == 21


def is_busted(cards: Sequence[Card]) -> bool:
    """Check if the best total is over 21."""
    return get_hand_total(cards).best > 21


def is_soft(cards: Sequence[Card]) -> bool:
    """Check if the hand holds an ace counted as 11."""
    total = get_hand_total(cards)
    return total.soft != total.hard and total.soft <= 21


def is_pair(cards: Sequence[Card]) -> bool:
    """Check for two cards of equal blackjack value (K-10 counts as a pair)."""
    return len(cards) == 2 and cards[0].value == cards[1].value


@dataclass
class HandState:
    """
    One player hand within a round.

    Cards are appended by the engine; ``result`` and ``payout`` are set once
    when the round is resolved.
    """

    cards: list[Card] = field(default_factory=list)
    bet: int = 0
    is_doubled: bool = False
    is_surrendered: bool = False
    is_insured: bool = False
    insurance_bet: Decimal = Decimal("0")
    is_split_hand: bool = False
    is_split_aces: bool = False
    result: HandResult = HandResult.PENDING
    payout: Decimal = Decimal("0")

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def total(self) -> HandTotal:
        return get_hand_total(self.cards)

    @property
    def value(self) -> int:
        """Return the best total."""
        return self.total.best

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a two-card 21."""
        return is_blackjack(self.cards)

    @property
    def is_busted(self) -> bool:
        return is_busted(self.cards)

    @property
    def is_pair(self) -> bool:
        return is_pair(self.cards)

    @property
    def is_finished(self) -> bool:
        """Check if the hand takes no more cards (bust, 21, or split aces)."""
        return self.is_split_aces or self.is_busted or self.value == 21

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"


def can_split(hand: HandState, bankroll: Decimal) -> bool:
    """Check for a two-card pair and enough bankroll to match the bet."""
    return is_pair(hand.cards) and bankroll >= hand.bet


def can_double(hand: HandState, bankroll: Decimal) -> bool:
    """Check for two cards, no prior double, and enough bankroll to match the bet."""
    return len(hand.cards) == 2 and not hand.is_doubled and bankroll >= hand.bet


def can_surrender(hand: HandState) -> bool:
    return len(hand.cards) == 2 and not hand.is_doubled


def get_available_actions(
    hand: HandState,
    bankroll: Decimal,
    allow_surrender: bool,
    allow_double_after_split: bool,
    is_split_hand: bool,
) -> list[Action]:
    """
    List the legal actions for a hand.

    Args:
        hand: The hand to act on
        bankroll: Chips the player can still commit this round
        allow_surrender: Table offers late surrender
        allow_double_after_split: Table allows doubling split hands
        is_split_hand: The hand came from a split

    Returns:
        Hit and stand always, then double, split and surrender when eligible
    """
    actions = [Action.HIT, Action.STAND]

    if can_double(hand, bankroll) and (not is_split_hand or allow_double_after_split):
        actions.append(Action.DOUBLE)

    if can_split(hand, bankroll):
        actions.append(Action.SPLIT)

    # Never on a split-derived hand, whatever the table allows
    if allow_surrender and can_surrender(hand) and not is_split_hand:
        actions.append(Action.SURRENDER)

    return actions

"""Basic strategy tables for blackjack (H17, multi-deck)."""

from enum import Enum
from typing import Iterable, Mapping, NamedTuple, Sequence

from bjtrainer.cards import Card
from bjtrainer.hand import Action, get_hand_total, is_pair, is_soft


class StrategyCode(str, Enum):
    """
    Chart codes. The second letter names the fallback when the primary
    action is not available.
    """

    H = "H"  # Hit
    S = "S"  # Stand
    D = "D"  # Double, else hit
    Ds = "Ds"  # Double, else stand
    P = "P"  # Split, else hit
    Ph = "Ph"  # Split, else hit
    Rh = "Rh"  # Surrender, else hit
    Rs = "Rs"  # Surrender, else stand

    def __str__(self) -> str:
        return self.value

    @property
    def primary(self) -> Action:
        """Return the action the chart asks for."""
        return _PRIMARY[self]

    @property
    def fallback(self) -> Action:
        """Return the action taken when the primary is unavailable."""
        return _FALLBACK[self]

    def resolve(self, available: Iterable[Action]) -> Action:
        """Pick the primary action if allowed, else the fallback."""
        return self.primary if self.primary in set(available) else self.fallback


_PRIMARY = {
    StrategyCode.H: Action.HIT,
    StrategyCode.S: Action.STAND,
    StrategyCode.D: Action.DOUBLE,
    StrategyCode.Ds: Action.DOUBLE,
    StrategyCode.P: Action.SPLIT,
    StrategyCode.Ph: Action.SPLIT,
    StrategyCode.Rh: Action.SURRENDER,
    StrategyCode.Rs: Action.SURRENDER,
}

_FALLBACK = {
    StrategyCode.H: Action.HIT,
    StrategyCode.S: Action.STAND,
    StrategyCode.D: Action.HIT,
    StrategyCode.Ds: Action.STAND,
    StrategyCode.P: Action.HIT,
    StrategyCode.Ph: Action.HIT,
    StrategyCode.Rh: Action.HIT,
    StrategyCode.Rs: Action.STAND,
}

# Type aliases for clarity
DealerUpcard = int  # 2-11 (11 = Ace)
StrategyTable = Mapping[tuple[int, DealerUpcard], StrategyCode]

DEALER_UPCARDS = range(2, 12)

HARD = "hard"
SOFT = "soft"
PAIR = "pair"


class StrategyLookup(NamedTuple):
    """The chart cell a hand maps to."""

    table: str  # "hard", "soft" or "pair"
    key: int  # total, or the pair card's value (11 = aces)
    dealer: DealerUpcard
    code: StrategyCode


def _build_hard_table() -> StrategyTable:
    """Build hard totals strategy table."""
    H = StrategyCode.H
    S = StrategyCode.S
    D = StrategyCode.D
    Rh = StrategyCode.Rh
    Rs = StrategyCode.Rs

    table: dict[tuple[int, int], StrategyCode] = {}

    # Hard 5-8: Always hit
    for total in range(5, 9):
        for dealer in DEALER_UPCARDS:
            table[(total, dealer)] = H

    # Hard 9
    for dealer in DEALER_UPCARDS:
        table[(9, dealer)] = D if dealer in (3, 4, 5, 6) else H

    # Hard 10
    for dealer in DEALER_UPCARDS:
        table[(10, dealer)] = D if dealer <= 9 else H

    # Hard 11
    for dealer in DEALER_UPCARDS:
        table[(11, dealer)] = D

    # Hard 12
    for dealer in DEALER_UPCARDS:
        table[(12, dealer)] = S if dealer in (4, 5, 6) else H

    # Hard 13-16
    for total in range(13, 17):
        for dealer in DEALER_UPCARDS:
            table[(total, dealer)] = S if dealer <= 6 else H

    # Late surrender, H17
    table[(15, 10)] = Rh
    table[(15, 11)] = Rh
    table[(16, 9)] = Rh
    table[(16, 10)] = Rh
    table[(16, 11)] = Rh

    # Hard 17+: Stand, except surrender 17 vs A under H17
    for total in range(17, 22):
        for dealer in DEALER_UPCARDS:
            table[(total, dealer)] = S
    table[(17, 11)] = Rs

    return table


def _build_soft_table() -> StrategyTable:
    """Build soft totals strategy table."""
    H = StrategyCode.H
    S = StrategyCode.S
    D = StrategyCode.D
    Ds = StrategyCode.Ds

    double_against = {
        13: (5, 6),
        14: (5, 6),
        15: (4, 5, 6),
        16: (4, 5, 6),
        17: (3, 4, 5, 6),
    }

    table: dict[tuple[int, int], StrategyCode] = {}

    # Soft 13-17 (A,2 through A,6)
    for total, doubles in double_against.items():
        for dealer in DEALER_UPCARDS:
            table[(total, dealer)] = D if dealer in doubles else H

    # Soft 18 (A,7)
    for dealer in DEALER_UPCARDS:
        if dealer <= 6:
            table[(18, dealer)] = Ds
        elif dealer <= 8:
            table[(18, dealer)] = S
        else:
            table[(18, dealer)] = H

    # Soft 19 (A,8): Double vs 6 under H17
    for dealer in DEALER_UPCARDS:
        table[(19, dealer)] = S
    table[(19, 6)] = Ds

    # Soft 20-21: Always stand
    for total in (20, 21):
        for dealer in DEALER_UPCARDS:
            table[(total, dealer)] = S

    return table


def _build_pair_table() -> StrategyTable:
    """Build pair splitting strategy table, keyed by the pair card's value."""
    H = StrategyCode.H
    S = StrategyCode.S
    D = StrategyCode.D
    P = StrategyCode.P
    Ph = StrategyCode.Ph

    table: dict[tuple[int, int], StrategyCode] = {}

    # Pairs of 2s and 3s
    for rank in (2, 3):
        for dealer in DEALER_UPCARDS:
            if dealer <= 3:
                table[(rank, dealer)] = Ph
            elif dealer <= 7:
                table[(rank, dealer)] = P
            else:
                table[(rank, dealer)] = H

    # Pair of 4s
    for dealer in DEALER_UPCARDS:
        table[(4, dealer)] = Ph if dealer in (5, 6) else H

    # Pair of 5s: Never split, play as hard 10
    for dealer in DEALER_UPCARDS:
        table[(5, dealer)] = D if dealer <= 9 else H

    # Pair of 6s
    for dealer in DEALER_UPCARDS:
        if dealer == 2:
            table[(6, dealer)] = Ph
        elif dealer <= 6:
            table[(6, dealer)] = P
        else:
            table[(6, dealer)] = H

    # Pair of 7s
    for dealer in DEALER_UPCARDS:
        table[(7, dealer)] = P if dealer <= 7 else H

    # Pair of 8s: Always split
    for dealer in DEALER_UPCARDS:
        table[(8, dealer)] = P

    # Pair of 9s
    for dealer in DEALER_UPCARDS:
        table[(9, dealer)] = S if dealer in (7, 10, 11) else P

    # Pair of 10s: Never split
    for dealer in DEALER_UPCARDS:
        table[(10, dealer)] = S

    # Pair of Aces: Always split
    for dealer in DEALER_UPCARDS:
        table[(11, dealer)] = P

    return table


HARD_TABLE: StrategyTable = _build_hard_table()
SOFT_TABLE: StrategyTable = _build_soft_table()
PAIR_TABLE: StrategyTable = _build_pair_table()

TABLES: Mapping[str, StrategyTable] = {
    HARD: HARD_TABLE,
    SOFT: SOFT_TABLE,
    PAIR: PAIR_TABLE,
}


def lookup(cards: Sequence[Card], dealer_upcard: Card) -> StrategyLookup:
    """
    Find the chart cell for a hand.

    Pairs are checked first, then soft totals, then hard totals clamped
    to 5-21.
    """
    dealer = dealer_upcard.value

    if is_pair(cards):
        key = cards[0].value
        return StrategyLookup(PAIR, key, dealer, PAIR_TABLE[(key, dealer)])

    best = get_hand_total(cards).best
    if is_soft(cards) and (best, dealer) in SOFT_TABLE:
        return StrategyLookup(SOFT, best, dealer, SOFT_TABLE[(best, dealer)])

    key = min(max(best, 5), 21)
    return StrategyLookup(HARD, key, dealer, HARD_TABLE[(key, dealer)])


def get_basic_strategy_code(cards: Sequence[Card], dealer_upcard: Card) -> StrategyCode:
    """Return the raw chart code for a hand."""
    return lookup(cards, dealer_upcard).code


def get_basic_strategy_action(
    cards: Sequence[Card],
    dealer_upcard: Card,
    available: Iterable[Action],
) -> Action:
    """Return the basic strategy action, falling back when the chart's choice is unavailable."""
    return lookup(cards, dealer_upcard).code.resolve(available)

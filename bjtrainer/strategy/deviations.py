"""Strategy deviations based on true count (Illustrious 18, Fab 4)."""

from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

from bjtrainer.cards import Card
from bjtrainer.hand import Action
from bjtrainer.strategy.basic import HARD, PAIR, StrategyLookup, lookup

# Take insurance at or above this Hi-Lo true count
INSURANCE_INDEX = 3.0


@dataclass(frozen=True)
class IndexPlay:
    """
    An index play (strategy deviation based on count).

    A play applies to one cell of the basic strategy chart. It is active
    when the true count is at or above the index ("at_or_above") or at or
    below it ("at_or_below").
    """

    table: str  # "hard" or "pair"
    key: int  # hard total, or pair card value
    dealer_upcard: int  # 2-11 (11 = Ace)
    index: float
    action: Action
    direction: Literal["at_or_above", "at_or_below"] = "at_or_above"

    # Description for training
    description: str = ""

    def should_deviate(self, true_count: float) -> bool:
        """
        Check if the deviation should be taken at the given true count.

        Args:
            true_count: The current true count

        Returns:
            True if the deviation should be taken
        """
        if self.direction == "at_or_above":
            return true_count >= self.index
        return true_count <= self.index

    def matches(self, cell: StrategyLookup) -> bool:
        """Check if this play belongs to the given chart cell."""
        return (
            self.table == cell.table
            and self.key == cell.key
            and self.dealer_upcard == cell.dealer
        )


def _hard(total: int, dealer: int, index: float, action: Action, description: str) -> IndexPlay:
    direction = "at_or_above" if action != Action.HIT else "at_or_below"
    return IndexPlay(HARD, total, dealer, index, action, direction, description)


# The Illustrious 18 playing deviations. Insurance, the remaining entry,
# is the standalone INSURANCE_INDEX.
ILLUSTRIOUS_18: list[IndexPlay] = [
    _hard(16, 10, 0, Action.STAND, "Stand on 16 vs 10 at TC 0 or higher"),
    _hard(15, 10, 4, Action.STAND, "Stand on 15 vs 10 at TC +4 or higher"),
    _hard(10, 10, 4, Action.DOUBLE, "Double 10 vs 10 at TC +4 or higher"),
    _hard(10, 11, 4, Action.DOUBLE, "Double 10 vs A at TC +4 or higher"),
    _hard(12, 3, 2, Action.STAND, "Stand on 12 vs 3 at TC +2 or higher"),
    _hard(12, 2, 3, Action.STAND, "Stand on 12 vs 2 at TC +3 or higher"),
    _hard(11, 11, 1, Action.DOUBLE, "Double 11 vs A at TC +1 or higher"),
    _hard(9, 2, 1, Action.DOUBLE, "Double 9 vs 2 at TC +1 or higher"),
    _hard(9, 7, 3, Action.DOUBLE, "Double 9 vs 7 at TC +3 or higher"),
    _hard(16, 9, 5, Action.STAND, "Stand on 16 vs 9 at TC +5 or higher"),
    _hard(13, 2, -1, Action.HIT, "Hit 13 vs 2 at TC -1 or lower"),
    _hard(12, 4, 0, Action.HIT, "Hit 12 vs 4 at TC 0 or lower"),
    _hard(12, 5, -2, Action.HIT, "Hit 12 vs 5 at TC -2 or lower"),
    _hard(12, 6, -1, Action.HIT, "Hit 12 vs 6 at TC -1 or lower"),
    _hard(13, 3, -2, Action.HIT, "Hit 13 vs 3 at TC -2 or lower"),
    IndexPlay(PAIR, 10, 5, 5, Action.SPLIT, description="Split 10s vs 5 at TC +5 or higher"),
    IndexPlay(PAIR, 10, 6, 4, Action.SPLIT, description="Split 10s vs 6 at TC +4 or higher"),
]


# The Fab 4 - Surrender deviations
FAB_4: list[IndexPlay] = [
    _hard(15, 10, 0, Action.SURRENDER, "Surrender 15 vs 10 at TC 0 or higher"),
    _hard(14, 10, 3, Action.SURRENDER, "Surrender 14 vs 10 at TC +3 or higher"),
    _hard(15, 9, 2, Action.SURRENDER, "Surrender 15 vs 9 at TC +2 or higher"),
    _hard(15, 11, 1, Action.SURRENDER, "Surrender 15 vs A at TC +1 or higher"),
]

ALL_INDEX_PLAYS: list[IndexPlay] = ILLUSTRIOUS_18 + FAB_4


def should_take_insurance(true_count: float) -> bool:
    """Insurance becomes a positive bet at a true count of +3."""
    return true_count >= INSURANCE_INDEX


def find_deviations(cell: StrategyLookup, true_count: float) -> list[IndexPlay]:
    """
    Return the plays active for a chart cell, surrender plays first.

    Within each group the table order is kept.
    """
    active = [
        play
        for play in ALL_INDEX_PLAYS
        if play.matches(cell) and play.should_deviate(true_count)
    ]
    surrenders = [play for play in active if play.action == Action.SURRENDER]
    others = [play for play in active if play.action != Action.SURRENDER]
    return surrenders + others


def get_deviation_action(
    cards: Sequence[Card],
    dealer_upcard: Card,
    true_count: float,
    available: Iterable[Action],
) -> Action | None:
    """
    Return the count-adjusted action for a hand, or None if no play is active.

    When the winning play's action is not available, the chart code's own
    fallback decides.
    """
    cell = lookup(cards, dealer_upcard)
    active = find_deviations(cell, true_count)
    if not active:
        return None

    allowed = set(available)
    if active[0].action in allowed:
        return active[0].action
    return cell.code.resolve(allowed)


def get_strategy_action(
    cards: Sequence[Card],
    dealer_upcard: Card,
    available: Iterable[Action],
    true_count: float | None = None,
) -> Action:
    """
    Combine both layers: the deviation when one is active, else basic strategy.

    Pass ``true_count=None`` to play pure basic strategy.
    """
    allowed = list(available)
    if true_count is not None:
        action = get_deviation_action(cards, dealer_upcard, true_count, allowed)
        if action is not None:
            return action
    return lookup(cards, dealer_upcard).code.resolve(allowed)

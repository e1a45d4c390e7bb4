"""Plain-language explanations of strategy decisions for training hints."""

from typing import Sequence

from bjtrainer.cards import Card
from bjtrainer.hand import Action
from bjtrainer.strategy.basic import PAIR, SOFT, StrategyCode, lookup
from bjtrainer.strategy.deviations import find_deviations

ACTION_NAMES = {
    Action.HIT: "hit",
    Action.STAND: "stand",
    Action.DOUBLE: "double down",
    Action.SPLIT: "split",
    Action.SURRENDER: "surrender",
}

CODE_DESCRIPTIONS = {
    StrategyCode.H: "hit",
    StrategyCode.S: "stand",
    StrategyCode.D: "double down (hit if not allowed)",
    StrategyCode.Ds: "double down (stand if not allowed)",
    StrategyCode.P: "split",
    StrategyCode.Ph: "split (hit if not allowed)",
    StrategyCode.Rh: "surrender (hit if not allowed)",
    StrategyCode.Rs: "surrender (stand if not allowed)",
}


def describe_hand(cards: Sequence[Card], dealer_upcard: Card) -> str:
    """Name the chart row a hand falls in, e.g. 'Pair of 8s' or 'Soft 18'."""
    cell = lookup(cards, dealer_upcard)
    if cell.table == PAIR:
        return "Pair of Aces" if cell.key == 11 else f"Pair of {cell.key}s"
    if cell.table == SOFT:
        return f"Soft {cell.key}"
    return f"Hard {cell.key}"


def explain_code(code: StrategyCode) -> str:
    return CODE_DESCRIPTIONS[code]


def explain_decision(
    cards: Sequence[Card],
    dealer_upcard: Card,
    true_count: float | None = None,
) -> str:
    """
    Explain what the charts recommend for a hand.

    With a true count, an active index play is named as well.
    """
    cell = lookup(cards, dealer_upcard)
    text = (
        f"{describe_hand(cards, dealer_upcard)} vs dealer {dealer_upcard.label}: "
        f"Basic strategy says {explain_code(cell.code)}."
    )
    if true_count is not None:
        active = find_deviations(cell, true_count)
        if active:
            text += f" At true count {true_count:+.1f}: {active[0].description}."
    return text


def get_decision_summary(
    cards: Sequence[Card],
    dealer_upcard: Card,
    chosen: Action,
    correct: Action,
) -> str:
    """One-line review of a decision, e.g. 'Hard 16: should surrender, chose hit'."""
    hand_desc = describe_hand(cards, dealer_upcard)
    return f"{hand_desc}: should {ACTION_NAMES[correct]}, chose {ACTION_NAMES[chosen]}"


def get_decision_reasoning(
    cards: Sequence[Card],
    dealer_upcard: Card,
    chosen: Action,
    correct: Action,
) -> str:
    """Longer review that quotes the chart code behind the correct action."""
    cell = lookup(cards, dealer_upcard)
    prefix = (
        f"{describe_hand(cards, dealer_upcard)} vs dealer {dealer_upcard.label}: "
        f"Basic strategy says {explain_code(cell.code)}."
    )
    if chosen == correct:
        return f"{prefix} You correctly chose {ACTION_NAMES[chosen]}."
    return f"{prefix} You chose {ACTION_NAMES[chosen]} instead of {ACTION_NAMES[correct]}."

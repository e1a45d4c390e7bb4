"""Player advantage and bet ramp by true count."""

from dataclasses import dataclass
from decimal import Decimal

# House edge at a neutral count, and the swing per true-count point
BASE_HOUSE_EDGE = 0.005
EDGE_PER_TRUE_COUNT = 0.005

# (true count below which the ramp applies, units to bet)
_BET_RAMP: list[tuple[float, int]] = [
    (2, 1),
    (3, 2),
    (4, 4),
    (5, 8),
]
_TOP_UNITS = 12


@dataclass(frozen=True)
class BetRecommendation:
    """Suggested bet for a true count."""

    units: int
    amount: Decimal
    advantage: float


def calculate_player_advantage(true_count: float) -> float:
    """
    Estimate the player's edge from the true count.

    Linear model: -0.5% at a neutral count, +0.5% per true-count point.
    """
    return -BASE_HOUSE_EDGE + true_count * EDGE_PER_TRUE_COUNT


def units_for_true_count(true_count: float) -> int:
    """Map a true count onto the 1-2-4-8-12 unit ramp."""
    for upper, units in _BET_RAMP:
        if true_count < upper:
            return units
    return _TOP_UNITS


def get_recommended_bet(
    true_count: float,
    minimum_bet: int,
    bankroll: Decimal,
) -> BetRecommendation:
    """
    Recommend a bet on the 1-2-4-8-12 ramp, capped at the bankroll.

    Args:
        true_count: Current Hi-Lo true count
        minimum_bet: Table minimum, used as the betting unit
        bankroll: Chips available

    Returns:
        Units, amount and the estimated advantage at this count
    """
    units = units_for_true_count(true_count)
    amount = min(Decimal(units * minimum_bet), Decimal(bankroll))
    return BetRecommendation(
        units=units,
        amount=amount,
        advantage=calculate_player_advantage(true_count),
    )

"""Count-based edge and bet sizing."""

from bjtrainer.statistics.advantage import (
    BetRecommendation,
    calculate_player_advantage,
    get_recommended_bet,
)
from bjtrainer.statistics.kelly import KellyCalculator

__all__ = [
    "BetRecommendation",
    "calculate_player_advantage",
    "get_recommended_bet",
    "KellyCalculator",
]

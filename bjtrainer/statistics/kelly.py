"""Kelly criterion calculations for optimal bet sizing."""

from decimal import ROUND_HALF_UP, Decimal

from bjtrainer.statistics.advantage import BASE_HOUSE_EDGE, EDGE_PER_TRUE_COUNT


class KellyCalculator:
    """
    Calculate optimal bet sizes using the Kelly criterion.

    The Kelly criterion maximizes the expected logarithm of wealth,
    providing the optimal bet size for long-term bankroll growth.
    """

    def __init__(
        self,
        bankroll: Decimal,
        min_bet: Decimal,
        max_bet: Decimal,
        kelly_fraction: float = 1.0,
    ) -> None:
        """
        Initialize the Kelly calculator.

        Args:
            bankroll: Current bankroll
            min_bet: Smallest bet to place, used whenever there is no edge
            max_bet: Largest bet allowed
            kelly_fraction: Fraction of Kelly to use (0.5 = half Kelly)
        """
        self.bankroll = bankroll
        self.min_bet = min_bet
        self.max_bet = max_bet
        self.kelly_fraction = kelly_fraction

    def optimal_bet(self, player_edge: Decimal) -> Decimal:
        """
        Calculate the Kelly-optimal bet size.

        For blackjack with approximately even-money payouts:
        Kelly bet = edge * bankroll

        Args:
            player_edge: Player's edge as a decimal (e.g., 0.01 for 1%)

        Returns:
            Optimal bet size in whole units, within [min_bet, max_bet]
        """
        if player_edge <= 0:
            return self.min_bet

        full_kelly = player_edge * self.bankroll
        optimal = (full_kelly * Decimal(str(self.kelly_fraction))).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )

        # Clamp to limits
        return max(self.min_bet, min(optimal, self.max_bet))

    def bet_for_true_count(self, true_count: float) -> Decimal:
        """
        Calculate optimal bet for a given true count.

        Args:
            true_count: Current true count

        Returns:
            Optimal bet size
        """
        # Player edge = TC * 0.5% - house edge
        edge_per_tc = Decimal(str(EDGE_PER_TRUE_COUNT))
        player_edge = Decimal(str(true_count)) * edge_per_tc - Decimal(str(BASE_HOUSE_EDGE))

        return self.optimal_bet(player_edge)

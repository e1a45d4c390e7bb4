"""Aggregate results of a simulation run."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from bjtrainer.game.state import RoundResult
from bjtrainer.hand import HandResult

# Bankroll history keeps roughly this many samples regardless of run length
HISTORY_SAMPLES = 1000


@dataclass(frozen=True)
class BankrollSample:
    """Bankroll after a given round."""

    hand_number: int
    bankroll: Decimal
    true_count: float
    bet: int = 0


@dataclass
class SimulationProgress:
    hands_completed: int
    total_hands: int
    current_bankroll: Decimal


def sample_interval_for(number_of_hands: int) -> int:
    """Rounds between bankroll samples."""
    if number_of_hands <= HISTORY_SAMPLES:
        return 1
    return number_of_hands // HISTORY_SAMPLES


@dataclass
class SimulationResults:
    """
    Running tallies for the tracked seat.

    Blackjacks also count as wins and surrenders also count as losses, so
    ``wins + losses + pushes == hands_played``.
    """

    starting_bankroll: Decimal
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    blackjacks: int = 0
    surrenders: int = 0
    hands_played: int = 0
    rounds_played: int = 0
    rounds_watched: int = 0
    net_profit: Decimal = Decimal("0")
    peak_bankroll: Decimal = Decimal("0")
    low_bankroll: Decimal = Decimal("0")
    final_bankroll: Decimal = Decimal("0")
    bankroll_history: list[BankrollSample] = field(default_factory=list)
    total_wagered: int = 0
    house_edge: float = 0.0
    avg_bet: float = 0.0

    def __post_init__(self) -> None:
        self.peak_bankroll = self.starting_bankroll
        self.low_bankroll = self.starting_bankroll
        self.final_bankroll = self.starting_bankroll
        if not self.bankroll_history:
            self.bankroll_history.append(BankrollSample(0, self.starting_bankroll, 0.0))

    def tally(
        self, round_results: Iterable[RoundResult], seat_index: int, bet: int
    ) -> HandResult | None:
        """
        Count the seat's hands from a settled round.

        Every resolved hand adds the round's opening bet to the amount
        wagered. Returns the first hand's result, which drives the
        betting progression.
        """
        first: HandResult | None = None
        for result in round_results:
            if result.seat_index != seat_index:
                continue
            self.hands_played += 1
            self.total_wagered += bet
            if first is None:
                first = result.result

            if result.result == HandResult.BLACKJACK:
                self.wins += 1
                self.blackjacks += 1
            elif result.result == HandResult.WIN:
                self.wins += 1
            elif result.result == HandResult.LOSS:
                self.losses += 1
            elif result.result == HandResult.PUSH:
                self.pushes += 1
            elif result.result == HandResult.SURRENDER:
                self.surrenders += 1
                self.losses += 1
        return first

    def sample(self, bankroll: Decimal, true_count: float, interval: int, bet: int = 0) -> None:
        """Track bankroll extremes and record a history point every ``interval`` rounds."""
        self.peak_bankroll = max(self.peak_bankroll, bankroll)
        self.low_bankroll = min(self.low_bankroll, bankroll)
        if self.rounds_played % interval == 0 or self.rounds_played <= 1:
            self.bankroll_history.append(
                BankrollSample(self.rounds_played, bankroll, true_count, bet)
            )

    def finalize(self, bankroll: Decimal) -> None:
        """Recompute the derived figures from the current bankroll."""
        self.final_bankroll = bankroll
        self.net_profit = bankroll - self.starting_bankroll
        self.house_edge = (
            float(-self.net_profit / self.total_wagered) if self.total_wagered else 0.0
        )
        self.avg_bet = self.total_wagered / self.hands_played if self.hands_played else 0.0

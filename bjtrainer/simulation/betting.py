"""Betting systems and the progression memory they carry between hands."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal, Mapping

from bjtrainer.config import GameSettings
from bjtrainer.hand import HandResult
from bjtrainer.statistics.kelly import KellyCalculator

Outcome = Literal["win", "loss", "push"]

# Maps true-count thresholds to unit multipliers
BetSpread = Mapping[int, int]


@dataclass(frozen=True)
class SpreadPreset:
    label: str
    spread: BetSpread


BET_SPREAD_PRESETS: dict[str, SpreadPreset] = {
    "conservative": SpreadPreset("1-4", {1: 1, 2: 2, 3: 3, 4: 4, 5: 4}),
    "moderate": SpreadPreset("1-8", {1: 1, 2: 2, 3: 4, 4: 6, 5: 8}),
    "aggressive": SpreadPreset("1-12", {1: 1, 2: 2, 3: 4, 4: 8, 5: 12}),
    "wong": SpreadPreset("1-16", {1: 1, 2: 4, 3: 8, 4: 12, 5: 16}),
}

DEFAULT_BET_SPREAD: BetSpread = BET_SPREAD_PRESETS["aggressive"].spread

ONE_THREE_TWO_SIX = [1, 3, 2, 6]
FIBONACCI = [1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89, 144]
LABOUCHERE_START = [1, 2, 3, 4]


def resolve_bet_from_spread(
    true_count: float,
    bet_unit: int,
    spread: BetSpread,
    bankroll: Decimal | int,
    max_bet: int,
) -> int:
    """
    Size a bet from a spread table.

    The multiplier comes from the highest threshold at or below the true
    count, one unit below every threshold. The bet is capped by bankroll
    and table maximum.
    """
    units = 1
    for threshold in sorted(spread):
        if true_count >= threshold:
            units = spread[threshold]
    return min(units * bet_unit, int(bankroll), max_bet)


@dataclass
class ProgressionState:
    """Cross-hand memory of a betting system."""

    current_multiplier: int = 1
    consecutive_wins: int = 0
    sequence_step: int = 0  # 1-3-2-6 position (0-3)
    series_profit: int = 0  # Oscar's Grind running P&L in units
    current_units: int = 1  # Oscar's Grind / D'Alembert bet in units
    last_result: Outcome | None = None
    fib_index: int = 0
    labouchere_seq: list[int] = field(default_factory=lambda: list(LABOUCHERE_START))


def classify(result: HandResult) -> Outcome:
    """Collapse a hand result into win, loss or push for progressions."""
    if result in (HandResult.WIN, HandResult.BLACKJACK):
        return "win"
    if result in (HandResult.LOSS, HandResult.SURRENDER):
        return "loss"
    return "push"


@dataclass(frozen=True)
class BetContext:
    """What a betting system may look at when sizing the next bet."""

    bet_unit: int
    true_count: float
    bankroll: Decimal
    settings: GameSettings


class BettingSystem(ABC):
    """
    Abstract base for betting systems.

    Subclasses size the raw bet and advance the progression after each
    resolved round; ``next_bet`` applies the table and bankroll limits.
    """

    name: str = ""

    @abstractmethod
    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        """Return the unclamped bet."""
        ...

    def advance(self, progression: ProgressionState, outcome: Outcome) -> None:
        """Update the progression after a round. Flat systems keep no memory."""

    def next_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        """Return the bet clamped to [table min, min(bankroll, table max)]."""
        bet = self.raw_bet(progression, ctx)
        capped = min(bet, int(ctx.bankroll), ctx.settings.maximum_bet)
        return max(capped, ctx.settings.minimum_bet)

    def record(self, progression: ProgressionState, result: HandResult) -> None:
        """Feed a round's result into the progression."""
        outcome = classify(result)
        self.advance(progression, outcome)
        progression.last_result = outcome


class FlatBetting(BettingSystem):
    name = "flat"

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        return ctx.bet_unit


class SpreadBetting(BettingSystem):
    """Bet units by true count from a spread table."""

    name = "spread"

    def __init__(self, spread: BetSpread = DEFAULT_BET_SPREAD) -> None:
        self.spread = dict(spread)

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        return resolve_bet_from_spread(
            ctx.true_count,
            ctx.bet_unit,
            self.spread,
            ctx.bankroll,
            ctx.settings.maximum_bet,
        )


class KellyBetting(BettingSystem):
    """
    Fractional Kelly on the count-estimated edge.

    The base unit is bet whenever the edge is not positive.
    """

    name = "kelly"

    def __init__(self, kelly_fraction: float = 0.5) -> None:
        self.kelly_fraction = kelly_fraction

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        calculator = KellyCalculator(
            bankroll=ctx.bankroll,
            min_bet=Decimal(ctx.bet_unit),
            max_bet=Decimal(ctx.settings.maximum_bet),
            kelly_fraction=self.kelly_fraction,
        )
        return int(calculator.bet_for_true_count(ctx.true_count))


class Martingale(BettingSystem):
    """Double after a loss, back to one unit after anything else."""

    name = "martingale"

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        return ctx.bet_unit * progression.current_multiplier

    def advance(self, progression: ProgressionState, outcome: Outcome) -> None:
        if outcome == "loss":
            progression.current_multiplier *= 2
        else:
            progression.current_multiplier = 1


class Paroli(BettingSystem):
    """Double after a win, resetting after three wins in a row."""

    name = "paroli"

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        return ctx.bet_unit * progression.current_multiplier

    def advance(self, progression: ProgressionState, outcome: Outcome) -> None:
        if outcome == "win":
            progression.consecutive_wins += 1
            progression.current_multiplier *= 2
            if progression.consecutive_wins >= 3:
                progression.consecutive_wins = 0
                progression.current_multiplier = 1
        else:
            progression.consecutive_wins = 0
            progression.current_multiplier = 1


class OneThreeTwoSix(BettingSystem):
    name = "one_three_two_six"

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        return ctx.bet_unit * ONE_THREE_TWO_SIX[progression.sequence_step]

    def advance(self, progression: ProgressionState, outcome: Outcome) -> None:
        if outcome == "win":
            progression.sequence_step = (progression.sequence_step + 1) % len(ONE_THREE_TWO_SIX)
        else:
            progression.sequence_step = 0


class OscarsGrind(BettingSystem):
    """
    Oscar's Grind: aim for one unit of profit per series.

    A win raises the bet by a unit, never past what completes the series;
    a loss keeps the bet; reaching +1 unit starts a new series.
    """

    name = "oscars_grind"

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        return ctx.bet_unit * progression.current_units

    def advance(self, progression: ProgressionState, outcome: Outcome) -> None:
        if outcome == "win":
            progression.series_profit += progression.current_units
            if progression.series_profit >= 1:
                progression.series_profit = 0
                progression.current_units = 1
            else:
                needed = 1 - progression.series_profit
                progression.current_units = min(progression.current_units + 1, needed)
        elif outcome == "loss":
            progression.series_profit -= progression.current_units


class Fibonacci(BettingSystem):
    """Step forward in the sequence after a loss, back two after a win."""

    name = "fibonacci"

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        index = min(progression.fib_index, len(FIBONACCI) - 1)
        return ctx.bet_unit * FIBONACCI[index]

    def advance(self, progression: ProgressionState, outcome: Outcome) -> None:
        if outcome == "loss":
            progression.fib_index = min(progression.fib_index + 1, len(FIBONACCI) - 1)
        elif outcome == "win":
            progression.fib_index = max(progression.fib_index - 2, 0)


class DAlembert(BettingSystem):
    """One unit up after a loss, one down after a win, never below one."""

    name = "dalembert"

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        return ctx.bet_unit * progression.current_units

    def advance(self, progression: ProgressionState, outcome: Outcome) -> None:
        if outcome == "loss":
            progression.current_units += 1
        elif outcome == "win":
            progression.current_units = max(1, progression.current_units - 1)


def _labouchere_units(seq: list[int]) -> int:
    if not seq:
        return 1
    if len(seq) == 1:
        return seq[0]
    return seq[0] + seq[-1]


class Labouchere(BettingSystem):
    """
    Cancellation system over a sequence starting at [1, 2, 3, 4].

    Bet the first plus last number; a win crosses both off, a loss appends
    the amount lost. An exhausted sequence starts over.
    """

    name = "labouchere"

    def raw_bet(self, progression: ProgressionState, ctx: BetContext) -> int:
        return ctx.bet_unit * _labouchere_units(progression.labouchere_seq)

    def advance(self, progression: ProgressionState, outcome: Outcome) -> None:
        seq = progression.labouchere_seq
        if outcome == "win":
            del seq[:1]
            if seq:
                seq.pop()
            if not seq:
                progression.labouchere_seq = list(LABOUCHERE_START)
        elif outcome == "loss":
            seq.append(_labouchere_units(seq))


BETTING_SYSTEMS: dict[str, type[BettingSystem]] = {
    system.name: system
    for system in (
        FlatBetting,
        SpreadBetting,
        KellyBetting,
        Martingale,
        Paroli,
        OneThreeTwoSix,
        OscarsGrind,
        Fibonacci,
        DAlembert,
        Labouchere,
    )
}


def create_betting_system(
    name: str,
    spread: BetSpread = DEFAULT_BET_SPREAD,
    kelly_fraction: float = 0.5,
) -> BettingSystem:
    """Build a betting system by name."""
    if name == SpreadBetting.name:
        return SpreadBetting(spread)
    if name == KellyBetting.name:
        return KellyBetting(kelly_fraction)
    try:
        return BETTING_SYSTEMS[name]()
    except KeyError:
        raise ValueError(f"Unknown betting system: {name}") from None

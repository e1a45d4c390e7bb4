"""Table and simulation configuration with environment variable support."""

import os
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any


class SpeedSetting(str, Enum):
    """Animation pacing requested by a presentation layer."""

    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"
    INSTANT = "instant"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class GameSettings:
    """
    Table rules and seating for one engine instance.

    Settings are immutable; build a new engine to change them.
    """

    number_of_decks: int = field(default_factory=lambda: int(os.getenv("BJ_DECKS", "6")))
    penetration: float = field(
        default_factory=lambda: float(os.getenv("BJ_PENETRATION", "0.75"))
    )
    hit_soft_17: bool = field(default_factory=lambda: _env_bool("BJ_HIT_SOFT_17", "true"))
    allow_insurance: bool = True
    allow_surrender: bool = True
    allow_double_after_split: bool = True

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    minimum_bet: int = field(default_factory=lambda: int(os.getenv("BJ_MIN_BET", "10")))
    maximum_bet: int = field(default_factory=lambda: int(os.getenv("BJ_MAX_BET", "500")))
    starting_bankroll: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("BJ_BANKROLL", "1000"))
    )

    number_of_ai_players: int = 0
    human_seat_position: int = 0  # 0-based index among all seats
    speed: SpeedSetting = SpeedSetting.NORMAL

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.number_of_decks < 1 or self.number_of_decks > 8:
            raise ValueError("number_of_decks must be between 1 and 8")
        if not 0.0 < self.penetration <= 1.0:
            raise ValueError("penetration must be between 0 and 1")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.minimum_bet <= 0:
            raise ValueError("minimum_bet must be positive")
        if self.maximum_bet < self.minimum_bet:
            raise ValueError("maximum_bet must not be below minimum_bet")
        if self.number_of_ai_players < 0 or self.number_of_ai_players > 9:
            raise ValueError("number_of_ai_players must be between 0 and 9")
        if self.human_seat_position < 0:
            raise ValueError("human_seat_position must not be negative")
        if not isinstance(self.starting_bankroll, Decimal):
            object.__setattr__(self, "starting_bankroll", Decimal(str(self.starting_bankroll)))

    @property
    def total_seats(self) -> int:
        """Return the number of occupied seats (AI players plus the human)."""
        return self.number_of_ai_players + 1

    def with_overrides(self, **changes: Any) -> "GameSettings":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def vegas_strip(cls) -> "GameSettings":
        """Standard Vegas Strip rules."""
        return cls(
            number_of_decks=6,
            hit_soft_17=False,
            blackjack_payout=1.5,
            allow_double_after_split=True,
            allow_surrender=True,
        )

    @classmethod
    def downtown_vegas(cls) -> "GameSettings":
        """Downtown Las Vegas rules (typically H17)."""
        return cls(
            number_of_decks=6,
            hit_soft_17=True,
            blackjack_payout=1.5,
            allow_double_after_split=True,
            allow_surrender=True,
        )

    @classmethod
    def single_deck(cls) -> "GameSettings":
        """Single deck rules."""
        return cls(
            number_of_decks=1,
            hit_soft_17=True,
            blackjack_payout=1.5,
            allow_double_after_split=False,
            allow_surrender=False,
        )

    @classmethod
    def atlantic_city(cls) -> "GameSettings":
        """Atlantic City rules."""
        return cls(
            number_of_decks=8,
            hit_soft_17=False,
            blackjack_payout=1.5,
            allow_double_after_split=True,
            allow_surrender=True,
        )


@dataclass(frozen=True)
class SimulationDefaults:
    """Defaults for batch simulations."""

    chunk_size: int = field(
        default_factory=lambda: int(os.getenv("BJ_SIM_CHUNK_SIZE", "500"))
    )
    number_of_hands: int = 10_000
    wong_threshold: float = 1.0
    kelly_fraction: float = 0.5
    # Rounds simulated with AI seats while a wonging player sits out
    wong_ai_players: int = 5
    # Upper bound on turn steps per round, guards against a stalled engine
    max_turn_steps: int = 500

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")

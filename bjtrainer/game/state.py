"""Round phases and immutable state snapshots."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from bjtrainer.cards import Card
from bjtrainer.hand import HandResult, HandState, HandTotal, get_hand_total
from bjtrainer.shoe import CountInfo, ShoeState


class RoundPhase(str, Enum):
    """
    Round state machine states.

    Flow: BETTING → DEALING → (INSURANCE_PROMPT) → PLAYER_TURN → DEALER_TURN
    → RESOLVING → ROUND_OVER → BETTING
    """

    BETTING = "betting"
    DEALING = "dealing"
    INSURANCE_PROMPT = "insurance_prompt"
    PLAYER_TURN = "player_turn"
    DEALER_TURN = "dealer_turn"
    RESOLVING = "resolving"
    ROUND_OVER = "round_over"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HandSnapshot:
    """Read-only copy of a hand."""

    cards: tuple[Card, ...]
    bet: int
    is_doubled: bool = False
    is_surrendered: bool = False
    is_insured: bool = False
    insurance_bet: Decimal = Decimal("0")
    is_split_hand: bool = False
    is_split_aces: bool = False
    result: HandResult = HandResult.PENDING
    payout: Decimal = Decimal("0")

    @property
    def total(self) -> HandTotal:
        return get_hand_total(self.cards)

    @classmethod
    def from_hand(cls, hand: HandState) -> "HandSnapshot":
        return cls(
            cards=tuple(hand.cards),
            bet=hand.bet,
            is_doubled=hand.is_doubled,
            is_surrendered=hand.is_surrendered,
            is_insured=hand.is_insured,
            insurance_bet=hand.insurance_bet,
            is_split_hand=hand.is_split_hand,
            is_split_aces=hand.is_split_aces,
            result=hand.result,
            payout=hand.payout,
        )


@dataclass(frozen=True)
class PlayerSnapshot:
    """Read-only copy of a seated player."""

    name: str
    seat_index: int
    bankroll: Decimal
    hands: tuple[HandSnapshot, ...]
    is_human: bool
    is_active: bool
    current_hand_index: int


@dataclass(frozen=True)
class RoundResult:
    """Settlement of one hand at the end of a round."""

    player_name: str
    seat_index: int
    hand_index: int
    bet: int
    result: HandResult
    payout: Decimal
    insurance_payout: Decimal = Decimal("0")


@dataclass(frozen=True)
class GameState:
    """
    Snapshot of the whole table.

    Built fresh on every request and never shares mutable data with the
    engine.
    """

    players: tuple[PlayerSnapshot, ...]
    dealer_hand: HandSnapshot
    phase: RoundPhase
    active_player_index: int  # -1 when nobody is acting
    shoe_state: ShoeState
    round_results: tuple[RoundResult, ...]
    round_number: int

    @property
    def count_info(self) -> CountInfo:
        return self.shoe_state.count_info


__all__ = [
    "RoundPhase",
    "HandSnapshot",
    "PlayerSnapshot",
    "RoundResult",
    "GameState",
    "CountInfo",
    "ShoeState",
]

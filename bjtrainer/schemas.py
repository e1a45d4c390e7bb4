"""Pydantic models for exporting engine snapshots and simulation results."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from bjtrainer.cards import Card
from bjtrainer.game.state import GameState, HandSnapshot, PlayerSnapshot, RoundPhase
from bjtrainer.hand import HandResult, get_hand_total, is_blackjack, is_busted, is_soft
from bjtrainer.simulation.simulator import SimulationState

HIDDEN = "?"


class CardModel(BaseModel):
    """Card representation. Face-down cards hide rank and suit."""

    rank: str
    suit: str
    value: int
    face_up: bool = True

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        if not card.face_up:
            return cls(rank=HIDDEN, suit=HIDDEN, value=0, face_up=False)
        return cls(rank=str(card.rank), suit=card.suit.name.lower(), value=card.value)


class HandModel(BaseModel):
    """Hand representation."""

    cards: list[CardModel]
    value: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool
    bet: int
    is_doubled: bool = False
    is_surrendered: bool = False
    is_split_hand: bool = False
    insurance_bet: Decimal = Decimal("0")
    result: HandResult = HandResult.PENDING
    payout: Decimal = Decimal("0")

    @classmethod
    def from_snapshot(cls, hand: HandSnapshot) -> "HandModel":
        # Totals cover face-up cards only, matching what a player can see
        visible = [card for card in hand.cards if card.face_up]
        return cls(
            cards=[CardModel.from_card(card) for card in hand.cards],
            value=get_hand_total(visible).best,
            is_soft=is_soft(visible),
            is_blackjack=(
                len(visible) == len(hand.cards)
                and is_blackjack(visible)
            ),
            is_busted=is_busted(visible),
            bet=hand.bet,
            is_doubled=hand.is_doubled,
            is_surrendered=hand.is_surrendered,
            is_split_hand=hand.is_split_hand,
            insurance_bet=hand.insurance_bet,
            result=hand.result,
            payout=hand.payout,
        )


class PlayerModel(BaseModel):
    """Seated player."""

    name: str
    seat_index: int
    bankroll: Decimal
    hands: list[HandModel]
    is_human: bool
    is_active: bool
    current_hand_index: int

    @classmethod
    def from_snapshot(cls, player: PlayerSnapshot) -> "PlayerModel":
        return cls(
            name=player.name,
            seat_index=player.seat_index,
            bankroll=player.bankroll,
            hands=[HandModel.from_snapshot(hand) for hand in player.hands],
            is_human=player.is_human,
            is_active=player.is_active,
            current_hand_index=player.current_hand_index,
        )


class CountInfoModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    running_count: int
    true_count: float
    cards_dealt: int
    cards_remaining: int
    decks_remaining: float


class ShoeStateModel(BaseModel):
    """Shoe state as exposed to consumers."""

    model_config = ConfigDict(from_attributes=True)

    total_cards: int
    cards_dealt: int
    penetration: float
    needs_reshuffle: bool
    count_info: CountInfoModel
    shuffle_count: int


class RoundResultModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    player_name: str
    seat_index: int
    hand_index: int
    bet: int
    result: HandResult
    payout: Decimal
    insurance_payout: Decimal


class GameStateModel(BaseModel):
    """Whole-table snapshot."""

    players: list[PlayerModel]
    dealer_hand: HandModel
    phase: RoundPhase
    active_player_index: int
    shoe_state: ShoeStateModel
    round_results: list[RoundResultModel]
    round_number: int

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateModel":
        return cls(
            players=[PlayerModel.from_snapshot(player) for player in state.players],
            dealer_hand=HandModel.from_snapshot(state.dealer_hand),
            phase=state.phase,
            active_player_index=state.active_player_index,
            shoe_state=ShoeStateModel.model_validate(state.shoe_state),
            round_results=[RoundResultModel.model_validate(r) for r in state.round_results],
            round_number=state.round_number,
        )


class BankrollSampleModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    hand_number: int
    bankroll: Decimal
    true_count: float
    bet: int


class SimulationResultsModel(BaseModel):
    """Aggregate simulation results."""

    model_config = ConfigDict(from_attributes=True)

    wins: int
    losses: int
    pushes: int
    blackjacks: int
    surrenders: int
    hands_played: int
    rounds_played: int
    rounds_watched: int
    net_profit: Decimal
    peak_bankroll: Decimal
    low_bankroll: Decimal
    final_bankroll: Decimal
    bankroll_history: list[BankrollSampleModel] = Field(default_factory=list)
    total_wagered: int
    house_edge: float
    avg_bet: float


class SimulationSummary(BaseModel):
    """Configuration and outcome of a finished or paused simulation."""

    play_strategy: str
    bet_system: str
    bet_amount: int
    number_of_hands: int
    seed: int | None
    done: bool
    results: SimulationResultsModel

    @classmethod
    def from_state(cls, state: SimulationState, include_history: bool = True) -> "SimulationSummary":
        results = SimulationResultsModel.model_validate(state.results)
        if not include_history:
            results = results.model_copy(update={"bankroll_history": []})
        return cls(
            play_strategy=state.config.play_strategy,
            bet_system=state.config.bet_system,
            bet_amount=state.config.bet_amount,
            number_of_hands=state.config.number_of_hands,
            seed=state.config.seed,
            done=state.done,
            results=results,
        )

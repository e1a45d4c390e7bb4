"""Blackjack round engine with state machine."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from random import Random
from typing import NamedTuple

from transitions import Machine

from bjtrainer.cards import Card
from bjtrainer.config import GameSettings
from bjtrainer.game.events import EventEmitter, EventHandler, EventType
from bjtrainer.game.state import (
    GameState,
    HandSnapshot,
    PlayerSnapshot,
    RoundPhase,
    RoundResult,
)
from bjtrainer.hand import (
    Action,
    HandState,
    get_available_actions,
    get_hand_total,
    is_blackjack,
)
from bjtrainer.payout import resolve_hand, resolve_insurance
from bjtrainer.shoe import Shoe, ShoeState
from bjtrainer.strategy.basic import get_basic_strategy_action
from bjtrainer.strategy.reasoning import explain_decision

logger = logging.getLogger(__name__)

AI_NAMES = ["Alice", "Bob", "Carlos", "Diana", "Eve", "Frank", "Grace", "Hank", "Ivy"]
HUMAN_NAME = "You"

NO_PLAYER = -1


@dataclass
class Player:
    """A seated player and their hands for the current round."""

    name: str
    seat_index: int
    bankroll: Decimal
    hands: list[HandState] = field(default_factory=lambda: [HandState()])
    is_human: bool = False
    is_active: bool = True
    current_hand_index: int = 0

    @property
    def current_hand(self) -> HandState:
        return self.hands[self.current_hand_index]

    @property
    def has_bet(self) -> bool:
        return self.is_active and self.hands[0].bet > 0

    @property
    def committed(self) -> Decimal:
        """Chips on the table this round: every hand's bet plus insurance."""
        return sum(
            (Decimal(hand.bet) + hand.insurance_bet for hand in self.hands),
            Decimal("0"),
        )

    @property
    def available(self) -> Decimal:
        """Bankroll not yet committed this round."""
        return self.bankroll - self.committed

    def reset_hands(self) -> None:
        """Reset all hands for a new round."""
        self.hands = [HandState()]
        self.current_hand_index = 0

    def snapshot(self) -> PlayerSnapshot:
        return PlayerSnapshot(
            name=self.name,
            seat_index=self.seat_index,
            bankroll=self.bankroll,
            hands=tuple(HandSnapshot.from_hand(hand) for hand in self.hands),
            is_human=self.is_human,
            is_active=self.is_active,
            current_hand_index=self.current_hand_index,
        )


class TurnProgress(NamedTuple):
    """Where the turn stands after a player action."""

    done: bool  # no player is left to act
    next_player: bool  # the acting seat changed


class GameEngine:
    """
    Blackjack round engine using a state machine.

    This is the core game logic, completely UI-agnostic. Illegal calls are
    rejected with a False/None/empty return and leave the state unchanged;
    the engine never raises for ordinary misuse. Communication happens
    through return values, snapshots and events only.
    """

    # State machine states
    STATES = [phase.value for phase in RoundPhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "begin_dealing", "source": "betting", "dest": "dealing"},
        {"trigger": "prompt_insurance", "source": "dealing", "dest": "insurance_prompt"},
        {
            "trigger": "open_player_turns",
            "source": ["dealing", "insurance_prompt"],
            "dest": "player_turn",
        },
        {
            "trigger": "dealer_has_blackjack",
            "source": ["dealing", "insurance_prompt"],
            "dest": "resolving",
        },
        {"trigger": "reveal_hole_card", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "begin_resolving", "source": "dealer_turn", "dest": "resolving"},
        {"trigger": "close_round", "source": "resolving", "dest": "round_over"},
        {"trigger": "next_round", "source": "*", "dest": "betting"},
    ]

    def __init__(
        self,
        settings: GameSettings | None = None,
        rng: Random | None = None,
        history_limit: int | None = None,
    ) -> None:
        """
        Initialize a table.

        Args:
            settings: Table rules and seating (uses defaults if not provided)
            rng: Random number generator for reproducible shuffles
            history_limit: Number of events to keep in the event history
        """
        self.settings = settings or GameSettings()
        self.shoe = Shoe(
            num_decks=self.settings.number_of_decks,
            penetration=self.settings.penetration,
            rng=rng,
        )
        self.events = EventEmitter(history_limit=history_limit)

        self.players: list[Player] = self._seat_players()
        self.dealer_hand = HandState()
        self.active_player_index = NO_PLAYER
        self.round_results: list[RoundResult] = []
        self.round_number = 0
        self._reshuffled = False

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=RoundPhase.BETTING.value,
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    def _seat_players(self) -> list[Player]:
        total = self.settings.total_seats
        human_seat = min(self.settings.human_seat_position, total - 1)
        bankroll = self.settings.starting_bankroll
        ai_names = iter(AI_NAMES)

        players = []
        for seat in range(total):
            if seat == human_seat:
                players.append(Player(HUMAN_NAME, seat, bankroll, is_human=True))
            else:
                players.append(Player(next(ai_names), seat, bankroll))
        return players

    @property
    def phase(self) -> RoundPhase:
        """Get current round phase as enum."""
        return RoundPhase(self._machine_state)  # type: ignore[attr-defined]

    def get_phase(self) -> RoundPhase:
        return self.phase

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    # -- snapshots -----------------------------------------------------------

    def get_state(self) -> GameState:
        """Return a disconnected snapshot of the table."""
        return GameState(
            players=tuple(player.snapshot() for player in self.players),
            dealer_hand=HandSnapshot.from_hand(self.dealer_hand),
            phase=self.phase,
            active_player_index=self.active_player_index,
            shoe_state=self.shoe.get_state(),
            round_results=tuple(self.round_results),
            round_number=self.round_number,
        )

    def get_shoe_state(self) -> ShoeState:
        return self.shoe.get_state()

    def consume_reshuffle(self) -> bool:
        """Return True once after the shoe was reshuffled at a deal."""
        was = self._reshuffled
        self._reshuffled = False
        return was

    def get_human_player_index(self) -> int:
        for index, player in enumerate(self.players):
            if player.is_human:
                return index
        return NO_PLAYER

    def get_dealer_upcard(self) -> Card | None:
        if self.dealer_hand.cards:
            return self.dealer_hand.cards[0]
        return None

    def _changed(self) -> None:
        if self.events.wants(EventType.STATE_CHANGED):
            self.events.emit_new(EventType.STATE_CHANGED, state=self.get_state())

    def _reject(self, message: str, **data: object) -> None:
        logger.debug("Rejected in %s: %s", self.phase.value, message)
        self.events.emit_new(
            EventType.INVALID_ACTION, message=message, phase=self.phase.value, **data
        )

    # -- betting -------------------------------------------------------------

    def place_bet(self, player_index: int, amount: int) -> bool:
        """
        Place a bet for a seat.

        Args:
            player_index: Seat index
            amount: Bet in whole chips

        Returns:
            True if the bet was accepted
        """
        if self.phase != RoundPhase.BETTING:
            self._reject("Cannot bet in current phase")
            return False
        if not 0 <= player_index < len(self.players):
            self._reject("No such seat", seat=player_index)
            return False

        player = self.players[player_index]
        if not player.is_active:
            self._reject("Player has left the table", seat=player_index)
            return False
        if amount < self.settings.minimum_bet or amount > self.settings.maximum_bet:
            self._reject(
                f"Bet must be between {self.settings.minimum_bet} and {self.settings.maximum_bet}",
                seat=player_index,
            )
            return False
        if amount > player.bankroll:
            self._reject("Insufficient funds", seat=player_index, amount=amount)
            return False

        player.hands = [HandState(bet=amount)]
        self.events.emit_new(EventType.BET_PLACED, seat=player_index, amount=amount)
        self._changed()
        return True

    def place_ai_bets(self) -> None:
        """Bet the table minimum for every AI seat, retiring those who cannot."""
        if self.phase != RoundPhase.BETTING:
            self._reject("Cannot bet in current phase")
            return
        for index, player in enumerate(self.players):
            if player.is_human or not player.is_active:
                continue
            if player.bankroll >= self.settings.minimum_bet:
                self.place_bet(index, self.settings.minimum_bet)
            else:
                self._eliminate(player)

    # -- dealing -------------------------------------------------------------

    def deal(self) -> bool:
        """
        Deal the opening cards.

        Reshuffles first when the cut card has been reached. Each betting
        player gets two face-up cards; the dealer's second card is the
        face-down hole card.

        Returns:
            True if the round was dealt
        """
        if self.phase != RoundPhase.BETTING:
            self._reject("Cannot deal in current phase")
            return False

        if self.shoe.needs_reshuffle():
            self.shoe.shuffle()
            self._reshuffled = True
            self.events.emit_new(EventType.SHOE_SHUFFLED, shuffle_count=self.shoe.shuffle_count)

        self.begin_dealing()  # type: ignore[attr-defined]
        self.round_number += 1
        self.round_results = []
        self.dealer_hand = HandState()
        logger.debug("Round %d dealt", self.round_number)

        for deal_round in range(2):
            for player in self.players:
                if player.has_bet:
                    self._deal_card_to_hand(player.hands[0])
            self._deal_card_to_hand(self.dealer_hand, face_up=deal_round == 0)

        self.events.emit_new(EventType.ROUND_STARTED, round_number=self.round_number)

        upcard = self.dealer_hand.cards[0]
        if upcard.is_ace and self.settings.allow_insurance:
            self.prompt_insurance()  # type: ignore[attr-defined]
            self.events.emit_new(EventType.INSURANCE_OFFERED)
            self._changed()
            return True

        self._start_player_turns()
        return True

    def _deal_card_to_hand(self, hand: HandState, face_up: bool = True) -> Card:
        """Deal a card to a hand."""
        card = self.shoe.deal(face_up=face_up)
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand="dealer" if hand is self.dealer_hand else "player",
        )
        return card

    def _reveal_hole_card(self) -> None:
        if len(self.dealer_hand.cards) > 1 and not self.dealer_hand.cards[1].face_up:
            hole = self.dealer_hand.cards[1].revealed()
            self.dealer_hand.cards[1] = hole
            self.shoe.update_count_for_reveal(hole)
            self.events.emit_new(
                EventType.DEALER_REVEALS, card=str(hole), hand_value=self.dealer_hand.value
            )

    # -- insurance -----------------------------------------------------------

    def place_insurance(self, player_index: int) -> bool:
        """
        Insure a seat's hand for half its bet.

        Returns:
            True if the insurance bet was placed
        """
        if self.phase != RoundPhase.INSURANCE_PROMPT:
            self._reject("Insurance is not on offer")
            return False
        if not 0 <= player_index < len(self.players):
            self._reject("No such seat", seat=player_index)
            return False

        player = self.players[player_index]
        if not player.has_bet:
            self._reject("Seat has no bet", seat=player_index)
            return False

        hand = player.hands[0]
        if hand.is_insured:
            self._reject("Hand already insured", seat=player_index)
            return False

        insurance_bet = Decimal(hand.bet) / 2
        if insurance_bet > player.available:
            self._reject("Insufficient funds", seat=player_index)
            return False

        hand.is_insured = True
        hand.insurance_bet = insurance_bet
        self.events.emit_new(EventType.INSURANCE_TAKEN, seat=player_index, amount=insurance_bet)
        self._changed()
        return True

    def decline_insurance(self) -> bool:
        """Close the insurance offer and continue to player turns."""
        if self.phase != RoundPhase.INSURANCE_PROMPT:
            self._reject("Insurance is not on offer")
            return False
        self.events.emit_new(EventType.INSURANCE_DECLINED)
        self._start_player_turns()
        return True

    def resolve_insurance_and_continue(self) -> bool:
        """Close the insurance offer, keeping any insurance placed, and continue."""
        if self.phase != RoundPhase.INSURANCE_PROMPT:
            self._reject("Insurance is not on offer")
            return False
        self._start_player_turns()
        return True

    # -- player turns --------------------------------------------------------

    def _start_player_turns(self) -> None:
        # Dealer peeks: a natural ends the round before anyone acts
        if is_blackjack(self.dealer_hand.cards):
            self._reveal_hole_card()
            self.events.emit_new(EventType.DEALER_BLACKJACK)
            self.dealer_has_blackjack()  # type: ignore[attr-defined]
            self._settle()
            return

        self.open_player_turns()  # type: ignore[attr-defined]
        self.active_player_index = self._find_next_active_player(NO_PLAYER)
        if self.active_player_index == NO_PLAYER:
            self._begin_dealer_turn()
        else:
            self._changed()

    def _find_next_active_player(self, from_index: int) -> int:
        for index in range(from_index + 1, len(self.players)):
            player = self.players[index]
            # Skip players holding a natural
            if player.has_bet and not is_blackjack(player.hands[0].cards):
                return index
        return NO_PLAYER

    def _current_player(self) -> Player | None:
        if self.phase != RoundPhase.PLAYER_TURN or self.active_player_index == NO_PLAYER:
            return None
        return self.players[self.active_player_index]

    def get_available_actions_for_current_player(self) -> list[Action]:
        player = self._current_player()
        if player is None:
            return []
        hand = player.current_hand
        return get_available_actions(
            hand,
            player.available,
            self.settings.allow_surrender,
            self.settings.allow_double_after_split,
            hand.is_split_hand,
        )

    def get_basic_strategy_hint(self) -> Action | None:
        """Return the basic strategy play for the hand to act, if any."""
        player = self._current_player()
        if player is None:
            return None
        return get_basic_strategy_action(
            player.current_hand.cards,
            self.dealer_hand.cards[0],
            self.get_available_actions_for_current_player(),
        )

    def get_strategy_explanation(self, use_count: bool = False) -> str | None:
        """
        Explain the chart decision for the hand to act.

        Args:
            use_count: Mention any index play active at the shoe's true count
        """
        player = self._current_player()
        if player is None:
            return None
        true_count = self.shoe.true_count if use_count else None
        return explain_decision(player.current_hand.cards, self.dealer_hand.cards[0], true_count)

    def player_action(self, action: Action) -> TurnProgress | None:
        """
        Apply an action to the hand whose turn it is.

        Returns:
            Turn progress, or None if the action was rejected
        """
        player = self._current_player()
        if player is None:
            self._reject("No hand to act on", action=str(action))
            return None
        if action not in self.get_available_actions_for_current_player():
            self._reject("Action not available", action=str(action))
            return None

        hand = player.current_hand
        hand_index = player.current_hand_index

        if action == Action.HIT:
            self._deal_card_to_hand(hand)
            self.events.emit_new(EventType.PLAYER_HIT, seat=player.seat_index, hand_value=hand.value)
            progress = self._advance_hand(player) if hand.is_finished else TurnProgress(False, False)

        elif action == Action.STAND:
            self.events.emit_new(EventType.PLAYER_STAND, seat=player.seat_index, hand_value=hand.value)
            progress = self._advance_hand(player)

        elif action == Action.DOUBLE:
            hand.bet *= 2
            hand.is_doubled = True
            self._deal_card_to_hand(hand)
            self.events.emit_new(
                EventType.PLAYER_DOUBLE, seat=player.seat_index, hand_value=hand.value, new_bet=hand.bet
            )
            progress = self._advance_hand(player)

        elif action == Action.SPLIT:
            progress = self._split(player)

        else:
            hand.is_surrendered = True
            self.events.emit_new(EventType.PLAYER_SURRENDER, seat=player.seat_index, hand_index=hand_index)
            progress = self._advance_hand(player)

        self._changed()
        return progress

    def _split(self, player: Player) -> TurnProgress:
        """Player splits a pair."""
        hand = player.current_hand

        # Create new hand with second card
        new_hand = HandState(cards=[hand.cards.pop()], bet=hand.bet, is_split_hand=True)
        hand.is_split_hand = True

        # Deal one card to each hand
        self._deal_card_to_hand(hand)
        self._deal_card_to_hand(new_hand)
        player.hands.insert(player.current_hand_index + 1, new_hand)

        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            seat=player.seat_index,
            hand1_value=hand.value,
            hand2_value=new_hand.value,
        )

        # Split aces get one card each and are done
        if hand.cards[0].is_ace:
            hand.is_split_aces = True
            new_hand.is_split_aces = True
            return self._advance_hand(player)

        if hand.is_finished:
            return self._advance_hand(player)
        return TurnProgress(False, False)

    def _advance_hand(self, player: Player) -> TurnProgress:
        """Move to the player's next unfinished hand, else the next player."""
        while player.current_hand_index < len(player.hands) - 1:
            player.current_hand_index += 1
            if not player.current_hand.is_finished:
                return TurnProgress(False, False)

        player.current_hand_index = 0
        self.active_player_index = self._find_next_active_player(self.active_player_index)
        if self.active_player_index == NO_PLAYER:
            return TurnProgress(True, True)
        return TurnProgress(False, True)

    def play_ai_turn(self) -> Action | None:
        """Play one basic-strategy action for the AI seat to act."""
        player = self._current_player()
        if player is None or player.is_human:
            return None

        action = get_basic_strategy_action(
            player.current_hand.cards,
            self.dealer_hand.cards[0],
            self.get_available_actions_for_current_player(),
        )
        self.player_action(action)
        return action

    def is_current_player_human(self) -> bool:
        player = self._current_player()
        return player is not None and player.is_human

    # -- dealer --------------------------------------------------------------

    def start_dealer_turn(self) -> bool:
        """
        Reveal the hole card and hand play to the dealer.

        Returns:
            True if the dealer turn started; False if it already had or the
            phase does not allow it
        """
        if self.phase == RoundPhase.DEALER_TURN:
            return False
        if self.phase != RoundPhase.PLAYER_TURN:
            self._reject("Cannot start dealer turn in current phase")
            return False
        self._begin_dealer_turn()
        return True

    def _begin_dealer_turn(self) -> None:
        self.active_player_index = NO_PLAYER
        self.reveal_hole_card()  # type: ignore[attr-defined]
        self._reveal_hole_card()
        self._changed()

    def dealer_should_hit(self) -> bool:
        """Dealer draws below 17, and on soft 17 when the table hits soft 17."""
        if self.phase != RoundPhase.DEALER_TURN:
            return False
        total = get_hand_total(self.dealer_hand.cards)
        if total.best < 17:
            return True
        return self.settings.hit_soft_17 and total.best == 17 and self.dealer_hand.is_soft

    def dealer_hit(self) -> Card | None:
        """Deal one card to the dealer."""
        if self.phase != RoundPhase.DEALER_TURN:
            self._reject("Dealer is not playing")
            return None
        card = self._deal_card_to_hand(self.dealer_hand)
        self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)
        self._changed()
        return card

    def all_players_busted(self) -> bool:
        """Check if no betting hand is left for the dealer to beat."""
        for player in self.players:
            if not player.has_bet:
                continue
            for hand in player.hands:
                if not hand.is_busted and not hand.is_surrendered:
                    return False
        return True

    # -- resolution ----------------------------------------------------------

    def resolve_all_hands(self) -> tuple[RoundResult, ...]:
        """
        Settle every bet hand against the dealer.

        Returns:
            The round results, or an empty tuple if the phase does not allow it
        """
        if self.phase == RoundPhase.DEALER_TURN:
            self.begin_resolving()  # type: ignore[attr-defined]
        elif self.phase != RoundPhase.RESOLVING:
            self._reject("Cannot resolve in current phase")
            return ()
        return self._settle()

    def _settle(self) -> tuple[RoundResult, ...]:
        """Resolve the round and pay out bets."""
        self.round_results = []

        for player in self.players:
            if not player.has_bet:
                continue

            for hand_index, hand in enumerate(player.hands):
                outcome = resolve_hand(hand, self.dealer_hand, self.settings)
                hand.result = outcome.result
                hand.payout = outcome.payout
                player.bankroll += outcome.payout

                insurance_payout = Decimal("0")
                if hand.is_insured:
                    insurance_payout = resolve_insurance(self.dealer_hand, hand.insurance_bet)
                    player.bankroll += insurance_payout

                result = RoundResult(
                    player_name=player.name,
                    seat_index=player.seat_index,
                    hand_index=hand_index,
                    bet=hand.bet,
                    result=outcome.result,
                    payout=outcome.payout,
                    insurance_payout=insurance_payout,
                )
                self.round_results.append(result)
                self.events.emit_new(EventType.HAND_RESOLVED, result=result)

            if player.bankroll < self.settings.minimum_bet:
                self._eliminate(player)

        self.close_round()  # type: ignore[attr-defined]
        logger.debug("Round %d resolved: %d hands", self.round_number, len(self.round_results))
        self.events.emit_new(EventType.ROUND_ENDED, round_number=self.round_number)
        self._changed()
        return tuple(self.round_results)

    def _eliminate(self, player: Player) -> None:
        player.is_active = False
        logger.debug("%s leaves the table with %s", player.name, player.bankroll)
        self.events.emit_new(
            EventType.PLAYER_ELIMINATED, seat=player.seat_index, bankroll=player.bankroll
        )

    def reset_for_new_round(self) -> None:
        """Clear the table and return to betting."""
        self.next_round()  # type: ignore[attr-defined]
        self.active_player_index = NO_PLAYER
        self.dealer_hand = HandState()
        self.round_results = []
        for player in self.players:
            player.reset_hands()
        self._changed()

"""Chunked Monte-Carlo simulator driving a GameEngine without a UI."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from random import Random
from typing import Callable

from bjtrainer.config import GameSettings, SimulationDefaults
from bjtrainer.counting import CountingSystem
from bjtrainer.game.engine import GameEngine
from bjtrainer.game.state import RoundPhase
from bjtrainer.shoe import CARDS_PER_DECK
from bjtrainer.simulation.betting import (
    BETTING_SYSTEMS,
    DEFAULT_BET_SPREAD,
    BetContext,
    BetSpread,
    BettingSystem,
    ProgressionState,
    create_betting_system,
)
from bjtrainer.simulation.play import PLAY_STRATEGIES, PlayContext, PlayStrategy
from bjtrainer.simulation.results import (
    SimulationProgress,
    SimulationResults,
    sample_interval_for,
)
from bjtrainer.strategy.deviations import should_take_insurance

logger = logging.getLogger(__name__)


def _defaults() -> SimulationDefaults:
    return SimulationDefaults()


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one simulation run."""

    play_strategy: str = "basic"
    bet_system: str = "flat"
    bet_amount: int = 10
    number_of_hands: int = field(default_factory=lambda: _defaults().number_of_hands)
    bet_spread: BetSpread = field(default_factory=lambda: dict(DEFAULT_BET_SPREAD))
    # Wonging plays only at or above this true count
    wong_threshold: float = field(default_factory=lambda: _defaults().wong_threshold)
    kelly_fraction: float = field(default_factory=lambda: _defaults().kelly_fraction)
    settings: GameSettings = field(default_factory=GameSettings)
    seed: int | None = None
    chunk_size: int = field(default_factory=lambda: _defaults().chunk_size)

    def __post_init__(self) -> None:
        if self.play_strategy not in PLAY_STRATEGIES:
            raise ValueError(f"Unknown play strategy: {self.play_strategy}")
        if self.bet_system not in BETTING_SYSTEMS:
            raise ValueError(f"Unknown betting system: {self.bet_system}")
        if self.bet_amount < 1:
            raise ValueError("bet_amount must be positive")
        if self.number_of_hands < 1:
            raise ValueError("number_of_hands must be at least 1")
        if self.kelly_fraction <= 0:
            raise ValueError("kelly_fraction must be positive")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")


@dataclass
class SimulationState:
    """
    Resumable state of a simulation.

    Owns its engine, shoe and progression exclusively. Pass it back to
    ``run_simulation_chunk`` until ``done`` is set.
    """

    engine: GameEngine
    config: SimulationConfig
    results: SimulationResults
    progress: SimulationProgress
    play: PlayStrategy
    betting: BettingSystem
    sample_interval: int
    progression: ProgressionState = field(default_factory=ProgressionState)
    done: bool = False
    player_index: int = 0
    # Parallel count for systems other than the shoe's Hi-Lo
    counter: CountingSystem | None = None
    # Shoe shuffle the parallel count belongs to
    shoe_generation: int = 0

    @property
    def custom_running_count(self) -> float:
        return self.counter.running_count if self.counter else 0.0

    @property
    def bankroll(self) -> Decimal:
        return self.engine.players[self.player_index].bankroll


def create_simulation(config: SimulationConfig) -> SimulationState:
    """Seat a fresh table for ``config`` and return the initial state."""
    play = PLAY_STRATEGIES[config.play_strategy]
    defaults = _defaults()
    settings = config.settings.with_overrides(
        number_of_ai_players=defaults.wong_ai_players if play.sits_out else 0,
        human_seat_position=0,
    )
    engine = GameEngine(settings, rng=Random(config.seed))
    starting_bankroll = config.settings.starting_bankroll

    logger.info(
        "Simulation created: %s play, %s betting, %d hands",
        config.play_strategy,
        config.bet_system,
        config.number_of_hands,
    )
    return SimulationState(
        engine=engine,
        config=config,
        results=SimulationResults(starting_bankroll=starting_bankroll),
        progress=SimulationProgress(0, config.number_of_hands, starting_bankroll),
        play=play,
        betting=create_betting_system(
            config.bet_system, config.bet_spread, config.kelly_fraction
        ),
        sample_interval=sample_interval_for(config.number_of_hands),
        player_index=engine.get_human_player_index(),
        counter=play.create_counter(),
        shoe_generation=engine.shoe.shuffle_count,
    )


def current_true_count(state: SimulationState) -> float:
    """
    Return the count signal the play strategy bets and insures on.

    Strategies without a parallel counter use the shoe's Hi-Lo true count.
    """
    shoe = state.engine.shoe
    if state.counter is None:
        return shoe.true_count
    return state.counter.true_count(shoe.cards_remaining / CARDS_PER_DECK)


def _play_turns(state: SimulationState) -> None:
    engine = state.engine
    max_steps = _defaults().max_turn_steps
    steps = 0

    while engine.phase == RoundPhase.PLAYER_TURN and steps < max_steps:
        steps += 1
        if engine.is_current_player_human():
            available = engine.get_available_actions_for_current_player()
            if not available:
                break
            hand = engine.players[state.player_index].current_hand
            ctx = PlayContext(engine.settings, engine.shoe.true_count)
            action = state.play.choose(hand.cards, engine.get_dealer_upcard(), available, ctx)
            progress = engine.player_action(action)
            if progress is None or progress.done:
                break
        elif engine.play_ai_turn() is None:
            break

    if engine.phase == RoundPhase.PLAYER_TURN and steps >= max_steps:
        logger.warning("Round %d stopped after %d turn steps", engine.round_number, steps)


def _play_round(state: SimulationState, bet: int) -> None:
    """Deal, play and settle one round. A zero bet sits the tracked seat out."""
    engine = state.engine

    if bet:
        engine.place_bet(state.player_index, bet)
    if state.play.sits_out:
        engine.place_ai_bets()
    engine.deal()

    if engine.phase == RoundPhase.INSURANCE_PROMPT:
        if bet and state.play.uses_count and should_take_insurance(current_true_count(state)):
            engine.place_insurance(state.player_index)
        engine.resolve_insurance_and_continue()

    if engine.phase == RoundPhase.PLAYER_TURN:
        _play_turns(state)

    if engine.phase in (RoundPhase.PLAYER_TURN, RoundPhase.DEALER_TURN):
        engine.start_dealer_turn()
        if not engine.all_players_busted():
            while engine.dealer_should_hit():
                engine.dealer_hit()
        engine.resolve_all_hands()


def _update_count(state: SimulationState) -> None:
    """Add every card on the table to the parallel count."""
    if state.counter is None:
        return
    engine = state.engine
    shoe = engine.shoe
    if shoe.shuffle_count != state.shoe_generation:
        # The shoe may have run out mid-round; only its new cards count
        state.counter.reset()
        state.shoe_generation = shoe.shuffle_count
        state.counter.count_cards(shoe.dealt_cards)
        return

    for player in engine.players:
        for hand in player.hands:
            state.counter.count_cards(hand.cards)
    state.counter.count_cards(engine.dealer_hand.cards)


def _finish_round(state: SimulationState, bet: int) -> None:
    engine = state.engine
    results = state.results

    if bet:
        first = results.tally(engine.round_results, state.player_index, bet)
        if first is not None:
            state.betting.record(state.progression, first)
    _update_count(state)

    results.rounds_played += 1
    results.sample(state.bankroll, engine.shoe.true_count, state.sample_interval, bet)
    engine.reset_for_new_round()


def run_simulation_chunk(state: SimulationState) -> SimulationState:
    """
    Play up to ``chunk_size`` rounds and return the updated state.

    Sets ``done`` once the requested number of rounds has been played or
    the tracked bankroll falls below the table minimum.
    """
    if state.done:
        return state

    config = state.config
    results = state.results
    minimum_bet = state.engine.settings.minimum_bet
    rounds = min(config.chunk_size, config.number_of_hands - results.rounds_played)

    for _ in range(rounds):
        if state.bankroll < minimum_bet:
            state.done = True
            break

        true_count = current_true_count(state)

        if state.play.sits_out and true_count < config.wong_threshold:
            _play_round(state, 0)
            results.rounds_watched += 1
            _finish_round(state, 0)
            continue

        ctx = BetContext(
            bet_unit=config.bet_amount,
            true_count=true_count,
            bankroll=state.bankroll,
            settings=state.engine.settings,
        )
        bet = state.betting.next_bet(state.progression, ctx)
        _play_round(state, bet)
        _finish_round(state, bet)

    bankroll = state.bankroll
    results.finalize(bankroll)
    state.progress = SimulationProgress(
        hands_completed=results.rounds_played,
        total_hands=config.number_of_hands,
        current_bankroll=bankroll,
    )

    if results.rounds_played >= config.number_of_hands or bankroll < minimum_bet:
        state.done = True

    if state.done:
        logger.info(
            "Simulation finished after %d rounds: %d hands, net %s, house edge %.4f",
            results.rounds_played,
            results.hands_played,
            results.net_profit,
            results.house_edge,
        )
    else:
        logger.debug("Chunk done: %d/%d rounds", results.rounds_played, config.number_of_hands)
    return state


def run_simulation(
    config: SimulationConfig,
    on_chunk: Callable[[SimulationState], None] | None = None,
) -> SimulationResults:
    """
    Run a whole simulation chunk by chunk.

    Args:
        config: Simulation parameters
        on_chunk: Called with the state after every chunk

    Returns:
        The final results
    """
    state = create_simulation(config)
    while not state.done:
        run_simulation_chunk(state)
        if on_chunk is not None:
            on_chunk(state)
    return state.results

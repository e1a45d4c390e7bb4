"""Batch simulation with pluggable play and betting systems."""

from bjtrainer.simulation.betting import (
    BET_SPREAD_PRESETS,
    BETTING_SYSTEMS,
    DEFAULT_BET_SPREAD,
    BetContext,
    BettingSystem,
    ProgressionState,
    create_betting_system,
    resolve_bet_from_spread,
)
from bjtrainer.simulation.play import PLAY_STRATEGIES, PlayStrategy, get_play_strategy
from bjtrainer.simulation.results import BankrollSample, SimulationProgress, SimulationResults
from bjtrainer.simulation.simulator import (
    SimulationConfig,
    SimulationState,
    create_simulation,
    current_true_count,
    run_simulation,
    run_simulation_chunk,
)

__all__ = [
    "BET_SPREAD_PRESETS",
    "BETTING_SYSTEMS",
    "DEFAULT_BET_SPREAD",
    "BetContext",
    "BettingSystem",
    "ProgressionState",
    "create_betting_system",
    "resolve_bet_from_spread",
    "PLAY_STRATEGIES",
    "PlayStrategy",
    "get_play_strategy",
    "BankrollSample",
    "SimulationProgress",
    "SimulationResults",
    "SimulationConfig",
    "SimulationState",
    "create_simulation",
    "current_true_count",
    "run_simulation",
    "run_simulation_chunk",
]

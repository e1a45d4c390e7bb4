"""Round engine, phases, snapshots and events."""

from bjtrainer.game.events import EventEmitter, EventType, GameEvent
from bjtrainer.game.state import (
    GameState,
    HandSnapshot,
    PlayerSnapshot,
    RoundPhase,
    RoundResult,
)
from bjtrainer.game.engine import GameEngine, Player, TurnProgress

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "GameState",
    "HandSnapshot",
    "PlayerSnapshot",
    "RoundPhase",
    "RoundResult",
    "GameEngine",
    "Player",
    "TurnProgress",
]

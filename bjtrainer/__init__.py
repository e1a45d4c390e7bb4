"""Blackjack count-trainer core - rules engine and simulator, 100% UI-agnostic."""

from bjtrainer.cards import Card, Rank, Suit
from bjtrainer.config import GameSettings
from bjtrainer.hand import Action, HandResult, HandState, HandTotal, get_hand_total
from bjtrainer.payout import HandOutcome, resolve_hand, resolve_insurance
from bjtrainer.shoe import Shoe

__all__ = [
    "Action",
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "HandState",
    "HandTotal",
    "get_hand_total",
    "HandOutcome",
    "HandResult",
    "resolve_hand",
    "resolve_insurance",
    "GameSettings",
]

__version__ = "0.1.0"

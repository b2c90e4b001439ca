"""Game models."""

from .card import Card, create_cards
from .deck import Deck, PileSource
from .game_state import GameState, TurnPhase, UpdateKind
from .player import Player, TurnRecord
from .tray import INVALID_VALUE, Tray

__all__ = [
    "Card",
    "create_cards",
    "Deck",
    "PileSource",
    "Tray",
    "INVALID_VALUE",
    "Player",
    "TurnRecord",
    "GameState",
    "TurnPhase",
    "UpdateKind",
]

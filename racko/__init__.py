"""Rack-O card game engine."""

from racko.config import Config, GameConfig, load_config
from racko.errors import (
    ConfigurationError,
    EmptyPileError,
    IllegalMoveError,
    IndexOutOfRangeError,
    RackoError,
)
from racko.game import GameSession, SleepScheduler, TurnPacer
from racko.models import Card, Deck, PileSource, Player, Tray, TurnPhase, UpdateKind
from racko.strategy import GuideValueStrategy, Strategy

__version__ = "0.1.0"

__all__ = [
    "Card",
    "Config",
    "ConfigurationError",
    "Deck",
    "EmptyPileError",
    "GameConfig",
    "GameSession",
    "GuideValueStrategy",
    "IllegalMoveError",
    "IndexOutOfRangeError",
    "PileSource",
    "Player",
    "RackoError",
    "SleepScheduler",
    "Strategy",
    "Tray",
    "TurnPacer",
    "TurnPhase",
    "UpdateKind",
    "load_config",
]

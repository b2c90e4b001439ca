"""Game logic."""

from .pacer import SleepScheduler, TurnPacer
from .session import GameSession

__all__ = [
    "GameSession",
    "SleepScheduler",
    "TurnPacer",
]

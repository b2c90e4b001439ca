"""Game logging module."""

from racko.config import GameLogConfig

from .formatters import format_card, format_tray, format_trays
from .game_logger import GameLogger

__all__ = [
    "GameLogConfig",
    "GameLogger",
    "format_card",
    "format_tray",
    "format_trays",
]

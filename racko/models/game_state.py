"""Game state models."""

from enum import Enum

from pydantic import BaseModel


class TurnPhase(str, Enum):
    """Phase of the turn state machine."""

    SETUP = "setup"  # Session created, no game dealt yet
    DEALING = "dealing"
    AWAITING_DRAW = "awaiting_draw"  # Current player must pick a pile
    AWAITING_SWAP_CHOICE = "awaiting_swap_choice"  # Holding a drawn card
    TURN_COMPLETE = "turn_complete"
    GAME_OVER = "game_over"


class UpdateKind(str, Enum):
    """What changed, for display-update notifications."""

    PILES = "piles"
    TRAY = "tray"
    HELD_CARD = "held_card"


class GameState(BaseModel):
    """Overall game state."""

    game_number: int = 0
    turn_number: int = 0

    current_player: int = -1  # Index into the session's turn order
    phase: TurnPhase = TurnPhase.SETUP
    winner: int | None = None  # Index into the turn order

    @property
    def is_over(self) -> bool:
        return self.phase == TurnPhase.GAME_OVER

    def reset_for_new_game(self) -> None:
        """Reset state for a new game."""
        self.game_number += 1
        self.turn_number = 0
        self.current_player = -1
        self.phase = TurnPhase.DEALING
        self.winner = None

    def __str__(self) -> str:
        parts = [f"Game {self.game_number}, Turn {self.turn_number}"]
        if self.is_over:
            parts.append(f"[OVER, winner {self.winner}]")
        else:
            parts.append(f"Player {self.current_player} {self.phase.value}")
        return " ".join(parts)

"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from racko.models.deck import Deck
    from racko.models.player import Player


def setup_logging(level: str = "INFO") -> None:
    """Send log records to stdout at the given level name.

    Session events are logged at DEBUG, so only -v shows them alongside
    the console display.
    """
    logging.basicConfig(
        level=logging.getLevelName(level.upper()),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Display game state to stdout."""

    def __init__(self, show_trays: bool = False):
        """Initialize display.

        Args:
            show_trays: Whether to show every player's tray, not just humans'
        """
        self.show_trays = show_trays

    def print_separator(self) -> None:
        """Print a separator line."""
        print("-" * 30)

    def print_message(self, message: str) -> None:
        print(message)

    def print_game_start(self, game_number: int, players: list["Player"]) -> None:
        """Print game start message with the turn order."""
        self.print_separator()
        print(f"GAME {game_number}")
        print("Turn order: " + ", ".join(str(p) for p in players))
        self.print_separator()

    def print_piles(self, deck: "Deck") -> None:
        """Print the draw pile size and the visible discard card."""
        top = deck.top_discard_value() or "-"
        print(f"Draw pile: {deck.draw_pile_size()} cards | Discard: {top}")

    def print_tray(self, player: "Player") -> None:
        """Print a tray top slot first, with guide values and positions.

        Automated players' trays are hidden unless show_trays is set.
        """
        if player.tray is None:
            return
        if player.is_automated and not self.show_trays:
            return

        tray = player.tray
        print(f"\n{player.name}'s tray (guide values in brackets):")
        for i in range(tray.slot_count - 1, -1, -1):
            print(f"  {i + 1:>2}: {tray.value_at(i):>3}  [{tray.guide_value_at(i)}]")

    def print_held_card(self, player: "Player") -> None:
        if player.held_card is not None:
            print(f"{player.name} is holding {player.held_card}")

    def print_game_end(self, winner: "Player", turns: int) -> None:
        """Print game end results."""
        self.print_separator()
        print(f"{winner.name} wins after {turns} turns!")
        if winner.tray is not None:
            print(f"Winning tray: {winner.tray}")
        self.print_separator()

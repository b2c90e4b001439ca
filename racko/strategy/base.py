"""Base strategy class for automated players.

Defines the interface that all AI strategies must implement.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from racko.models.deck import PileSource
from racko.models.tray import Tray


@dataclass(frozen=True)
class PileChoice:
    """Which pile to draw from, and the reasoning behind it."""

    source: PileSource
    tray_index: int | None = None  # Planned swap slot for a discard-pile draw
    benefit: float = 0.0
    threshold: float = 0.0


class Strategy(ABC):
    """Abstract base class for turn strategies.

    A turn asks the strategy twice: once to pick a pile, and, after a blind
    draw from the draw pile, once more to pick a slot for the drawn card.
    """

    @abstractmethod
    def select_source(
        self, tray: Tray, top_discard_value: int, rng: random.Random
    ) -> PileChoice:
        """Choose the pile to draw from.

        Args:
            tray: The acting player's tray
            top_discard_value: Value of the visible discard card
            rng: Random source for this decision

        Returns:
            PileChoice. A DISCARD choice must carry the tray index to swap.
        """
        pass

    @abstractmethod
    def select_swap(
        self, tray: Tray, held_value: int, choice: PileChoice
    ) -> int | None:
        """Choose a slot for a card drawn from the draw pile.

        Args:
            tray: The acting player's tray
            held_value: Value of the drawn card
            choice: The PileChoice made earlier this turn

        Returns:
            Tray index to swap, or None to discard the drawn card
        """
        pass

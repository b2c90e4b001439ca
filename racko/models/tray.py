"""Player tray (rack) and guide-value geometry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from racko.errors import IndexOutOfRangeError

from .card import Card

if TYPE_CHECKING:
    from .deck import Deck

logger = logging.getLogger(__name__)

# Returned by value_at() for an out-of-range index
INVALID_VALUE = -1


class Tray:
    """A player's fixed-size ordered hand.

    Index 0 is the bottom slot and slot_count - 1 the top. A tray is won
    when values ascend from bottom to top.
    """

    def __init__(self, cards: list[Card], card_count: int):
        """Initialize tray.

        Args:
            cards: One card per slot, bottom first
            card_count: Number of cards in the deck (for guide values)
        """
        if not cards:
            raise ValueError("Tray needs at least one card")
        self._cards = list(cards)
        self.card_count = card_count

    @classmethod
    def deal(cls, deck: Deck, slot_count: int) -> Tray:
        """Deal a tray from the draw pile, filling the top slot first."""
        cards: list[Card | None] = [None] * slot_count
        for i in range(slot_count - 1, -1, -1):
            cards[i] = deck.draw_from_draw_pile()
        return cls(cards, deck.card_count)  # type: ignore[arg-type]

    @classmethod
    def from_values(cls, values: list[int], card_count: int) -> Tray:
        """Build a tray holding new cards with the given values."""
        return cls([Card(value=v) for v in values], card_count)

    @property
    def slot_count(self) -> int:
        return len(self._cards)

    def values(self) -> list[int]:
        """Card values bottom to top."""
        return [c.value for c in self._cards]

    def is_ascending(self) -> bool:
        """Check whether values ascend from bottom to top (the win condition)."""
        for i in range(1, len(self._cards)):
            if self._cards[i].value < self._cards[i - 1].value:
                return False
        return True

    def swap(self, index: int, incoming: Card) -> Card:
        """Put incoming card at index and return the card it replaces.

        Raises:
            IndexOutOfRangeError: If index is outside the tray
        """
        self._check_index(index)
        outgoing = self._cards[index]
        self._cards[index] = incoming
        return outgoing

    def value_at(self, index: int) -> int:
        """Value of the card at index, or INVALID_VALUE if out of range."""
        if not 0 <= index < len(self._cards):
            logger.warning(
                f"Error accessing card at position {index} (index out of range)"
            )
            return INVALID_VALUE
        return self._cards[index].value

    def guide_value_at(self, index: int) -> int:
        """Target value for a slot in an evenly spread ascending tray.

        Spaces slot_count anchors across 1..card_count, independent of the
        cards actually held.
        """
        return self.card_count * (index + 1) // (self.slot_count + 2)

    def guide_values(self) -> list[int]:
        return [self.guide_value_at(i) for i in range(self.slot_count)]

    def swap_benefit(self, candidate_value: int, index: int) -> float:
        """Score replacing the card at index with candidate_value.

        The result lies in [-1, 1]: positive when the candidate is closer to
        the slot's guide value than the current card, scaled by the largest
        distance any card could be from that guide value.
        """
        self._check_index(index)
        guide = self.guide_value_at(index)
        half = self.card_count // 2
        max_diff = abs(guide - half) + half
        if max_diff == 0:
            return 0.0

        current_diff = abs(self._cards[index].value - guide)
        candidate_diff = abs(candidate_value - guide)
        # Integer halving undershoots max_diff for an odd card_count
        return max(-1.0, min(1.0, (current_diff - candidate_diff) / max_diff))

    def best_swap_benefit(self, candidate_value: int) -> tuple[float, int | None]:
        """Find the slot that gains most from candidate_value.

        Returns:
            (benefit, index). Ties go to the lowest index. If no slot has a
            positive benefit, returns (0.0, None).
        """
        best_benefit = 0.0
        best_index: int | None = None

        for i in range(self.slot_count):
            benefit = self.swap_benefit(candidate_value, i)
            if benefit > best_benefit:
                best_benefit = benefit
                best_index = i

        return best_benefit, best_index

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._cards):
            raise IndexOutOfRangeError(index, len(self._cards))

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __str__(self) -> str:
        return "[" + ", ".join(str(c) for c in self._cards) + "]"

    def __repr__(self) -> str:
        return f"Tray({self.values()!r})"

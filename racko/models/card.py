"""Card model."""

from pydantic import BaseModel, Field


class Card(BaseModel, frozen=True):
    """Single numbered Rack-O card.

    Cards compare by identity: each value exists exactly once per deck, and a
    card object is held by exactly one pile, tray or hand at a time.
    """

    value: int = Field(ge=1)

    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Card({self.value})"


def create_cards(card_count: int) -> list[Card]:
    """Create cards numbered 1..card_count in ascending order."""
    return [Card(value=v) for v in range(1, card_count + 1)]

"""Player model."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from racko.errors import IllegalMoveError

from .card import Card
from .deck import Deck, PileSource
from .tray import Tray

if TYPE_CHECKING:
    from racko.strategy.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class TurnRecord:
    """What happened during one turn."""

    source: PileSource
    drawn_value: int
    discarded_value: int
    tray_index: int | None = None  # None when the drawn card was discarded

    @property
    def swapped(self) -> bool:
        return self.tray_index is not None


class Player(BaseModel):
    """Player state.

    The tray and the held card belong to this player alone. Every move takes
    the session's deck explicitly.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    player_id: int = 0  # Position in the setup roster
    name: str = "Player"
    is_automated: bool = False

    tray: Tray | None = None
    held_card: Card | None = None

    @property
    def is_winner(self) -> bool:
        """Check if this player's tray is in ascending order."""
        return self.tray is not None and self.tray.is_ascending()

    def initialize_tray(self, deck: Deck, slot_count: int) -> Tray:
        """Deal a fresh tray and drop any held card."""
        self.held_card = None
        self.tray = Tray.deal(deck, slot_count)
        return self.tray

    def draw_from_draw_pile(self, deck: Deck) -> Card:
        self._require_empty_hand()
        self.held_card = deck.draw_from_draw_pile()
        logger.debug(f"{self.name} drew {self.held_card} from the draw pile")
        return self.held_card

    def draw_from_discard_pile(self, deck: Deck) -> Card:
        self._require_empty_hand()
        self.held_card = deck.draw_from_discard_pile()
        logger.debug(f"{self.name} drew {self.held_card} from the discard pile")
        return self.held_card

    def draw(self, deck: Deck, source: PileSource) -> Card:
        if source == PileSource.DISCARD:
            return self.draw_from_discard_pile(deck)
        return self.draw_from_draw_pile(deck)

    def discard_held_card(self, deck: Deck) -> Card:
        """Discard the held card without swapping.

        Returns:
            The discarded card
        """
        card = self._require_held_card()
        deck.discard(card)
        self.held_card = None
        logger.debug(f"{self.name} discarded {card}")
        return card

    def swap_held_card_and_discard(self, deck: Deck, tray_index: int) -> Card:
        """Put the held card into the tray and discard the card it replaces.

        The held card stays in hand if tray_index is out of range.

        Returns:
            The discarded card (previously at tray_index)
        """
        card = self._require_held_card()
        tray = self._require_tray()
        self.held_card = tray.swap(tray_index, card)
        logger.debug(f"{self.name} swapped {card} into position {tray_index}")
        return self.discard_held_card(deck)

    def emulate_turn(
        self,
        deck: Deck,
        strategy: Strategy,
        rng: random.Random | None = None,
    ) -> TurnRecord:
        """Play a whole turn using strategy.

        Runs to completion: draws, optionally swaps, and discards.

        Returns:
            TurnRecord describing the turn
        """
        tray = self._require_tray()
        self._require_empty_hand()

        choice = strategy.select_source(tray, deck.top_discard_value(), rng or random.Random())

        if choice.source == PileSource.DISCARD and choice.tray_index is not None:
            drawn = self.draw_from_discard_pile(deck)
            discarded = self.swap_held_card_and_discard(deck, choice.tray_index)
            return TurnRecord(
                source=PileSource.DISCARD,
                drawn_value=drawn.value,
                discarded_value=discarded.value,
                tray_index=choice.tray_index,
            )

        drawn = self.draw_from_draw_pile(deck)
        tray_index = strategy.select_swap(tray, drawn.value, choice)
        if tray_index is None:
            discarded = self.discard_held_card(deck)
        else:
            discarded = self.swap_held_card_and_discard(deck, tray_index)

        return TurnRecord(
            source=PileSource.DRAW,
            drawn_value=drawn.value,
            discarded_value=discarded.value,
            tray_index=tray_index,
        )

    def card_values(self) -> list[int]:
        """Values of every card this player holds (tray and hand)."""
        values = self.tray.values() if self.tray else []
        if self.held_card is not None:
            values.append(self.held_card.value)
        return values

    def _require_tray(self) -> Tray:
        if self.tray is None:
            raise IllegalMoveError(f"{self.name} has no tray")
        return self.tray

    def _require_held_card(self) -> Card:
        if self.held_card is None:
            raise IllegalMoveError(f"{self.name} is not holding a card")
        return self.held_card

    def _require_empty_hand(self) -> None:
        if self.held_card is not None:
            raise IllegalMoveError(f"{self.name} is already holding {self.held_card}")

    def __str__(self) -> str:
        kind = "AI" if self.is_automated else "human"
        return f"{self.name} ({kind})"

    def __repr__(self) -> str:
        return (
            f"Player(id={self.player_id}, name={self.name!r}, "
            f"automated={self.is_automated}, tray={self.tray!r})"
        )

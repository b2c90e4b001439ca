"""Draw pile and discard pile."""

import logging
import random
from enum import Enum

from racko.errors import ConfigurationError, EmptyPileError

from .card import Card, create_cards

logger = logging.getLogger(__name__)


class PileSource(str, Enum):
    """Pile a card is drawn from."""

    DRAW = "draw"
    DISCARD = "discard"


class Deck:
    """Owns the draw pile and the discard pile for one session.

    Both piles are lists whose last element is the top card. The draw pile
    is face down; the top of the discard pile is visible to every player.
    """

    def __init__(self, card_count: int | None = None, rng: random.Random | None = None):
        """Initialize deck.

        Args:
            card_count: Number of cards (values 1..card_count). May be left
                unset and supplied once through configure().
            rng: Random source for shuffling (module random if not provided)
        """
        self._card_count: int | None = None
        self._rng = rng or random.Random()
        self._draw_pile: list[Card] = []
        self._discard_pile: list[Card] = []

        if card_count is not None:
            self.configure(card_count)

    def configure(self, card_count: int) -> None:
        """Set the number of cards. Allowed exactly once per deck.

        Raises:
            ConfigurationError: If already configured or card_count < 1
        """
        if self._card_count is not None:
            raise ConfigurationError("card_count can only be set once")
        if card_count < 1:
            raise ConfigurationError(f"card_count must be positive, got {card_count}")
        self._card_count = card_count

    @property
    def card_count(self) -> int:
        if self._card_count is None:
            raise ConfigurationError("Deck has not been configured")
        return self._card_count

    @property
    def is_configured(self) -> bool:
        return self._card_count is not None

    def initialize_deck(self) -> None:
        """Build a fresh shuffled draw pile and turn its top card face up."""
        self._draw_pile = create_cards(self.card_count)
        self._rng.shuffle(self._draw_pile)
        self._discard_pile = [self._draw_pile.pop()]
        logger.debug(f"Deck initialized with {self.card_count} cards")

    def reset_draw_pile(self) -> bool:
        """Recycle the discard pile into a new draw pile.

        Does nothing unless the draw pile is empty. Otherwise the discard
        pile is shuffled, becomes the draw pile, and its top card starts a
        new discard pile.

        Returns:
            True if the piles were recycled
        """
        if self._draw_pile:
            return False
        if not self._discard_pile:
            raise EmptyPileError("Cannot reset draw pile: discard pile is empty")

        cards = self._discard_pile
        self._rng.shuffle(cards)
        self._draw_pile = cards
        self._discard_pile = [self._draw_pile.pop()]
        logger.debug(f"Discard pile reshuffled into {len(self._draw_pile)} card draw pile")
        return True

    def draw_from_draw_pile(self) -> Card:
        """Remove and return the top card of the draw pile."""
        if not self._draw_pile:
            raise EmptyPileError("Draw pile is empty; call reset_draw_pile() first")
        return self._draw_pile.pop()

    def draw_from_discard_pile(self) -> Card:
        """Remove and return the top card of the discard pile."""
        if not self._discard_pile:
            raise EmptyPileError("Discard pile is empty")
        return self._discard_pile.pop()

    def draw(self, source: PileSource) -> Card:
        """Draw from the given pile."""
        if source == PileSource.DISCARD:
            return self.draw_from_discard_pile()
        return self.draw_from_draw_pile()

    def discard(self, card: Card) -> None:
        """Place a card face up on top of the discard pile."""
        self._discard_pile.append(card)

    def top_discard_value(self) -> int:
        """Value of the visible discard card, or 0 if the pile is empty."""
        return self._discard_pile[-1].value if self._discard_pile else 0

    def draw_pile_size(self) -> int:
        return len(self._draw_pile)

    def discard_pile_size(self) -> int:
        return len(self._discard_pile)

    def card_values(self) -> list[int]:
        """Values of every card in both piles (draw pile first)."""
        return [c.value for c in self._draw_pile] + [c.value for c in self._discard_pile]

    def __str__(self) -> str:
        top = self.top_discard_value() or "-"
        return f"Deck(draw={self.draw_pile_size()}, discard top={top})"

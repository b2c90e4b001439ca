"""Guide-value strategy.

Strategy:
- Take the visible discard card if its best swap benefit beats a random
  threshold t in [0, 1)
- Otherwise draw blind and keep the card if its best benefit beats t / 2
- Swap into the slot with the largest benefit (lowest index on ties)
"""

import logging
import random

from racko.models.deck import PileSource
from racko.models.tray import Tray
from racko.strategy.base import PileChoice, Strategy

logger = logging.getLogger(__name__)


class GuideValueStrategy(Strategy):
    """Swap toward per-slot guide values with a randomized acceptance bar.

    The blind draw is accepted more readily than the known discard card.
    There is no lookahead and no opponent modelling.
    """

    def select_source(
        self, tray: Tray, top_discard_value: int, rng: random.Random
    ) -> PileChoice:
        benefit, index = tray.best_swap_benefit(top_discard_value)
        threshold = rng.random()

        if index is not None and benefit >= threshold:
            logger.debug(
                f"Taking discard {top_discard_value} for slot {index} "
                f"(benefit {benefit:.3f} >= {threshold:.3f})"
            )
            return PileChoice(PileSource.DISCARD, index, benefit, threshold)

        return PileChoice(PileSource.DRAW, None, benefit, threshold)

    def select_swap(
        self, tray: Tray, held_value: int, choice: PileChoice
    ) -> int | None:
        benefit, index = tray.best_swap_benefit(held_value)
        threshold = choice.threshold / 2

        if index is not None and benefit >= threshold:
            logger.debug(
                f"Keeping {held_value} for slot {index} "
                f"(benefit {benefit:.3f} >= {threshold:.3f})"
            )
            return index
        return None

"""Draw-pile ownership for a running match."""

from __future__ import annotations

import logging
import random
from typing import Iterable

from .cards import Card, build_fresh_deck, shuffle_cards

__all__ = ["DeckService"]

logger = logging.getLogger(__name__)


class DeckService:
    """Owns the live draw pile; the front of the pile is the next draw.

    The pile only changes through :meth:`draw`, :meth:`load_and_shuffle` and
    :meth:`reset`. An empty pile is an ordinary state, not an error.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._draw_pile: list[Card] = []
        self.reset()

    @property
    def cards(self) -> tuple[Card, ...]:
        """Return the draw pile front to back."""

        return tuple(self._draw_pile)

    def draw(self) -> Card | None:
        """Remove and return the front card, or ``None`` when the pile is empty."""

        if not self._draw_pile:
            return None
        return self._draw_pile.pop(0)

    def remaining_count(self) -> int:
        return len(self._draw_pile)

    def load_and_shuffle(self, cards: Iterable[Card]) -> None:
        """Replace the draw pile with a shuffled permutation of ``cards``."""

        self._draw_pile = shuffle_cards(cards, self._rng)
        logger.debug("draw pile rebuilt with %d card(s)", len(self._draw_pile))

    def reset(self) -> None:
        """Replace the draw pile with a freshly shuffled full deck."""

        self._draw_pile = build_fresh_deck(self._rng)
        logger.debug("draw pile reset to a fresh %d-card deck", len(self._draw_pile))

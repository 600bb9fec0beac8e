"""Card abstractions and deck assembly for Flip 7."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Iterator, List

__all__ = [
    "CardKind",
    "Card",
    "DECK_COMPOSITION",
    "DECK_SIZE",
    "iter_deck_cards",
    "build_fresh_deck",
    "shuffle_cards",
]


class CardKind(str, Enum):
    """Enumeration of the six card families in a Flip 7 deck."""

    NUMBER = "number"
    ADDITION = "addition"
    MULTIPLIER = "multiplier"
    FREEZE = "freeze"
    FLIP_THREE = "flip-three"
    SECOND_CHANCE = "second-chance"


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical Flip 7 card."""

    id: int
    kind: CardKind
    value: int
    label: str

    @property
    def is_number(self) -> bool:
        """Return ``True`` for Number cards, the only kind that can bust."""

        return self.kind is CardKind.NUMBER

    @property
    def scores(self) -> bool:
        """Return ``True`` when the card's value is summed into a round score."""

        return self.kind in (CardKind.NUMBER, CardKind.ADDITION)


# (kind, value, label, copies) in construction order.
DECK_COMPOSITION: Final[tuple[tuple[CardKind, int, str, int], ...]] = (
    (CardKind.NUMBER, 0, "0", 1),
    *((CardKind.NUMBER, value, str(value), value) for value in range(1, 13)),
    *((CardKind.ADDITION, value, f"+{value}", 1) for value in (2, 4, 6, 8, 10)),
    (CardKind.MULTIPLIER, 2, "x2", 1),
    (CardKind.FREEZE, 0, "FREEZE", 3),
    (CardKind.FLIP_THREE, 0, "FLIP THREE", 3),
    (CardKind.SECOND_CHANCE, 0, "SECOND CHANCE", 3),
)

DECK_SIZE: Final[int] = sum(copies for *_, copies in DECK_COMPOSITION)


def iter_deck_cards() -> Iterator[Card]:
    """Yield all physical cards of a fresh deck in construction order."""

    next_id = 1
    for kind, value, label, copies in DECK_COMPOSITION:
        for _ in range(copies):
            yield Card(id=next_id, kind=kind, value=value, label=label)
            next_id += 1


def shuffle_cards(cards: Iterable[Card], rng: random.Random | None = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards`` (Fisher–Yates).

    ``rng`` only needs a ``randrange`` method; ``None`` uses a system seeded
    :class:`random.Random`.
    """

    source = rng if rng is not None else random.Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = source.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def build_fresh_deck(rng: random.Random | None = None) -> List[Card]:
    """Return the full 94-card deck in random order."""

    return shuffle_cards(iter_deck_cards(), rng)

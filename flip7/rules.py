"""Rule utilities and constants for Flip 7.

Every helper here is pure: inputs are never mutated and the same hand always
produces the same answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from .cards import Card, CardKind

__all__ = [
    "HAND_LIMIT",
    "SEVEN_CARD_BONUS",
    "FLIP_THREE_DRAWS",
    "MULTIPLIER_FACTOR",
    "SecondChanceResult",
    "is_bust",
    "has_second_chance",
    "resolve_second_chance",
    "compute_round_score",
    "has_freeze",
    "has_flip_three",
    "number_card_values",
    "number_card_count",
]

HAND_LIMIT: Final[int] = 7
SEVEN_CARD_BONUS: Final[int] = 15
FLIP_THREE_DRAWS: Final[int] = 3
MULTIPLIER_FACTOR: Final[int] = 2


@dataclass(frozen=True, slots=True)
class SecondChanceResult:
    """Hand left over after a Second Chance mitigation and the cards it consumed."""

    remaining_hand: tuple[Card, ...]
    removed_cards: tuple[Card, ...]


def is_bust(hand: Sequence[Card], incoming: Card) -> bool:
    """Return ``True`` when ``incoming`` duplicates a Number already in ``hand``."""

    if not incoming.is_number:
        return False
    return any(card.is_number and card.value == incoming.value for card in hand)


def has_second_chance(hand: Sequence[Card]) -> bool:
    return any(card.kind is CardKind.SECOND_CHANCE for card in hand)


def resolve_second_chance(hand: Sequence[Card], bust_card_id: int) -> SecondChanceResult:
    """Remove one Second Chance card and the bust card from ``hand``.

    Only the first Second Chance encountered is consumed, so a hand holding
    several can be mitigated again later in the same turn. Cards that stay
    behind keep their relative order.
    """

    remaining: list[Card] = []
    removed: list[Card] = []
    second_chance_used = False
    for card in hand:
        if card.id == bust_card_id:
            removed.append(card)
            continue
        if card.kind is CardKind.SECOND_CHANCE and not second_chance_used:
            second_chance_used = True
            removed.append(card)
            continue
        remaining.append(card)
    return SecondChanceResult(remaining_hand=tuple(remaining), removed_cards=tuple(removed))


def number_card_values(hand: Sequence[Card]) -> list[int]:
    return [card.value for card in hand if card.is_number]


def number_card_count(hand: Sequence[Card]) -> int:
    return sum(1 for card in hand if card.is_number)


def compute_round_score(hand: Sequence[Card]) -> int:
    """Score ``hand``: sum Numbers and Additions, double on x2, then add the bonus.

    The seven-card bonus is applied after doubling and only counts Number
    cards. Freeze, Flip Three and Second Chance never contribute.
    """

    total = sum(card.value for card in hand if card.scores)
    if any(card.kind is CardKind.MULTIPLIER for card in hand):
        total *= MULTIPLIER_FACTOR
    if number_card_count(hand) == HAND_LIMIT:
        total += SEVEN_CARD_BONUS
    return total


def has_freeze(hand: Sequence[Card]) -> bool:
    return any(card.kind is CardKind.FREEZE for card in hand)


def has_flip_three(hand: Sequence[Card]) -> bool:
    return any(card.kind is CardKind.FLIP_THREE for card in hand)

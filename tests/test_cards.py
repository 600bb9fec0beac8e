from __future__ import annotations

import random
from collections import Counter

from flip7.cards import DECK_SIZE, Card, CardKind, build_fresh_deck, iter_deck_cards, shuffle_cards


class ZeroRandom:
    def randrange(self, stop: int) -> int:
        return 0


def test_fresh_deck_has_94_unique_cards() -> None:
    deck = build_fresh_deck(random.Random(3))

    assert DECK_SIZE == 94
    assert len(deck) == 94
    assert sorted(card.id for card in deck) == list(range(1, 95))


def test_fresh_deck_composition() -> None:
    counts = Counter((card.kind, card.value) for card in build_fresh_deck(random.Random(5)))

    assert counts[(CardKind.NUMBER, 0)] == 1
    for value in range(1, 13):
        assert counts[(CardKind.NUMBER, value)] == value
    for value in (2, 4, 6, 8, 10):
        assert counts[(CardKind.ADDITION, value)] == 1
    assert counts[(CardKind.MULTIPLIER, 2)] == 1

    by_kind = Counter(card.kind for card in iter_deck_cards())
    assert by_kind[CardKind.NUMBER] == 79
    assert by_kind[CardKind.FREEZE] == 3
    assert by_kind[CardKind.FLIP_THREE] == 3
    assert by_kind[CardKind.SECOND_CHANCE] == 3


def test_identity_shuffle_keeps_construction_order(identity_rng) -> None:
    deck = build_fresh_deck(identity_rng)

    assert [card.id for card in deck] == list(range(1, 95))
    assert deck[0] == Card(id=1, kind=CardKind.NUMBER, value=0, label="0")
    assert deck[-1].kind is CardKind.SECOND_CHANCE


def test_shuffle_is_a_permutation_and_leaves_input_untouched() -> None:
    cards = list(iter_deck_cards())
    original = list(cards)

    shuffled = shuffle_cards(cards, random.Random(7))

    assert cards == original
    assert sorted(card.id for card in shuffled) == [card.id for card in original]
    assert shuffled != original


def test_shuffle_is_reproducible_with_seed() -> None:
    first = build_fresh_deck(random.Random(11))
    second = build_fresh_deck(random.Random(11))

    assert first == second


def test_fisher_yates_swaps_from_the_back() -> None:
    a, b, c = list(iter_deck_cards())[:3]

    assert shuffle_cards([a, b, c], ZeroRandom()) == [b, c, a]
    assert shuffle_cards([], ZeroRandom()) == []


def test_card_scoring_flags() -> None:
    labels = {card.kind: card for card in iter_deck_cards()}

    assert labels[CardKind.NUMBER].scores
    assert labels[CardKind.ADDITION].scores
    assert not labels[CardKind.MULTIPLIER].scores
    assert not labels[CardKind.FREEZE].scores
    assert labels[CardKind.FLIP_THREE].label == "FLIP THREE"
    assert labels[CardKind.SECOND_CHANCE].label == "SECOND CHANCE"

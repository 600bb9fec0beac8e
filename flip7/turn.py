"""Single-turn state machine: draws, busts, special cards and finalization."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from .cards import Card, CardKind
from .deck import DeckService
from .rules import (
    FLIP_THREE_DRAWS,
    HAND_LIMIT,
    compute_round_score,
    has_second_chance,
    is_bust,
    number_card_count,
    resolve_second_chance,
)
from .state import DiscardPile, EventKind, TurnEvent, TurnState, TurnStatus

__all__ = ["TurnNotFinished", "DrawResult", "TurnOutcome", "TurnEngine"]

logger = logging.getLogger(__name__)


class TurnNotFinished(RuntimeError):
    """Raised when finalization is attempted on a turn that is still active."""


@dataclass(frozen=True, slots=True)
class DrawResult:
    """Outcome of one draw request or one scheduled Flip Three draw."""

    accepted: bool
    card: Card | None = None
    events: tuple[TurnEvent, ...] = ()
    status: TurnStatus = TurnStatus.ACTIVE

    def has_event(self, kind: EventKind) -> bool:
        return any(event.kind is kind for event in self.events)


@dataclass(frozen=True, slots=True)
class TurnOutcome:
    """Summary of a finalized turn."""

    status: TurnStatus
    round_score: int
    awarded: int
    cards: tuple[Card, ...]


class TurnEngine:
    """Drives the active player's turn against a deck and a discard pile.

    Flip Three draws are kept as an explicit worklist (``pending_flip_three``)
    rather than chained calls. While the worklist is non-empty only
    :meth:`step_flip_three` may draw; manual draws and end-turn requests are
    rejected until it drains or a terminal status truncates it.
    """

    def __init__(self, deck: DeckService, discard: DiscardPile) -> None:
        self._deck = deck
        self._discard = discard
        self._state = TurnState()

    @property
    def hand(self) -> tuple[Card, ...]:
        return tuple(self._state.hand)

    @property
    def round_score(self) -> int:
        return self._state.round_score

    @property
    def status(self) -> TurnStatus:
        return self._state.status

    @property
    def pending_flip_three(self) -> int:
        return self._state.pending_flip_three

    @property
    def flip_three_in_progress(self) -> bool:
        return self._state.pending_flip_three > 0

    def _cards_available(self) -> bool:
        return self._deck.remaining_count() > 0 or bool(self._discard)

    def can_draw(self) -> bool:
        """Return ``True`` when a manual draw request would be honoured."""

        state = self._state
        return (
            state.active
            and state.pending_flip_three == 0
            and number_card_count(state.hand) < HAND_LIMIT
            and self._cards_available()
        )

    def can_end_turn(self) -> bool:
        state = self._state
        return state.active and bool(state.hand) and state.pending_flip_three == 0

    def request_draw(self) -> DrawResult:
        """Draw one card for the active player, or reject without side effects."""

        if not self.can_draw():
            logger.debug("draw rejected in status %s", self._state.status.value)
            return DrawResult(accepted=False, status=self._state.status)
        return self._draw()

    def step_flip_three(self) -> DrawResult | None:
        """Perform the next scheduled Flip Three draw; ``None`` when none remain."""

        state = self._state
        if state.pending_flip_three == 0:
            return None
        if not state.active or number_card_count(state.hand) >= HAND_LIMIT:
            state.pending_flip_three = 0
            return None
        state.pending_flip_three -= 1
        return self._draw()

    def iter_flip_three(self) -> Iterator[DrawResult]:
        """Yield one result per scheduled draw until the worklist is empty."""

        while True:
            result = self.step_flip_three()
            if result is None:
                return
            yield result

    def resolve_flip_three(self) -> list[DrawResult]:
        return list(self.iter_flip_three())

    def end_turn(self) -> bool:
        """End the turn by choice, keeping the current round score."""

        if not self.can_end_turn():
            return False
        self._state.status = TurnStatus.MANUALLY_ENDED
        logger.debug("turn ended manually with %d point(s)", self._state.round_score)
        return True

    def finalize(self) -> TurnOutcome:
        """Move the hand to the discard pile and reset for the next player."""

        state = self._state
        if not state.status.is_terminal:
            raise TurnNotFinished("cannot finalize an active turn")
        awarded = 0 if state.busted else state.round_score
        cards = tuple(state.hand)
        self._discard.extend(cards)
        outcome = TurnOutcome(
            status=state.status,
            round_score=state.round_score,
            awarded=awarded,
            cards=cards,
        )
        state.reset()
        return outcome

    def reset(self) -> None:
        """Drop the current turn entirely; used when the deck is rebuilt."""

        self._state.reset()

    def _truncate(self, status: TurnStatus) -> None:
        self._state.status = status
        self._state.pending_flip_three = 0

    def _draw(self) -> DrawResult:
        state = self._state
        events: list[TurnEvent] = []

        card = self._deck.draw()
        if card is None and self._discard:
            self._deck.load_and_shuffle(self._discard.take_all())
            events.append(TurnEvent(EventKind.DECK_EMPTY))
            logger.info("draw pile empty, reshuffled %d card(s)", self._deck.remaining_count())
            card = self._deck.draw()
        if card is None:
            state.pending_flip_three = 0
            logger.warning("no cards left in the draw or discard pile")
            return DrawResult(accepted=False, events=tuple(events), status=state.status)

        logger.debug("drew %s (id %d)", card.label, card.id)

        if is_bust(state.hand, card):
            if has_second_chance(state.hand):
                result = resolve_second_chance([*state.hand, card], card.id)
                state.hand = list(result.remaining_hand)
                self._discard.extend(result.removed_cards)
                events.append(TurnEvent(EventKind.SECOND_CHANCE, card))
                logger.debug("second chance consumed against %s", card.label)
            else:
                state.hand.append(card)
                state.round_score = 0
                self._truncate(TurnStatus.BUSTED)
                events.append(TurnEvent(EventKind.BUST, card))
                logger.debug("bust on duplicate %s", card.label)
            return DrawResult(accepted=True, card=card, events=tuple(events), status=state.status)

        state.hand.append(card)
        state.round_score = compute_round_score(state.hand)

        if card.kind is CardKind.FREEZE:
            self._truncate(TurnStatus.FROZEN)
            events.append(TurnEvent(EventKind.FREEZE, card))
        elif card.kind is CardKind.FLIP_THREE:
            state.pending_flip_three += FLIP_THREE_DRAWS
            events.append(TurnEvent(EventKind.FLIP_THREE, card))
        elif number_card_count(state.hand) >= HAND_LIMIT:
            self._truncate(TurnStatus.HAND_LIMIT_REACHED)
            events.append(TurnEvent(EventKind.BONUS, card))

        return DrawResult(accepted=True, card=card, events=tuple(events), status=state.status)

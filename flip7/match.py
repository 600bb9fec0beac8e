"""Multi-player match coordination: roster, score accrual, rotation and winner."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from .cards import DECK_SIZE, Card
from .deck import DeckService
from .scoreboard import MatchHistory, TurnRecord, leaderboard
from .state import (
    DiscardPile,
    MatchConfig,
    MatchPhase,
    MatchSnapshot,
    Player,
    PlayerView,
    TurnEvent,
    TurnStatus,
    default_player_name,
)
from .turn import DrawResult, TurnEngine

__all__ = ["RosterError", "CardConservationError", "MatchCoordinator"]

logger = logging.getLogger(__name__)


class RosterError(ValueError):
    """Raised when a roster change or match start would break the player bounds."""


class CardConservationError(RuntimeError):
    """Raised when draw pile, discard pile and hand no longer hold the full deck."""


class MatchCoordinator:
    """Owns the roster and discard pile and delegates the active turn.

    Host-facing calls never leave the match in a partially updated state:
    illegal draw and end-turn requests are rejected without side effects, and
    roster violations raise :class:`RosterError` before anything changes.
    """

    def __init__(
        self,
        names: Sequence[str] | None = None,
        *,
        config: MatchConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config if config is not None else MatchConfig()
        if names is None:
            names = [default_player_name(idx) for idx in range(self.config.min_players)]
        self._players = [
            Player(name=name.strip() or default_player_name(idx)) for idx, name in enumerate(names)
        ]
        self._deck = DeckService(rng)
        self._discard = DiscardPile()
        self._turn = TurnEngine(self._deck, self._discard)
        self._phase = MatchPhase.SETUP
        self._active_index = 0
        self._winner_index: int | None = None
        self._turn_number = 0
        self._events: tuple[TurnEvent, ...] = ()
        self.history: MatchHistory | None = None

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players)

    @property
    def phase(self) -> MatchPhase:
        return self._phase

    @property
    def turn(self) -> TurnEngine:
        return self._turn

    @property
    def deck(self) -> DeckService:
        return self._deck

    @property
    def discard_pile(self) -> tuple[Card, ...]:
        return self._discard.cards

    @property
    def active_player_index(self) -> int:
        return self._active_index

    @property
    def active_player(self) -> Player:
        return self._players[self._active_index]

    @property
    def winner(self) -> Player | None:
        if self._winner_index is None:
            return None
        return self._players[self._winner_index]

    @property
    def events(self) -> tuple[TurnEvent, ...]:
        """Events produced by the most recent draw or end-turn request."""

        return self._events

    # Roster -----------------------------------------------------------------

    def _ensure_roster_editable(self) -> None:
        if self._phase is not MatchPhase.SETUP:
            raise RosterError("cannot change the roster outside setup; return to start first")

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._players):
            raise RosterError(f"player index {index} out of range")

    def add_player(self, name: str = "") -> Player:
        """Seat a new player; a blank name becomes ``"Player N"``."""

        self._ensure_roster_editable()
        if len(self._players) >= self.config.max_players:
            raise RosterError(f"maximum {self.config.max_players} players reached")
        player = Player(name=name.strip() or default_player_name(len(self._players)))
        self._players.append(player)
        return player

    def remove_player(self, index: int) -> Player:
        self._ensure_roster_editable()
        self._check_index(index)
        if len(self._players) <= self.config.min_players:
            raise RosterError(f"minimum {self.config.min_players} players required")
        return self._players.pop(index)

    def update_player_name(self, index: int, name: str) -> None:
        self._check_index(index)
        self._players[index].name = name.strip() or default_player_name(index)

    # Lifecycle --------------------------------------------------------------

    def _reset_table(self) -> None:
        for player in self._players:
            player.total_score = 0
        self._deck.reset()
        self._discard.clear()
        self._turn.reset()
        self._active_index = 0
        self._winner_index = None
        self._turn_number = 0
        self._events = ()

    def start_match(self) -> None:
        """Zero all scores, rebuild the deck and hand the first turn to seat 0."""

        size = len(self._players)
        if not self.config.roster_size_ok(size):
            raise RosterError(
                f"a match needs {self.config.min_players}-{self.config.max_players} players, got {size}"
            )
        self._reset_table()
        self.history = MatchHistory(num_players=size)
        self._phase = MatchPhase.IN_PROGRESS
        logger.info("match started with %d players", size)
        self._check_conservation()

    def return_to_start(self) -> None:
        """Abandon the match, keeping roster membership but not scores."""

        self._reset_table()
        self.history = None
        self._phase = MatchPhase.SETUP
        self._check_conservation()

    # Turn flow --------------------------------------------------------------

    @property
    def in_progress(self) -> bool:
        return self._phase is MatchPhase.IN_PROGRESS

    def can_draw(self) -> bool:
        return self.in_progress and self._turn.can_draw()

    def can_end_turn(self) -> bool:
        if not self.in_progress or self._turn.flip_three_in_progress:
            return False
        return self._turn.status.is_terminal or self._turn.can_end_turn()

    def request_draw(self, *, resolve_flip_three: bool = True) -> list[DrawResult]:
        """Draw for the active player.

        The first result is the requested draw. With ``resolve_flip_three``
        any Flip Three sequence it starts is drawn eagerly and its results
        follow; otherwise the host advances it through :meth:`step_flip_three`.
        """

        if not self.in_progress:
            return [DrawResult(accepted=False, status=self._turn.status)]
        results = [self._turn.request_draw()]
        if resolve_flip_three and results[0].accepted:
            results.extend(self._turn.iter_flip_three())
        self._events = tuple(event for result in results for event in result.events)
        self._check_conservation()
        return results

    def step_flip_three(self) -> DrawResult | None:
        if not self.in_progress:
            return None
        result = self._turn.step_flip_three()
        if result is not None:
            self._events = result.events
            self._check_conservation()
        return result

    def request_end_turn(self) -> TurnRecord | None:
        """End or acknowledge the active turn and pass play to the next seat."""

        if not self.can_end_turn():
            return None
        if self._turn.status is TurnStatus.ACTIVE:
            self._turn.end_turn()
        return self.finalize_active_turn()

    def finalize_active_turn(self) -> TurnRecord | None:
        """Commit a finished turn's score, rotate seats and check for a winner."""

        if not self.in_progress or not self._turn.status.is_terminal:
            return None
        outcome = self._turn.finalize()
        player = self._players[self._active_index]
        player.total_score += outcome.awarded
        self._turn_number += 1
        record = TurnRecord(
            turn_number=self._turn_number,
            player_index=self._active_index,
            status=outcome.status,
            awarded=outcome.awarded,
            card_count=len(outcome.cards),
        )
        if self.history is not None:
            self.history.record(record)
        logger.info(
            "%s scored %d (%s), total %d",
            player.name,
            outcome.awarded,
            outcome.status.value,
            player.total_score,
        )
        self._active_index = (self._active_index + 1) % len(self._players)
        self._events = ()
        self._check_winner()
        self._check_conservation()
        return record

    def _check_winner(self) -> None:
        if not any(player.total_score >= self.config.winning_score for player in self._players):
            return
        # max() keeps the first of equal keys, so ties go to the earliest seat.
        self._winner_index = max(
            range(len(self._players)), key=lambda idx: self._players[idx].total_score
        )
        self._phase = MatchPhase.FINISHED
        winner = self._players[self._winner_index]
        logger.info("%s wins with %d points", winner.name, winner.total_score)

    def _check_conservation(self) -> None:
        total = self._deck.remaining_count() + len(self._discard) + len(self._turn.hand)
        if total != DECK_SIZE:
            raise CardConservationError(f"expected {DECK_SIZE} cards in play, found {total}")

    # Views ------------------------------------------------------------------

    def leaderboard(self) -> list[tuple[int, Player]]:
        return leaderboard(self._players)

    def snapshot(self) -> MatchSnapshot:
        """Return a read-only view of the whole match."""

        views = tuple(
            PlayerView(index=idx, name=player.name, total_score=player.total_score)
            for idx, player in enumerate(self._players)
        )
        winner = views[self._winner_index] if self._winner_index is not None else None
        return MatchSnapshot(
            phase=self._phase,
            players=views,
            active_player_index=self._active_index,
            hand=self._turn.hand,
            round_score=self._turn.round_score,
            turn_status=self._turn.status,
            pending_flip_three=self._turn.pending_flip_three,
            draw_pile_count=self._deck.remaining_count(),
            discard_pile=self._discard.cards,
            events=self._events,
            winner=winner,
        )

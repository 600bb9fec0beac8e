"""Helpers for tracking per-turn Flip 7 results across a match."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, TypeVar

from .state import Player, PlayerView, TurnStatus

__all__ = ["TurnRecord", "PlayerMatchTotal", "MatchHistory", "leaderboard"]

_Ranked = TypeVar("_Ranked", Player, PlayerView)


@dataclass(frozen=True, slots=True)
class TurnRecord:
    """Result captured after a single finalized turn."""

    turn_number: int
    player_index: int
    status: TurnStatus
    awarded: int
    card_count: int


@dataclass(frozen=True, slots=True)
class PlayerMatchTotal:
    """Aggregate totals accumulated across all recorded turns."""

    player_index: int
    turns: int
    busts: int
    bonuses: int
    points: int
    best_turn: int


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates turn records for a match."""

    num_players: int
    turns: list[TurnRecord] = field(default_factory=list)
    _turns: list[int] = field(init=False, repr=False)
    _busts: list[int] = field(init=False, repr=False)
    _bonuses: list[int] = field(init=False, repr=False)
    _points: list[int] = field(init=False, repr=False)
    _best: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.num_players <= 0:
            raise ValueError("num_players must be positive")
        self._turns = [0 for _ in range(self.num_players)]
        self._busts = [0 for _ in range(self.num_players)]
        self._bonuses = [0 for _ in range(self.num_players)]
        self._points = [0 for _ in range(self.num_players)]
        self._best = [0 for _ in range(self.num_players)]

    def record(self, record: TurnRecord) -> None:
        """Record ``record`` and update cumulative totals."""

        idx = record.player_index
        if idx < 0 or idx >= self.num_players:
            raise ValueError("player index out of range")
        if record.awarded < 0:
            raise ValueError("awarded points cannot be negative")
        self.turns.append(record)
        self._turns[idx] += 1
        self._points[idx] += record.awarded
        self._best[idx] = max(self._best[idx], record.awarded)
        if record.status is TurnStatus.BUSTED:
            self._busts[idx] += 1
        elif record.status is TurnStatus.HAND_LIMIT_REACHED:
            self._bonuses[idx] += 1

    def totals(self) -> list[PlayerMatchTotal]:
        """Return the cumulative totals for each player in seating order."""

        return [
            PlayerMatchTotal(
                player_index=idx,
                turns=self._turns[idx],
                busts=self._busts[idx],
                bonuses=self._bonuses[idx],
                points=self._points[idx],
                best_turn=self._best[idx],
            )
            for idx in range(self.num_players)
        ]


def leaderboard(players: Sequence[_Ranked]) -> list[tuple[int, _Ranked]]:
    """Return ``(roster index, player)`` pairs, highest total first.

    Accepts live players or snapshot views. Equal totals keep roster order.
    """

    return sorted(enumerate(players), key=lambda pair: -pair[1].total_score)

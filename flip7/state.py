"""Core game state data structures for Flip 7."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

from .cards import Card

__all__ = [
    "MatchConfig",
    "Player",
    "default_player_name",
    "TurnStatus",
    "TurnState",
    "DiscardPile",
    "EventKind",
    "TurnEvent",
    "MatchPhase",
    "PlayerView",
    "MatchSnapshot",
]


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Runtime configuration for a Flip 7 match."""

    min_players: int = 3
    max_players: int = 18
    winning_score: int = 200

    def __post_init__(self) -> None:
        if self.min_players <= 0:
            raise ValueError("min_players must be positive")
        if self.max_players < self.min_players:
            raise ValueError("max_players must not be below min_players")
        if self.winning_score <= 0:
            raise ValueError("winning_score must be positive")

    def roster_size_ok(self, size: int) -> bool:
        return self.min_players <= size <= self.max_players


def default_player_name(index: int) -> str:
    """Return the fallback name for the zero-based roster ``index``."""

    return f"Player {index + 1}"


@dataclass(slots=True)
class Player:
    """A seated player and their running match total."""

    name: str
    total_score: int = 0


class TurnStatus(str, Enum):
    """Phases of a single player's turn; everything but ``ACTIVE`` is terminal."""

    ACTIVE = "active"
    BUSTED = "busted"
    FROZEN = "frozen"
    HAND_LIMIT_REACHED = "hand_limit_reached"
    MANUALLY_ENDED = "manually_ended"

    @property
    def is_terminal(self) -> bool:
        return self is not TurnStatus.ACTIVE


@dataclass(slots=True)
class TurnState:
    """Transient state tracked for the active player's turn."""

    hand: List[Card] = field(default_factory=list)
    round_score: int = 0
    status: TurnStatus = TurnStatus.ACTIVE
    pending_flip_three: int = 0

    @property
    def active(self) -> bool:
        return self.status is TurnStatus.ACTIVE

    @property
    def busted(self) -> bool:
        return self.status is TurnStatus.BUSTED

    def reset(self) -> None:
        self.hand = []
        self.round_score = 0
        self.status = TurnStatus.ACTIVE
        self.pending_flip_three = 0


class DiscardPile:
    """Used cards awaiting a reshuffle, oldest first."""

    __slots__ = ("_cards",)

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: list[Card] = list(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __bool__(self) -> bool:
        return bool(self._cards)

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def extend(self, cards: Iterable[Card]) -> None:
        self._cards.extend(cards)

    def take_all(self) -> list[Card]:
        """Empty the pile and return what it held."""

        taken = self._cards
        self._cards = []
        return taken

    def clear(self) -> None:
        self._cards = []


class EventKind(str, Enum):
    """Notable transitions a host may want to announce."""

    BUST = "bust"
    FREEZE = "freeze"
    BONUS = "bonus"
    DECK_EMPTY = "deck_empty"
    SECOND_CHANCE = "second_chance"
    FLIP_THREE = "flip_three"


@dataclass(frozen=True, slots=True)
class TurnEvent:
    """Tagged event emitted by a draw; ``card`` is the card that caused it."""

    kind: EventKind
    card: Card | None = None


class MatchPhase(str, Enum):
    """Lifecycle of a match."""

    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True, slots=True)
class PlayerView:
    """Read-only copy of a roster entry."""

    index: int
    name: str
    total_score: int


@dataclass(frozen=True, slots=True)
class MatchSnapshot:
    """Everything a host needs to render the current match."""

    phase: MatchPhase
    players: tuple[PlayerView, ...]
    active_player_index: int
    hand: tuple[Card, ...]
    round_score: int
    turn_status: TurnStatus
    pending_flip_three: int
    draw_pile_count: int
    discard_pile: tuple[Card, ...]
    events: tuple[TurnEvent, ...]
    winner: PlayerView | None = None

    @property
    def active_player(self) -> PlayerView:
        return self.players[self.active_player_index]

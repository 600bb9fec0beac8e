from __future__ import annotations

import random

from rich.console import Console
from typer.testing import CliRunner

from flip7.cards import CardKind
from flip7.cli.main import _available_choices, app
from flip7.cli.render import event_message, format_card, render_snapshot
from flip7.match import MatchCoordinator
from flip7.state import EventKind, TurnEvent

runner = CliRunner()


def test_deck_command_lists_composition() -> None:
    result = runner.invoke(app, ["deck"])

    assert result.exit_code == 0
    assert "94" in result.output
    assert "FREEZE" in result.output


def test_play_rejects_short_roster() -> None:
    result = runner.invoke(app, ["play", "--player", "Ann", "--player", "Bo"])

    assert result.exit_code != 0


def test_play_can_be_abandoned() -> None:
    result = runner.invoke(app, ["play", "--seed", "3"], input="q\n")

    assert result.exit_code == 0
    assert "Match abandoned." in result.output


def test_available_choices_follow_turn_state() -> None:
    coordinator = MatchCoordinator(rng=random.Random(9))
    assert _available_choices(coordinator) == ["q"]

    coordinator.start_match()
    assert _available_choices(coordinator) == ["d", "q"]

    coordinator.request_draw()
    assert "e" in _available_choices(coordinator)


def test_event_messages_name_the_event() -> None:
    bust_card = next(
        card for card in MatchCoordinator(rng=random.Random(1)).deck.cards if card.kind is CardKind.NUMBER
    )

    assert "BUSTED!" in event_message(TurnEvent(EventKind.BUST, bust_card))
    assert format_card(bust_card) in event_message(TurnEvent(EventKind.BUST, bust_card))
    assert "Reshuffling" in event_message(TurnEvent(EventKind.DECK_EMPTY))


def test_leaderboard_rows_keep_tied_players_in_seat_order() -> None:
    coordinator = MatchCoordinator(["Ann", "Bo", "Cy"], rng=random.Random(5))
    coordinator.start_match()
    coordinator.players[1].total_score = 40
    coordinator.players[2].total_score = 40
    console = Console(record=True, width=80)

    console.print(render_snapshot(coordinator.snapshot()))
    text = console.export_text()

    assert text.index("Bo") < text.index("Cy") < text.index("Ann")

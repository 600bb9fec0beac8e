"""Typer entry-point wiring for the Flip 7 CLI."""

from __future__ import annotations

import logging
import random
from collections import Counter

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt
from rich.table import Table

from ..cards import DECK_SIZE, iter_deck_cards
from ..match import MatchCoordinator, RosterError
from ..state import MatchConfig, MatchPhase
from ..turn import DrawResult
from .render import event_message, format_card, render_snapshot, render_totals, winner_message

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

DRAW_KEY = "d"
END_KEY = "e"
QUIT_KEY = "q"


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _available_choices(coordinator: MatchCoordinator) -> list[str]:
    choices: list[str] = []
    if coordinator.can_draw():
        choices.append(DRAW_KEY)
    if coordinator.can_end_turn():
        choices.append(END_KEY)
    choices.append(QUIT_KEY)
    return choices


def _prompt_label(choices: list[str]) -> str:
    labels = {DRAW_KEY: "draw", END_KEY: "end turn", QUIT_KEY: "quit"}
    return " / ".join(f"[bold]{key}[/bold] {labels[key]}" for key in choices)


def _report_draws(results: list[DrawResult]) -> None:
    for result in results:
        if result.card is not None:
            console.print(f"Drew {format_card(result.card)}")
        for event in result.events:
            console.print(event_message(event))


@app.command()
def play(
    player: list[str] | None = typer.Option(
        None, "--player", "-p", help="Player name; repeat for each seat (defaults to three players)."
    ),
    seed: int | None = typer.Option(None, help="Random seed for reproducible shuffles (omit for randomness)."),
    target: int = typer.Option(200, min=1, help="Total score that ends the match."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine activity."),
) -> None:
    """Play a hot-seat match in the terminal."""

    _configure_logging(verbose)
    coordinator = MatchCoordinator(
        player or None,
        config=MatchConfig(winning_score=target),
        rng=random.Random(seed),
    )
    try:
        coordinator.start_match()
    except RosterError as exc:
        raise typer.BadParameter(str(exc), param_hint="--player") from exc

    while coordinator.phase is MatchPhase.IN_PROGRESS:
        console.print(render_snapshot(coordinator.snapshot()))
        choices = _available_choices(coordinator)
        choice = Prompt.ask(_prompt_label(choices), choices=choices, console=console)
        if choice == QUIT_KEY:
            console.print("[yellow]Match abandoned.[/yellow]")
            return
        if choice == DRAW_KEY:
            _report_draws(coordinator.request_draw())
        elif choice == END_KEY:
            record = coordinator.request_end_turn()
            if record is not None:
                name = coordinator.players[record.player_index].name
                console.print(f"{name} banks [bold]{record.awarded}[/bold] point(s).")
                console.print(f"[cyan]{coordinator.active_player.name} is now playing[/cyan]")

    snapshot = coordinator.snapshot()
    if snapshot.winner is not None:
        console.print(winner_message(snapshot.winner))
    if coordinator.history is not None:
        console.print(render_totals(snapshot, coordinator.history.totals()))


@app.command("deck")
def deck_cli() -> None:
    """Print the composition of a fresh deck."""

    counts = Counter((card.kind, card.label) for card in iter_deck_cards())
    table = Table(title=f"Flip 7 Deck ({DECK_SIZE} cards)", box=box.SIMPLE_HEAVY)
    table.add_column("Kind", justify="left")
    table.add_column("Card", justify="center")
    table.add_column("Copies", justify="right")
    for (kind, label), copies in counts.items():
        table.add_row(kind.value, label, str(copies))
    console.print(table)


def main() -> None:
    """Entry-point for ``python -m flip7.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()

"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, CardKind
from ..scoreboard import PlayerMatchTotal, leaderboard
from ..state import EventKind, MatchSnapshot, PlayerView, TurnEvent

_KIND_STYLES = {
    CardKind.NUMBER: "bold white",
    CardKind.ADDITION: "green",
    CardKind.MULTIPLIER: "magenta",
    CardKind.FREEZE: "blue",
    CardKind.FLIP_THREE: "yellow",
    CardKind.SECOND_CHANCE: "red",
}

_EVENT_MESSAGES = {
    EventKind.BUST: "[bold red]BUSTED![/bold red] You drew a duplicate card",
    EventKind.FREEZE: "[bold blue]FROZEN![/bold blue] Better luck next time.",
    EventKind.BONUS: "[bold green]15 POINT BONUS![/bold green]",
    EventKind.DECK_EMPTY: "[bold yellow]DECK EMPTY[/bold yellow] Reshuffling...",
    EventKind.SECOND_CHANCE: "[bold magenta]SECOND CHANCE![/bold magenta] Bust prevented.",
    EventKind.FLIP_THREE: "[bold yellow]FLIP THREE ACTIVATED![/bold yellow] Auto-drawing cards...",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    style = _KIND_STYLES.get(card.kind, "white")
    return f"[{style}]{card.label}[/{style}]"


def format_hand(cards: Sequence[Card]) -> str:
    if not cards:
        return "[dim]No cards drawn yet[/dim]"
    return " ".join(format_card(card) for card in cards)


def event_message(event: TurnEvent) -> str:
    message = _EVENT_MESSAGES[event.kind]
    if event.card is not None and event.kind is EventKind.BUST:
        message = f"{message} ({format_card(event.card)})"
    return message


def winner_message(winner: PlayerView) -> str:
    return f"[bold green]{winner.name} wins with {winner.total_score} points![/bold green]"


def _roster_table(snapshot: MatchSnapshot) -> Table:
    table = Table(title="Leaderboard", box=box.ROUNDED, expand=True)
    table.add_column("Player", justify="left", style="bold")
    table.add_column("Score", justify="right")

    for _, player in leaderboard(snapshot.players):
        name = player.name
        if player.index == snapshot.active_player_index:
            name = f"[bold yellow]> {name}[/bold yellow]"
        table.add_row(name, str(player.total_score))
    return table


def _turn_panel(snapshot: MatchSnapshot) -> Panel:
    grid = Table.grid(expand=True)
    grid.add_column(justify="left")
    grid.add_row(f"[cyan]Playing[/cyan]: {snapshot.active_player.name}")
    grid.add_row(f"[cyan]Your Cards[/cyan]: {format_hand(snapshot.hand)}")
    grid.add_row(f"[cyan]Round Score[/cyan]: {snapshot.round_score}")
    grid.add_row(f"[cyan]Status[/cyan]: {snapshot.turn_status.value.replace('_', ' ')}")
    grid.add_row(f"[cyan]Deck[/cyan]: {snapshot.draw_pile_count} card(s)")
    grid.add_row(f"[cyan]Discard[/cyan]: {len(snapshot.discard_pile)} card(s)")
    if snapshot.pending_flip_three:
        grid.add_row(f"[cyan]Flip Three[/cyan]: {snapshot.pending_flip_three} draw(s) left")
    return Panel(grid, title="Turn", box=box.SQUARE, border_style="blue")


def render_snapshot(snapshot: MatchSnapshot, *, title: str = "FLIP 7") -> RenderableType:
    """Return a Rich panel describing the current match state."""

    body = Group(_roster_table(snapshot), _turn_panel(snapshot))
    return Panel(body, title=title, padding=(0, 1), border_style="cyan")


def render_totals(snapshot: MatchSnapshot, totals: Sequence[PlayerMatchTotal]) -> Table:
    """Return the end-of-match summary table."""

    table = Table(title="Match Summary", box=box.DOUBLE_EDGE)
    table.add_column("Player", justify="center")
    table.add_column("Turns", justify="right")
    table.add_column("Busts", justify="right")
    table.add_column("Bonuses", justify="right")
    table.add_column("Best", justify="right")
    table.add_column("Total", justify="right")

    winner_index = snapshot.winner.index if snapshot.winner is not None else None
    for total in totals:
        player = snapshot.players[total.player_index]
        label = player.name
        score = str(player.total_score)
        if total.player_index == winner_index:
            label = f"[bold green]{label}[/bold green]"
            score = f"[bold green]{score}[/bold green]"
        table.add_row(
            label,
            str(total.turns),
            str(total.busts),
            str(total.bonuses),
            str(total.best_turn),
            score,
        )
    return table

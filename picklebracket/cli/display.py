"""
Rich-based CLI consumer for SessionEvent objects.

This is the only place terminal output for tournament state happens. It
translates events from TournamentSession into Rich tables and panels; the
session and engine need no changes to drive a different front end.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from picklebracket.engine.base import Match, Team
from picklebracket.events import (
    FinalsEvent,
    MatchScoredEvent,
    PlacementsEvent,
    ScheduleGeneratedEvent,
    SemifinalsEvent,
    SessionEvent,
    StandingsEvent,
)

console = Console(legacy_windows=False)

_MATCH_LABELS = {"SF1": "Semifinal 1", "SF2": "Semifinal 2", "FINAL": "Final", "THIRD": "Third place"}


def display_event(event: SessionEvent) -> None:
    """Dispatch a SessionEvent to the appropriate display function."""
    match event:
        case ScheduleGeneratedEvent():
            _schedule_generated(event)
        case MatchScoredEvent():
            _match_scored(event)
        case StandingsEvent():
            _standings(event)
        case SemifinalsEvent():
            _playoff_round("Semifinals", event.semis, event.team_names)
        case FinalsEvent():
            _playoff_round("Finals", event.finals, event.team_names)
        case PlacementsEvent():
            _placements(event)


def display_lineup(tournament_name: str, teams: list[Team], games_per_team: int) -> None:
    table = Table(
        title="Tournament Line-up",
        show_header=True,
        header_style="bold",
        border_style="green",
        show_lines=False,
    )
    table.add_column("Seed", style="dim", width=5, justify="right")
    table.add_column("Team", min_width=20)
    table.add_column("ID", style="dim")

    for seed, team in enumerate(teams, 1):
        table.add_row(str(seed), team.name, team.id)

    console.print()
    console.print(
        Panel(
            f"[bold]{tournament_name}[/]\n\n"
            f"[dim]Teams: {len(teams)}  •  Games per team: {games_per_team}[/]",
            title="[bold green] Pickle Bracket [/]",
            border_style="green",
            expand=False,
        )
    )
    console.print(table)
    console.print()


def display_matches(title: str, matches: list[Match], team_names: dict[str, str]) -> None:
    table = Table(title=title, show_header=True, header_style="bold", border_style="dim", show_lines=False)
    table.add_column("Match", style="dim", width=8)
    table.add_column("Team A", min_width=20)
    table.add_column("", width=7, justify="center")
    table.add_column("Team B", min_width=20)

    for m in matches:
        a = team_names.get(m.team_a, m.team_a)
        b = team_names.get(m.team_b, m.team_b)
        if m.winner is None:
            table.add_row(m.id, a, "vs", b)
        else:
            if m.winner == m.team_a:
                a = f"[bold green]{a}[/]"
            else:
                b = f"[bold green]{b}[/]"
            table.add_row(m.id, a, _score_text(m), b)

    console.print()
    console.print(table)


# --------------------------------------------------------------------------- #
# Display functions                                                            #
# --------------------------------------------------------------------------- #

def _schedule_generated(event: ScheduleGeneratedEvent) -> None:
    console.print()
    console.rule(
        f"[bold]Round robin — {len(event.matches)} matches, "
        f"{event.games_per_team} per team[/]",
        style="bright_blue",
    )
    if event.cleared_playoffs:
        console.print("  [yellow]Existing playoff matches were cleared.[/]")
    display_matches("Schedule", event.matches, event.team_names)
    console.print()


def _match_scored(event: MatchScoredEvent) -> None:
    m = event.match
    label = _MATCH_LABELS.get(m.id, m.id)
    if event.forfeit:
        summary = f"[green]✓[/] {label}: [bold]{event.winner_name}[/] wins by forfeit"
    else:
        summary = (
            f"[green]✓[/] {label}: {event.team_a_name} [bold]{m.score_a}[/] – "
            f"[bold]{m.score_b}[/] {event.team_b_name}  →  [bold]{event.winner_name}[/]"
        )
    if event.rescored:
        summary += "  [yellow](result replaced)[/]"
    console.print(f"\n  {summary}")


def _standings(event: StandingsEvent) -> None:
    title = "Standings" if event.remaining == 0 else f"Standings ({event.remaining} matches to play)"
    table = Table(title=title, show_header=True, header_style="bold", border_style="dim", show_lines=False)
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Team", min_width=20)
    table.add_column("GP", justify="center", width=4)
    table.add_column("W", justify="center", width=4)
    table.add_column("L", justify="center", width=4)
    table.add_column("Diff", justify="right", width=6)

    for i, row in enumerate(event.rows, 1):
        # Top four make the playoffs
        style = "bold" if i <= 4 else ""
        table.add_row(
            str(i),
            event.team_names.get(row.team_id, row.team_id),
            str(row.games_played),
            str(row.wins),
            str(row.losses),
            f"{row.point_diff:+d}",
            style=style,
        )

    console.print()
    console.print(table)
    console.print()


def _playoff_round(title: str, matches: list[Match], team_names: dict[str, str]) -> None:
    console.print()
    console.rule(f"[bold]{title}[/]", style="bright_blue")
    table = Table(show_header=True, header_style="bold", border_style="dim", show_lines=False)
    table.add_column("Match", style="dim", width=12)
    table.add_column("Team A", min_width=20)
    table.add_column("", width=3, justify="center")
    table.add_column("Team B", min_width=20)
    for m in matches:
        table.add_row(
            _MATCH_LABELS.get(m.id, m.id),
            f"[bold]{team_names.get(m.team_a, m.team_a)}[/]",
            "vs",
            f"[bold]{team_names.get(m.team_b, m.team_b)}[/]",
        )
    console.print(table)
    console.print()


def _placements(event: PlacementsEvent) -> None:
    names = event.team_names
    p = event.placements
    console.print()
    console.print(
        Panel(
            f"[bold yellow]★  {names.get(p.champion, p.champion)}[/]\n\n"
            f"[dim]{event.timestamp.strftime('%Y-%m-%d %H:%M:%S')}[/]",
            title="[bold green] Tournament Champion [/]",
            border_style="yellow",
            expand=False,
        )
    )

    table = Table(title="Final Placements", show_header=True, header_style="bold", border_style="dim")
    table.add_column("Place", style="dim", width=6, justify="right")
    table.add_column("Team", min_width=20)
    for place, team_id in enumerate(p.as_list(), 1):
        table.add_row(str(place), names.get(team_id, team_id), style="bold yellow" if place == 1 else "")

    console.print()
    console.print(table)
    console.print()


def _score_text(m: Match) -> str:
    if m.score_a is None or m.score_b is None:
        return "[dim]FF[/]"
    return f"{m.score_a}–{m.score_b}"

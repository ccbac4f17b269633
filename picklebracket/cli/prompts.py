"""
Interactive prompts for the tournament CLI.

Only input lives here; rendering is in cli/display.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from picklebracket.engine.base import Match

console = Console(legacy_windows=False)

MenuAction = Literal[
    "schedule",
    "score",
    "forfeit",
    "standings",
    "semifinals",
    "finals",
    "placements",
    "regenerate",
    "quit",
]

_MENU: list[tuple[MenuAction, str]] = [
    ("schedule", "Show matches"),
    ("score", "Record a score"),
    ("forfeit", "Record a forfeit (round robin)"),
    ("standings", "Show standings"),
    ("semifinals", "Generate semifinals"),
    ("finals", "Generate final + third place"),
    ("placements", "Show placements"),
    ("regenerate", "Regenerate round robin"),
    ("quit", "Quit"),
]


@dataclass
class ScoreEntry:
    match_id: str
    score_a: int
    score_b: int


def select_action() -> MenuAction:
    console.print("[bold]What next?[/]")
    for i, (_, label) in enumerate(_MENU, 1):
        console.print(f"  {i}. {label}")
    choices = [str(i) for i in range(1, len(_MENU) + 1)]
    choice = IntPrompt.ask("\nSelect", choices=choices, show_choices=False, default=1)
    return _MENU[choice - 1][0]


def ask_score(match_ids: list[str]) -> ScoreEntry | None:
    """Ask for a match code and both scores. Empty match code cancels."""
    if not match_ids:
        console.print("  [red]No matches yet.[/]")
        return None
    raw = Prompt.ask("  Match (e.g. RR-3, SF1, FINAL; Enter to cancel)", default="", show_default=False)
    if not raw.strip():
        return None
    score_a = IntPrompt.ask("  Team A score")
    score_b = IntPrompt.ask("  Team B score")
    return ScoreEntry(match_id=raw, score_a=score_a, score_b=score_b)


def ask_forfeit_winner(match: Match, team_names: dict[str, str]) -> str:
    """Return the team id awarded the forfeit."""
    console.print(f"  1. {team_names.get(match.team_a, match.team_a)}")
    console.print(f"  2. {team_names.get(match.team_b, match.team_b)}")
    choice = IntPrompt.ask("  Who wins by forfeit?", choices=["1", "2"])
    return match.team_a if choice == 1 else match.team_b


def ask_match_code() -> str | None:
    raw = Prompt.ask("  Match (Enter to cancel)", default="", show_default=False)
    return raw.strip() or None


def ask_games_per_team(current: int, team_count: int) -> int:
    choices = [str(i) for i in range(1, team_count)]
    return IntPrompt.ask(
        f"  Games per team (1–{team_count - 1})",
        choices=choices,
        show_choices=False,
        default=min(current, team_count - 1),
    )

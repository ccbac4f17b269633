"""
Pickle Bracket — tournament entry point.

Usage:
    uv run python tournament_main.py [config.yaml]

Wires together:
    config → logging → tournament session → menu loop → CLI display
"""

from __future__ import annotations

import logging
import random
import sys
from pathlib import Path

from picklebracket.cli.display import console, display_event, display_lineup, display_matches
from picklebracket.cli.prompts import (
    ask_forfeit_winner,
    ask_games_per_team,
    ask_match_code,
    ask_score,
    select_action,
)
from picklebracket.config import Config, load_config
from picklebracket.engine import TournamentError
from picklebracket.logging_setup import configure_logging
from picklebracket.session import TournamentSession

logger = logging.getLogger("picklebracket")


def _main(config_path: Path) -> None:
    try:
        config = load_config(config_path)
    except FileNotFoundError as exc:
        console.print(f"[red]Error:[/] {exc}")
        sys.exit(1)
    except ValueError as exc:
        console.print(f"[red]Config error:[/] {exc}")
        sys.exit(1)

    # Log to file only; the console belongs to the Rich UI
    configure_logging(config.logging.level, config.log_file_path, console=False)

    if len(config.teams) < 2:
        console.print("[red]Config error:[/] list at least 2 teams under 'teams'.")
        sys.exit(1)

    session = _build_session(config)
    display_lineup(config.tournament.name, session.teams, session.games_per_team)

    try:
        display_event(session.generate_schedule())
    except TournamentError as exc:
        console.print(f"[red]Cannot schedule:[/] {exc}")
        _run_action(session, "regenerate")

    while True:
        action = select_action()
        if action == "quit":
            break
        _run_action(session, action)


def _build_session(config: Config) -> TournamentSession:
    seed = config.tournament.seed
    return TournamentSession(
        config.teams,
        games_per_team=config.tournament.games_per_team,
        scoring=config.scoring,
        max_attempts=config.tournament.max_attempts,
        rng=random.Random(seed) if seed is not None else None,
    )


def _run_action(session: TournamentSession, action: str) -> None:
    """Run one menu action; engine and policy errors are shown, not raised."""
    try:
        match action:
            case "schedule":
                names = session.team_names
                display_matches("Round robin", session.rr_matches, names)
                if session.semis:
                    display_matches("Semifinals", session.semis, names)
                if session.finals:
                    display_matches("Finals", session.finals, names)
                console.print()
            case "score":
                entry = ask_score([m.id for m in session.all_matches])
                if entry is not None:
                    display_event(session.record_score(entry.match_id, entry.score_a, entry.score_b))
            case "forfeit":
                code = ask_match_code()
                if code is not None:
                    target = session.match(code)
                    winner = ask_forfeit_winner(target, session.team_names)
                    display_event(session.record_forfeit(target.id, winner))
            case "standings":
                display_event(session.standings())
            case "semifinals":
                display_event(session.generate_semifinals())
            case "finals":
                display_event(session.generate_finals())
            case "placements":
                display_event(session.placements())
            case "regenerate":
                games = ask_games_per_team(session.games_per_team, len(session.teams))
                display_event(session.generate_schedule(games))
    except TournamentError as exc:
        logger.info("Action %s rejected: %s", action, exc)
        console.print(f"  [red]✗[/] {exc}\n")


def main() -> None:
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.yaml")
    try:
        _main(config_path)
    except KeyboardInterrupt:
        console.print("\n[yellow]Bye.[/]")


if __name__ == "__main__":
    main()

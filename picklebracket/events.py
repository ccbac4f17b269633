"""
Session event dataclasses — the shared language between TournamentSession and
any consumer (CLI display, tests).

All events are frozen so they are safe to keep around after the session moves
on; dataclasses.asdict() turns them into JSON-compatible dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from picklebracket.engine.base import Match, Placements, StandingsRow


@dataclass(frozen=True)
class ScheduleGeneratedEvent:
    """Fired when a new round-robin schedule replaces the previous one."""

    games_per_team: int
    matches: list[Match]
    team_names: dict[str, str]
    cleared_playoffs: bool = False    # True if existing SF/FINAL/THIRD were dropped
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class MatchScoredEvent:
    """Fired after a score or forfeit is recorded against a match."""

    match: Match
    team_a_name: str
    team_b_name: str
    winner_name: str
    forfeit: bool = False
    rescored: bool = False            # the match already had a result


@dataclass(frozen=True)
class StandingsEvent:
    rows: list[StandingsRow]
    team_names: dict[str, str]
    remaining: int                    # RR matches still without a winner


@dataclass(frozen=True)
class SemifinalsEvent:
    semis: list[Match]
    team_names: dict[str, str]


@dataclass(frozen=True)
class FinalsEvent:
    finals: list[Match]
    team_names: dict[str, str]


@dataclass(frozen=True)
class PlacementsEvent:
    placements: Placements
    team_names: dict[str, str]
    timestamp: datetime = field(default_factory=datetime.now)


# Union type for type-safe pattern matching in consumers
SessionEvent = (
    ScheduleGeneratedEvent
    | MatchScoredEvent
    | StandingsEvent
    | SemifinalsEvent
    | FinalsEvent
    | PlacementsEvent
)

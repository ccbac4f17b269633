"""
Engine exception taxonomy.

Every failure the engine reports is an input-validation failure. None of them
are transient, so callers surface them as user-facing messages instead of
retrying.
"""

from __future__ import annotations


class TournamentError(Exception):
    """Base class for every error raised by the tournament engine."""


class InfeasibleParametersError(TournamentError, ValueError):
    """Too few teams, bad games-per-team, or a malformed team/match."""


class SchedulingExhaustedError(TournamentError):
    """Raised when the partial round-robin retry budget runs out."""

    def __init__(self, games_per_team: int, team_count: int, attempts: int) -> None:
        self.games_per_team = games_per_team
        self.team_count = team_count
        self.attempts = attempts
        super().__init__(
            f"Could not generate a schedule where each of {team_count} teams plays "
            f"{games_per_team} games after {attempts} attempts. "
            "Try reducing games per team or adding teams."
        )


class MatchNotFoundError(TournamentError, KeyError):
    """The referenced match id is not in the supplied collection."""

    def __init__(self, match_id: str) -> None:
        self.match_id = match_id
        super().__init__(match_id)

    def __str__(self) -> str:
        return f"Match not found: {self.match_id}"


class InvalidScoreError(TournamentError, ValueError):
    """Non-integer score, tied score, or a forfeit winner outside the match."""


class PreconditionError(TournamentError):
    """Standings too small for playoffs, or semifinals/finals not yet decided."""

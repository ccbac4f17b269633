"""
Tournament engine package.

A pure, synchronous computation library: every function takes the team and
match collections it works on and holds no state between calls.

Flow:
  1. generate_round_robin()  — unplayed RR matches
  2. score_match()           — once per match as scores come in
  3. compute_standings()     — any time
  4. generate_semifinals()   — once every RR match is decided
  5. generate_finals()       — once both semifinals are decided
  6. compute_placements()    — once FINAL and THIRD are decided
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable

from picklebracket.engine.base import (
    PHASES,
    Match,
    Phase,
    Placements,
    StandingsRow,
    Team,
    TeamId,
    canonical_id,
)
from picklebracket.engine.bracket import compute_placements, generate_finals, generate_semifinals
from picklebracket.engine.errors import (
    InfeasibleParametersError,
    InvalidScoreError,
    MatchNotFoundError,
    PreconditionError,
    SchedulingExhaustedError,
    TournamentError,
)
from picklebracket.engine.schedule import DEFAULT_MAX_ATTEMPTS, generate_round_robin
from picklebracket.engine.scoring import (
    find_match,
    record_forfeit,
    score_match,
    validate_score_policy,
)
from picklebracket.engine.standings import compute_standings

__all__ = [
    # Data model
    "PHASES",
    "Match",
    "Phase",
    "Placements",
    "StandingsRow",
    "Team",
    "TeamId",
    "canonical_id",
    # Errors
    "TournamentError",
    "InfeasibleParametersError",
    "SchedulingExhaustedError",
    "MatchNotFoundError",
    "InvalidScoreError",
    "PreconditionError",
    # Operations
    "DEFAULT_MAX_ATTEMPTS",
    "generate_round_robin",
    "compute_standings",
    "generate_semifinals",
    "generate_finals",
    "compute_placements",
    "find_match",
    "score_match",
    "record_forfeit",
    "validate_score_policy",
    # Convenience
    "TournamentSkeleton",
    "build_tournament",
]


@dataclass
class TournamentSkeleton:
    round_robin: list[Match]
    standings: list[StandingsRow]
    semifinals: list[Match]


def build_tournament(
    teams: Iterable[Team | TeamId],
    games_per_team: int = 4,
    *,
    rng: random.Random | None = None,
) -> TournamentSkeleton:
    """
    Schedule → standings → playoff skeleton in one call.

    Nothing is scored yet, so the standings are all zeros in seed order and
    the semifinals are seeded from that order.
    """
    teams = list(teams)
    round_robin = generate_round_robin(teams, games_per_team, rng=rng)
    team_ids = [t.id if isinstance(t, Team) else t for t in teams]
    standings = compute_standings(team_ids, round_robin)
    return TournamentSkeleton(
        round_robin=round_robin,
        standings=standings,
        semifinals=generate_semifinals(standings),
    )

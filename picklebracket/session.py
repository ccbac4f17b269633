"""
In-memory tournament session — the policy layer over the pure engine.

The engine deliberately leaves several rules to its caller: clearing old
matches before rescheduling, enforcing point thresholds before scoring,
recording forfeits, and refusing to seed playoffs until the round robin is
finished. TournamentSession owns the team and match collections for one
tournament and applies those rules, returning a SessionEvent for each
operation so any front end can render the result.

Not thread-safe: callers serialise access to a session.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Iterable

from picklebracket.config import ScoringConfig
from picklebracket.engine import (
    DEFAULT_MAX_ATTEMPTS,
    InvalidScoreError,
    Match,
    Placements,
    PreconditionError,
    StandingsRow,
    Team,
    TeamId,
    canonical_id,
    compute_placements,
    compute_standings,
    find_match,
    generate_finals,
    generate_round_robin,
    generate_semifinals,
    record_forfeit,
    score_match,
    validate_score_policy,
)
from picklebracket.events import (
    FinalsEvent,
    MatchScoredEvent,
    PlacementsEvent,
    ScheduleGeneratedEvent,
    SemifinalsEvent,
    StandingsEvent,
)

logger = logging.getLogger(__name__)


class TournamentSession:
    """One tournament's teams and matches, plus the rules around them."""

    def __init__(
        self,
        teams: Iterable[Team],
        *,
        games_per_team: int = 4,
        scoring: ScoringConfig | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: random.Random | None = None,
    ) -> None:
        self.teams: list[Team] = list(teams)
        self.games_per_team = games_per_team
        self.scoring = scoring or ScoringConfig()
        self.max_attempts = max_attempts
        self._rng = rng or random.Random()

        self.rr_matches: list[Match] = []
        self.semis: list[Match] = []
        self.finals: list[Match] = []

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    @property
    def team_names(self) -> dict[str, str]:
        return {t.id: t.name for t in self.teams}

    def team_name(self, team_id: TeamId | None) -> str:
        if team_id is None:
            return "—"
        key = canonical_id(team_id)
        return self.team_names.get(key, f"Team {key}")

    @property
    def all_matches(self) -> list[Match]:
        return [*self.rr_matches, *self.semis, *self.finals]

    def match(self, match_id: str) -> Match:
        return find_match(self.all_matches, _normalise_code(match_id))

    def missing_results(self) -> list[str]:
        """Codes of round-robin matches that still have no winner."""
        return [m.id for m in self.rr_matches if m.winner is None]

    @property
    def is_round_robin_complete(self) -> bool:
        return bool(self.rr_matches) and not self.missing_results()

    # ------------------------------------------------------------------ #
    # Operations                                                           #
    # ------------------------------------------------------------------ #

    def generate_schedule(self, games_per_team: int | None = None) -> ScheduleGeneratedEvent:
        """Replace every existing match with a fresh round-robin schedule."""
        target = self.games_per_team if games_per_team is None else games_per_team

        # Generate first so a failure leaves the current schedule in place
        matches = generate_round_robin(
            self.teams,
            target,
            max_attempts=self.max_attempts,
            rng=self._rng,
        )
        cleared_playoffs = bool(self.semis or self.finals)

        self.games_per_team = target
        self.rr_matches = matches
        self.semis = []
        self.finals = []
        logger.info(
            "Schedule generated: %d matches, %d games per team%s",
            len(matches), self.games_per_team,
            " (playoffs cleared)" if cleared_playoffs else "",
        )
        return ScheduleGeneratedEvent(
            games_per_team=self.games_per_team,
            matches=_snapshot(matches),
            team_names=self.team_names,
            cleared_playoffs=cleared_playoffs,
        )

    def record_score(self, match_id: str, score_a: int, score_b: int) -> MatchScoredEvent:
        """Apply the game-length policy, then record the score with the engine."""
        code = _normalise_code(match_id)
        match = find_match(self.all_matches, code)

        message = validate_score_policy(
            score_a, score_b,
            play_to=self.scoring.play_to_for(match.phase),
            win_by=self.scoring.win_by,
        )
        if message:
            logger.warning("Rejected score %r-%r for %s: %s", score_a, score_b, code, message)
            raise InvalidScoreError(message)

        rescored = match.is_decided
        score_match(self.all_matches, code, score_a, score_b)
        if rescored and match.phase == "SF" and self.finals:
            logger.warning("%s re-scored after finals were generated; finals left unchanged", code)
        elif rescored and match.phase == "RR" and self.semis:
            logger.warning("%s re-scored after semifinals were seeded; bracket left unchanged", code)
        logger.info("%s: %s %d - %d %s", code, match.team_a, score_a, score_b, match.team_b)
        return self._scored_event(match, forfeit=False, rescored=rescored)

    def record_forfeit(self, match_id: str, winner_id: TeamId) -> MatchScoredEvent:
        """Award a round-robin match by default. Playoff matches must be played."""
        code = _normalise_code(match_id)
        if any(m.id == code for m in self.semis + self.finals):
            raise PreconditionError(f"Forfeits are only recorded in the round robin, not {code}.")
        match = find_match(self.rr_matches, code)

        rescored = match.is_decided
        record_forfeit(self.rr_matches, code, winner_id)
        logger.info("%s: forfeit, winner %s", code, match.winner)
        return self._scored_event(match, forfeit=True, rescored=rescored)

    def standings(self) -> StandingsEvent:
        rows = self.standings_rows()
        return StandingsEvent(
            rows=rows,
            team_names=self.team_names,
            remaining=len(self.missing_results()),
        )

    def standings_rows(self) -> list[StandingsRow]:
        return compute_standings([t.id for t in self.teams], self.rr_matches)

    def generate_semifinals(self) -> SemifinalsEvent:
        """Seed SF1/SF2 from final standings. Clears any existing playoff matches."""
        if not self.rr_matches:
            raise PreconditionError("Generate the round-robin schedule first.")
        missing = self.missing_results()
        if missing:
            raise PreconditionError(
                f"Round robin isn't complete yet. Missing winners for: {', '.join(missing)}"
            )

        self.semis = generate_semifinals(self.standings_rows())
        self.finals = []
        logger.info("Semifinals generated")
        return SemifinalsEvent(semis=_snapshot(self.semis), team_names=self.team_names)

    def generate_finals(self) -> FinalsEvent:
        self.finals = generate_finals(self.semis)
        logger.info("Final and third-place match generated")
        return FinalsEvent(finals=_snapshot(self.finals), team_names=self.team_names)

    def placements(self) -> PlacementsEvent:
        placements: Placements = compute_placements(self.finals)
        logger.info("Champion: %s", placements.champion)
        return PlacementsEvent(placements=placements, team_names=self.team_names)

    def reset_playoffs(self) -> int:
        """Drop semifinal, final and third-place matches. Returns how many were removed."""
        removed = len(self.semis) + len(self.finals)
        self.semis = []
        self.finals = []
        logger.info("Playoffs reset (%d matches removed)", removed)
        return removed

    # ------------------------------------------------------------------ #
    # Internal helpers                                                     #
    # ------------------------------------------------------------------ #

    def _scored_event(self, match: Match, *, forfeit: bool, rescored: bool) -> MatchScoredEvent:
        return MatchScoredEvent(
            match=replace(match),
            team_a_name=self.team_name(match.team_a),
            team_b_name=self.team_name(match.team_b),
            winner_name=self.team_name(match.winner),
            forfeit=forfeit,
            rescored=rescored,
        )


def _snapshot(matches: list[Match]) -> list[Match]:
    return [replace(m) for m in matches]


def _normalise_code(match_id: str) -> str:
    """Accept "rr-3", " sf1 ", "rr3" or a bare "3" (the last two mean RR-3)."""
    code = str(match_id).strip().upper()
    if code.isdigit():
        return f"RR-{code}"
    if code.startswith("RR") and code[2:].isdigit():
        return f"RR-{code[2:]}"
    return code

"""
Recording match results.

score_match() is the engine's only scoring rule set: integer scores, no ties,
winner derived from the higher score. Point thresholds ("play to 11, win by
2") are tournament policy; validate_score_policy() implements them for the
calling layer, which must run it before score_match().

Forfeits never go through score_match(): record_forfeit() sets the winner and
leaves both scores empty.
"""

from __future__ import annotations

import logging
from typing import Iterable

from picklebracket.engine.base import Match, TeamId, canonical_id
from picklebracket.engine.errors import InvalidScoreError, MatchNotFoundError

logger = logging.getLogger(__name__)


def find_match(matches: Iterable[Match], match_id: str) -> Match:
    for m in matches:
        if m.id == match_id:
            return m
    raise MatchNotFoundError(match_id)


def score_match(matches: Iterable[Match], match_id: str, score_a: int, score_b: int) -> Match:
    """
    Overwrite a match's scores and derive its winner.

    Validation runs before any mutation, in this order:
      1. the match exists           (MatchNotFoundError)
      2. both scores are integers   (InvalidScoreError)
      3. the scores differ          (InvalidScoreError)
    """
    match = find_match(matches, match_id)
    if not _is_int(score_a) or not _is_int(score_b):
        raise InvalidScoreError("Scores must be integers.")
    if score_a == score_b:
        raise InvalidScoreError("Ties not supported for bracket logic.")

    match.score_a = score_a
    match.score_b = score_b
    match.winner = match.team_a if score_a > score_b else match.team_b

    logger.debug("%s scored %d-%d, winner %s", match.id, score_a, score_b, match.winner)
    return match


def record_forfeit(matches: Iterable[Match], match_id: str, winner_id: TeamId) -> Match:
    """Decide a match by default: winner set, both scores cleared."""
    match = find_match(matches, match_id)
    winner = canonical_id(winner_id)
    if winner not in (match.team_a, match.team_b):
        raise InvalidScoreError(f"Team {winner} is not playing in {match.id}.")

    match.score_a = None
    match.score_b = None
    match.winner = winner

    logger.debug("%s forfeited, winner %s", match.id, winner)
    return match


def validate_score_policy(
    score_a: object,
    score_b: object,
    *,
    play_to: int = 11,
    win_by: int = 2,
) -> str | None:
    """
    Check a score against the tournament's game-length rules.

    The winner must reach play_to and lead by at least win_by. Lopsided
    overtime results such as 13-10 are accepted as entered.

    Returns a user-facing error message, or None if the score is acceptable.
    """
    if not _is_int(score_a) or not _is_int(score_b):
        return "Scores must be integers."
    if score_a < 0 or score_b < 0:
        return "Scores cannot be negative."
    if score_a == score_b:
        return "Ties are not allowed."

    high, low = max(score_a, score_b), min(score_a, score_b)
    if high < play_to:
        return f"Winning score must be at least {play_to}."
    if high - low < win_by:
        return f"Must win by at least {win_by}."
    return None


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

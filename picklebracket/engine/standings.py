"""Round-robin standings."""

from __future__ import annotations

import logging
from typing import Iterable

from picklebracket.engine.base import Match, StandingsRow, TeamId, canonical_id

logger = logging.getLogger(__name__)


def compute_standings(team_ids: Iterable[TeamId], matches: Iterable[Match]) -> list[StandingsRow]:
    """
    Aggregate decided round-robin matches into ranked rows.

    Pure: recomputed from scratch on every call, safe at any completion state.
    Only RR matches with a winner count. A forfeit (winner, no scores) gives
    the winner a win and both teams a game played but leaves point
    differential alone. Matches naming unknown teams are skipped.

    Sorted by wins, then point differential, both descending. There is no
    third tie-break: rows still tied keep the order of team_ids.
    """
    rows: dict[str, StandingsRow] = {}
    for raw_id in team_ids:
        team_id = canonical_id(raw_id)
        rows.setdefault(team_id, StandingsRow(team_id=team_id))

    counted = 0
    for m in matches:
        if m.phase != "RR" or m.winner is None:
            continue

        a = rows.get(canonical_id(m.team_a))
        b = rows.get(canonical_id(m.team_b))
        if a is None or b is None:
            logger.debug("Skipping %s: references a team outside the standings", m.id)
            continue

        if m.score_a is None and m.score_b is None:
            winner_id = canonical_id(m.winner)
            if winner_id == a.team_id:
                winner = a
            elif winner_id == b.team_id:
                winner = b
            else:
                logger.debug("Skipping forfeit %s: winner %s not in match", m.id, winner_id)
                continue
            winner.wins += 1
            a.games_played += 1
            b.games_played += 1
            counted += 1
            continue

        if not _is_int(m.score_a) or not _is_int(m.score_b):
            logger.debug("Skipping %s: non-integer score", m.id)
            continue

        a.games_played += 1
        b.games_played += 1
        if m.score_a > m.score_b:
            a.wins += 1
        else:
            b.wins += 1
        a.point_diff += m.score_a - m.score_b
        b.point_diff += m.score_b - m.score_a
        counted += 1

    logger.debug("Standings computed from %d decided matches over %d teams", counted, len(rows))
    # sorted() is stable, so unresolved ties keep team_ids order
    return sorted(rows.values(), key=lambda r: (-r.wins, -r.point_diff))


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

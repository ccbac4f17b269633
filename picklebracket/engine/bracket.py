"""
Playoff bracket: two semifinals seeded from standings, then a final and a
third-place match seeded from the semifinal results.

Seeding follows the usual four-team convention (1 vs 4, 2 vs 3) so the two
top seeds can only meet in the final. Every function here is pure and
deterministic, so re-deriving a bracket from the same inputs always gives the
same pairings.
"""

from __future__ import annotations

import logging
from typing import Iterable

from picklebracket.engine.base import Match, Placements, StandingsRow
from picklebracket.engine.errors import PreconditionError

logger = logging.getLogger(__name__)

PLAYOFF_SIZE = 4


def generate_semifinals(standings: list[StandingsRow]) -> list[Match]:
    """Return unplayed [SF1 (seed 1 vs 4), SF2 (seed 2 vs 3)]."""
    if len(standings) < PLAYOFF_SIZE:
        raise PreconditionError("Need at least 4 teams for playoffs.")

    seed1, seed2, seed3, seed4 = (row.team_id for row in standings[:PLAYOFF_SIZE])
    logger.info("Semifinals seeded: 1=%s 2=%s 3=%s 4=%s", seed1, seed2, seed3, seed4)

    return [
        Match(id="SF1", phase="SF", team_a=seed1, team_b=seed4),
        Match(id="SF2", phase="SF", team_a=seed2, team_b=seed3),
    ]


def generate_finals(semis: Iterable[Match]) -> list[Match]:
    """Return unplayed [FINAL (SF winners), THIRD (SF losers)]."""
    by_id = {m.id: m for m in semis}
    sf1 = by_id.get("SF1")
    sf2 = by_id.get("SF2")
    if sf1 is None or sf2 is None:
        raise PreconditionError("Need SF1 and SF2.")
    if sf1.winner is None or sf2.winner is None:
        raise PreconditionError("Both semifinals must be completed before generating finals.")

    logger.info("Finals seeded: FINAL %s vs %s, THIRD %s vs %s",
                sf1.winner, sf2.winner, sf1.loser, sf2.loser)

    return [
        Match(id="FINAL", phase="FINAL", team_a=sf1.winner, team_b=sf2.winner),
        Match(id="THIRD", phase="THIRD", team_a=sf1.loser, team_b=sf2.loser),
    ]


def compute_placements(finals: Iterable[Match]) -> Placements:
    """Champion, runner-up, third and fourth from decided FINAL and THIRD matches."""
    by_id = {m.id: m for m in finals}
    final = by_id.get("FINAL")
    third = by_id.get("THIRD")
    if final is None or third is None:
        raise PreconditionError("Need FINAL and THIRD.")
    if final.winner is None or third.winner is None:
        raise PreconditionError("FINAL and THIRD must both be completed before placements.")

    return Placements(
        champion=final.winner,
        runner_up=final.loser,
        third=third.winner,
        fourth=third.loser,
    )

"""
Round-robin schedule generation.

Two strategies, chosen by games_per_team:

- Full round robin (games_per_team == n - 1): the circle method. Deterministic;
  every team meets every other team exactly once over n - 1 rounds.
- Partial round robin (games_per_team < n - 1): randomised greedy construction
  with bounded reshuffles. This is a heuristic, not a guaranteed-optimal
  construction. It converges quickly for league-sized fields when the request
  is feasible, and raises SchedulingExhaustedError when the retry budget runs
  out. Note n * games_per_team must be even for any schedule to exist.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable

from picklebracket.engine.base import Match, Team, TeamId, canonical_id
from picklebracket.engine.errors import InfeasibleParametersError, SchedulingExhaustedError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 200

_BYE = None  # placeholder slot for odd team counts in the circle method


def generate_round_robin(
    teams: Iterable[Team | TeamId],
    games_per_team: int,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: random.Random | None = None,
) -> list[Match]:
    """
    Build an unplayed round-robin schedule where every team plays games_per_team matches.

    Args:
        teams:          Team objects or raw ids, in seed order.
        games_per_team: Target number of matches per team.
        max_attempts:   Reshuffle budget for partial schedules.
        rng:            Random source for partial schedules (fresh Random() if None).

    Returns:
        Matches coded RR-1, RR-2, … in schedule order.

    Raises:
        InfeasibleParametersError: fewer than 2 teams, duplicate ids, or
            games_per_team outside 1..n-1.
        SchedulingExhaustedError: no balanced partial schedule within max_attempts.
    """
    team_ids = _team_ids(teams)
    n = len(team_ids)

    if n < 2:
        raise InfeasibleParametersError("Need at least 2 teams.")
    if isinstance(games_per_team, bool) or not isinstance(games_per_team, int):
        raise InfeasibleParametersError(f"games_per_team must be an integer, got {games_per_team!r}")
    if games_per_team < 1:
        raise InfeasibleParametersError("games_per_team must be >= 1")
    if games_per_team > n - 1:
        raise InfeasibleParametersError(
            f"games_per_team={games_per_team} is too large for {n} teams (max is {n - 1})."
        )
    if max_attempts < 1:
        raise InfeasibleParametersError("max_attempts must be >= 1")

    if games_per_team == n - 1:
        pairs = _circle_method(team_ids)
        logger.info("Full round robin: %d teams, %d matches", n, len(pairs))
    else:
        pairs = _greedy_partial(team_ids, games_per_team, max_attempts, rng or random.Random())
        logger.info(
            "Partial round robin: %d teams × %d games, %d matches",
            n, games_per_team, len(pairs),
        )

    return [
        Match(id=f"RR-{i}", phase="RR", team_a=a, team_b=b)
        for i, (a, b) in enumerate(pairs, 1)
    ]


# ------------------------------------------------------------------ #
# Strategies                                                           #
# ------------------------------------------------------------------ #

def _circle_method(team_ids: list[str]) -> list[tuple[str, str]]:
    """
    Fix the first team and rotate the rest one step per round.

    Each round pairs the fixed team with the slot opposite it and folds the
    remaining slots together (first with last, second with second-last, …).
    """
    slots: list[str | None] = list(team_ids)
    if len(slots) % 2 == 1:
        slots.append(_BYE)

    n = len(slots)
    half = n // 2
    fixed = slots[0]
    rotating = slots[1:]

    pairs: list[tuple[str, str]] = []
    for _round in range(n - 1):
        left = [fixed, *rotating[: half - 1]]
        right = rotating[half - 1:][::-1]
        for a, b in zip(left, right):
            if a is _BYE or b is _BYE:
                continue
            pairs.append((a, b))
        # Last element moves to the front
        rotating = [rotating[-1], *rotating[:-1]]

    return pairs


def _greedy_partial(
    team_ids: list[str],
    games_per_team: int,
    max_attempts: int,
    rng: random.Random,
) -> list[tuple[str, str]]:
    all_pairs = [
        (team_ids[i], team_ids[j])
        for i in range(len(team_ids))
        for j in range(i + 1, len(team_ids))
    ]

    for attempt in range(1, max_attempts + 1):
        counts = dict.fromkeys(team_ids, 0)
        used: set[frozenset[str]] = set()
        schedule: list[tuple[str, str]] = []
        filled = 0

        shuffled = list(all_pairs)
        rng.shuffle(shuffled)

        for a, b in shuffled:
            if counts[a] >= games_per_team or counts[b] >= games_per_team:
                continue
            key = frozenset((a, b))
            if key in used:
                continue

            used.add(key)
            schedule.append((a, b))
            for team in (a, b):
                counts[team] += 1
                if counts[team] == games_per_team:
                    filled += 1

            if filled == len(team_ids):
                break

        if filled == len(team_ids):
            logger.debug("Partial schedule found on attempt %d", attempt)
            return schedule

        logger.debug(
            "Attempt %d stuck with %d/%d teams on target",
            attempt, filled, len(team_ids),
        )

    logger.warning(
        "Scheduling exhausted: %d teams × %d games after %d attempts",
        len(team_ids), games_per_team, max_attempts,
    )
    raise SchedulingExhaustedError(games_per_team, len(team_ids), max_attempts)


# ------------------------------------------------------------------ #
# Helpers                                                              #
# ------------------------------------------------------------------ #

def _team_ids(teams: Iterable[Team | TeamId]) -> list[str]:
    ids = [t.id if isinstance(t, Team) else canonical_id(t) for t in teams]
    seen: set[str] = set()
    for team_id in ids:
        if team_id in seen:
            raise InfeasibleParametersError(f"Duplicate team id: {team_id}")
        seen.add(team_id)
    return ids

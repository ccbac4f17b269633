"""
Tests for round-robin schedule generation — circle method completeness,
partial schedule balance, and parameter validation.
"""

from __future__ import annotations

import random
from collections import Counter
from itertools import combinations

import pytest

from picklebracket.engine import (
    InfeasibleParametersError,
    SchedulingExhaustedError,
    Team,
    generate_round_robin,
)
from picklebracket.engine.schedule import _circle_method


# --------------------------------------------------------------------------- #
# Helpers                                                                      #
# --------------------------------------------------------------------------- #

def make_teams(n: int) -> list[Team]:
    return [Team.create(f"T{i}", f"Team {i}") for i in range(1, n + 1)]


def pair_counts(matches) -> Counter:
    return Counter(frozenset((m.team_a, m.team_b)) for m in matches)


def games_per_team(matches) -> Counter:
    counts: Counter = Counter()
    for m in matches:
        counts[m.team_a] += 1
        counts[m.team_b] += 1
    return counts


# --------------------------------------------------------------------------- #
# Full round robin                                                             #
# --------------------------------------------------------------------------- #

class TestFullRoundRobin:
    @pytest.mark.parametrize("n", range(2, 13))
    def test_every_pair_exactly_once(self, n):
        teams = make_teams(n)
        matches = generate_round_robin(teams, n - 1)

        assert len(matches) == n * (n - 1) // 2
        counts = pair_counts(matches)
        expected = {frozenset(p) for p in combinations([t.id for t in teams], 2)}
        assert set(counts) == expected
        assert all(c == 1 for c in counts.values())

    def test_four_teams_six_matches(self):
        matches = generate_round_robin(make_teams(4), 3)
        assert len(matches) == 6
        assert all(c == 3 for c in games_per_team(matches).values())

    def test_five_teams_bye_never_appears(self):
        teams = make_teams(5)
        matches = generate_round_robin(teams, 4)
        assert len(matches) == 10
        ids = {t.id for t in teams}
        for m in matches:
            assert m.team_a in ids
            assert m.team_b in ids

    def test_circle_method_rounds_are_disjoint(self):
        # With 6 teams each block of 3 consecutive pairs is one round
        pairs = _circle_method(["A", "B", "C", "D", "E", "F"])
        for r in range(5):
            round_pairs = pairs[r * 3:(r + 1) * 3]
            teams_in_round = [t for p in round_pairs for t in p]
            assert len(set(teams_in_round)) == 6

    def test_full_round_robin_is_deterministic(self):
        first = generate_round_robin(make_teams(7), 6)
        second = generate_round_robin(make_teams(7), 6)
        assert [m.to_dict() for m in first] == [m.to_dict() for m in second]


# --------------------------------------------------------------------------- #
# Partial round robin                                                          #
# --------------------------------------------------------------------------- #

class TestPartialRoundRobin:
    @pytest.mark.parametrize(
        "n,k",
        [(4, 1), (4, 2), (5, 2), (6, 1), (6, 2), (6, 3), (6, 4), (8, 3), (10, 4), (12, 5)],
    )
    def test_every_team_plays_exactly_k(self, n, k):
        matches = generate_round_robin(
            make_teams(n), k, max_attempts=2000, rng=random.Random(n * 100 + k)
        )

        assert len(matches) == n * k // 2
        assert all(c == k for c in games_per_team(matches).values())
        assert len(games_per_team(matches)) == n
        assert all(c == 1 for c in pair_counts(matches).values())

    def test_six_teams_four_games_scenario(self):
        matches = generate_round_robin(make_teams(6), 4, rng=random.Random(42))
        assert len(matches) == 12
        assert set(games_per_team(matches).values()) == {4}

    def test_seeded_rng_is_reproducible(self):
        a = generate_round_robin(make_teams(8), 3, rng=random.Random(7))
        b = generate_round_robin(make_teams(8), 3, rng=random.Random(7))
        assert [m.to_dict() for m in a] == [m.to_dict() for m in b]

    def test_odd_total_is_exhausted(self):
        # 5 teams × 3 games = 15 team-slots; a schedule needs an even number
        with pytest.raises(SchedulingExhaustedError) as excinfo:
            generate_round_robin(make_teams(5), 3, max_attempts=20, rng=random.Random(1))
        err = excinfo.value
        assert err.games_per_team == 3
        assert err.team_count == 5
        assert "reducing games per team" in str(err)


# --------------------------------------------------------------------------- #
# Output shape                                                                 #
# --------------------------------------------------------------------------- #

class TestMatchShape:
    def test_sequential_codes_and_unplayed(self):
        matches = generate_round_robin(make_teams(6), 2, rng=random.Random(3))
        assert [m.id for m in matches] == [f"RR-{i}" for i in range(1, len(matches) + 1)]
        for m in matches:
            assert m.phase == "RR"
            assert m.score_a is None and m.score_b is None and m.winner is None
            assert m.team_a != m.team_b

    def test_raw_ids_are_canonicalised(self):
        matches = generate_round_robin([1, 2, "3", 4.0], 3)
        ids = {m.team_a for m in matches} | {m.team_b for m in matches}
        assert ids == {"1", "2", "3", "4"}


# --------------------------------------------------------------------------- #
# Validation                                                                   #
# --------------------------------------------------------------------------- #

class TestValidation:
    def test_single_team_raises(self):
        with pytest.raises(InfeasibleParametersError, match="at least 2"):
            generate_round_robin(make_teams(1), 1)

    def test_zero_games_raises(self):
        with pytest.raises(InfeasibleParametersError, match=">= 1"):
            generate_round_robin(make_teams(4), 0)

    def test_negative_games_raises(self):
        with pytest.raises(InfeasibleParametersError):
            generate_round_robin(make_teams(4), -2)

    @pytest.mark.parametrize("n", [2, 4, 5, 9])
    def test_games_equal_to_team_count_raises(self, n):
        with pytest.raises(InfeasibleParametersError, match="too large"):
            generate_round_robin(make_teams(n), n)

    def test_duplicate_ids_raise(self):
        with pytest.raises(InfeasibleParametersError, match="Duplicate"):
            generate_round_robin([1, "1", 2], 1)

    def test_zero_attempts_raises(self):
        with pytest.raises(InfeasibleParametersError):
            generate_round_robin(make_teams(6), 2, max_attempts=0)

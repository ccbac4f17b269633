"""
Tests for compute_standings — ordering, forfeits, identifier normalisation,
and the cases that must not affect the table.
"""

from __future__ import annotations

import random

from picklebracket.engine import Match, compute_standings


def rr(code: str, a, b, score_a=None, score_b=None, winner=None) -> Match:
    return Match(id=code, phase="RR", team_a=a, team_b=b, score_a=score_a, score_b=score_b, winner=winner)


def by_team(rows):
    return {r.team_id: r for r in rows}


SAMPLE = [
    rr("RR-1", "1", "2", 11, 5, "1"),
    rr("RR-2", "3", "4", 9, 11, "4"),
    rr("RR-3", "1", "3", 11, 9, "1"),
    rr("RR-4", "2", "4", 11, 7, "2"),
    rr("RR-5", "1", "4", 4, 11, "4"),
    rr("RR-6", "2", "3", 13, 11, "2"),
]


class TestOrdering:
    def test_sorted_by_wins_then_point_diff(self):
        rows = compute_standings(["1", "2", "3", "4"], SAMPLE)
        # 1: 2W diff +1, 2: 2W diff 0, 4: 2W diff +5, 3: 0W
        assert [r.team_id for r in rows] == ["4", "1", "2", "3"]
        assert [r.wins for r in rows] == [2, 2, 2, 0]

    def test_tallies(self):
        rows = by_team(compute_standings(["1", "2", "3", "4"], SAMPLE))
        assert rows["1"].games_played == 3
        assert rows["1"].point_diff == 6 + 2 - 7
        assert rows["3"].losses == 3
        assert rows["3"].point_diff == -2 - 2 - 2

    def test_independent_of_match_order(self):
        baseline = compute_standings(["1", "2", "3", "4"], SAMPLE)
        rng = random.Random(5)
        for _ in range(10):
            shuffled = list(SAMPLE)
            rng.shuffle(shuffled)
            assert compute_standings(["1", "2", "3", "4"], shuffled) == baseline

    def test_unresolved_ties_keep_team_order(self):
        matches = [rr("RR-1", "a", "b", 11, 9, "a"), rr("RR-2", "c", "d", 11, 9, "c")]
        rows = compute_standings(["c", "d", "a", "b"], matches)
        assert [r.team_id for r in rows] == ["c", "a", "d", "b"]

    def test_point_diff_breaks_equal_wins(self):
        matches = [rr("RR-1", "a", "b", 11, 9, "a"), rr("RR-2", "c", "d", 11, 0, "c")]
        rows = compute_standings(["a", "b", "c", "d"], matches)
        assert [r.team_id for r in rows][:2] == ["c", "a"]


class TestForfeits:
    def test_forfeit_counts_win_and_games_but_not_diff(self):
        matches = [rr("RR-1", "1", "2", winner="2")]
        rows = by_team(compute_standings(["1", "2"], matches))
        assert rows["2"].wins == 1
        assert rows["2"].games_played == 1
        assert rows["1"].games_played == 1
        assert rows["1"].wins == 0
        assert rows["1"].point_diff == 0
        assert rows["2"].point_diff == 0

    def test_forfeit_alongside_scored_match(self):
        matches = [rr("RR-1", "1", "2", 11, 3, "1"), rr("RR-2", "1", "3", winner="3")]
        rows = by_team(compute_standings(["1", "2", "3"], matches))
        assert rows["1"].point_diff == 8
        assert rows["1"].games_played == 2
        assert rows["3"].point_diff == 0


class TestSkipped:
    def test_unplayed_matches_ignored(self):
        rows = compute_standings(["1", "2"], [rr("RR-1", "1", "2")])
        assert all(r.games_played == 0 for r in rows)

    def test_unknown_team_ignored(self):
        rows = by_team(compute_standings(["1", "2"], [rr("RR-1", "1", "99", 11, 2, "1")]))
        assert rows["1"].games_played == 0
        assert "99" not in rows

    def test_playoff_matches_ignored(self):
        semi = Match(id="SF1", phase="SF", team_a="1", team_b="2", score_a=11, score_b=4, winner="1")
        rows = by_team(compute_standings(["1", "2"], [semi]))
        assert rows["1"].wins == 0

    def test_every_team_gets_a_row(self):
        rows = compute_standings(["1", "2", "3"], [])
        assert [r.team_id for r in rows] == ["1", "2", "3"]


class TestIdentifiers:
    def test_numeric_and_string_ids_merge(self):
        # Team list arrives as ints, matches as strings (or the other way round)
        matches = [rr("RR-1", "41", "42", 11, 6, "41"), rr("RR-2", "41", "43", 11, 1, "41")]
        rows = compute_standings([41, 42, 43], matches)
        top = rows[0]
        assert top.team_id == "41"
        assert top.wins == 2
        assert len(rows) == 3

    def test_duplicate_team_ids_collapse(self):
        rows = compute_standings([1, "1", 2], [])
        assert [r.team_id for r in rows] == ["1", "2"]

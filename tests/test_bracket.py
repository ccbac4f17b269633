"""
Tests for playoff bracket derivation — semifinal seeding, final/third-place
pairing, placements, and the preconditions around them.
"""

from __future__ import annotations

import pytest

from picklebracket.engine import (
    Match,
    PreconditionError,
    StandingsRow,
    compute_placements,
    generate_finals,
    generate_semifinals,
)


def rows(*team_ids: str) -> list[StandingsRow]:
    return [StandingsRow(team_id=t) for t in team_ids]


def decided_semis(sf1_winner: str = "A", sf2_winner: str = "B") -> list[Match]:
    sf1 = Match(id="SF1", phase="SF", team_a="A", team_b="D")
    sf2 = Match(id="SF2", phase="SF", team_a="B", team_b="C")
    sf1.score_a, sf1.score_b = (11, 7) if sf1_winner == "A" else (7, 11)
    sf1.winner = sf1_winner
    sf2.score_a, sf2.score_b = (11, 9) if sf2_winner == "B" else (9, 11)
    sf2.winner = sf2_winner
    return [sf1, sf2]


class TestSemifinals:
    def test_one_vs_four_two_vs_three(self):
        sf1, sf2 = generate_semifinals(rows("A", "B", "C", "D", "E"))
        assert (sf1.id, sf1.phase, sf1.team_a, sf1.team_b) == ("SF1", "SF", "A", "D")
        assert (sf2.id, sf2.phase, sf2.team_a, sf2.team_b) == ("SF2", "SF", "B", "C")
        assert sf1.winner is None and sf2.winner is None

    def test_exactly_four_teams(self):
        semis = generate_semifinals(rows("A", "B", "C", "D"))
        assert len(semis) == 2

    def test_fewer_than_four_raises(self):
        with pytest.raises(PreconditionError, match="at least 4"):
            generate_semifinals(rows("A", "B", "C"))


class TestFinals:
    def test_winners_to_final_losers_to_third(self):
        final, third = generate_finals(decided_semis("A", "C"))
        assert (final.id, final.phase, final.team_a, final.team_b) == ("FINAL", "FINAL", "A", "C")
        assert (third.id, third.phase, third.team_a, third.team_b) == ("THIRD", "THIRD", "D", "B")

    def test_upsets(self):
        final, third = generate_finals(decided_semis("D", "C"))
        assert (final.team_a, final.team_b) == ("D", "C")
        assert (third.team_a, third.team_b) == ("A", "B")

    def test_idempotent(self):
        semis = decided_semis()
        first = [m.to_dict() for m in generate_finals(semis)]
        second = [m.to_dict() for m in generate_finals(semis)]
        assert first == second

    def test_order_of_semis_does_not_matter(self):
        semis = decided_semis()
        assert generate_finals(semis) == generate_finals(list(reversed(semis)))

    def test_missing_semifinal_raises(self):
        with pytest.raises(PreconditionError, match="SF1 and SF2"):
            generate_finals(decided_semis()[:1])

    def test_undecided_semifinal_raises(self):
        semis = decided_semis()
        semis[1].winner = None
        semis[1].score_a = semis[1].score_b = None
        with pytest.raises(PreconditionError, match="completed"):
            generate_finals(semis)

    def test_forfeited_semifinal_counts_as_decided(self):
        semis = decided_semis()
        semis[0].score_a = semis[0].score_b = None
        final, third = generate_finals(semis)
        assert final.team_a == "A"
        assert third.team_a == "D"


class TestPlacements:
    def test_full_order(self):
        final, third = generate_finals(decided_semis("A", "B"))
        final.score_a, final.score_b, final.winner = 8, 11, "B"
        third.score_a, third.score_b, third.winner = 11, 6, "D"

        placements = compute_placements([final, third])
        assert placements.as_list() == ["B", "A", "D", "C"]

    def test_undecided_final_raises(self):
        final, third = generate_finals(decided_semis())
        third.winner = third.team_a
        with pytest.raises(PreconditionError):
            compute_placements([final, third])

    def test_missing_third_raises(self):
        final, _ = generate_finals(decided_semis())
        final.winner = final.team_a
        with pytest.raises(PreconditionError, match="FINAL and THIRD"):
            compute_placements([final])

"""
Engine data model: teams, matches, standings rows and playoff placements.

Team identifiers arrive as ints from one source and strings from another.
canonical_id() is the single place they are reduced to one string form; every
engine entry point goes through it so a team's record is never split across
two keys.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal, Union

from picklebracket.engine.errors import InfeasibleParametersError

Phase = Literal["RR", "SF", "FINAL", "THIRD"]
PHASES: tuple[Phase, ...] = ("RR", "SF", "FINAL", "THIRD")

TeamId = Union[int, str]


def canonical_id(value: object) -> str:
    """Reduce an int/str team id to its canonical string form."""
    # bool is an int subclass; True would silently become "1"
    if isinstance(value, bool) or value is None:
        raise InfeasibleParametersError(f"Invalid team id: {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise InfeasibleParametersError(f"Invalid team id: {value!r}")
        return str(int(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InfeasibleParametersError("Team id must not be empty.")
        return text
    raise InfeasibleParametersError(f"Invalid team id: {value!r}")


def optional_id(value: object) -> str | None:
    return None if value is None else canonical_id(value)


@dataclass(frozen=True)
class Team:
    """A doubles team. Immutable once matches reference it."""

    id: str
    name: str

    @classmethod
    def create(cls, id: TeamId, name: str | None = None) -> Team:
        team_id = canonical_id(id)
        return cls(id=team_id, name=(name or "").strip() or f"Team {team_id}")


@dataclass
class Match:
    """
    One game between two teams.

    State is one of:
      unplayed  — no scores, no winner
      decided   — both scores and a winner
      forfeit   — a winner but no scores
    """

    id: str                      # e.g. "RR-3", "SF1", "FINAL", "THIRD"
    phase: Phase
    team_a: str
    team_b: str
    score_a: int | None = None
    score_b: int | None = None
    winner: str | None = None

    def __post_init__(self) -> None:
        if self.phase not in PHASES:
            raise InfeasibleParametersError(f"Unknown phase {self.phase!r} for match {self.id}")
        if self.team_a == self.team_b:
            raise InfeasibleParametersError(
                f"Match {self.id} pairs team {self.team_a} against itself."
            )

    @property
    def is_decided(self) -> bool:
        return self.winner is not None

    @property
    def is_forfeit(self) -> bool:
        return self.winner is not None and self.score_a is None and self.score_b is None

    @property
    def loser(self) -> str | None:
        if self.winner is None:
            return None
        return self.team_b if self.winner == self.team_a else self.team_a

    def involves(self, team_id: TeamId) -> bool:
        return canonical_id(team_id) in (self.team_a, self.team_b)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Match:
        """Build a Match from a plain dict, canonicalising every id."""
        try:
            return cls(
                id=str(raw["id"]),
                phase=raw["phase"],
                team_a=canonical_id(raw["team_a"]),
                team_b=canonical_id(raw["team_b"]),
                score_a=raw.get("score_a"),
                score_b=raw.get("score_b"),
                winner=optional_id(raw.get("winner")),
            )
        except KeyError as exc:
            raise InfeasibleParametersError(f"Match is missing field {exc}") from exc


@dataclass
class StandingsRow:
    """Running tally for one team across its decided round-robin matches."""

    team_id: str
    wins: int = 0
    point_diff: int = 0
    games_played: int = 0

    @property
    def losses(self) -> int:
        return self.games_played - self.wins


@dataclass(frozen=True)
class Placements:
    """Final finishing order, available once FINAL and THIRD are decided."""

    champion: str
    runner_up: str
    third: str
    fourth: str

    def as_list(self) -> list[str]:
        return [self.champion, self.runner_up, self.third, self.fourth]

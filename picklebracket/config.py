"""
Configuration loading from config.yaml.

Uses typed dataclasses throughout so the rest of the app gets IDE
completion and type-checker support without touching raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from picklebracket.engine.base import Team
from picklebracket.engine.errors import InfeasibleParametersError
from picklebracket.engine.schedule import DEFAULT_MAX_ATTEMPTS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class TournamentConfig:
    name: str = "League Night"
    games_per_team: int = 4
    max_attempts: int = DEFAULT_MAX_ATTEMPTS   # reshuffles for partial schedules
    seed: int | None = None                    # fixed RNG seed for reproducible schedules


@dataclass
class ScoringConfig:
    play_to: int = 11
    playoff_play_to: int = 15             # semifinals, final and third place
    win_by: int = 2

    def play_to_for(self, phase: str) -> int:
        return self.play_to if phase == "RR" else self.playoff_play_to


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = "./logs/picklebracket.log"


@dataclass
class Config:
    tournament: TournamentConfig
    scoring: ScoringConfig
    logging: LoggingConfig
    teams: list[Team] = field(default_factory=list)

    @property
    def log_file_path(self) -> Path:
        return Path(self.logging.file)


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load and validate config.yaml.

    Raises:
        FileNotFoundError: config.yaml is missing.
        ValueError: required fields are absent or invalid.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {cfg_path.resolve()}\n"
            "Copy config.example.yaml to config.yaml and list your teams."
        )

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    try:
        t_raw = raw.get("tournament") or {}
        seed = t_raw.get("seed")
        tournament = TournamentConfig(
            name=str(t_raw.get("name", "League Night")),
            games_per_team=int(t_raw.get("games_per_team", 4)),
            max_attempts=int(t_raw.get("max_attempts", DEFAULT_MAX_ATTEMPTS)),
            seed=int(seed) if seed is not None else None,
        )

        s_raw = raw.get("scoring") or {}
        scoring = ScoringConfig(
            play_to=int(s_raw.get("play_to", 11)),
            playoff_play_to=int(s_raw.get("playoff_play_to", 15)),
            win_by=int(s_raw.get("win_by", 2)),
        )

        l_raw = raw.get("logging") or {}
        logging_cfg = LoggingConfig(
            level=str(l_raw.get("level", "INFO")).upper(),
            file=str(l_raw.get("file", "./logs/picklebracket.log")),
        )

        teams = [
            Team.create(t["id"], t.get("name"))
            for t in (raw.get("teams") or [])
        ]

        config = Config(tournament=tournament, scoring=scoring, logging=logging_cfg, teams=teams)
        _validate(config)
        return config

    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"Invalid config.yaml structure: {exc}") from exc
    except InfeasibleParametersError as exc:
        raise ValueError(f"Invalid team in config.yaml: {exc}") from exc


def _validate(config: Config) -> None:
    if config.tournament.games_per_team < 1:
        raise ValueError("tournament.games_per_team must be >= 1")
    if config.tournament.max_attempts < 1:
        raise ValueError("tournament.max_attempts must be >= 1")
    if config.scoring.play_to < 1:
        raise ValueError("scoring.play_to must be >= 1")
    if config.scoring.playoff_play_to < 1:
        raise ValueError("scoring.playoff_play_to must be >= 1")
    if config.scoring.win_by < 1:
        raise ValueError("scoring.win_by must be >= 1")
    if config.logging.level not in LOG_LEVELS:
        raise ValueError(
            f"logging.level must be one of {LOG_LEVELS}, got '{config.logging.level}'"
        )
    ids = [t.id for t in config.teams]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ValueError(f"Duplicate team ids in config.yaml: {', '.join(duplicates)}")
    # Team count vs games_per_team is checked when the schedule is generated,
    # so the CLI can still start and let the user pick a smaller value.

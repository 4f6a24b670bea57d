from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from blaseball_stats.shared.serialization import from_json_dict, to_json_dict

WEATHER_NAMES: tuple[str, ...] = (
    "Void",
    "Sun 2",
    "Overcast",
    "Rainy",
    "Sandstorm",
    "Snowy",
    "Acidic",
    "Solar Eclipse",
    "Glitter",
    "Bloodwind",
    "Peanuts",
    "Birds",
    "Feedback",
    "Reverb",
    "Black Hole",
    "Coffee",
    "Coffee 2",
    "Coffee 3s",
    "Flooding",
    "???",
    "???",
    "???",
    "???",
)


def weather_name(code: int) -> str:
    if 0 <= code < len(WEATHER_NAMES):
        return WEATHER_NAMES[code]
    return ""


@dataclass
class SplitRecord:
    wins: int = 0
    losses: int = 0
    pct: float = 0
    type: str = ""

    def record_win(self) -> None:
        self.wins += 1
        self._update_pct()

    def record_loss(self) -> None:
        self.losses += 1
        self._update_pct()

    def _update_pct(self) -> None:
        self.pct = self.wins / (self.wins + self.losses)


@dataclass
class DivisionSplitRecord(SplitRecord):
    division_id: str = ""
    division_name: str = ""


@dataclass
class LeagueSplitRecord(SplitRecord):
    league_id: str = ""
    league_name: str = ""


@dataclass
class LeagueRecord:
    wins: int = 0
    losses: int = 0
    pct: float = 0


@dataclass
class Streak:
    streak_type: str = ""
    streak_number: int = 0
    streak_code: str = ""

    def extend(self, won: bool) -> None:
        streak_type = "wins" if won else "losses"
        if self.streak_type == streak_type:
            self.streak_number += 1
        else:
            self.streak_type = streak_type
            self.streak_number = 1
        self.streak_code = f"{'W' if won else 'L'}{self.streak_number}"


SPLIT_TYPES: tuple[str, ...] = ("home", "away", "extraInnings", "winners", "oneRun", "shame")


def _default_splits() -> dict[str, SplitRecord]:
    return {split: SplitRecord(type=split) for split in SPLIT_TYPES}


@dataclass
class TeamRecord:
    team_id: str
    team_name: str | None = None
    team_slug: str | None = None
    season: int | None = None
    streak: Streak = field(default_factory=Streak)
    division_rank: int = 0
    league_rank: int = 0
    sport_rank: int = 0
    games_played: int = 0
    games_back: str = ""
    league_games_back: str = ""
    sport_games_back: str = ""
    division_games_back: str = ""
    league_record: LeagueRecord = field(default_factory=LeagueRecord)
    split_records: dict[str, SplitRecord] = field(default_factory=_default_splits)
    weather_records: dict[int, SplitRecord] = field(default_factory=dict)
    league_records: dict[str, LeagueSplitRecord] = field(default_factory=dict)
    division_records: dict[str, DivisionSplitRecord] = field(default_factory=dict)
    runs_allowed: float = 0
    runs_scored: float = 0
    division_champ: bool = False
    division_leader: bool = False
    league_leader: bool = False
    sport_leader: bool = False
    clinched: bool = False
    elimination_number: str = ""
    magic_number: str = ""
    wins: int = 0
    losses: int = 0
    run_differential: float = 0
    winning_percentage: float = 0

    @property
    def win_differential(self) -> int:
        return self.wins - self.losses

    def to_dict(self) -> dict[str, Any]:
        return to_json_dict(self)


@dataclass(frozen=True)
class Division:
    id: str
    name: str | None = None
    subleague: str | None = None
    teams: tuple[str, ...] = ()


@dataclass(frozen=True)
class Subleague:
    id: str
    name: str | None = None
    divisions: tuple[str, ...] = ()
    teams: tuple[str, ...] = ()


@dataclass(frozen=True)
class SeasonStructure:
    """Subleague and division membership for one season."""

    subleagues: tuple[Subleague, ...] = ()
    divisions: tuple[Division, ...] = ()

    def subleague_of(self, team_id: str | None) -> Subleague | None:
        return next((s for s in self.subleagues if team_id in s.teams), None)

    def division_of(self, team_id: str | None) -> Division | None:
        return next((d for d in self.divisions if team_id in d.teams), None)

    def to_dict(self) -> dict[str, Any]:
        return to_json_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SeasonStructure:
        subleagues = data.get("subleagues") or []
        divisions = data.get("divisions") or []
        # Older caches stored these keyed by id.
        if isinstance(subleagues, dict):
            subleagues = list(subleagues.values())
        if isinstance(divisions, dict):
            divisions = list(divisions.values())
        return cls(
            subleagues=tuple(
                Subleague(
                    id=s["id"],
                    name=s.get("name"),
                    divisions=tuple(s.get("divisions") or ()),
                    teams=tuple(s.get("teams") or ()),
                )
                for s in subleagues
            ),
            divisions=tuple(
                Division(
                    id=d["id"],
                    name=d.get("name"),
                    subleague=d.get("subleague"),
                    teams=tuple(d.get("teams") or ()),
                )
                for d in divisions
            ),
        )


@dataclass(frozen=True)
class LeagueStructure:
    seasons: dict[int, SeasonStructure] = field(default_factory=dict)
    last_updated_at: int = 0

    @property
    def latest_season(self) -> int | None:
        return max(self.seasons) if self.seasons else None

    def for_season(self, season: int) -> SeasonStructure | None:
        return self.seasons.get(season)

    def to_dict(self) -> dict[str, Any]:
        return {
            "seasons": {str(s): structure.to_dict() for s, structure in sorted(self.seasons.items())},
            "lastUpdatedAt": self.last_updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LeagueStructure:
        return cls(
            seasons={int(s): SeasonStructure.from_dict(v) for s, v in (data.get("seasons") or {}).items()},
            last_updated_at=int(data.get("lastUpdatedAt") or 0),
        )


@dataclass(frozen=True)
class GameResult:
    """A game record as published by the game results archive."""

    id: str
    season: int
    day: int
    home_team: str | None = None
    away_team: str | None = None
    home_team_name: str | None = None
    away_team_name: str | None = None
    home_team_nickname: str | None = None
    away_team_nickname: str | None = None
    home_score: float = 0
    away_score: float = 0
    inning: int = 0
    is_postseason: bool = False
    game_complete: bool = False
    shame: bool = False
    weather: int | None = None
    outcomes: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameResult:
        if "id" not in data and "_id" in data:
            data = {**data, "id": data["_id"]}
        outcomes = data.get("outcomes")
        data = {**data, "outcomes": tuple(str(o) for o in outcomes) if isinstance(outcomes, list) else ()}
        return from_json_dict(cls, data)

    def to_dict(self) -> dict[str, Any]:
        return to_json_dict(self)


# Raw archive records bucketed by season, then day.
type GameResultsBySeason = dict[int, dict[int, list[dict[str, Any]]]]

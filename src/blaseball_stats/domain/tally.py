from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Self

from blaseball_stats.shared.serialization import from_json_dict, to_json_dict


def counter() -> Any:
    return field(default=0, metadata={"counter": True})


def derived(default: float = 0) -> Any:
    return field(default=default, metadata={"derived": True})


@dataclass
class Tally:
    """Mutable counter bundle for one player in one scope."""

    team: str | None = None
    team_name: str | None = None

    @classmethod
    def counter_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.metadata.get("counter"))

    @classmethod
    def derived_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.metadata.get("derived"))

    def add(self, other: Tally) -> None:
        for name in self.counter_names():
            setattr(self, name, getattr(self, name) + getattr(other, name))

    def increment(self, stat: str, amount: float = 1) -> None:
        if stat not in self.counter_names():
            msg = f"{type(self).__name__} has no counter {stat!r}"
            raise ValueError(msg)
        setattr(self, stat, getattr(self, stat) + amount)

    def to_dict(self) -> dict[str, Any]:
        return to_json_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return from_json_dict(cls, data)


@dataclass
class BattingTally(Tally):
    appearances: int = counter()
    plate_appearances: int = counter()
    at_bats: int = counter()
    hits: int = counter()
    doubles_hit: int = counter()
    triples_hit: int = counter()
    home_runs_hit: int = counter()
    runs_scored: int = counter()
    runs_batted_in: int = counter()
    stolen_bases: int = counter()
    caught_stealing: int = counter()
    bases_on_balls: int = counter()
    strikeouts: int = counter()
    ground_into_double_plays: int = counter()
    sacrifice_bunts: int = counter()
    sacrifice_flies: int = counter()
    at_bats_with_runners_in_scoring_position: int = counter()
    hits_with_runners_in_scoring_position: int = counter()
    batting_average: float = derived()
    on_base_percentage: float = derived()
    slugging_percentage: float = derived()
    on_base_plus_slugging: float = derived()
    total_bases: int = derived(0)
    batting_average_with_runners_in_scoring_position: float = derived()


@dataclass
class PitchingTally(Tally):
    appearances: int = counter()
    wins: int = counter()
    losses: int = counter()
    outs_recorded: int = counter()
    pitch_count: int = counter()
    batters_faced: int = counter()
    bases_on_balls: int = counter()
    hit_by_pitches: int = counter()
    hits_allowed: int = counter()
    home_runs: int = counter()
    earned_runs: int = counter()
    strikeouts: int = counter()
    flyouts: int = counter()
    groundouts: int = counter()
    quality_starts: int = counter()
    shutouts: int = counter()
    innings_pitched: float = derived()
    earned_run_average: float = derived()
    bases_on_balls_per_nine: float = derived()
    hits_allowed_per_nine: float = derived()
    home_runs_per_nine: float = derived()
    strikeouts_per_nine: float = derived()
    strikeout_rate: float = derived()
    walk_rate: float = derived()
    strikeout_to_walk_ratio: float = derived()
    walks_and_hits_per_inning_pitched: float = derived()
    winning_percentage: float = derived()


@dataclass
class PlayerSummary[T: Tally]:
    """All tallies of one player for one role, keyed by season number."""

    id: str
    tally_type: type[T]
    name: str | None = None
    slug: str | None = None
    seasons: dict[int, T] = field(default_factory=dict)
    postseasons: dict[int, T] = field(default_factory=dict)
    career_season: T = None  # type: ignore[assignment]
    career_postseason: T = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.career_season is None:
            self.career_season = self.tally_type()
        if self.career_postseason is None:
            self.career_postseason = self.tally_type()

    def scoped(self, postseason: bool) -> dict[int, T]:
        return self.postseasons if postseason else self.seasons

    def all_scoped(self) -> list[tuple[bool, int, T]]:
        """Every (postseason, season, tally) triple, regular seasons first."""
        return [(False, s, t) for s, t in self.seasons.items()] + [(True, s, t) for s, t in self.postseasons.items()]

    def to_dict(self) -> dict[str, Any]:
        return {
            "careerPostseason": self.career_postseason.to_dict(),
            "careerSeason": self.career_season.to_dict(),
            "id": self.id,
            "name": self.name,
            "seasons": {str(s): t.to_dict() for s, t in sorted(self.seasons.items())},
            "slug": self.slug,
            "postseasons": {str(s): t.to_dict() for s, t in sorted(self.postseasons.items())},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], tally_type: type[T]) -> PlayerSummary[T]:
        return cls(
            id=str(data["id"]),
            tally_type=tally_type,
            name=data.get("name"),
            slug=data.get("slug"),
            seasons={int(s): tally_type.from_dict(t) for s, t in (data.get("seasons") or {}).items()},
            postseasons={int(s): tally_type.from_dict(t) for s, t in (data.get("postseasons") or {}).items()},
            career_season=tally_type.from_dict(data.get("careerSeason") or {}),
            career_postseason=tally_type.from_dict(data.get("careerPostseason") or {}),
        )

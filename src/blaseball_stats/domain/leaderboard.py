from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from blaseball_stats.domain.stat_event import Role
from blaseball_stats.shared.naming import to_snake
from blaseball_stats.shared.serialization import to_json_dict


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class StatCategory:
    abbreviation: str
    id: str
    name: str
    sort: SortDirection
    type: Role
    minimum_innings_per_team_game: float | None = None
    minimum_plate_appearances_per_team_game: float | None = None

    @property
    def attribute(self) -> str:
        """Name of the tally attribute this category ranks."""
        return to_snake(self.id)

    def beats(self, value: float, incumbent: float) -> bool:
        if self.sort is SortDirection.ASC:
            return value < incumbent
        return value > incumbent

    def to_dict(self) -> dict[str, Any]:
        return to_json_dict(self, omit_none=True)


@dataclass(frozen=True)
class LeaderEntry:
    player_id: str
    player_name: str | None
    player_slug: str | None
    team: str | None
    team_name: str | None
    value: float

    def to_dict(self) -> dict[str, Any]:
        return to_json_dict(self)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from blaseball_stats.shared.serialization import from_json_dict, to_json_dict


@dataclass
class PlayerRecord:
    id: str
    name: str | None = None
    aliases: list[str | None] = field(default_factory=list)
    current_team_id: str | None = None
    current_team_name: str | None = None
    debut_day: int | None = None
    debut_game_id: str | None = None
    debut_season: int | None = None
    debut_team_id: str | None = None
    debut_team_name: str | None = None
    is_incinerated: bool = False
    incinerated_game_day: int | None = None
    incinerated_game_id: str | None = None
    incinerated_game_season: int | None = None
    last_game_day: int | None = None
    last_game_id: str | None = None
    last_game_season: int | None = None
    position: str = "lineup"
    slug: str | None = None

    def rename(self, name: str | None) -> None:
        """Adopt a new display name, remembering the old one as an alias."""
        if name == self.name:
            return
        if self.name not in self.aliases:
            self.aliases.append(self.name)
        self.name = name

    def to_dict(self) -> dict[str, Any]:
        return to_json_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerRecord:
        record = from_json_dict(cls, data)
        record.aliases = list(record.aliases or [])
        return record

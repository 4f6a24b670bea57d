from dataclasses import dataclass
from enum import StrEnum

from blaseball_stats.domain.snapshot import Scope


class Role(StrEnum):
    BATTING = "batting"
    PITCHING = "pitching"


class EventKind(StrEnum):
    APPEARANCE = "appearance"
    PLATE_APPEARANCE = "plate_appearance"
    AT_BAT = "at_bat"
    HIT = "hit"
    DOUBLE = "double"
    TRIPLE = "triple"
    HOME_RUN = "home_run"
    WALK = "walk"
    HIT_BY_PITCH = "hit_by_pitch"
    STRIKEOUT = "strikeout"
    DOUBLE_PLAY = "double_play"
    SACRIFICE_BUNT = "sacrifice_bunt"
    SACRIFICE_FLY = "sacrifice_fly"
    RUN_BATTED_IN = "run_batted_in"
    RUN_SCORED = "run_scored"
    STOLEN_BASE = "stolen_base"
    CAUGHT_STEALING = "caught_stealing"
    RISP_AT_BAT = "risp_at_bat"
    RISP_HIT = "risp_hit"
    OUT = "out"
    PITCH = "pitch"
    FLYOUT = "flyout"
    GROUNDOUT = "groundout"
    HIT_ALLOWED = "hit_allowed"
    BATTER_FACED = "batter_faced"
    EARNED_RUN = "earned_run"
    WIN = "win"
    LOSS = "loss"
    QUALITY_START = "quality_start"
    SHUTOUT = "shutout"


@dataclass(frozen=True)
class StatEvent:
    """Increment ``stat`` on the tally of ``player_id`` in ``scope`` by ``amount``."""

    kind: EventKind
    role: Role
    player_id: str
    scope: Scope
    stat: str
    amount: float = 1


@dataclass(frozen=True)
class PlayerSighting:
    """A player was observed in a game snapshot.

    ``update_roster`` is false when the sighting only needs the player's tally
    to exist (e.g. the previous tick's batter), without touching roster state.
    """

    role: Role
    player_id: str
    name: str | None
    team_id: str | None
    team_name: str | None
    scope: Scope
    game_id: str
    day: int
    update_roster: bool = True


@dataclass(frozen=True)
class Incineration:
    role: Role
    player_name: str
    game_id: str
    day: int
    season: int


type Observation = StatEvent | PlayerSighting | Incineration

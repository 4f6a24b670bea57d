import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from blaseball_stats.domain.stat_event import Role
from blaseball_stats.domain.tally import BattingTally, PitchingTally, Tally
from blaseball_stats.reducer.metrics import finalize_batting, finalize_pitching
from blaseball_stats.reducer.rules import (
    BATTING_RULES,
    HITTER_INCINERATED,
    PITCHER_INCINERATED,
    PITCHING_RULES,
    SCORES_BASERUNNER,
    EventRule,
)


def _unchanged(text: str) -> str:
    return text


def _hide_scores_baserunner(text: str) -> str:
    return SCORES_BASERUNNER.sub("", text, count=1)


@dataclass(frozen=True)
class RoleProfile:
    """Everything that differs between reducing batting and pitching stats."""

    role: Role
    tally_type: type[Tally]
    position: str
    rules: tuple[EventRule, ...]
    incineration: re.Pattern[str]
    sanitize: Callable[[str], str]
    # Pitchers follow their latest team; batters keep the first team seen in a scope.
    overwrite_team: bool
    finalize: Callable[[Any], None]


BATTING = RoleProfile(
    role=Role.BATTING,
    tally_type=BattingTally,
    position="lineup",
    rules=BATTING_RULES,
    incineration=HITTER_INCINERATED,
    sanitize=_unchanged,
    overwrite_team=False,
    finalize=finalize_batting,
)

PITCHING = RoleProfile(
    role=Role.PITCHING,
    tally_type=PitchingTally,
    position="rotation",
    rules=PITCHING_RULES,
    incineration=PITCHER_INCINERATED,
    sanitize=_hide_scores_baserunner,
    overwrite_team=True,
    finalize=finalize_pitching,
)


def profile_for(role: Role) -> RoleProfile:
    return BATTING if role is Role.BATTING else PITCHING

"""Turns a pair of consecutive game snapshots into stat observations.

The update text on ``curr`` describes a play that finished between the two
ticks, so discrete outcomes are credited to whoever was batting or pitching
in ``prev``. Rules that need ``prev`` are suppressed for a game's first
tick, and every rule checks the player it would credit before emitting
anything, so classification never raises on incomplete records.
"""

import logging
from collections.abc import Callable, Sequence

from blaseball_stats.domain.snapshot import GameSnapshot, Scope
from blaseball_stats.domain.stat_event import EventKind, Incineration, Observation, PlayerSighting, Role, StatEvent
from blaseball_stats.reducer.roles import RoleProfile
from blaseball_stats.reducer.rules import (
    BATTING_FOR,
    CAUGHT_STEALING,
    GAME_OVER,
    HOME_RUN,
    RISP_RULES,
    RUNNER_SCORES,
    RUNNERS_SCORED_COUNT,
    RUNS_BATTED_IN,
    STEALS,
    EventRule,
)

logger = logging.getLogger(__name__)

# Base indices: 0 is first, 1 second, 2 third.
_SCORING_POSITION = frozenset({1, 2})


def _at[T](items: Sequence[T], index: int) -> T | None:
    return items[index] if 0 <= index < len(items) else None


def _whole(value: float) -> float:
    return int(value) if float(value).is_integer() else value


class EventClassifier:
    def __init__(self, profile: RoleProfile, name_of: Callable[[str], str | None] | None = None) -> None:
        self._profile = profile
        self._name_of = name_of or (lambda _: None)
        self._seen_batters: dict[str, set[str]] = {}

    @property
    def role(self) -> Role:
        return self._profile.role

    def classify(self, prev: GameSnapshot | None, curr: GameSnapshot) -> list[Observation]:
        text = self._profile.sanitize(curr.last_update)
        observations: list[Observation] = []
        if self.role is Role.BATTING:
            observations.extend(self._batting_sightings(prev, curr))
            observations.extend(self._batting_events(prev, curr, text))
        else:
            observations.extend(self._pitching_sightings(prev, curr))
            observations.extend(self._pitching_events(prev, curr, text))
        incineration = self._incineration(prev, text)
        if incineration is not None:
            observations.append(incineration)
        return observations

    def _credit(
        self, kind: EventKind, player_id: str | None, scope: Scope, stat: str, amount: float = 1
    ) -> list[StatEvent]:
        if not player_id:
            return []
        return [StatEvent(kind=kind, role=self.role, player_id=player_id, scope=scope, stat=stat, amount=amount)]

    def _apply_rules(
        self, rules: Sequence[EventRule], player_id: str | None, scope: Scope, text: str
    ) -> list[StatEvent]:
        if not player_id:
            return []
        events: list[StatEvent] = []
        for rule in rules:
            if rule.matches(text):
                for stat in rule.stats:
                    events.extend(self._credit(rule.kind, player_id, scope, stat))
        return events

    def _sighting(
        self,
        snapshot: GameSnapshot,
        player_id: str,
        name: str | None,
        team_id: str | None,
        team_name: str | None,
        *,
        update_roster: bool = True,
    ) -> PlayerSighting:
        return PlayerSighting(
            role=self.role,
            player_id=player_id,
            name=name,
            team_id=team_id,
            team_name=team_name,
            scope=snapshot.scope,
            game_id=snapshot.id,
            day=snapshot.day,
            update_roster=update_roster,
        )

    def _incineration(self, prev: GameSnapshot | None, text: str) -> Incineration | None:
        if prev is None:
            return None
        match = self._profile.incineration.search(text)
        if match is None:
            return None
        return Incineration(
            role=self.role, player_name=match.group(1), game_id=prev.id, day=prev.day, season=prev.season
        )

    # Batting

    def _batting_sightings(self, prev: GameSnapshot | None, curr: GameSnapshot) -> list[PlayerSighting]:
        sightings: list[PlayerSighting] = []
        if curr.batter:
            sightings.append(
                self._sighting(curr, curr.batter, curr.batter_name, curr.batting_team, curr.batting_team_name)
            )
        if prev is not None and prev.batter and prev.batter != curr.batter:
            sightings.append(
                self._sighting(
                    prev,
                    prev.batter,
                    prev.batter_name,
                    prev.batting_team,
                    prev.batting_team_name,
                    update_roster=False,
                )
            )
        return sightings

    def _batting_events(self, prev: GameSnapshot | None, curr: GameSnapshot, text: str) -> list[StatEvent]:
        events: list[StatEvent] = []

        if curr.batter:
            seen = self._seen_batters.setdefault(curr.id, set())
            if curr.batter not in seen:
                seen.add(curr.batter)
                events.extend(self._credit(EventKind.APPEARANCE, curr.batter, curr.scope, "appearances"))
        if curr.game_complete:
            self._seen_batters.pop(curr.id, None)

        if prev is None:
            return events

        hitter = prev.batter
        scope = prev.scope
        events.extend(self._apply_rules(self._profile.rules, hitter, scope, text))
        if _SCORING_POSITION.intersection(prev.bases_occupied):
            events.extend(self._apply_rules(RISP_RULES, hitter, scope, text))

        if hitter and RUNS_BATTED_IN.search(text):
            delta = self._runs_on_play(prev, curr)
            if delta > 0:
                events.extend(self._credit(EventKind.RUN_BATTED_IN, hitter, scope, "runs_batted_in", _whole(delta)))

        for runner in self._scoring_runners(prev, text):
            events.extend(self._credit(EventKind.RUN_SCORED, runner, scope, "runs_scored"))

        events.extend(self._stolen_bases(prev, curr, text))
        events.extend(self._caught_stealing(prev, curr, text))
        return events

    @staticmethod
    def _runs_on_play(prev: GameSnapshot, curr: GameSnapshot) -> float:
        if prev.half_inning_score is not None and curr.half_inning_score is not None:
            return curr.half_inning_score - prev.half_inning_score
        return curr.batting_score - prev.batting_score

    @staticmethod
    def _scoring_runners(prev: GameSnapshot, text: str) -> list[str | None]:
        runners = list(prev.base_runners)
        scorers: list[str | None] = []
        count = RUNNERS_SCORED_COUNT.search(text)
        if count is not None:
            scorers.extend(runners[: int(count.group(1))])
        elif RUNNER_SCORES.search(text):
            scorers.extend(runners[:1])
        # Everyone on base comes home on a home run; the batter is credited by the home run rule.
        if HOME_RUN.search(text):
            scorers.extend(runners)
        return scorers

    def _stolen_bases(self, prev: GameSnapshot, curr: GameSnapshot, text: str) -> list[StatEvent]:
        if STEALS.search(text) is None:
            return []
        events: list[StatEvent] = []
        prev_occupied = list(prev.bases_occupied)
        occupied = list(curr.bases_occupied)
        # Occupied base values double as positions here. A runner leaving third
        # shifts the current array by a synthetic "home" entry so the remaining
        # runners line up with where they stood before the steal.
        for base in prev_occupied:
            if base == 2:
                occupied.insert(0, 3)
            if _at(prev_occupied, base) != _at(occupied, base):
                runner = _at(prev.base_runners, base)
                events.extend(self._credit(EventKind.STOLEN_BASE, runner, prev.scope, "stolen_bases"))
        return events

    def _caught_stealing(self, prev: GameSnapshot, curr: GameSnapshot, text: str) -> list[StatEvent]:
        match = CAUGHT_STEALING.search(text)
        if match is None:
            return []
        name = match.group(1)
        events: list[StatEvent] = []
        for base in prev.bases_occupied:
            if _at(prev.bases_occupied, base) == _at(curr.bases_occupied, base):
                continue
            runner = _at(prev.base_runners, base)
            if runner and self._name_of(runner) == name:
                events.extend(self._credit(EventKind.CAUGHT_STEALING, runner, prev.scope, "caught_stealing"))
        return events

    # Pitching

    def _pitching_sightings(self, prev: GameSnapshot | None, curr: GameSnapshot) -> list[PlayerSighting]:
        sightings: list[PlayerSighting] = []
        seen: set[str] = set()
        candidates = (
            (curr.pitcher, curr.pitcher_name, curr.pitching_team, curr.pitching_team_name),
            (curr.away_pitcher, curr.away_pitcher_name, curr.away_team, curr.away_team_name),
            (curr.home_pitcher, curr.home_pitcher_name, curr.home_team, curr.home_team_name),
        )
        for player_id, name, team_id, team_name in candidates:
            if player_id and player_id not in seen:
                seen.add(player_id)
                sightings.append(self._sighting(curr, player_id, name, team_id, team_name))
        if prev is not None and prev.pitcher and prev.pitcher not in seen:
            sightings.append(
                self._sighting(
                    prev,
                    prev.pitcher,
                    prev.pitcher_name,
                    prev.pitching_team,
                    prev.pitching_team_name,
                    update_roster=False,
                )
            )
        return sightings

    def _pitching_events(self, prev: GameSnapshot | None, curr: GameSnapshot, text: str) -> list[StatEvent]:
        events: list[StatEvent] = []
        scope = curr.scope
        home, away = curr.home_pitcher, curr.away_pitcher
        game_over = GAME_OVER.search(text) is not None

        if game_over:
            events.extend(self._credit(EventKind.APPEARANCE, away, scope, "appearances"))
            events.extend(self._credit(EventKind.APPEARANCE, home, scope, "appearances"))
            winner, loser = (home, away) if curr.home_score > curr.away_score else (away, home)
            events.extend(self._credit(EventKind.WIN, winner, scope, "wins"))
            events.extend(self._credit(EventKind.LOSS, loser, scope, "losses"))

        if prev is not None:
            events.extend(self._apply_rules(self._profile.rules, prev.pitcher, prev.scope, text))

        if BATTING_FOR.search(text):
            events.extend(self._credit(EventKind.BATTER_FACED, curr.pitcher, scope, "batters_faced"))

        if prev is None:
            return events

        # Runs charge the pitcher on the other side; negative deltas (shame) are ignored.
        away_runs = curr.away_score - prev.away_score
        if away_runs > 0:
            events.extend(self._credit(EventKind.EARNED_RUN, home, scope, "earned_runs", _whole(away_runs)))
        home_runs = curr.home_score - prev.home_score
        if home_runs > 0:
            events.extend(self._credit(EventKind.EARNED_RUN, away, scope, "earned_runs", _whole(home_runs)))

        if game_over and not prev.game_complete:
            if curr.home_score <= 3:
                events.extend(self._credit(EventKind.QUALITY_START, away, scope, "quality_starts"))
            if curr.away_score <= 3:
                events.extend(self._credit(EventKind.QUALITY_START, home, scope, "quality_starts"))
            if curr.home_score == 0:
                events.extend(self._credit(EventKind.SHUTOUT, away, scope, "shutouts"))
            if curr.away_score == 0:
                events.extend(self._credit(EventKind.SHUTOUT, home, scope, "shutouts"))

        return events

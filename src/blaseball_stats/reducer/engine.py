import logging
from collections.abc import Iterable
from dataclasses import dataclass

from blaseball_stats.domain.snapshot import GameSnapshot
from blaseball_stats.domain.stat_event import Incineration, Observation, PlayerSighting, StatEvent
from blaseball_stats.ingest.feed_source import Tick
from blaseball_stats.ingest.normalizer import normalize_snapshot
from blaseball_stats.reducer.accumulator import StatAccumulator
from blaseball_stats.reducer.classifier import EventClassifier
from blaseball_stats.reducer.roles import RoleProfile
from blaseball_stats.reducer.roster import Roster

logger = logging.getLogger(__name__)


@dataclass
class ReduceReport:
    ticks_read: int = 0
    ticks_processed: int = 0
    ticks_below_floor: int = 0
    duplicate_ticks: int = 0
    snapshots_processed: int = 0
    duplicate_snapshots: int = 0
    events_applied: int = 0
    incinerations: int = 0


class EventReducer:
    """Single pass over the game feed that feeds one role's accumulator and roster.

    Only the latest snapshot per game and the set of content fingerprints seen
    so far are retained between ticks.
    """

    def __init__(
        self,
        profile: RoleProfile,
        accumulator: StatAccumulator,
        roster: Roster,
        *,
        from_season: int = 0,
    ) -> None:
        self._profile = profile
        self._accumulator = accumulator
        self._roster = roster
        self._from_season = from_season
        self._classifier = EventClassifier(profile, name_of=accumulator.name_of)
        self._previous: dict[str, GameSnapshot] = {}
        self._seen: set[str] = set()
        self._last_tick: str | None = None
        self.report = ReduceReport()

    def run(self, ticks: Iterable[Tick]) -> ReduceReport:
        for tick in ticks:
            self.process_tick(tick)
        logger.info(
            "Reduced %d of %d ticks for %s (%d events, %d duplicate ticks)",
            self.report.ticks_processed,
            self.report.ticks_read,
            self._profile.role,
            self.report.events_applied,
            self.report.duplicate_ticks,
        )
        return self.report

    def process_tick(self, tick: Tick) -> None:
        self.report.ticks_read += 1
        if tick.season is not None and tick.season < self._from_season:
            self.report.ticks_below_floor += 1
            return
        if not tick.games:
            return
        if tick.fingerprint == self._last_tick:
            return
        self._last_tick = tick.fingerprint

        if tick.fingerprint in self._seen:
            logger.info("Duplicate game states found with hash %s", tick.fingerprint[:12])
            self.report.duplicate_ticks += 1
            for raw in tick.games:
                snapshot = normalize_snapshot(raw)
                if snapshot is not None:
                    self._previous[snapshot.id] = snapshot
            return
        self._seen.add(tick.fingerprint)

        self.report.ticks_processed += 1
        for raw in tick.games:
            snapshot = normalize_snapshot(raw)
            if snapshot is not None:
                self.process_snapshot(snapshot)

    def process_snapshot(self, curr: GameSnapshot) -> None:
        prev = self._previous.get(curr.id)
        self._previous[curr.id] = curr

        if prev is not None and prev.game_complete and curr.game_complete:
            return
        if prev is not None and prev.fingerprint == curr.fingerprint:
            return
        if curr.fingerprint in self._seen:
            logger.debug("Duplicate game state found from game %s", curr.id)
            self.report.duplicate_snapshots += 1
            return
        self._seen.add(curr.fingerprint)

        self.report.snapshots_processed += 1
        for observation in self._classifier.classify(prev, curr):
            self._observe(observation)

    def _observe(self, observation: Observation) -> None:
        match observation:
            case StatEvent():
                self._accumulator.apply(observation)
                self.report.events_applied += 1
            case PlayerSighting():
                self._accumulator.observe(observation)
                if observation.update_roster:
                    self._roster.observe(observation)
            case Incineration():
                if self._roster.incinerate(observation) is not None:
                    self.report.incinerations += 1

import logging
from collections.abc import Iterator

from blaseball_stats.domain.snapshot import Scope
from blaseball_stats.domain.stat_event import PlayerSighting, StatEvent
from blaseball_stats.domain.tally import PlayerSummary, Tally
from blaseball_stats.reducer.roles import RoleProfile
from blaseball_stats.shared.naming import slugify

logger = logging.getLogger(__name__)


class StatAccumulator:
    """Running tallies for every player of one role, keyed by player id and scope."""

    def __init__(self, profile: RoleProfile) -> None:
        self._profile = profile
        self._summaries: dict[str, PlayerSummary[Tally]] = {}

    @property
    def summaries(self) -> dict[str, PlayerSummary[Tally]]:
        return self._summaries

    def __len__(self) -> int:
        return len(self._summaries)

    def __iter__(self) -> Iterator[PlayerSummary[Tally]]:
        return iter(self._summaries.values())

    def name_of(self, player_id: str) -> str | None:
        summary = self._summaries.get(player_id)
        return summary.name if summary is not None else None

    def ensure(self, player_id: str, scope: Scope) -> Tally:
        """Return the tally for ``player_id`` in ``scope``, creating a zeroed one if needed."""
        summary = self._summaries.get(player_id)
        if summary is None:
            summary = PlayerSummary(id=player_id, tally_type=self._profile.tally_type)
            self._summaries[player_id] = summary
        scoped = summary.scoped(scope.postseason)
        tally = scoped.get(scope.season)
        if tally is None:
            tally = self._profile.tally_type()
            scoped[scope.season] = tally
        return tally

    def observe(self, sighting: PlayerSighting) -> None:
        tally = self.ensure(sighting.player_id, sighting.scope)
        summary = self._summaries[sighting.player_id]
        if sighting.name and (summary.name is None or sighting.update_roster):
            summary.name = sighting.name
            summary.slug = slugify(sighting.name)

        if self._profile.overwrite_team:
            if sighting.team_id:
                tally.team = sighting.team_id
                tally.team_name = sighting.team_name
        else:
            if tally.team is None:
                tally.team = sighting.team_id
            if tally.team_name is None:
                tally.team_name = sighting.team_name

    def apply(self, event: StatEvent) -> None:
        """Credit ``event`` to a player already sighted in this run; anyone else is skipped."""
        if event.player_id not in self._summaries:
            logger.debug("Skipping %s for unsighted player %s", event.stat, event.player_id)
            return
        tally = self.ensure(event.player_id, event.scope)
        tally.increment(event.stat, event.amount)

    def load(self, summaries: dict[str, PlayerSummary[Tally]]) -> None:
        """Replace the accumulated state, e.g. with the result of a merge."""
        self._summaries = dict(summaries)

    def finalize(self, scope: Scope) -> None:
        """Compute derived stats for every tally in ``scope``."""
        for summary in self._summaries.values():
            tally = summary.scoped(scope.postseason).get(scope.season)
            if tally is not None:
                self._profile.finalize(tally)

    def scopes(self) -> list[Scope]:
        found = {
            Scope(season=season, postseason=postseason)
            for summary in self._summaries.values()
            for postseason, season, _ in summary.all_scoped()
        }
        return sorted(found)

    def rebuild_careers(self) -> None:
        """Sum every season and postseason into fresh career aggregates."""
        tally_type = self._profile.tally_type
        for summary in self._summaries.values():
            summary.career_season = tally_type()
            summary.career_postseason = tally_type()
            for season in summary.seasons.values():
                summary.career_season.add(season)
            for postseason in summary.postseasons.values():
                summary.career_postseason.add(postseason)
            self._profile.finalize(summary.career_season)
            self._profile.finalize(summary.career_postseason)

    def finalize_all(self) -> None:
        for scope in self.scopes():
            self.finalize(scope)
        self.rebuild_careers()
        logger.debug("Finalized %d %s summaries", len(self._summaries), self._profile.role)

import logging
from collections.abc import Iterable

from blaseball_stats.domain.player import PlayerRecord
from blaseball_stats.domain.stat_event import Incineration, PlayerSighting
from blaseball_stats.shared.naming import slugify

logger = logging.getLogger(__name__)


class Roster:
    """Identity records for every player of one role seen across all runs.

    Seeded with the persisted roster so debut details survive reprocessing;
    records are only ever added or updated, never removed.
    """

    def __init__(self, position: str, records: Iterable[PlayerRecord] = ()) -> None:
        self._position = position
        self._records: dict[str, PlayerRecord] = {r.id: r for r in records}

    def __len__(self) -> int:
        return len(self._records)

    def get(self, player_id: str) -> PlayerRecord | None:
        return self._records.get(player_id)

    def records(self) -> list[PlayerRecord]:
        return list(self._records.values())

    def observe(self, sighting: PlayerSighting) -> PlayerRecord:
        record = self._records.get(sighting.player_id)
        if record is None:
            record = PlayerRecord(
                id=sighting.player_id,
                name=sighting.name,
                current_team_id=sighting.team_id,
                current_team_name=sighting.team_name,
                debut_day=sighting.day,
                debut_game_id=sighting.game_id,
                debut_season=sighting.scope.season,
                debut_team_id=sighting.team_id,
                debut_team_name=sighting.team_name,
                last_game_day=sighting.day,
                last_game_id=sighting.game_id,
                last_game_season=sighting.scope.season,
                position=self._position,
                slug=slugify(sighting.name),
            )
            self._records[record.id] = record
            logger.debug("New %s player %s (%s)", self._position, record.name, record.id)
            return record

        if sighting.name != record.name:
            logger.info("Player %s renamed from %r to %r", record.id, record.name, sighting.name)
            record.rename(sighting.name)
            record.slug = slugify(sighting.name) or record.slug
        record.current_team_id = sighting.team_id
        record.current_team_name = sighting.team_name
        record.last_game_day = sighting.day
        record.last_game_id = sighting.game_id
        record.last_game_season = sighting.scope.season
        if not record.debut_game_id:
            record.debut_day = sighting.day
            record.debut_game_id = sighting.game_id
            record.debut_season = sighting.scope.season
            record.debut_team_id = sighting.team_id
            record.debut_team_name = sighting.team_name
        return record

    def find_by_name(self, name: str) -> PlayerRecord | None:
        return next((r for r in self._records.values() if r.name == name), None)

    def incinerate(self, incineration: Incineration) -> PlayerRecord | None:
        record = self.find_by_name(incineration.player_name)
        if record is None:
            logger.warning("Unable to locate incinerated player: %s", incineration.player_name)
            return None
        record.is_incinerated = True
        record.incinerated_game_day = incineration.day
        record.incinerated_game_id = incineration.game_id
        record.incinerated_game_season = incineration.season
        logger.info("Player %s incinerated in game %s", record.name, incineration.game_id)
        return record

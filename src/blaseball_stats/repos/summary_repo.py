import logging
from pathlib import Path

from blaseball_stats.domain.tally import PlayerSummary, Tally
from blaseball_stats.repos.json_store import read_json, write_json

logger = logging.getLogger(__name__)


class JsonSummaryRepo:
    """Player id to summary mapping for one role."""

    def __init__(self, path: Path, tally_type: type[Tally]) -> None:
        self._path = path
        self._tally_type = tally_type

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, PlayerSummary[Tally]]:
        data = read_json(self._path)
        if not isinstance(data, dict):
            return {}
        summaries: dict[str, PlayerSummary[Tally]] = {}
        for player_id, raw in data.items():
            if not isinstance(raw, dict):
                logger.warning("Skipping malformed summary for %s in %s", player_id, self._path)
                continue
            summaries[player_id] = PlayerSummary.from_dict({"id": player_id, **raw}, self._tally_type)
        logger.debug("Loaded %d summaries from %s", len(summaries), self._path)
        return summaries

    def save(self, summaries: dict[str, PlayerSummary[Tally]]) -> None:
        write_json(self._path, {player_id: s.to_dict() for player_id, s in summaries.items()})

import logging
from pathlib import Path

from blaseball_stats.domain.player import PlayerRecord
from blaseball_stats.repos.json_store import read_json, write_json

logger = logging.getLogger(__name__)


class JsonRosterRepo:
    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> list[PlayerRecord]:
        data = read_json(self._path)
        if not isinstance(data, list):
            return []
        records = [PlayerRecord.from_dict(row) for row in data if isinstance(row, dict) and row.get("id")]
        logger.debug("Loaded %d roster records from %s", len(records), self._path)
        return records

    def save(self, records: list[PlayerRecord]) -> None:
        write_json(self._path, [r.to_dict() for r in records])

from pathlib import Path
from typing import Any

from blaseball_stats.domain.leaderboard import LeaderEntry, StatCategory
from blaseball_stats.repos.json_store import write_json

type CategoryLeaders = dict[str, dict[str, list[LeaderEntry]]]


def _boards(boards: CategoryLeaders) -> dict[str, Any]:
    return {
        category_type: {category: [e.to_dict() for e in entries] for category, entries in categories.items()}
        for category_type, categories in boards.items()
    }


class JsonLeadersRepo:
    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def save(
        self,
        by_season: dict[int, CategoryLeaders],
        all_time: CategoryLeaders,
        categories: list[StatCategory],
    ) -> None:
        write_json(self._directory / "allTime.json", _boards(all_time))
        write_json(
            self._directory / "bySeason.json",
            {str(season): _boards(boards) for season, boards in sorted(by_season.items())},
        )
        write_json(self._directory / "categories.json", [c.to_dict() for c in categories])

from pathlib import Path

from blaseball_stats.domain.standings import GameResultsBySeason, LeagueStructure, TeamRecord
from blaseball_stats.repos.json_store import read_json, write_json


class JsonStandingsRepo:
    """Standings keyed by season, then division id."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def latest_season(self) -> int | None:
        data = read_json(self._path)
        if not isinstance(data, dict):
            return None
        seasons = [int(s) for s in data if str(s).lstrip("-").isdigit()]
        return max(seasons) if seasons else None

    def save(self, standings: dict[int, dict[str, list[TeamRecord]]]) -> None:
        write_json(
            self._path,
            {
                str(season): {division: [r.to_dict() for r in records] for division, records in divisions.items()}
                for season, divisions in sorted(standings.items())
            },
        )


class JsonGameResultsRepo:
    """Raw game records bucketed by season and day."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> GameResultsBySeason:
        data = read_json(self._path)
        if not isinstance(data, dict):
            return {}
        results: GameResultsBySeason = {}
        for season, days in data.items():
            if not isinstance(days, dict):
                continue
            results[int(season)] = {
                int(day): [g for g in games if isinstance(g, dict)]
                for day, games in days.items()
                if isinstance(games, list)
            }
        return results

    def save(self, results: GameResultsBySeason) -> None:
        write_json(
            self._path,
            {
                str(season): {str(day): games for day, games in sorted(days.items())}
                for season, days in sorted(results.items())
            },
        )


class JsonLeagueStructureRepo:
    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> LeagueStructure | None:
        data = read_json(self._path)
        if not isinstance(data, dict):
            return None
        return LeagueStructure.from_dict(data)

    def save(self, structure: LeagueStructure) -> None:
        write_json(self._path, structure.to_dict())

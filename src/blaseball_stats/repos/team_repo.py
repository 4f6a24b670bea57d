import logging
from pathlib import Path
from typing import Any

from blaseball_stats.repos.json_store import read_json, write_json

logger = logging.getLogger(__name__)


class JsonTeamRepo:
    """Reference team list in, per-team player stats out."""

    def __init__(self, teams_path: Path, team_stats_path: Path) -> None:
        self._teams_path = teams_path
        self._team_stats_path = team_stats_path

    def load_teams(self) -> list[dict[str, Any]]:
        data = read_json(self._teams_path)
        if not isinstance(data, list):
            logger.warning("No reference team list at %s", self._teams_path)
            return []
        return [team for team in data if isinstance(team, dict) and team.get("id")]

    def save_team_stats(self, team_stats: list[dict[str, Any]]) -> None:
        write_json(self._team_stats_path, team_stats)

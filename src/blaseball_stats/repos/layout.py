from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DataLayout:
    """Where each job reads and writes under the data directory."""

    root: Path

    @property
    def batters(self) -> Path:
        return self.root / "batting" / "batters.json"

    @property
    def pitchers(self) -> Path:
        return self.root / "pitching" / "pitchers.json"

    @property
    def batter_roster(self) -> Path:
        return self.root / "players" / "batters.json"

    @property
    def pitcher_roster(self) -> Path:
        return self.root / "players" / "pitchers.json"

    @property
    def players(self) -> Path:
        return self.root / "players" / "players.json"

    @property
    def leaders_dir(self) -> Path:
        return self.root / "leaders"

    @property
    def standings(self) -> Path:
        return self.root / "standings" / "standings.json"

    @property
    def game_results(self) -> Path:
        return self.root / "gameResults.json"

    @property
    def league_structure(self) -> Path:
        return self.root / "leaguesAndDivisions.json"

    @property
    def teams(self) -> Path:
        return self.root / "teams.json"

    @property
    def team_stats(self) -> Path:
        return self.root / "teams" / "teams.json"

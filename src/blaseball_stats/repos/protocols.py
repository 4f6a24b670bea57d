from typing import Any, Protocol

from blaseball_stats.domain.leaderboard import LeaderEntry, StatCategory
from blaseball_stats.domain.player import PlayerRecord
from blaseball_stats.domain.standings import GameResultsBySeason, LeagueStructure, TeamRecord
from blaseball_stats.domain.tally import PlayerSummary, Tally


class SummaryRepo(Protocol):
    def load(self) -> dict[str, PlayerSummary[Tally]]: ...

    def save(self, summaries: dict[str, PlayerSummary[Tally]]) -> None: ...


class RosterRepo(Protocol):
    def load(self) -> list[PlayerRecord]: ...

    def save(self, records: list[PlayerRecord]) -> None: ...


class StandingsRepo(Protocol):
    def latest_season(self) -> int | None: ...

    def save(self, standings: dict[int, dict[str, list[TeamRecord]]]) -> None: ...


class GameResultsRepo(Protocol):
    def load(self) -> GameResultsBySeason: ...

    def save(self, results: GameResultsBySeason) -> None: ...


class LeagueStructureRepo(Protocol):
    def load(self) -> LeagueStructure | None: ...

    def save(self, structure: LeagueStructure) -> None: ...


class LeadersRepo(Protocol):
    def save(
        self,
        by_season: dict[int, dict[str, dict[str, list[LeaderEntry]]]],
        all_time: dict[str, dict[str, list[LeaderEntry]]],
        categories: list[StatCategory],
    ) -> None: ...


class TeamRepo(Protocol):
    def load_teams(self) -> list[dict[str, Any]]: ...

    def save_team_stats(self, team_stats: list[dict[str, Any]]) -> None: ...

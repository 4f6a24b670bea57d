from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import httpx

from blaseball_stats.config import PipelineSettings, create_config, load_settings
from blaseball_stats.domain.errors import ConfigError
from blaseball_stats.domain.result import Err, Ok, Result
from blaseball_stats.domain.tally import BattingTally, PitchingTally
from blaseball_stats.ingest.blaseball_api import GameResultsSource, LeagueStructureSource, ThrottledClient
from blaseball_stats.repos.layout import DataLayout
from blaseball_stats.repos.leaders_repo import JsonLeadersRepo
from blaseball_stats.repos.roster_repo import JsonRosterRepo
from blaseball_stats.repos.standings_repo import JsonGameResultsRepo, JsonLeagueStructureRepo, JsonStandingsRepo
from blaseball_stats.repos.summary_repo import JsonSummaryRepo
from blaseball_stats.repos.team_repo import JsonTeamRepo


def build_settings(overrides: dict[str, object] | None = None) -> Result[PipelineSettings, ConfigError]:
    try:
        return Ok(load_settings(create_config(overrides=overrides)))
    except (KeyError, ValueError) as exc:
        return Err(ConfigError(message=f"invalid configuration: {exc}"))


@dataclass(frozen=True)
class RepoContainer:
    layout: DataLayout
    batting_repo: JsonSummaryRepo
    pitching_repo: JsonSummaryRepo
    batter_roster_repo: JsonRosterRepo
    pitcher_roster_repo: JsonRosterRepo
    players_repo: JsonRosterRepo
    leaders_repo: JsonLeadersRepo
    standings_repo: JsonStandingsRepo
    game_results_repo: JsonGameResultsRepo
    league_repo: JsonLeagueStructureRepo
    team_repo: JsonTeamRepo


def build_repos(settings: PipelineSettings) -> RepoContainer:
    layout = DataLayout(settings.data_dir)
    return RepoContainer(
        layout=layout,
        batting_repo=JsonSummaryRepo(layout.batters, BattingTally),
        pitching_repo=JsonSummaryRepo(layout.pitchers, PitchingTally),
        batter_roster_repo=JsonRosterRepo(layout.batter_roster),
        pitcher_roster_repo=JsonRosterRepo(layout.pitcher_roster),
        players_repo=JsonRosterRepo(layout.players),
        leaders_repo=JsonLeadersRepo(layout.leaders_dir),
        standings_repo=JsonStandingsRepo(layout.standings),
        game_results_repo=JsonGameResultsRepo(layout.game_results),
        league_repo=JsonLeagueStructureRepo(layout.league_structure),
        team_repo=JsonTeamRepo(layout.teams, layout.team_stats),
    )


@dataclass(frozen=True)
class ApiContext:
    league_source: LeagueStructureSource
    game_source: GameResultsSource


@contextmanager
def build_api_context(settings: PipelineSettings) -> Iterator[ApiContext]:
    """Composition-root context manager: opens one HTTP client shared by both sources, closes it on exit."""
    http_client = httpx.Client(timeout=httpx.Timeout(settings.timeout, connect=10.0))
    try:
        client = ThrottledClient(http_client, min_interval=settings.min_request_interval)
        yield ApiContext(
            league_source=LeagueStructureSource(client, settings.blaseball_url, settings.league_id),
            game_source=GameResultsSource(client, settings.chronicler_url),
        )
    finally:
        http_client.close()

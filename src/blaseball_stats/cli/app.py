from pathlib import Path
from typing import Annotated

import typer

from blaseball_stats.cli._logging import configure_logging
from blaseball_stats.cli._output import (
    print_count_report,
    print_error,
    print_leaders_report,
    print_standings_report,
    print_stat_report,
)
from blaseball_stats.cli.factory import RepoContainer, build_api_context, build_repos, build_settings
from blaseball_stats.config import PipelineSettings
from blaseball_stats.domain.result import Err, Ok
from blaseball_stats.domain.stat_event import Role
from blaseball_stats.ingest.feed_source import FeedSource
from blaseball_stats.services.jobs import (
    reprocess_floor,
    run_leaders_job,
    run_players_job,
    run_standings_job,
    run_stat_job,
    run_team_stats_job,
)

app = typer.Typer(name="blaseball-stats", help="Blaseball stats pipeline: player stats, leaders and standings")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log warnings and errors")] = False,
) -> None:
    """Blaseball stats pipeline: player stats, leaders and standings."""
    configure_logging(verbose=verbose, quiet=quiet)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_DataDirOpt = Annotated[Path | None, typer.Option("--data-dir", help="Directory holding the JSON data files")]
_FeedOpt = Annotated[Path | None, typer.Option("--feed", help="Newline-delimited game update feed")]
_FromSeasonOpt = Annotated[
    int | None,
    typer.Option("--from-season", help="Reprocess from this season (default: latest season with standings)"),
]


def _load_settings(
    data_dir: Path | None = None,
    feed: Path | None = None,
    from_season: int | None = None,
) -> PipelineSettings:
    pipeline: dict[str, object] = {}
    if data_dir is not None:
        pipeline["data_dir"] = str(data_dir)
    if feed is not None:
        pipeline["feed_path"] = str(feed)
    if from_season is not None:
        pipeline["from_season"] = from_season
    match build_settings({"pipeline": pipeline} if pipeline else None):
        case Ok(settings):
            return settings
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)


def _run_stats(role: Role, settings: PipelineSettings, repos: RepoContainer) -> None:
    if not settings.feed_path.exists():
        print_error(f"feed not found: {settings.feed_path}")
        raise typer.Exit(code=1)
    if role is Role.BATTING:
        summary_repo, roster_repo = repos.batting_repo, repos.batter_roster_repo
    else:
        summary_repo, roster_repo = repos.pitching_repo, repos.pitcher_roster_repo
    match run_stat_job(
        role,
        FeedSource(settings.feed_path),
        summary_repo,
        roster_repo,
        from_season=reprocess_floor(settings.from_season, repos.standings_repo),
    ):
        case Ok(report):
            print_stat_report(report)
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)


@app.command()
def stats(data_dir: _DataDirOpt = None, feed: _FeedOpt = None, from_season: _FromSeasonOpt = None) -> None:
    """Reduce the game feed into batting and pitching stats."""
    settings = _load_settings(data_dir, feed, from_season)
    repos = build_repos(settings)
    _run_stats(Role.BATTING, settings, repos)
    _run_stats(Role.PITCHING, settings, repos)


@app.command()
def batting(data_dir: _DataDirOpt = None, feed: _FeedOpt = None, from_season: _FromSeasonOpt = None) -> None:
    """Reduce the game feed into batting stats and the batter roster."""
    settings = _load_settings(data_dir, feed, from_season)
    _run_stats(Role.BATTING, settings, build_repos(settings))


@app.command()
def pitching(data_dir: _DataDirOpt = None, feed: _FeedOpt = None, from_season: _FromSeasonOpt = None) -> None:
    """Reduce the game feed into pitching stats and the pitcher roster."""
    settings = _load_settings(data_dir, feed, from_season)
    _run_stats(Role.PITCHING, settings, build_repos(settings))


@app.command()
def leaders(data_dir: _DataDirOpt = None) -> None:
    """Rank players into per-season and all-time stat leaders."""
    settings = _load_settings(data_dir)
    repos = build_repos(settings)
    match run_leaders_job(
        repos.batting_repo,
        repos.pitching_repo,
        repos.leaders_repo,
        max_leaders=settings.max_leaders_per_category,
        team_games_per_season=settings.team_games_per_season,
    ):
        case Ok(report):
            print_leaders_report(report)
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)


@app.command()
def standings(
    data_dir: _DataDirOpt = None,
    offline: Annotated[bool, typer.Option("--offline", help="Use cached league structure and game results")] = False,
) -> None:
    """Fetch new game results and rebuild standings for every season."""
    settings = _load_settings(data_dir)
    repos = build_repos(settings)
    with build_api_context(settings) as api:
        result = run_standings_job(
            None if offline else api.league_source,
            None if offline else api.game_source,
            repos.league_repo,
            repos.game_results_repo,
            repos.standings_repo,
            games_in_season=settings.games_in_season,
            playoff_spots=settings.playoff_spots,
        )
    match result:
        case Ok(report):
            print_standings_report(report)
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)


@app.command("team-stats")
def team_stats(data_dir: _DataDirOpt = None) -> None:
    """Group player stats by the team they were recorded with."""
    settings = _load_settings(data_dir)
    repos = build_repos(settings)
    match run_team_stats_job(repos.team_repo, repos.batting_repo, repos.pitching_repo):
        case Ok(report):
            print_count_report("team stat entries", report)
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)


@app.command()
def players(data_dir: _DataDirOpt = None) -> None:
    """Combine the batter and pitcher rosters into one player directory."""
    settings = _load_settings(data_dir)
    repos = build_repos(settings)
    match run_players_job(repos.pitcher_roster_repo, repos.batter_roster_repo, repos.players_repo):
        case Ok(report):
            print_count_report("players", report)
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)

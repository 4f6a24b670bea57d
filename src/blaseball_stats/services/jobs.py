"""Batch jobs that read persisted JSON, transform it and write it back.

Every job computes its whole output before writing anything, so a failed
run leaves the previous output in place. Failures come back as ``Err``
values rather than exceptions.
"""

import logging
from dataclasses import dataclass, field

from blaseball_stats.domain.errors import FetchError, IngestError, PersistenceError, PipelineError
from blaseball_stats.domain.result import Err, Ok, Result
from blaseball_stats.domain.standings import GameResultsBySeason, LeagueStructure
from blaseball_stats.domain.stat_event import Role
from blaseball_stats.ingest.protocols import GameSource, LeagueSource, TickSource
from blaseball_stats.reducer.accumulator import StatAccumulator
from blaseball_stats.reducer.engine import EventReducer, ReduceReport
from blaseball_stats.reducer.merge import merge_summaries
from blaseball_stats.reducer.roles import profile_for
from blaseball_stats.reducer.roster import Roster
from blaseball_stats.repos.protocols import (
    GameResultsRepo,
    LeadersRepo,
    LeagueStructureRepo,
    RosterRepo,
    StandingsRepo,
    SummaryRepo,
    TeamRepo,
)
from blaseball_stats.services.game_results import fetch_game_results, latest_recorded_season, merge_game_results
from blaseball_stats.services.leaderboards import (
    MAX_LEADERS_PER_CATEGORY,
    STAT_CATEGORIES,
    TEAM_GAMES_PER_SEASON,
    generate_leaders,
)
from blaseball_stats.services.league_structure import resolve_league_structure
from blaseball_stats.services.player_directory import combine_players
from blaseball_stats.services.standings import GAMES_IN_SEASON, PLAYOFF_SPOTS, generate_standings
from blaseball_stats.services.team_stats import build_team_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatJobReport:
    role: Role
    from_season: int
    players: int
    roster_size: int
    reduce: ReduceReport = field(default_factory=ReduceReport)


@dataclass(frozen=True)
class LeadersJobReport:
    seasons: int
    categories: int


@dataclass(frozen=True)
class StandingsJobReport:
    seasons: int
    teams: int
    seasons_fetched: int
    structure_refreshed: bool


@dataclass(frozen=True)
class CountReport:
    written: int


def reprocess_floor(from_season: int | None, standings_repo: StandingsRepo) -> int:
    """An explicit season wins; otherwise the latest season with standings, or 0."""
    if from_season is not None:
        return from_season
    latest = standings_repo.latest_season()
    return latest if latest is not None else 0


def run_stat_job(
    role: Role,
    feed: TickSource,
    summary_repo: SummaryRepo,
    roster_repo: RosterRepo,
    *,
    from_season: int = 0,
) -> Result[StatJobReport, PipelineError]:
    profile = profile_for(role)
    persisted = summary_repo.load()
    roster = Roster(profile.position, roster_repo.load())
    accumulator = StatAccumulator(profile)
    reducer = EventReducer(profile, accumulator, roster, from_season=from_season)
    logger.info("Reducing %s stats from %s (from season %d)", role, feed.source_detail, from_season)

    try:
        report = reducer.run(feed.ticks())
    except Exception as exc:
        logger.error("Reducing %s stats failed after %d ticks: %s", role, reducer.report.ticks_read, exc)
        return Err(
            IngestError(
                message=str(exc),
                source_detail=feed.source_detail,
                ticks_read=reducer.report.ticks_read,
            )
        )

    accumulator.load(merge_summaries(persisted, accumulator.summaries, from_season))
    accumulator.finalize_all()

    try:
        summary_repo.save(accumulator.summaries)
        roster_repo.save(roster.records())
    except OSError as exc:
        logger.error("Saving %s stats failed: %s", role, exc)
        return Err(PersistenceError(message=str(exc), path=str(exc.filename or "")))

    return Ok(
        StatJobReport(
            role=role,
            from_season=from_season,
            players=len(accumulator),
            roster_size=len(roster),
            reduce=report,
        )
    )


def run_leaders_job(
    batting_repo: SummaryRepo,
    pitching_repo: SummaryRepo,
    leaders_repo: LeadersRepo,
    *,
    max_leaders: int = MAX_LEADERS_PER_CATEGORY,
    team_games_per_season: int = TEAM_GAMES_PER_SEASON,
) -> Result[LeadersJobReport, PipelineError]:
    boards = generate_leaders(
        batting_repo.load(),
        pitching_repo.load(),
        STAT_CATEGORIES,
        max_leaders=max_leaders,
        team_games_per_season=team_games_per_season,
    )
    try:
        leaders_repo.save(boards.by_season, boards.all_time, list(STAT_CATEGORIES))
    except OSError as exc:
        logger.error("Saving leaders failed: %s", exc)
        return Err(PersistenceError(message=str(exc), path=str(exc.filename or "")))
    return Ok(LeadersJobReport(seasons=len(boards.by_season), categories=len(STAT_CATEGORIES)))


def run_standings_job(
    league_source: LeagueSource | None,
    game_source: GameSource | None,
    league_repo: LeagueStructureRepo,
    game_repo: GameResultsRepo,
    standings_repo: StandingsRepo,
    *,
    games_in_season: int = GAMES_IN_SEASON,
    playoff_spots: int = PLAYOFF_SPOTS,
) -> Result[StandingsJobReport, PipelineError]:
    """Refresh league structure and game results, then rebuild standings.

    Passing ``None`` for a source skips that fetch and uses what is on disk.
    """
    cached = league_repo.load()
    existing = game_repo.load()
    structure: LeagueStructure | None = cached
    refreshed = False
    fetched: GameResultsBySeason = {}
    detail = ""

    try:
        if league_source is not None:
            detail = league_source.source_detail
            structure, refreshed = resolve_league_structure(league_source, cached)
        if game_source is not None:
            detail = game_source.source_detail
            fetched = fetch_game_results(game_source, latest_recorded_season(existing))
    except Exception as exc:
        logger.error("Fetching standings inputs failed: %s", exc)
        return Err(FetchError(message=str(exc), url=detail))

    if structure is None:
        return Err(FetchError(message="No league structure available; fetch it before building standings"))

    results = merge_game_results(existing, fetched)
    standings = generate_standings(
        results,
        structure,
        games_in_season=games_in_season,
        playoff_spots=playoff_spots,
    )

    try:
        if refreshed:
            league_repo.save(structure)
        if fetched:
            game_repo.save(results)
        standings_repo.save(standings)
    except OSError as exc:
        logger.error("Saving standings failed: %s", exc)
        return Err(PersistenceError(message=str(exc), path=str(exc.filename or "")))

    teams = sum(len(records) for divisions in standings.values() for records in divisions.values())
    return Ok(
        StandingsJobReport(
            seasons=len(standings),
            teams=teams,
            seasons_fetched=len(fetched),
            structure_refreshed=refreshed,
        )
    )


def run_team_stats_job(
    team_repo: TeamRepo,
    batting_repo: SummaryRepo,
    pitching_repo: SummaryRepo,
) -> Result[CountReport, PipelineError]:
    team_stats = build_team_stats(team_repo.load_teams(), batting_repo.load(), pitching_repo.load())
    try:
        team_repo.save_team_stats(team_stats)
    except OSError as exc:
        logger.error("Saving team player stats failed: %s", exc)
        return Err(PersistenceError(message=str(exc), path=str(exc.filename or "")))
    return Ok(CountReport(written=len(team_stats)))


def run_players_job(
    pitcher_roster_repo: RosterRepo,
    batter_roster_repo: RosterRepo,
    players_repo: RosterRepo,
) -> Result[CountReport, PipelineError]:
    players = combine_players(pitcher_roster_repo.load(), batter_roster_repo.load())
    try:
        players_repo.save(players)
    except OSError as exc:
        logger.error("Saving player directory failed: %s", exc)
        return Err(PersistenceError(message=str(exc), path=str(exc.filename or "")))
    return Ok(CountReport(written=len(players)))

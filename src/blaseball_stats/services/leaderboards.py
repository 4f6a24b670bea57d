import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from blaseball_stats.domain.leaderboard import LeaderEntry, SortDirection, StatCategory
from blaseball_stats.domain.stat_event import Role
from blaseball_stats.domain.tally import PlayerSummary, Tally

logger = logging.getLogger(__name__)

MAX_LEADERS_PER_CATEGORY = 10
TEAM_GAMES_PER_SEASON = 100

type CategoryLeaders = dict[str, dict[str, list[LeaderEntry]]]


def _batting(abbreviation: str, id: str, name: str, sort: str = "desc", **minimums: float) -> StatCategory:
    return StatCategory(abbreviation, id, name, SortDirection(sort), Role.BATTING, **minimums)


def _pitching(abbreviation: str, id: str, name: str, sort: str = "desc", **minimums: float) -> StatCategory:
    return StatCategory(abbreviation, id, name, SortDirection(sort), Role.PITCHING, **minimums)


_PA = {"minimum_plate_appearances_per_team_game": 3}
_IP = {"minimum_innings_per_team_game": 1}

STAT_CATEGORIES: tuple[StatCategory, ...] = (
    _batting("AVG", "battingAverage", "Batting Average", **_PA),
    _batting("CS", "caughtStealing", "Caught Stealing"),
    _batting("2B", "doublesHit", "Doubles Hit"),
    _batting("GDP", "groundIntoDoublePlays", "Ground Into Double Plays"),
    _batting("H", "hits", "Hits"),
    _batting("HR", "homeRunsHit", "Home Runs Hit"),
    _batting("OBP", "onBasePercentage", "On-base Percentage", **_PA),
    _batting("RBI", "runsBattedIn", "Runs Batted In"),
    _batting("SLG", "sluggingPercentage", "Slugging Percentage", **_PA),
    _batting("SB", "stolenBases", "Stolen Bases"),
    _batting("SO", "strikeouts", "Strikeouts"),
    _batting("3B", "triplesHit", "Triples Hit"),
    _pitching("BB", "basesOnBalls", "Bases on Balls"),
    _pitching("BB9", "basesOnBallsPerNine", "Walks Per 9 Innings", "asc", **_IP),
    _pitching("ER", "earnedRuns", "Earned Runs"),
    _pitching("ERA", "earnedRunAverage", "Earned Run Average", "asc", **_IP),
    _pitching("H", "hitsAllowed", "Hits Allowed"),
    _pitching("H9", "hitsAllowedPerNine", "Hits Allowed Per 9 Innings", "asc", **_IP),
    _pitching("HR", "homeRuns", "Home Runs Allowed"),
    _pitching("HR9", "homeRunsPerNine", "Home Runs Allowed Per 9 Innings", "asc", **_IP),
    _pitching("IP", "inningsPitched", "Innings Pitched"),
    _pitching("L", "losses", "Losses"),
    _pitching("QS", "qualityStarts", "Quality Starts"),
    _pitching("SHO", "shutouts", "Shutouts"),
    _pitching("SO", "strikeouts", "Strikeouts"),
    _pitching("SO/BB", "strikeoutToWalkRatio", "Strikeout-to-Walk Ratio", **_IP),
    _pitching("SO9", "strikeoutsPerNine", "Strikeouts Per 9 Innings", **_IP),
    _pitching("SO%", "strikeoutRate", "Strikeout Percentage", **_IP),
    _pitching("WHIP", "walksAndHitsPerInningPitched", "Walks and Hits Per Inning Pitched", "asc", **_IP),
    _pitching("BB%", "walkRate", "Walk Percentage", "asc", **_IP),
    _pitching("W-L%", "winningPercentage", "Winning Percentage", **_IP),
    _pitching("W", "wins", "Wins"),
)


@dataclass
class Leaderboards:
    by_season: dict[int, CategoryLeaders] = field(default_factory=dict)
    all_time: CategoryLeaders = field(default_factory=dict)


def qualifies(category: StatCategory, tally: Tally, team_games: int) -> bool:
    """Whether a tally meets the category's per-team-game volume threshold."""
    if category.minimum_innings_per_team_game:
        innings = getattr(tally, "innings_pitched", 0)
        if innings < team_games * category.minimum_innings_per_team_game:
            return False
    if category.minimum_plate_appearances_per_team_game:
        plate_appearances = getattr(tally, "plate_appearances", 0)
        if plate_appearances < team_games * category.minimum_plate_appearances_per_team_game:
            return False
    return True


def update_category_leaders(
    leaders: list[LeaderEntry],
    category: StatCategory,
    candidate: LeaderEntry,
    tally: Tally,
    *,
    team_games: int = TEAM_GAMES_PER_SEASON,
    max_leaders: int = MAX_LEADERS_PER_CATEGORY,
) -> list[LeaderEntry]:
    """Return a new leader list with *candidate* placed by the category's sort.

    Disqualified candidates leave the list unchanged. A candidate only moves
    ahead of an incumbent it strictly beats, so ties keep the first-seen entry
    in front.
    """
    if not qualifies(category, tally, team_games):
        return leaders
    for index, incumbent in enumerate(leaders):
        if category.beats(candidate.value, incumbent.value):
            ranked = [*leaders[:index], candidate, *leaders[index:]]
            break
    else:
        ranked = [*leaders, candidate]
    return ranked[:max_leaders]


def infer_team_games(summaries: Iterable[PlayerSummary[Tally]], season: int) -> int:
    """Games played in a season, taken as the most appearances by any player."""
    most = 0
    for summary in summaries:
        tally = summary.seasons.get(season)
        if tally is not None:
            most = max(most, getattr(tally, "appearances", 0))
    return most


def _entry(summary: PlayerSummary[Tally], tally: Tally, category: StatCategory, team_tally: Tally) -> LeaderEntry:
    return LeaderEntry(
        player_id=summary.id,
        player_name=summary.name,
        player_slug=summary.slug,
        team=team_tally.team,
        team_name=team_tally.team_name,
        value=getattr(tally, category.attribute),
    )


def _latest_tally(summary: PlayerSummary[Tally]) -> Tally:
    if summary.seasons:
        return summary.seasons[max(summary.seasons)]
    return summary.career_season


def generate_leaders(
    batters: Mapping[str, PlayerSummary[Tally]],
    pitchers: Mapping[str, PlayerSummary[Tally]],
    categories: Iterable[StatCategory] = STAT_CATEGORIES,
    *,
    max_leaders: int = MAX_LEADERS_PER_CATEGORY,
    team_games_per_season: int = TEAM_GAMES_PER_SEASON,
) -> Leaderboards:
    """Rank every player's regular seasons and career totals per category.

    Completed seasons qualify players against the inferred number of games
    played; the most recent season and career boards use
    ``team_games_per_season``.
    """
    groups: dict[Role, Mapping[str, PlayerSummary[Tally]]] = {Role.BATTING: batters, Role.PITCHING: pitchers}
    everyone = [*batters.values(), *pitchers.values()]
    seasons = sorted({season for summary in everyone for season in summary.seasons})
    latest = seasons[-1] if seasons else None
    team_games: dict[int, int] = {}
    for season in seasons:
        inferred = infer_team_games(everyone, season)
        team_games[season] = team_games_per_season if season == latest or inferred == 0 else inferred
    logger.debug("Team games per season: %s", team_games)

    boards = Leaderboards()
    for category in categories:
        category_type = str(category.type)
        all_time = boards.all_time.setdefault(category_type, {}).setdefault(category.id, [])
        for summary in groups[category.type].values():
            all_time = update_category_leaders(
                all_time,
                category,
                _entry(summary, summary.career_season, category, _latest_tally(summary)),
                summary.career_season,
                team_games=team_games_per_season,
                max_leaders=max_leaders,
            )
            for season, tally in summary.seasons.items():
                season_boards = boards.by_season.setdefault(season, {}).setdefault(category_type, {})
                season_boards[category.id] = update_category_leaders(
                    season_boards.get(category.id, []),
                    category,
                    _entry(summary, tally, category, tally),
                    tally,
                    team_games=team_games[season],
                    max_leaders=max_leaders,
                )
        boards.all_time[category_type][category.id] = all_time
    boards.by_season = dict(sorted(boards.by_season.items()))
    return boards

import logging
import time
from collections.abc import Callable

from blaseball_stats.domain.standings import LeagueStructure
from blaseball_stats.ingest.protocols import LeagueSource

logger = logging.getLogger(__name__)

ONE_DAY_MS = 24 * 60 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


def is_fresh(cached: LeagueStructure, current_season: int, now_ms: int) -> bool:
    """A cache is reusable when fetched within a day and already holding the current season."""
    if now_ms - cached.last_updated_at > ONE_DAY_MS:
        logger.info("League structure cache is older than a day")
        return False
    return cached.latest_season == current_season


def resolve_league_structure(
    source: LeagueSource,
    cached: LeagueStructure | None,
    *,
    clock: Callable[[], int] = _now_ms,
) -> tuple[LeagueStructure, bool]:
    """Return the league structure and whether it was refetched.

    Earlier seasons are carried over from the cache; only the current
    season is fetched.
    """
    current_season = source.current_season()
    now = clock()
    if cached is not None and is_fresh(cached, current_season, now):
        logger.debug("Reusing cached league structure for season %d", current_season)
        return cached, False

    logger.info("Fetching league structure for season %d from %s", current_season, source.source_detail)
    fetched = source.fetch()
    seasons = dict(cached.seasons) if cached is not None else {}
    seasons[current_season] = fetched
    return LeagueStructure(seasons=dict(sorted(seasons.items())), last_updated_at=now), True

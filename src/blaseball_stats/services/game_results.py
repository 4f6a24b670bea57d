import logging
from collections.abc import Mapping
from typing import Any

from blaseball_stats.domain.standings import GameResultsBySeason
from blaseball_stats.ingest.protocols import GameSource

logger = logging.getLogger(__name__)


def latest_recorded_season(results: Mapping[int, Any]) -> int:
    return max(results) if results else 0


def fetch_game_results(source: GameSource, starting_season: int) -> GameResultsBySeason:
    """Fetch season after season, starting at *starting_season*, until one comes back empty."""
    fetched: GameResultsBySeason = {}
    season = starting_season
    games = source.fetch(season)
    while games:
        logger.info("Fetched game results for season %d", season)
        days = fetched.setdefault(season, {})
        for game in games:
            day = game.get("day")
            if not isinstance(day, int):
                logger.warning("Skipping game %s without a day", game.get("id") or game.get("_id"))
                continue
            days.setdefault(day, []).append(game)
        season += 1
        games = source.fetch(season)
    return fetched


def merge_game_results(existing: GameResultsBySeason, fetched: GameResultsBySeason) -> GameResultsBySeason:
    """Overlay fetched days onto existing ones; a fetched day replaces the stored day wholesale."""
    merged: GameResultsBySeason = {season: dict(days) for season, days in existing.items()}
    for season, days in fetched.items():
        merged.setdefault(season, {}).update(days)
    return {season: dict(sorted(days.items())) for season, days in sorted(merged.items())}

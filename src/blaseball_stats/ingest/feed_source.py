import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from blaseball_stats.ingest.normalizer import content_fingerprint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tick:
    """One line of the game feed: every game's state at a moment in time."""

    line_number: int
    season: int | None
    games: tuple[Any, ...]
    fingerprint: str


def _sim_season(update: dict[str, Any]) -> int | None:
    sim = update.get("sim")
    if not isinstance(sim, dict):
        return None
    season = sim.get("season")
    if isinstance(season, int) and not isinstance(season, bool):
        return season
    return None


def parse_ticks(lines: Iterable[str]) -> Iterator[Tick]:
    """Parse newline-delimited feed updates into ticks.

    A line holds either an update object with a ``schedule`` array or a bare
    array of game records. Blank and unparseable lines are skipped.
    """
    for line_number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue
        try:
            update = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Skipping malformed feed line %d: %s", line_number, exc)
            continue

        season: int | None = None
        if isinstance(update, dict):
            season = _sim_season(update)
            schedule = update.get("schedule")
        else:
            schedule = update

        if not isinstance(schedule, list):
            logger.debug("Feed line %d has no schedule", line_number)
            continue

        yield Tick(
            line_number=line_number,
            season=season,
            games=tuple(schedule),
            fingerprint=content_fingerprint(schedule),
        )


class FeedSource:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def source_type(self) -> str:
        return "ndjson"

    @property
    def source_detail(self) -> str:
        return str(self._path)

    def ticks(self) -> Iterator[Tick]:
        logger.debug("Streaming feed %s", self._path)
        with open(self._path, encoding="utf-8") as f:
            yield from parse_ticks(f)

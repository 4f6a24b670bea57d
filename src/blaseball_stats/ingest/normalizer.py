import hashlib
import json
import logging
from typing import Any

from blaseball_stats.domain.snapshot import GameSnapshot

logger = logging.getLogger(__name__)


def content_fingerprint(value: Any) -> str:
    """Stable digest of a JSON value, insensitive to object key order."""
    canonical = json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    return default


def _optional_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _number(value: Any, default: float | None = 0) -> float | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return default


def _str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _int_tuple(value: Any) -> tuple[int, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, int) and not isinstance(v, bool))


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value if v is not None)


def _runner_tuple(value: Any) -> tuple[str | None, ...]:
    """Runner ids in base order; an empty slot stays None so positions line up with ``basesOccupied``."""
    if not isinstance(value, list):
        return ()
    return tuple(None if v is None or v == "" else str(v) for v in value)


def normalize_snapshot(raw: Any) -> GameSnapshot | None:
    """Canonicalize one raw game record, or return None when it should be skipped.

    Legacy archives carry the game id as ``_id``; it is copied into ``id``
    when ``id`` is missing. Games that have not started are skipped, as are
    records that are not objects or carry no id at all.
    """
    if not isinstance(raw, dict):
        logger.warning("Skipping malformed game record of type %s", type(raw).__name__)
        return None
    if "id" not in raw and "_id" in raw:
        raw = {**raw, "id": raw["_id"]}
    if not raw.get("gameStart"):
        return None
    game_id = _str(raw.get("id"))
    if game_id is None:
        logger.warning("Skipping game record without an id")
        return None

    return GameSnapshot(
        id=game_id,
        fingerprint=content_fingerprint(raw),
        season=_int(raw.get("season")),
        day=_int(raw.get("day")),
        is_postseason=bool(raw.get("isPostseason")),
        inning=_int(raw.get("inning")),
        top_of_inning=bool(raw.get("topOfInning", True)),
        home_team=_str(raw.get("homeTeam")),
        away_team=_str(raw.get("awayTeam")),
        home_team_name=_str(raw.get("homeTeamName")),
        away_team_name=_str(raw.get("awayTeamName")),
        home_team_nickname=_str(raw.get("homeTeamNickname")),
        away_team_nickname=_str(raw.get("awayTeamNickname")),
        home_pitcher=_str(raw.get("homePitcher")),
        away_pitcher=_str(raw.get("awayPitcher")),
        home_pitcher_name=_str(raw.get("homePitcherName")),
        away_pitcher_name=_str(raw.get("awayPitcherName")),
        home_batter=_str(raw.get("homeBatter")),
        away_batter=_str(raw.get("awayBatter")),
        home_batter_name=_str(raw.get("homeBatterName")),
        away_batter_name=_str(raw.get("awayBatterName")),
        home_score=_number(raw.get("homeScore")) or 0,
        away_score=_number(raw.get("awayScore")) or 0,
        half_inning_score=_number(raw.get("halfInningScore"), None),
        last_update=str(raw.get("lastUpdate") or ""),
        bases_occupied=_int_tuple(raw.get("basesOccupied")),
        base_runners=_runner_tuple(raw.get("baseRunners")),
        game_start=True,
        game_complete=bool(raw.get("gameComplete")),
        weather=_optional_int(raw.get("weather")),
        outcomes=_str_tuple(raw.get("outcomes")),
        shame=bool(raw.get("shame")),
    )

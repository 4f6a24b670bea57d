from typing import Any

from blaseball_stats.domain.tally import BattingTally, PitchingTally, PlayerSummary, Tally
from blaseball_stats.ingest.feed_source import Tick
from blaseball_stats.ingest.normalizer import content_fingerprint


def game(**overrides: Any) -> dict[str, Any]:
    """Build a raw game record as it appears in the feed.

    Defaults describe a started, incomplete regular-season game in season 6
    with the away team batting.
    """
    record: dict[str, Any] = {
        "id": "G1",
        "season": 6,
        "day": 10,
        "isPostseason": False,
        "inning": 0,
        "topOfInning": True,
        "homeTeam": "T-HOME",
        "awayTeam": "T-AWAY",
        "homeTeamName": "Home Team",
        "awayTeamName": "Away Team",
        "homeTeamNickname": "Homers",
        "awayTeamNickname": "Visitors",
        "homePitcher": None,
        "awayPitcher": None,
        "homePitcherName": None,
        "awayPitcherName": None,
        "homeBatter": None,
        "awayBatter": None,
        "homeBatterName": None,
        "awayBatterName": None,
        "homeScore": 0,
        "awayScore": 0,
        "halfInningScore": 0,
        "lastUpdate": "",
        "basesOccupied": [],
        "baseRunners": [],
        "gameStart": True,
        "gameComplete": False,
        "weather": 1,
        "outcomes": [],
        "shame": False,
    }
    record.update(overrides)
    return record


def tick(*games: dict[str, Any], season: int | None = 6, line_number: int = 1) -> Tick:
    schedule = list(games)
    return Tick(
        line_number=line_number,
        season=season,
        games=tuple(schedule),
        fingerprint=content_fingerprint(schedule),
    )


def batting_summary(
    player_id: str,
    seasons: dict[int, BattingTally] | None = None,
    *,
    name: str | None = None,
    postseasons: dict[int, BattingTally] | None = None,
) -> PlayerSummary[Tally]:
    return PlayerSummary(
        id=player_id,
        tally_type=BattingTally,
        name=name or player_id,
        slug=(name or player_id).lower(),
        seasons=dict(seasons or {}),
        postseasons=dict(postseasons or {}),
    )


def pitching_summary(
    player_id: str,
    seasons: dict[int, PitchingTally] | None = None,
    *,
    name: str | None = None,
) -> PlayerSummary[Tally]:
    return PlayerSummary(
        id=player_id,
        tally_type=PitchingTally,
        name=name or player_id,
        slug=(name or player_id).lower(),
        seasons=dict(seasons or {}),
    )


def game_result(**overrides: Any) -> dict[str, Any]:
    """Raw completed game record from the results archive."""
    record: dict[str, Any] = {
        "id": "R1",
        "season": 6,
        "day": 1,
        "homeTeam": "A",
        "awayTeam": "B",
        "homeTeamName": "Team A",
        "awayTeamName": "Team B",
        "homeTeamNickname": "Alphas",
        "awayTeamNickname": "Betas",
        "homeScore": 5,
        "awayScore": 3,
        "inning": 8,
        "isPostseason": False,
        "gameComplete": True,
        "shame": False,
        "weather": 1,
        "outcomes": [],
    }
    record.update(overrides)
    return record

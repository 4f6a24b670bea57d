import logging
import threading
import time
from collections.abc import Callable
from typing import Any

import httpx

from blaseball_stats.domain.standings import Division, SeasonStructure, Subleague
from blaseball_stats.ingest._retry import default_http_retry

logger = logging.getLogger(__name__)

DEFAULT_BLASEBALL_URL = "https://www.blaseball.com/database"
DEFAULT_CHRONICLER_URL = "https://api.sibr.dev/chronicler/v1"
ILB_LEAGUE_ID = "d8545021-e9fc-48a3-af74-48685950a183"

_DEFAULT_RETRY = default_http_retry("blaseball API request")


class ThrottledClient:
    """Serializes GET requests and spaces them at least *min_interval* seconds apart."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        min_interval: float = 0.25,
        timeout: float = 60.0,
        retry: Callable[[Callable[..., Any]], Callable[..., Any]] = _DEFAULT_RETRY,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout, connect=10.0))
        self._min_interval = min_interval
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()
        self._last_request_time: float | None = None
        self._get_with_retry = retry(self._do_get)

    def _polite_delay(self) -> None:
        if self._last_request_time is not None:
            elapsed = self._clock() - self._last_request_time
            if elapsed < self._min_interval:
                self._sleep(self._min_interval - elapsed)
        self._last_request_time = self._clock()

    def _do_get(self, url: str, params: dict[str, Any] | None) -> Any:
        with self._lock:
            self._polite_delay()
            logger.debug("GET %s %s", url, params or "")
            response = self._client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        return self._get_with_retry(url, params)


class LeagueStructureSource:
    """Reads the current season's subleagues and divisions from the game's database API."""

    def __init__(
        self,
        client: ThrottledClient,
        base_url: str = DEFAULT_BLASEBALL_URL,
        league_id: str = ILB_LEAGUE_ID,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._league_id = league_id

    @property
    def source_type(self) -> str:
        return "blaseball_api"

    @property
    def source_detail(self) -> str:
        return f"league/{self._league_id}"

    def current_season(self) -> int:
        data = self._client.get_json(f"{self._base_url}/simulationData")
        return int(data["season"])

    def fetch(self) -> SeasonStructure:
        league = self._client.get_json(f"{self._base_url}/league", {"id": self._league_id})
        subleagues: list[Subleague] = []
        divisions: list[Division] = []

        for subleague_id in league.get("subleagues", []):
            subleague = self._client.get_json(f"{self._base_url}/subleague", {"id": subleague_id})
            subleague_teams: list[str] = []
            for division_id in subleague.get("divisions", []):
                division = self._client.get_json(f"{self._base_url}/division", {"id": division_id})
                teams = tuple(division.get("teams", []))
                subleague_teams.extend(teams)
                divisions.append(
                    Division(id=division["id"], name=division.get("name"), subleague=subleague["id"], teams=teams)
                )
            subleagues.append(
                Subleague(
                    id=subleague["id"],
                    name=subleague.get("name"),
                    divisions=tuple(subleague.get("divisions", [])),
                    teams=tuple(subleague_teams),
                )
            )

        logger.info("Fetched %d subleagues and %d divisions", len(subleagues), len(divisions))
        return SeasonStructure(subleagues=tuple(subleagues), divisions=tuple(divisions))


class GameResultsSource:
    """Completed game records for one season from the Chronicler archive."""

    def __init__(self, client: ThrottledClient, base_url: str = DEFAULT_CHRONICLER_URL) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    @property
    def source_type(self) -> str:
        return "chronicler"

    @property
    def source_detail(self) -> str:
        return f"{self._base_url}/games"

    def fetch(self, season: int) -> list[dict[str, Any]]:
        payload = self._client.get_json(f"{self._base_url}/games", {"season": season})
        entries = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(entries, list):
            return []
        games = [entry["data"] for entry in entries if isinstance(entry, dict) and isinstance(entry.get("data"), dict)]
        logger.debug("Chronicler returned %d games for season %d", len(games), season)
        return games

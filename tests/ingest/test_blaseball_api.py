from typing import Any

import httpx
import pytest
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_none

from blaseball_stats.ingest.blaseball_api import GameResultsSource, LeagueStructureSource, ThrottledClient
from blaseball_stats.ingest.protocols import GameSource, LeagueSource

_NO_WAIT_RETRY = retry(
    stop=stop_after_attempt(3),
    wait=wait_none(),
    retry=retry_if_exception_type((httpx.TransportError, httpx.HTTPStatusError)),
    reraise=True,
)


class FakeTransport(httpx.BaseTransport):
    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self.last_request: httpx.Request | None = None

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.last_request = request
        return self._response


class FailNTransport(httpx.BaseTransport):
    def __init__(self, fail_count: int, success_response: httpx.Response) -> None:
        self._fail_count = fail_count
        self._success_response = success_response
        self._call_count = 0

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self._call_count += 1
        if self._call_count <= self._fail_count:
            raise httpx.TransportError("connection failed")
        return self._success_response

    @property
    def call_count(self) -> int:
        return self._call_count


class RoutingTransport(httpx.BaseTransport):
    """Answers by request path and ``id`` query parameter."""

    def __init__(self, routes: dict[tuple[str, str | None], Any]) -> None:
        self._routes = routes
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.url.path.rsplit("/", 1)[-1], request.url.params.get("id"))
        if key not in self._routes:
            return httpx.Response(404)
        return httpx.Response(200, json=self._routes[key])


def _client(transport: httpx.BaseTransport) -> ThrottledClient:
    return ThrottledClient(
        httpx.Client(transport=transport),
        min_interval=0,
        retry=_NO_WAIT_RETRY,
        sleep=lambda _: None,
    )


class TestThrottledClient:
    def test_get_json_passes_params(self) -> None:
        transport = FakeTransport(httpx.Response(200, json={"ok": True}))
        client = _client(transport)
        assert client.get_json("https://example.test/games", {"season": 3}) == {"ok": True}
        assert transport.last_request is not None
        assert transport.last_request.url.params["season"] == "3"

    def test_retries_transport_failures(self) -> None:
        transport = FailNTransport(2, httpx.Response(200, json=[]))
        assert _client(transport).get_json("https://example.test/x") == []
        assert transport.call_count == 3

    def test_status_errors_raise_after_retries(self) -> None:
        transport = FailNTransport(0, httpx.Response(500))
        with pytest.raises(httpx.HTTPStatusError):
            _client(transport).get_json("https://example.test/x")
        assert transport.call_count == 3

    def test_spaces_requests(self) -> None:
        times = iter([0.0, 0.1, 0.25])
        sleeps: list[float] = []
        client = ThrottledClient(
            httpx.Client(transport=FakeTransport(httpx.Response(200, json={}))),
            min_interval=0.25,
            retry=_NO_WAIT_RETRY,
            sleep=sleeps.append,
            clock=lambda: next(times),
        )
        client.get_json("https://example.test/a")
        client.get_json("https://example.test/b")
        assert sleeps == [pytest.approx(0.15)]


class TestLeagueStructureSource:
    def test_walks_league_subleagues_and_divisions(self) -> None:
        transport = RoutingTransport(
            {
                ("simulationData", None): {"season": 11},
                ("league", "L"): {"id": "L", "subleagues": ["SL1", "SL2"]},
                ("subleague", "SL1"): {"id": "SL1", "name": "Good", "divisions": ["D1", "D2"]},
                ("subleague", "SL2"): {"id": "SL2", "name": "Evil", "divisions": ["D3"]},
                ("division", "D1"): {"id": "D1", "name": "Good High", "teams": ["A", "B"]},
                ("division", "D2"): {"id": "D2", "name": "Good Low", "teams": ["C"]},
                ("division", "D3"): {"id": "D3", "name": "Evil High", "teams": ["D"]},
            }
        )
        source = LeagueStructureSource(_client(transport), "https://example.test/database/", "L")

        assert source.current_season() == 11
        structure = source.fetch()

        assert [s.id for s in structure.subleagues] == ["SL1", "SL2"]
        assert structure.subleagues[0].teams == ("A", "B", "C")
        assert structure.subleagues[0].divisions == ("D1", "D2")
        assert structure.division_of("C").name == "Good Low"  # type: ignore[union-attr]
        assert structure.division_of("D").subleague == "SL2"  # type: ignore[union-attr]
        assert all(str(r.url).startswith("https://example.test/database/") for r in transport.requests)

    def test_satisfies_protocol(self) -> None:
        source = LeagueStructureSource(_client(FakeTransport(httpx.Response(200, json={}))), league_id="L")
        assert isinstance(source, LeagueSource)
        assert source.source_detail == "league/L"


class TestGameResultsSource:
    def test_unwraps_archive_entries(self) -> None:
        transport = FakeTransport(
            httpx.Response(
                200,
                json={"data": [{"gameId": "G1", "data": {"id": "G1", "day": 0}}, {"gameId": "G2"}, "junk"]},
            )
        )
        source = GameResultsSource(_client(transport), "https://example.test/v1")
        games = source.fetch(4)
        assert games == [{"id": "G1", "day": 0}]
        assert transport.last_request is not None
        assert transport.last_request.url.path == "/v1/games"
        assert transport.last_request.url.params["season"] == "4"

    def test_unexpected_payload_is_empty(self) -> None:
        transport = FakeTransport(httpx.Response(200, json=[1, 2, 3]))
        assert GameResultsSource(_client(transport)).fetch(1) == []

    def test_satisfies_protocol(self) -> None:
        source = GameResultsSource(_client(FakeTransport(httpx.Response(200, json={}))), "https://example.test/v1")
        assert isinstance(source, GameSource)
        assert source.source_detail == "https://example.test/v1/games"

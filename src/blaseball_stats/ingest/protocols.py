from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

from blaseball_stats.domain.standings import SeasonStructure
from blaseball_stats.ingest.feed_source import Tick


@runtime_checkable
class TickSource(Protocol):
    @property
    def source_type(self) -> str: ...

    @property
    def source_detail(self) -> str: ...

    def ticks(self) -> Iterator[Tick]: ...


@runtime_checkable
class LeagueSource(Protocol):
    @property
    def source_type(self) -> str: ...

    @property
    def source_detail(self) -> str: ...

    def current_season(self) -> int: ...

    def fetch(self) -> SeasonStructure: ...


@runtime_checkable
class GameSource(Protocol):
    @property
    def source_type(self) -> str: ...

    @property
    def source_detail(self) -> str: ...

    def fetch(self, season: int) -> list[dict[str, Any]]: ...

"""Shared pytest fixtures for test modules."""

from pathlib import Path

import pytest

from blaseball_stats.domain.standings import Division, LeagueStructure, SeasonStructure, Subleague
from blaseball_stats.repos.layout import DataLayout


@pytest.fixture
def layout(tmp_path: Path) -> DataLayout:
    return DataLayout(tmp_path / "data")


@pytest.fixture
def season_structure() -> SeasonStructure:
    """Two subleagues of one division each; A, B and C share a subleague, D is alone."""
    return SeasonStructure(
        subleagues=(
            Subleague(id="SL1", name="Good", divisions=("D1",), teams=("A", "B", "C")),
            Subleague(id="SL2", name="Evil", divisions=("D2",), teams=("D",)),
        ),
        divisions=(
            Division(id="D1", name="Good High", subleague="SL1", teams=("A", "B", "C")),
            Division(id="D2", name="Evil High", subleague="SL2", teams=("D",)),
        ),
    )


@pytest.fixture
def league_structure(season_structure: SeasonStructure) -> LeagueStructure:
    return LeagueStructure(seasons={6: season_structure}, last_updated_at=1_000)

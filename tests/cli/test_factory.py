import os
from pathlib import Path

import pytest

from blaseball_stats.cli.factory import build_api_context, build_repos, build_settings
from blaseball_stats.domain.errors import ConfigError
from blaseball_stats.domain.result import Err, Ok
from blaseball_stats.ingest.blaseball_api import GameResultsSource, LeagueStructureSource


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("BLASEBALL__"):
            monkeypatch.delenv(key)


class TestBuildSettings:
    def test_overrides_apply(self, tmp_path: Path) -> None:
        result = build_settings({"pipeline": {"data_dir": str(tmp_path), "from_season": 5}})
        assert isinstance(result, Ok)
        assert result.value.data_dir == tmp_path
        assert result.value.from_season == 5

    def test_bad_value_is_a_config_error(self) -> None:
        result = build_settings({"pipeline": {"from_season": "soon"}})
        assert isinstance(result, Err)
        assert isinstance(result.error, ConfigError)
        assert "invalid configuration" in result.error.message


class TestBuildRepos:
    def test_repos_live_under_the_data_dir(self, tmp_path: Path) -> None:
        result = build_settings({"pipeline": {"data_dir": str(tmp_path)}})
        assert isinstance(result, Ok)

        repos = build_repos(result.value)

        assert repos.layout.root == tmp_path
        assert repos.batting_repo.path == tmp_path / "batting" / "batters.json"
        assert repos.pitching_repo.path == tmp_path / "pitching" / "pitchers.json"


class TestBuildApiContext:
    def test_yields_both_sources(self, tmp_path: Path) -> None:
        result = build_settings({"pipeline": {"data_dir": str(tmp_path)}})
        assert isinstance(result, Ok)

        with build_api_context(result.value) as api:
            assert isinstance(api.league_source, LeagueStructureSource)
            assert isinstance(api.game_source, GameResultsSource)

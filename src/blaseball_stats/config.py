from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from blaseball_stats.ingest.blaseball_api import DEFAULT_BLASEBALL_URL, DEFAULT_CHRONICLER_URL, ILB_LEAGUE_ID


class AppConfig(Protocol):
    def __getitem__(self, key: str) -> object: ...


_DEFAULTS: dict[str, object] = {
    "pipeline": {
        "data_dir": "./data",
        "feed_path": "./data/gameDataUpdates.json",
        "from_season": "",
    },
    "leaders": {
        "max_per_category": 10,
        "team_games_per_season": 100,
    },
    "standings": {
        "games_in_season": 99,
        "playoff_spots": 4,
    },
    "api": {
        "blaseball_url": DEFAULT_BLASEBALL_URL,
        "chronicler_url": DEFAULT_CHRONICLER_URL,
        "league_id": ILB_LEAGUE_ID,
        "min_request_interval": 0.25,
        "timeout": 60.0,
    },
}


@dataclass(frozen=True)
class PipelineSettings:
    data_dir: Path
    feed_path: Path
    from_season: int | None
    max_leaders_per_category: int
    team_games_per_season: int
    games_in_season: int
    playoff_spots: int
    blaseball_url: str
    chronicler_url: str
    league_id: str
    min_request_interval: float
    timeout: float


def create_config(
    yaml_path: str = "blaseball.yaml",
    env_prefix: str = "BLASEBALL",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    Environment variables use a double underscore between levels, e.g.
    ``BLASEBALL__PIPELINE__DATA_DIR``.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def _optional_int(value: object) -> int | None:
    if value is None or str(value).strip() == "":
        return None
    return int(str(value))


def load_settings(cfg: AppConfig | None = None) -> PipelineSettings:
    if cfg is None:
        cfg = create_config()
    return PipelineSettings(
        data_dir=Path(str(cfg["pipeline.data_dir"])).expanduser(),
        feed_path=Path(str(cfg["pipeline.feed_path"])).expanduser(),
        from_season=_optional_int(cfg["pipeline.from_season"]),
        max_leaders_per_category=int(str(cfg["leaders.max_per_category"])),
        team_games_per_season=int(str(cfg["leaders.team_games_per_season"])),
        games_in_season=int(str(cfg["standings.games_in_season"])),
        playoff_spots=int(str(cfg["standings.playoff_spots"])),
        blaseball_url=str(cfg["api.blaseball_url"]),
        chronicler_url=str(cfg["api.chronicler_url"]),
        league_id=str(cfg["api.league_id"]),
        min_request_interval=float(str(cfg["api.min_request_interval"])),
        timeout=float(str(cfg["api.timeout"])),
    )

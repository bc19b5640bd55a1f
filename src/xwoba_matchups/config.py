from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

if TYPE_CHECKING:
    from collections.abc import Mapping

_DEFAULTS: dict[str, object] = {
    "db": {
        "path": "./data/xwoba.db",
    },
    "mlb": {
        "base_url": "https://statsapi.mlb.com/api/v1",
        "timeout": 10.0,
    },
    "schedule": {
        "timezone": "America/Los_Angeles",
        "refresh_days": 8,
    },
    "matchups": {
        "split_season": 0,
        "chunk_size": 100,
        "prune_stale": False,
        "strict_secondary": True,
    },
    "weighted": {
        "seasons": [2025, 2024, 2023],
        "weights": [0.5, 0.3, 0.2],
    },
}


@dataclass(frozen=True)
class Settings:
    db_path: str
    mlb_base_url: str
    mlb_timeout: float
    timezone: str
    refresh_days: int
    split_season: int
    chunk_size: int
    prune_stale: bool
    strict_secondary: bool
    season_weights: dict[int, float]


def create_config(
    yaml_path: str = "xwoba.yaml",
    env_prefix: str = "XWOBA",
    defaults: dict[str, object] | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    Environment variables use ``__`` as the section separator, e.g. ``XWOBA__DB__PATH``.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(dict(overrides)))
    return ConfigurationSet(*layers)


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _as_list(value: object) -> list[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(part) for part in value]
    raise ValueError(f"not a list: {value!r}")


def _season_weights(seasons: object, weights: object) -> dict[int, float]:
    season_list = [int(s) for s in _as_list(seasons)]
    weight_list = [float(w) for w in _as_list(weights)]
    if len(season_list) != len(weight_list):
        raise ValueError(f"weighted.seasons has {len(season_list)} entries but weighted.weights has {len(weight_list)}")
    return dict(zip(season_list, weight_list, strict=True))


def load_settings(cfg: ConfigurationSet | None = None) -> Settings:
    if cfg is None:
        cfg = create_config()
    return Settings(
        db_path=str(cfg["db.path"]),
        mlb_base_url=str(cfg["mlb.base_url"]),
        mlb_timeout=float(str(cfg["mlb.timeout"])),
        timezone=str(cfg["schedule.timezone"]),
        refresh_days=int(str(cfg["schedule.refresh_days"])),
        split_season=int(str(cfg["matchups.split_season"])),
        chunk_size=int(str(cfg["matchups.chunk_size"])),
        prune_stale=_as_bool(cfg["matchups.prune_stale"]),
        strict_secondary=_as_bool(cfg["matchups.strict_secondary"]),
        season_weights=_season_weights(cfg["weighted.seasons"], cfg["weighted.weights"]),
    )

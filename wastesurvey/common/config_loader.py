"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wastesurvey.common.errors import ConfigError
from wastesurvey.common.fs import read_yaml
from wastesurvey.common.http import TimeoutConfig
from wastesurvey.common.schema import validate_options_config, validate_store_config


@dataclass(frozen=True)
class ConfigBundle:
    store: dict
    options: dict

    @property
    def base_url(self) -> str:
        return self.store["store"]["base_url"]

    @property
    def sheet_id(self) -> str:
        return str(self.store["store"]["sheet_id"])

    @property
    def drive_folder_id(self) -> str:
        return str(self.store["store"]["drive_folder_id"])

    @property
    def timeout(self) -> TimeoutConfig:
        timeout = self.store["store"]["timeout"]
        return TimeoutConfig(connect=float(timeout["connect"]), read=float(timeout["read"]))

    @property
    def page_size(self) -> int:
        return int(self.store["table"]["page_size"])

    @property
    def max_visible(self) -> int:
        return int(self.store["table"]["max_visible"])

    @property
    def default_location(self) -> tuple[float, float]:
        map_cfg = self.store["map"]
        return float(map_cfg["default_lat"]), float(map_cfg["default_lng"])


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    return _deep_merge(base, overlay)


def load_all_configs(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> ConfigBundle:
    def _overlay(name: str) -> Path | None:
        if overlay_config_dir is None:
            return None
        return overlay_config_dir / name

    store = validate_store_config(
        _load_yaml_with_overlay(config_dir / "store.yml", _overlay("store.yml")),
        allow_unknown=allow_unknown,
    )
    options = validate_options_config(
        _load_yaml_with_overlay(config_dir / "options.yml", _overlay("options.yml")),
        allow_unknown=allow_unknown,
    )
    return ConfigBundle(store=store, options=options)

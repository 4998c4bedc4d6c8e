"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from wastesurvey.common.errors import ConfigError

OPTION_LISTS = (
    "address_types",
    "communities",
    "streets",
    "waste_methods",
    "water_methods",
    "responsible_persons",
)


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    _assert_mapping(obj, ctx)
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_positive_number(value, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive number")


def validate_store_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_required = {"store", "table", "map"}
    _assert_required_keys(cfg, top_required, "store config")
    _assert_no_unknown_keys(cfg, top_required, "store config", allow_unknown)

    store = cfg["store"]
    _assert_required_keys(store, {"base_url", "sheet_id", "drive_folder_id", "timeout"}, "store")
    if not str(store["base_url"]).startswith(("http://", "https://")):
        raise ConfigError("store.base_url must be an http(s) URL")
    _assert_required_keys(store["timeout"], {"connect", "read"}, "store.timeout")
    _assert_positive_number(store["timeout"]["connect"], "store.timeout.connect")
    _assert_positive_number(store["timeout"]["read"], "store.timeout.read")

    table = cfg["table"]
    _assert_required_keys(table, {"page_size", "max_visible"}, "table")
    _assert_positive_number(table["page_size"], "table.page_size")
    _assert_positive_number(table["max_visible"], "table.max_visible")

    _assert_required_keys(cfg["map"], {"default_lat", "default_lng"}, "map")

    return cfg


def validate_options_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    required = {*OPTION_LISTS, "address_type_other"}
    _assert_required_keys(cfg, required, "options config")
    _assert_no_unknown_keys(cfg, required, "options config", allow_unknown)

    for name in OPTION_LISTS:
        values = cfg[name]
        if not isinstance(values, list) or not values:
            raise ConfigError(f"options.{name} must be a non-empty list")
        dupes = {value for value in values if values.count(value) > 1}
        if dupes:
            raise ConfigError(f"Duplicate options in {name}: {', '.join(sorted(dupes))}")

    if cfg["address_type_other"] not in cfg["address_types"]:
        raise ConfigError("options.address_type_other must be one of options.address_types")

    return cfg

import pytest

from wastesurvey.common.errors import ConfigError
from wastesurvey.common.schema import validate_options_config, validate_store_config


def _store_cfg() -> dict:
    return {
        "store": {
            "base_url": "https://example.test/exec",
            "sheet_id": "s",
            "drive_folder_id": "f",
            "timeout": {"connect": 5, "read": 30},
        },
        "table": {"page_size": 20, "max_visible": 100},
        "map": {"default_lat": 19.3, "default_lng": 97.9},
    }


def _options_cfg() -> dict:
    return {
        "address_types": ["home", "other"],
        "address_type_other": "other",
        "communities": ["c"],
        "streets": ["s"],
        "waste_methods": ["w"],
        "water_methods": ["x"],
        "responsible_persons": ["p"],
    }


def test_validate_store_config_accepts_valid():
    cfg = _store_cfg()
    assert validate_store_config(cfg) is cfg


def test_validate_store_config_missing_key():
    cfg = _store_cfg()
    del cfg["store"]["sheet_id"]

    with pytest.raises(ConfigError, match="sheet_id"):
        validate_store_config(cfg)


def test_validate_store_config_unknown_key_respects_allow_unknown():
    cfg = _store_cfg()
    cfg["extra"] = {}

    with pytest.raises(ConfigError, match="Unknown keys"):
        validate_store_config(cfg)
    assert validate_store_config(cfg, allow_unknown=True) is cfg


def test_validate_store_config_rejects_bad_url_and_page_size():
    cfg = _store_cfg()
    cfg["store"]["base_url"] = "ftp://example.test"
    with pytest.raises(ConfigError, match="base_url"):
        validate_store_config(cfg)

    cfg = _store_cfg()
    cfg["table"]["page_size"] = 0
    with pytest.raises(ConfigError, match="page_size"):
        validate_store_config(cfg)


def test_validate_options_config_rejects_empty_and_duplicates():
    cfg = _options_cfg()
    cfg["streets"] = []
    with pytest.raises(ConfigError, match="non-empty"):
        validate_options_config(cfg)

    cfg = _options_cfg()
    cfg["communities"] = ["c", "c"]
    with pytest.raises(ConfigError, match="Duplicate"):
        validate_options_config(cfg)


def test_validate_options_config_sentinel_must_be_listed():
    cfg = _options_cfg()
    cfg["address_type_other"] = "elsewhere"

    with pytest.raises(ConfigError, match="address_type_other"):
        validate_options_config(cfg)

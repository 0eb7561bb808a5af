"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from kml_to_fgfp.config import DEFAULTS, load_config, merge
from kml_to_fgfp.errors import ConfigError

SHIPPED_CONFIG = Path(__file__).resolve().parent.parent / "configs" / "default_config.yaml"


def test_defaults_without_file():
    cfg = load_config()
    assert cfg == DEFAULTS
    assert cfg is not DEFAULTS
    cfg["route"]["style_marker"] = "#Other"
    assert DEFAULTS["route"]["style_marker"] == "#FixMark"


def test_shipped_config_matches_defaults():
    assert load_config(SHIPPED_CONFIG) == DEFAULTS


def test_partial_override(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("route:\n  altitude_step_ft: 500\nheader:\n  flight_rules: I\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg["route"]["altitude_step_ft"] == 500
    assert cfg["route"]["style_marker"] == "#FixMark"
    assert cfg["header"]["flight_rules"] == "I"
    assert cfg["header"]["version"] == 2


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DEFAULTS


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Cannot read config file"):
        load_config(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("route: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(path)


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must contain a mapping"):
        load_config(path)


@pytest.mark.parametrize("body", [
    "route:\n  altitude_step_ft: 0\n",
    "route:\n  meters_to_feet: -1\n",
    "route:\n  meters_to_feet: .nan\n",
    "route:\n  meters_to_feet: .inf\n",
    "route:\n  altitude_step_ft: lots\n",
    "route:\n  altitude_step_ft: .inf\n",
])
def test_bad_route_values(tmp_path, body):
    path = tmp_path / "cfg.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_merge_is_recursive_and_copies():
    base = {"a": {"x": 1, "y": 2}, "b": 1}
    out = merge(base, {"a": {"y": 3}, "c": 4})
    assert out == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
    assert base == {"a": {"x": 1, "y": 2}, "b": 1}

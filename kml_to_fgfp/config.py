"""YAML configuration with built-in defaults.

Every key is optional; a config file only needs the values it changes:

    route:
      style_marker: "#FixMark"
      altitude_step_ft: 500
"""

from __future__ import annotations

import copy
import math
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .emitter import DEFAULT_HEADER
from .errors import ConfigError
from .scanner import FIX_MARKER
from .waypoint import ALTITUDE_STEP_FT, FEET_PER_METER

DEFAULTS: Dict[str, Any] = {
    "route": {
        "style_marker": FIX_MARKER,
        "meters_to_feet": FEET_PER_METER,
        "altitude_step_ft": ALTITUDE_STEP_FT,
    },
    "header": dict(DEFAULT_HEADER),
    "reader": {
        "huge_tree": False,
    },
    "writer": {
        "indent": True,
        "write_airport_blocks": True,
    },
    "visualization": {
        "output_dpi": 150,
    },
}


def read_yaml(path: Union[str, Path]) -> dict:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` into a copy of `base`."""
    out = copy.deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    cfg = merge(DEFAULTS, read_yaml(path)) if path is not None else copy.deepcopy(DEFAULTS)

    # Fail early on values the scanner would choke on mid-run
    r_cfg = cfg.get("route", {})
    try:
        factor = float(r_cfg.get("meters_to_feet", FEET_PER_METER))
        step = int(r_cfg.get("altitude_step_ft", ALTITUDE_STEP_FT))
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigError(f"Invalid route settings: {e}") from e
    if not math.isfinite(factor) or factor <= 0 or step <= 0:
        raise ConfigError("route.meters_to_feet and route.altitude_step_ft must be positive finite numbers")
    return cfg

"""Route point records and the unit conversions that fill them.

Conventions:
- lon/lat are decimal degrees (WGS84), exactly as found in KML <coordinates>.
- KML altitudes are meters; route altitudes are whole feet rounded to the
  nearest `altitude_step_ft` so they line up with flight-plan levels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import ConfigError

FEET_PER_METER = 3.280839895
ALTITUDE_STEP_FT = 100


@dataclass
class Waypoint:
    number: int = 0
    ident: str = ""
    lon: float = 0.0
    lat: float = 0.0
    altitude_ft: int = 0


@dataclass(frozen=True)
class Airport:
    ident: str
    runway: Optional[str] = None


def parse_airport(code: str) -> Airport:
    """`SAEZ/11` -> Airport('SAEZ', '11'); `SAEZ` -> Airport('SAEZ', None)."""
    ident, sep, runway = code.partition("/")
    ident = ident.strip()
    runway = runway.strip()
    if not ident:
        raise ConfigError(f"Airport code {code!r} has no ICAO identifier")
    if sep and not runway:
        raise ConfigError(f"Airport code {code!r} has an empty runway")
    return Airport(ident=ident, runway=runway or None)


def meters_to_feet(meters: float, factor: float = FEET_PER_METER, step: int = ALTITUDE_STEP_FT) -> int:
    """Convert meters to feet rounded to the nearest `step`.

    3800.2 m is 12469.4 ft, which becomes 12500. Halves round away from zero.
    Anything below sea level comes out as 0. Raises ValueError when the
    altitude does not fit a float once converted (e.g. 1e308 m).
    """
    steps = meters * factor / step
    if not math.isfinite(steps):
        raise ValueError(f"altitude {meters!r} m is out of range")
    if steps <= 0:
        return 0
    return int(math.floor(steps + 0.5)) * step


def parse_coordinates(text: str) -> Tuple[float, float, float]:
    """Parse `lon,lat,alt` into floats. Raises ValueError on any problem."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) < 3:
        raise ValueError(f"expected lon,lat,alt but got {len(parts)} value(s) in {text.strip()!r}")
    values = []
    for label, raw in zip(("longitude", "latitude", "altitude"), parts[:3]):
        try:
            v = float(raw)
        except ValueError:
            raise ValueError(f"invalid {label} {raw!r}") from None
        if not math.isfinite(v):
            raise ValueError(f"invalid {label} {raw!r}")
        values.append(v)
    lon, lat, alt = values
    return lon, lat, alt

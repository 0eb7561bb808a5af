"""Route report: legs, distances and altitude range.

Distances are geodesic on WGS84, in nautical miles. Runway waypoints have no
coordinates of their own and are left out of the legs.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pyproj import Geod

from .convert import RouteResult
from .waypoint import Waypoint

METERS_PER_NM = 1852.0

_GEOD = Geod(ellps="WGS84")


def leg_distances_nm(waypoints: List[Waypoint]) -> List[float]:
    if len(waypoints) < 2:
        return []
    lons = [w.lon for w in waypoints]
    lats = [w.lat for w in waypoints]
    _, _, dists = _GEOD.inv(lons[:-1], lats[:-1], lons[1:], lats[1:])
    return [float(d) / METERS_PER_NM for d in dists]


def summarize_route(result: RouteResult) -> Dict[str, Any]:
    wps = result.waypoints
    legs = leg_distances_nm(wps)
    report = result.to_dict()
    report["legs"] = [
        {"from": a.ident, "to": b.ident, "distance_nm": round(d, 1)}
        for a, b, d in zip(wps[:-1], wps[1:], legs)
    ]
    report["total_distance_nm"] = round(sum(legs), 1)
    if wps:
        alts = [w.altitude_ft for w in wps]
        report["altitude_ft"] = {"min": min(alts), "max": max(alts)}
    else:
        report["altitude_ft"] = None
    return report

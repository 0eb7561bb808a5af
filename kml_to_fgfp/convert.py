"""Drive one KML -> .fgfp conversion.

Order of the route:
1. departure runway waypoint (slot 0) when a departure airport is given,
2. every kept placemark, numbered in document order,
3. destination runway waypoint with the next free number.

A malformed document stops the scan early but the plan is still finished
(route closed, destination written), so the output is always valid XML.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from lxml import etree

from .airports import AirportWaypoint, Role, synthesize_airport
from .config import DEFAULTS
from .emitter import RouteEmitter
from .events import Event, ReadError, read_kml_events
from .scanner import FIX_MARKER, PlacemarkScanner
from .waypoint import ALTITUDE_STEP_FT, FEET_PER_METER, Airport, Waypoint

logger = logging.getLogger(__name__)


@dataclass
class RouteResult:
    waypoints: List[Waypoint] = field(default_factory=list)
    airport_waypoints: List[AirportWaypoint] = field(default_factory=list)
    accepted: int = 0
    dropped: int = 0
    read_error: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.waypoints) + len(self.airport_waypoints)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "waypoints": self.total,
            "fixes_accepted": self.accepted,
            "placemarks_dropped": self.dropped,
            "airports": [
                {"n": a.number, "role": a.role.value, "icao": a.icao, "runway": a.runway}
                for a in self.airport_waypoints
            ],
            "read_error": self.read_error,
        }


def transform_route(
    events: Iterable[Event],
    emitter: RouteEmitter,
    departure: Optional[Airport] = None,
    destination: Optional[Airport] = None,
    config: Optional[Dict[str, Any]] = None,
) -> RouteResult:
    """Write the <route> element for one document's events."""
    r_cfg = (config or DEFAULTS).get("route", {})
    result = RouteResult()

    with emitter.route():
        dep = synthesize_airport(departure, Role.DEPARTURE, 0)
        if dep is not None:
            emitter.write_airport_waypoint(dep)
            result.airport_waypoints.append(dep)

        scanner = PlacemarkScanner(
            departure=departure,
            destination=destination,
            first_number=1 if dep is not None else 0,
            style_marker=str(r_cfg.get("style_marker", FIX_MARKER)),
            meters_to_feet_factor=float(r_cfg.get("meters_to_feet", FEET_PER_METER)),
            altitude_step_ft=int(r_cfg.get("altitude_step_ft", ALTITUDE_STEP_FT)),
        )
        for event in events:
            if isinstance(event, ReadError):
                # Keep only the first line, libxml2 messages repeat the position
                summary = event.description.splitlines()[0] if event.description else "unknown error"
                logger.error("Stopped reading input: %s", summary)
                result.read_error = summary
                break
            wp = scanner.feed(event)
            if wp is not None:
                emitter.write_waypoint(wp)
                result.waypoints.append(wp)

        result.accepted = scanner.accepted
        result.dropped = scanner.dropped

        dest = synthesize_airport(destination, Role.DESTINATION, scanner.next_number)
        if dest is not None:
            emitter.write_airport_waypoint(dest)
            result.airport_waypoints.append(dest)

    logger.info(
        "Route: %d waypoint(s), %d placemark(s) dropped", result.total, result.dropped
    )
    return result


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    departure: Optional[Airport] = None,
    destination: Optional[Airport] = None,
    config: Optional[Dict[str, Any]] = None,
) -> RouteResult:
    """Convert a KML file into a complete .fgfp file."""
    cfg = config or DEFAULTS
    w_cfg = cfg.get("writer", {})
    rd_cfg = cfg.get("reader", {})

    logger.debug("Converting %s -> %s", input_path, output_path)
    with open(output_path, "wb") as out, etree.xmlfile(out, encoding="utf-8") as xf:
        xf.write_declaration()
        emitter = RouteEmitter(xf, indent=bool(w_cfg.get("indent", True)))
        with emitter.element("PropertyList"):
            emitter.write_header(cfg.get("header"))
            if bool(w_cfg.get("write_airport_blocks", True)):
                emitter.write_airports(departure, destination)
            events = read_kml_events(str(input_path), huge_tree=bool(rd_cfg.get("huge_tree", False)))
            result = transform_route(events, emitter, departure, destination, cfg)
    return result

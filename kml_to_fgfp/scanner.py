"""Placemark scanner: KML events in, route waypoints out.

The sequence we look for inside the KML is:

    <Placemark>
       <name>EZE11</name>
       <styleUrl>#FixMark</styleUrl>
       <coordinates>-58.594239,-34.811897,823</coordinates>
    </Placemark>

Everything else (Document, Folder, Point, description, ...) is ignored by not
transitioning. A placemark is dropped when
- its name is the departure/destination airport (the route gets a runway
  waypoint for it instead),
- its styleUrl is not the fix marker (e.g. `#RouteMark` for the route line),
- its coordinates cannot be parsed,
- it closes before its name, styleUrl and coordinates were all seen.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, Optional, Tuple

from .events import ElementClose, ElementOpen, Event, Text, simplify_name
from .waypoint import (
    ALTITUDE_STEP_FT,
    FEET_PER_METER,
    Airport,
    Waypoint,
    meters_to_feet,
    parse_coordinates,
)

logger = logging.getLogger(__name__)

FIX_MARKER = "#FixMark"


class ScanState(enum.Enum):
    AWAITING_PLACEMARK_OPEN = enum.auto()
    AWAITING_NAME_OPEN = enum.auto()
    AWAITING_NAME_TEXT = enum.auto()
    AWAITING_NAME_CLOSE = enum.auto()
    AWAITING_STYLE_URL_OPEN = enum.auto()
    AWAITING_STYLE_URL_TEXT = enum.auto()
    AWAITING_STYLE_URL_CLOSE = enum.auto()
    AWAITING_COORDINATES_OPEN = enum.auto()
    AWAITING_COORDINATES_TEXT = enum.auto()
    AWAITING_COORDINATES_CLOSE = enum.auto()
    AWAITING_PLACEMARK_CLOSE = enum.auto()


S = ScanState

# state -> (tag that moves us on, next state)
OPEN_TRANSITIONS: Dict[ScanState, Tuple[str, ScanState]] = {
    S.AWAITING_PLACEMARK_OPEN: ("Placemark", S.AWAITING_NAME_OPEN),
    S.AWAITING_NAME_OPEN: ("name", S.AWAITING_NAME_TEXT),
    S.AWAITING_STYLE_URL_OPEN: ("styleUrl", S.AWAITING_STYLE_URL_TEXT),
    S.AWAITING_COORDINATES_OPEN: ("coordinates", S.AWAITING_COORDINATES_TEXT),
}

CLOSE_TRANSITIONS: Dict[ScanState, Tuple[str, ScanState]] = {
    S.AWAITING_NAME_CLOSE: ("name", S.AWAITING_STYLE_URL_OPEN),
    S.AWAITING_STYLE_URL_CLOSE: ("styleUrl", S.AWAITING_COORDINATES_OPEN),
    S.AWAITING_COORDINATES_CLOSE: ("coordinates", S.AWAITING_PLACEMARK_CLOSE),
}

# Text states and the element whose (empty) close stands in for missing text
TEXT_STATES: Dict[ScanState, str] = {
    S.AWAITING_NAME_TEXT: "name",
    S.AWAITING_STYLE_URL_TEXT: "styleUrl",
    S.AWAITING_COORDINATES_TEXT: "coordinates",
}

# Past the styleUrl check: the placemark is a route fix
FIX_STATES = frozenset({
    S.AWAITING_COORDINATES_OPEN,
    S.AWAITING_COORDINATES_TEXT,
    S.AWAITING_COORDINATES_CLOSE,
})


class PlacemarkScanner:
    """One pass over one document.

    `number` on committed waypoints starts at `first_number` and only advances
    when a placemark is kept, so dropped placemarks never leave gaps.
    """

    def __init__(
        self,
        departure: Optional[Airport] = None,
        destination: Optional[Airport] = None,
        first_number: int = 0,
        style_marker: str = FIX_MARKER,
        meters_to_feet_factor: float = FEET_PER_METER,
        altitude_step_ft: int = ALTITUDE_STEP_FT,
    ):
        self.departure = departure
        self.destination = destination
        self.style_marker = style_marker
        self.meters_to_feet_factor = meters_to_feet_factor
        self.altitude_step_ft = altitude_step_ft

        self.state = S.AWAITING_PLACEMARK_OPEN
        self.waypoint = Waypoint()
        self.drop = False
        self.next_number = first_number
        self.accepted = 0
        self.dropped = 0

    def feed(self, event: Event) -> Optional[Waypoint]:
        """Advance on one event. Returns the waypoint committed by it, if any."""
        if isinstance(event, ElementOpen):
            self.on_open(event.name)
        elif isinstance(event, Text):
            self.on_text(event.content)
        elif isinstance(event, ElementClose):
            return self.on_close(event.name)
        return None

    def on_open(self, name: str) -> None:
        expected = OPEN_TRANSITIONS.get(self.state)
        if expected is None or simplify_name(name) != expected[0]:
            return
        if self.state is S.AWAITING_PLACEMARK_OPEN:
            self.waypoint = Waypoint()
            self.drop = False
        self.state = expected[1]

    def on_text(self, content: str) -> None:
        if self.state is S.AWAITING_NAME_TEXT:
            self._take_name(content)
        elif self.state is S.AWAITING_STYLE_URL_TEXT:
            self._take_style_url(content)
        elif self.state is S.AWAITING_COORDINATES_TEXT:
            self._take_coordinates(content)

    def on_close(self, name: str) -> Optional[Waypoint]:
        name = simplify_name(name)

        # <name/> and friends: no text event, the close means empty content
        if TEXT_STATES.get(self.state) == name:
            self.on_text("")

        expected = CLOSE_TRANSITIONS.get(self.state)
        if expected is not None and name == expected[0]:
            self.state = expected[1]
            return None

        if name != "Placemark" or self.state is S.AWAITING_PLACEMARK_OPEN:
            return None
        return self._close_placemark()

    def _take_name(self, content: str) -> None:
        self.waypoint.ident = content
        self.state = S.AWAITING_NAME_CLOSE
        for airport in (self.departure, self.destination):
            if airport is not None and content == airport.ident:
                logger.debug("Dropping %s: replaced by the airport waypoint", content)
                self._drop_placemark()
                return

    def _take_style_url(self, content: str) -> None:
        if content != self.style_marker:
            logger.debug("Dropping %s: style %r is not a route fix", self.waypoint.ident, content)
            self._drop_placemark()
            return
        self.state = S.AWAITING_STYLE_URL_CLOSE

    def _take_coordinates(self, content: str) -> None:
        try:
            lon, lat, meters = parse_coordinates(content)
            altitude_ft = meters_to_feet(meters, self.meters_to_feet_factor, self.altitude_step_ft)
        except ValueError as e:
            logger.warning("Dropping %s waypoint: %s", self.waypoint.ident, e)
            self.drop = True
        else:
            self.waypoint.lon = lon
            self.waypoint.lat = lat
            self.waypoint.altitude_ft = altitude_ft
        self.state = S.AWAITING_COORDINATES_CLOSE

    def _drop_placemark(self) -> None:
        """Mark the placemark as dropped and skip ahead to its close."""
        self.drop = True
        self.state = S.AWAITING_PLACEMARK_CLOSE

    def _close_placemark(self) -> Optional[Waypoint]:
        if self.state is not S.AWAITING_PLACEMARK_CLOSE:
            if self.state in FIX_STATES:
                logger.warning("Dropping %s waypoint: placemark has no coordinates", self.waypoint.ident)
            else:
                logger.debug("Dropping incomplete placemark %r", self.waypoint.ident)
            self.drop = True

        committed = None
        if self.drop:
            self.dropped += 1
        else:
            committed = self.waypoint
            committed.number = self.next_number
            self.next_number += 1
            self.accepted += 1

        self.state = S.AWAITING_PLACEMARK_OPEN
        self.waypoint = Waypoint()
        self.drop = False
        return committed

"""Write the FlightGear flight plan (.fgfp) property list.

Output layout:

    <PropertyList>
        <version type="int">2</version>
        <flight-rules type="string">V</flight-rules>
        <flight-type type="string">X</flight-type>
        <estimated-duration-minutes type="int">0</estimated-duration-minutes>
        <departure>
            <airport type="string">SAEZ</airport>
            <runway type="string">11</runway>
        </departure>
        <route>
            <wp>
                <type type="string">runway</type>
                <departure type="bool">true</departure>
                <ident type="string">11</ident>
                <icao type="string">SAEZ</icao>
            </wp>
            <wp n="1">
                <type type="string">basic</type>
                <ident type="string">EZE11</ident>
                <lon type="double">-58.594239</lon>
                <lat type="double">-34.811897</lat>
                <alt-restrict type="string">at</alt-restrict>
                <altitude-ft type="double">2700</altitude-ft>
            </wp>
        </route>
    </PropertyList>

Waypoint 0 carries no `n` attribute. Everything is written incrementally
through `lxml.etree.xmlfile`, so write errors surface as soon as they happen.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from lxml import etree

from .airports import AirportWaypoint
from .waypoint import Airport, Waypoint

# (element, config key, property type)
HEADER_FIELDS = (
    ("version", "version", "int"),
    ("flight-rules", "flight_rules", "string"),
    ("flight-type", "flight_type", "string"),
    ("estimated-duration-minutes", "estimated_duration_minutes", "int"),
)

DEFAULT_HEADER: Dict[str, Any] = {
    "version": 2,
    "flight_rules": "V",
    "flight_type": "X",
    "estimated_duration_minutes": 0,
}


class RouteEmitter:
    def __init__(self, xf, indent: bool = True):
        self.xf = xf
        self.indent = indent
        self._depth = 0

    def _newline(self) -> None:
        self.xf.write("\n" + "\t" * self._depth)

    @contextmanager
    def element(self, tag: str, attrib: Optional[Dict[str, str]] = None) -> Iterator[None]:
        # Whitespace is only written inside the root element
        if self.indent and self._depth:
            self._newline()
        with self.xf.element(tag, attrib or {}):
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            if self.indent:
                self._newline()

    def leaf(self, tag: str, value: Any, ptype: str = "string") -> None:
        if self.indent and self._depth:
            self._newline()
        el = etree.Element(tag, type=ptype)
        el.text = str(value)
        self.xf.write(el)

    def write_header(self, header: Optional[Dict[str, Any]] = None) -> None:
        values = dict(DEFAULT_HEADER, **(header or {}))
        for tag, key, ptype in HEADER_FIELDS:
            self.leaf(tag, values[key], ptype)

    def write_airports(self, departure: Optional[Airport], destination: Optional[Airport]) -> None:
        for tag, airport in (("departure", departure), ("destination", destination)):
            if airport is None:
                continue
            with self.element(tag):
                self.leaf("airport", airport.ident)
                if airport.runway:
                    self.leaf("runway", airport.runway)

    def route(self):
        return self.element("route")

    def _wp(self, number: int):
        return self.element("wp", {"n": str(number)} if number else None)

    def write_waypoint(self, wp: Waypoint) -> None:
        with self._wp(wp.number):
            self.leaf("type", "basic")
            self.leaf("ident", wp.ident)
            self.leaf("lon", f"{wp.lon:.6f}", "double")
            self.leaf("lat", f"{wp.lat:.6f}", "double")
            self.leaf("alt-restrict", "at")
            self.leaf("altitude-ft", wp.altitude_ft, "double")

    def write_airport_waypoint(self, awp: AirportWaypoint) -> None:
        with self._wp(awp.number):
            self.leaf("type", "runway")
            self.leaf(awp.role.flag, "true", "bool")
            if awp.runway:
                self.leaf("ident", awp.runway)
            self.leaf("icao", awp.icao)

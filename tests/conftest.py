"""Shared fixtures: KML documents and event streams shaped like SimBrief exports."""

from __future__ import annotations

from typing import List, Optional, Tuple

import pytest

from kml_to_fgfp.events import ElementClose, ElementOpen, Text

KML_NS = "http://www.opengis.net/kml/2.2"

EZE11 = ("EZE11", "#FixMark", "-58.594239,-34.811897,823")

PlacemarkSpec = Tuple[Optional[str], Optional[str], Optional[str]]


def q(tag: str) -> str:
    return f"{{{KML_NS}}}{tag}"


def _leaf(tag: str, text: Optional[str]) -> list:
    if text is None:
        return []
    return [ElementOpen(q(tag)), Text(text), ElementClose(q(tag))]


@pytest.fixture
def placemark_events():
    """Factory: events of one placemark. A None field omits that element."""

    def make(name: Optional[str] = "EZE11", style: Optional[str] = "#FixMark",
             coords: Optional[str] = "-58.594239,-34.811897,823") -> list:
        events = [ElementOpen(q("Placemark"))]
        events += _leaf("name", name)
        events += _leaf("description", "Fix on the route")
        events += _leaf("styleUrl", style)
        if coords is not None:
            events.append(ElementOpen(q("Point")))
            events += _leaf("coordinates", coords)
            events.append(ElementClose(q("Point")))
        events.append(ElementClose(q("Placemark")))
        return events

    return make


def build_kml(placemarks: List[PlacemarkSpec]) -> str:
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<kml xmlns="{KML_NS}">',
        "<Document>",
        "<name>SAEZSBGL</name>",
        '<Style id="FixMark"><IconStyle><scale>0.6</scale></IconStyle></Style>',
        '<Style id="RouteMark"><LineStyle><width>3</width></LineStyle></Style>',
        "<Placemark>",
        "  <name>SAEZ-SBGL</name>",
        "  <styleUrl>#RouteMark</styleUrl>",
        "  <LineString><coordinates>",
        "    -58.5358,-34.8222,6 -58.594239,-34.811897,823",
        "  </coordinates></LineString>",
        "</Placemark>",
    ]
    for name, style, coords in placemarks:
        parts.append("<Placemark>")
        if name is not None:
            parts.append(f"  <name>{name}</name>")
        parts.append("  <description>Fix</description>")
        if style is not None:
            parts.append(f"  <styleUrl>{style}</styleUrl>")
        if coords is not None:
            parts.append(f"  <Point><coordinates>{coords}</coordinates></Point>")
        parts.append("</Placemark>")
    parts += ["</Document>", "</kml>"]
    return "\n".join(parts)


@pytest.fixture
def kml_file(tmp_path):
    """Factory: write a KML document with the given placemarks, return its path."""

    def make(placemarks: List[PlacemarkSpec], name: str = "route.kml"):
        path = tmp_path / name
        path.write_text(build_kml(placemarks), encoding="utf-8")
        return path

    return make


@pytest.fixture
def sample_route() -> List[PlacemarkSpec]:
    return [
        ("SAEZ", "#FixMark", "-58.5358,-34.8222,6"),
        EZE11,
        ("ASADA", "#FixMark", "-57.123456,-33.000001,3800.2"),
        ("TOC", "#RouteMark", "-56.0,-32.0,10668"),
        ("BAD", "#FixMark", "-55.0,-31.0"),
        ("SBGL", "#FixMark", "-43.2436,-22.8089,9"),
    ]

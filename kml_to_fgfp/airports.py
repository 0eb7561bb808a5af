"""Runway waypoints for the departure and destination airports.

These carry no coordinates: FlightGear resolves the runway threshold from the
ICAO code and runway when it loads the plan.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from .waypoint import Airport


class Role(enum.Enum):
    DEPARTURE = "departure"
    DESTINATION = "destination"

    @property
    def flag(self) -> str:
        """Name of the boolean element marking the waypoint's role."""
        return "departure" if self is Role.DEPARTURE else "approach"


@dataclass
class AirportWaypoint:
    number: int
    role: Role
    icao: str
    runway: Optional[str] = None


def synthesize_airport(airport: Optional[Airport], role: Role, number: int) -> Optional[AirportWaypoint]:
    if airport is None:
        return None
    return AirportWaypoint(number=number, role=role, icao=airport.ident, runway=airport.runway)

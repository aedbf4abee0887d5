"""Functional Core - Pure functions with no I/O.

This module contains all business logic:
- Geographic primitives and distances
- Point-in-polygon containment
- Land/ocean classification
- Threat circle radii
- Marker registry and hover/click selection
- Severity ranking and report formatting

Apart from the registry and the markers' classification fields, nothing
here mutates state or performs I/O.
"""

from quakemap.core.geo import GeoPoint, InvalidCoordinateError, distance_km
from quakemap.core.polygon import Polygon, Region, contains, ring_contains
from quakemap.core.threat import ThreatCircleConfig, threat_radius_km
from quakemap.core.earthquake import (
    OCEAN,
    UNCLASSIFIED,
    AgeCategory,
    EventMarker,
    Land,
    parse_events,
)
from quakemap.core.city import CityMarker, parse_city
from quakemap.core.classifier import classify, classify_events, count_quakes_by_country
from quakemap.core.selection import SelectionState, handle_click, handle_cursor_move
from quakemap.core.registry import MarkerRegistry
from quakemap.core.ranking import rank_report, top_n

__all__ = [
    # Geo
    "GeoPoint",
    "InvalidCoordinateError",
    "distance_km",
    # Polygons
    "Polygon",
    "Region",
    "contains",
    "ring_contains",
    # Threat circle
    "ThreatCircleConfig",
    "threat_radius_km",
    # Markers
    "OCEAN",
    "UNCLASSIFIED",
    "AgeCategory",
    "EventMarker",
    "Land",
    "parse_events",
    "CityMarker",
    "parse_city",
    # Classification
    "classify",
    "classify_events",
    "count_quakes_by_country",
    # Selection
    "MarkerRegistry",
    "SelectionState",
    "handle_click",
    "handle_cursor_move",
    # Ranking
    "rank_report",
    "top_n",
]

"""GeoJSON Feature Loader - Imperative Shell.

This module reads the country and city GeoJSON files from disk and turns
them into core Region and CityMarker objects. File I/O is contained here.
"""

import json
import logging
from pathlib import Path
from typing import Any

from quakemap.core.city import CityMarker, parse_city
from quakemap.core.geo import InvalidCoordinateError
from quakemap.core.polygon import Polygon, Region, make_ring


logger = logging.getLogger(__name__)


def _parse_ring(coordinates: list[list[float]]) -> Polygon:
    """Build a ring from GeoJSON [lon, lat] positions."""
    return make_ring([(float(position[1]), float(position[0])) for position in coordinates])


def parse_region(feature: dict[str, Any]) -> Region | None:
    """Parse a country feature into a Region.

    Only outer rings are used: holes are ignored. A MultiPolygon yields one
    ring per polygon.

    Args:
        feature: GeoJSON feature with Polygon or MultiPolygon geometry

    Returns:
        Region, or None if the feature has no name or usable geometry

    Raises:
        InvalidCoordinateError: If a vertex is out of range
    """
    props = feature.get("properties") or {}
    geometry = feature.get("geometry") or {}
    name = props.get("name")
    geometry_type = geometry.get("type")
    coordinates = geometry.get("coordinates") or []

    if not name:
        return None

    if geometry_type == "Polygon":
        outer_rings = coordinates[:1]
    elif geometry_type == "MultiPolygon":
        outer_rings = [polygon[0] for polygon in coordinates if polygon]
    else:
        logger.warning("Skipping region %s with geometry type %s", name, geometry_type)
        return None

    rings = tuple(_parse_ring(ring) for ring in outer_rings)
    if not rings:
        return None

    return Region(name=name, rings=rings)


def _read_features(path: str | Path) -> list[dict[str, Any]]:
    """Read the feature list of a GeoJSON FeatureCollection file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    path = Path(path)

    logger.info("Loading features from %s", path)

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return data.get("features", [])


def load_regions(path: str | Path) -> list[Region]:
    """Load country regions from a GeoJSON file, keeping file order.

    This method performs file I/O.
    """
    regions = []

    for feature in _read_features(path):
        try:
            region = parse_region(feature)
        except InvalidCoordinateError as e:
            logger.warning("Skipping region %s: %s", (feature.get("properties") or {}).get("name"), e)
            continue
        if region is not None:
            regions.append(region)

    logger.info("Loaded %d regions", len(regions))
    return regions


def load_cities(path: str | Path) -> list[CityMarker]:
    """Load city markers from a GeoJSON file, keeping file order.

    This method performs file I/O.
    """
    cities = []

    for feature in _read_features(path):
        try:
            city = parse_city(feature)
        except InvalidCoordinateError as e:
            logger.warning("Skipping city %s: %s", (feature.get("properties") or {}).get("name"), e)
            continue
        if city is not None:
            cities.append(city)

    logger.info("Loaded %d cities", len(cities))
    return cities

"""City markers and parsing - Pure functions."""

from dataclasses import dataclass
from typing import Any

from quakemap.core.geo import GeoPoint


@dataclass(eq=False)
class CityMarker:
    """A city on the map.

    Compared and hashed by identity, like EventMarker.

    Attributes:
        location: City center
        name: City name
        population: Population in millions
        coastal: City lies on a coast
        high_lying: City lies at high elevation
        country: Country name from the source data (optional)
    """
    location: GeoPoint
    name: str
    population: float = 0.0
    coastal: bool = False
    high_lying: bool = False
    country: str | None = None


def parse_city(feature: dict[str, Any]) -> CityMarker | None:
    """Parse a GeoJSON Point feature into a CityMarker.

    Pure function. Returns None for features without a point geometry or
    name.

    Raises:
        InvalidCoordinateError: If the coordinates are out of range
    """
    props = feature.get("properties") or {}
    geometry = feature.get("geometry") or {}

    if geometry.get("type") != "Point":
        return None

    coords = geometry.get("coordinates") or []
    name = props.get("name")
    if len(coords) < 2 or not name:
        return None

    try:
        population = float(props.get("population") or 0.0)
    except (TypeError, ValueError):
        population = 0.0

    return CityMarker(
        location=GeoPoint(latitude=float(coords[1]), longitude=float(coords[0])),
        name=name,
        population=population,
        coastal=bool(props.get("coastal", False)),
        high_lying=bool(props.get("high_lying", False)),
        country=props.get("country"),
    )

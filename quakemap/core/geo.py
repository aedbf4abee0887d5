"""Geographic primitives and distance calculations - Pure functions.

This module provides the GeoPoint value type, bounding boxes, and
great-circle distance. All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


class InvalidCoordinateError(ValueError):
    """Raised when a latitude or longitude is outside its valid range."""


@dataclass(frozen=True)
class GeoPoint:
    """Immutable geographic location.

    Construction fails with InvalidCoordinateError if either coordinate is
    out of range, so a GeoPoint that exists is always valid.

    Attributes:
        latitude: Degrees north, -90 to 90
        longitude: Degrees east, -180 to 180
    """
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90 <= self.latitude <= 90:
            raise InvalidCoordinateError(
                f"Latitude {self.latitude} out of range [-90, 90]"
            )
        if not -180 <= self.longitude <= 180:
            raise InvalidCoordinateError(
                f"Longitude {self.longitude} out of range [-180, 180]"
            )


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if a point is within this bounding box."""
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )

    def contains_point(self, point: GeoPoint) -> bool:
        """Check if a GeoPoint is within this bounding box."""
        return self.contains(point.latitude, point.longitude)


def bounds_of(points: list[GeoPoint]) -> BoundingBox | None:
    """Compute the smallest bounding box enclosing a set of points.

    Pure function.

    Args:
        points: Points to enclose

    Returns:
        BoundingBox, or None if no points were given
    """
    if not points:
        return None

    return BoundingBox(
        min_latitude=min(p.latitude for p in points),
        max_latitude=max(p.latitude for p in points),
        min_longitude=min(p.longitude for p in points),
        max_longitude=max(p.longitude for p in points),
    )


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two GeoPoints in kilometers.

    Pure function.
    """
    return calculate_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def destination(origin: GeoPoint, bearing_deg: float, distance: float) -> GeoPoint:
    """Point reached by travelling a distance along a great circle.

    Pure function.

    Args:
        origin: Starting point
        bearing_deg: Initial bearing, degrees clockwise from north
        distance: Distance in kilometers

    Returns:
        Destination point, longitude normalized to [-180, 180]
    """
    lat1 = math.radians(origin.latitude)
    lon1 = math.radians(origin.longitude)
    bearing = math.radians(bearing_deg)
    angular = distance / EARTH_RADIUS_KM

    lat2 = math.asin(
        math.sin(lat1) * math.cos(angular)
        + math.cos(lat1) * math.sin(angular) * math.cos(bearing)
    )
    lon2 = lon1 + math.atan2(
        math.sin(bearing) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )

    longitude = (math.degrees(lon2) + 540.0) % 360.0 - 180.0
    latitude = max(-90.0, min(90.0, math.degrees(lat2)))
    return GeoPoint(latitude=latitude, longitude=longitude)


def circle_points(center: GeoPoint, radius: float, segments: int = 64) -> list[GeoPoint]:
    """Approximate a circle of a given radius (km) as a ring of points.

    Pure function.
    """
    return [
        destination(center, 360.0 * i / segments, radius)
        for i in range(segments)
    ]


def unwrap_longitude(longitude: float, reference: float) -> float:
    """Shift a longitude by whole turns to lie within 180 degrees of a reference.

    Pure function. Rings built around a center near the antimeridian keep
    contiguous longitudes (e.g. 181.0 instead of -179.0), so a planar
    renderer draws them as one shape.

    Args:
        longitude: Longitude to shift, in degrees
        reference: Longitude to stay close to, in degrees

    Returns:
        Equivalent longitude in [reference - 180, reference + 180)
    """
    return reference + (longitude - reference + 180.0) % 360.0 - 180.0

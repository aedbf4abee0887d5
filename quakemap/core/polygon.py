"""Polygons, regions and point containment - Pure functions.

A Region is a named country made of one or more rings. Rings are disjoint
landmasses (mainland plus islands), never holes. Containment uses the
crossing-number rule with longitude as x and latitude as y, treated as
planar coordinates.

Points lying exactly on an edge have unspecified parity: depending on the
edge orientation they may count as inside or outside.
"""

from dataclasses import dataclass
from functools import cached_property

from quakemap.core.geo import BoundingBox, GeoPoint, bounds_of


# Rings with fewer vertices than this never contain anything
MIN_RING_VERTICES = 3


@dataclass(frozen=True)
class Polygon:
    """A closed ring of vertices.

    The closing vertex does not need to repeat the first one; if it does,
    the repeated vertex produces a zero-length edge that never counts as a
    crossing.

    Attributes:
        vertices: Ring vertices in order
    """
    vertices: tuple[GeoPoint, ...]

    @property
    def is_degenerate(self) -> bool:
        """True if the ring has too few vertices to enclose an area."""
        return len(self.vertices) < MIN_RING_VERTICES

    @cached_property
    def bounds(self) -> BoundingBox | None:
        """Bounding box of the ring, None for an empty ring."""
        return bounds_of(list(self.vertices))


@dataclass(frozen=True)
class Region:
    """A named country made of one or more rings.

    Attributes:
        name: Country name
        rings: One polygon per landmass
    """
    name: str
    rings: tuple[Polygon, ...]

    def __post_init__(self) -> None:
        if not self.rings:
            raise ValueError(f"Region '{self.name}' has no rings")

    @classmethod
    def single(cls, name: str, ring: Polygon) -> "Region":
        """Build a region with a single ring."""
        return cls(name=name, rings=(ring,))


def make_ring(coordinates: list[tuple[float, float]]) -> Polygon:
    """Build a Polygon from (latitude, longitude) pairs.

    Raises:
        InvalidCoordinateError: If any pair is out of range
    """
    return Polygon(tuple(GeoPoint(lat, lon) for lat, lon in coordinates))


def ring_contains(ring: Polygon, point: GeoPoint) -> bool:
    """Crossing-number test of a point against a single ring.

    Pure function. A horizontal ray is cast from the point towards +x and
    each edge it crosses flips the inside flag.

    Args:
        ring: Ring to test against
        point: Point to locate

    Returns:
        True if the point is inside the ring
    """
    if ring.is_degenerate:
        return False

    if not ring.bounds.contains_point(point):
        return False

    x, y = point.longitude, point.latitude
    vertices = ring.vertices
    inside = False

    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i].longitude, vertices[i].latitude
        xj, yj = vertices[j].longitude, vertices[j].latitude

        # Edge straddles the ray's scan line
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i

    return inside


def contains(region: Region, point: GeoPoint) -> bool:
    """Check if a point lies inside any ring of a region.

    Pure function.

    Args:
        region: Region to test against
        point: Point to locate

    Returns:
        True if some ring of the region contains the point
    """
    return any(ring_contains(ring, point) for ring in region.rings)

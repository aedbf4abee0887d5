"""Screen projection and marker hit testing - Pure functions.

The selection state machine needs to know whether a marker's on-screen
shape contains the cursor. This module provides a default answer for a
Web Mercator map (the projection used by OpenStreetMap tiles and by the
staticmap renderer): each marker is a circle of a fixed pixel radius
around its projected location.
"""

import math
from dataclasses import dataclass

from quakemap.core.city import CityMarker
from quakemap.core.earthquake import EventMarker
from quakemap.core.geo import GeoPoint
from quakemap.core.selection import HitTester


TILE_SIZE = 256

# Web Mercator is undefined at the poles
MAX_MERCATOR_LATITUDE = 85.0511

DEFAULT_CITY_RADIUS_PX = 6


@dataclass(frozen=True)
class Viewport:
    """A rendered map window.

    Attributes:
        center: Geographic point at the center of the window
        zoom: Tile zoom level (0-18)
        width: Window width in pixels
        height: Window height in pixels
    """
    center: GeoPoint
    zoom: int
    width: int
    height: int


def _world_pixels(point: GeoPoint, zoom: int) -> tuple[float, float]:
    """Project a point to global pixel coordinates at a zoom level."""
    scale = TILE_SIZE * 2 ** zoom
    lat = max(-MAX_MERCATOR_LATITUDE, min(MAX_MERCATOR_LATITUDE, point.latitude))
    lat_rad = math.radians(lat)

    x = (point.longitude + 180.0) / 360.0 * scale
    y = (1 - math.log(math.tan(lat_rad) + 1 / math.cos(lat_rad)) / math.pi) / 2 * scale
    return x, y


def to_screen(viewport: Viewport, point: GeoPoint) -> tuple[float, float]:
    """Project a geographic point to (x, y) pixels within the viewport.

    Pure function. The origin is the top-left corner of the window.
    """
    cx, cy = _world_pixels(viewport.center, viewport.zoom)
    px, py = _world_pixels(point, viewport.zoom)
    return (
        px - cx + viewport.width / 2,
        py - cy + viewport.height / 2,
    )


def screen_to_lonlat(viewport: Viewport, x: float, y: float) -> tuple[float, float]:
    """Inverse of to_screen: window pixels to (longitude, latitude).

    Pure function. Longitudes are not wrapped, so shapes drawn near the
    antimeridian stay contiguous.
    """
    scale = TILE_SIZE * 2 ** viewport.zoom
    cx, cy = _world_pixels(viewport.center, viewport.zoom)
    px = x - viewport.width / 2 + cx
    py = y - viewport.height / 2 + cy

    longitude = px / scale * 360.0 - 180.0
    latitude = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * py / scale))))
    return longitude, latitude


def offset_shape(
    viewport: Viewport,
    point: GeoPoint,
    offsets: list[tuple[float, float]],
) -> list[tuple[float, float]]:
    """Place a fixed-pixel shape around a point.

    Pure function. Used for decorations (crosses, triangles) whose size
    should not change with zoom.

    Args:
        viewport: Map window the shape is drawn in
        point: Anchor of the shape
        offsets: (dx, dy) pixel offsets from the anchor, y pointing down

    Returns:
        (longitude, latitude) pairs, one per offset
    """
    x, y = to_screen(viewport, point)
    return [screen_to_lonlat(viewport, x + dx, y + dy) for dx, dy in offsets]


def get_marker_radius(magnitude: float) -> int:
    """Determine earthquake marker radius based on magnitude.

    Pure function. Larger earthquakes get bigger markers.

    Args:
        magnitude: Earthquake magnitude

    Returns:
        Marker radius in pixels
    """
    # Scale radius with magnitude (roughly 8-20 pixels)
    base_radius = 8
    scale_factor = 2
    return min(int(base_radius + magnitude * scale_factor), 24)


def make_hit_tester(
    viewport: Viewport,
    city_radius_px: float = DEFAULT_CITY_RADIUS_PX,
) -> HitTester:
    """Build a hit tester that treats markers as circles on screen.

    Earthquakes use get_marker_radius(magnitude); cities use a fixed
    radius. A point on the circle's edge counts as a hit.

    Args:
        viewport: Map window the markers are drawn in
        city_radius_px: Pixel radius of city markers

    Returns:
        Callable (marker, x, y) -> bool
    """
    def marker_contains_screen_point(
        marker: EventMarker | CityMarker,
        x: float,
        y: float,
    ) -> bool:
        mx, my = to_screen(viewport, marker.location)
        if isinstance(marker, EventMarker):
            radius = get_marker_radius(marker.magnitude)
        else:
            radius = city_radius_px
        return math.hypot(x - mx, y - my) <= radius

    return marker_contains_screen_point

"""Static Map Client - Imperative Shell.

This module renders a snapshot of the marker registry onto OpenStreetMap
tiles. It is a renderer: it reads visibility, hover and click flags from
the registry and never changes them.
"""

import io
import logging
from dataclasses import dataclass

from staticmap import CircleMarker, Line, Polygon, StaticMap

from quakemap.core.city import CityMarker
from quakemap.core.earthquake import AgeCategory, EventMarker
from quakemap.core.formatter import get_depth_category
from quakemap.core.geo import circle_points, unwrap_longitude
from quakemap.core.projection import (
    DEFAULT_CITY_RADIUS_PX,
    Viewport,
    get_marker_radius,
    offset_shape,
)
from quakemap.core.registry import MarkerRegistry


logger = logging.getLogger(__name__)


DEPTH_COLORS = {
    "shallow": "#eab308",       # yellow-500
    "intermediate": "#3b82f6",  # blue-500
    "deep": "#dc2626",          # red-600
}
OCEAN_OUTLINE_COLOR = "#1e3a8a"
CITY_COLOR = "#1e9696"
HIGHLIGHT_COLOR = "white"
THREAT_CIRCLE_COLOR = "#dc2626"

# Recent events get an X across the marker: (color, line width)
AGE_CROSS_STYLES = {
    AgeCategory.PAST_HOUR: ("#dc2626", 3),
    AgeCategory.PAST_DAY: ("black", 1),
}


def _triangle_offsets(radius: float, pointing_up: bool) -> list[tuple[float, float]]:
    """Pixel offsets of a triangle inscribed in a circle of the given radius."""
    tip = -radius if pointing_up else radius
    base = radius / 2 if pointing_up else -radius / 2
    half_width = radius * 0.866
    return [(0.0, tip), (half_width, base), (-half_width, base)]


@dataclass
class MapImageResult:
    """Result of map image generation.

    Attributes:
        success: Whether the image was generated successfully
        image_bytes: PNG image data if successful
        error: Error message if failed
    """
    success: bool
    image_bytes: bytes | None = None
    error: str | None = None


class StaticMapClient:
    """Client for rendering marker snapshots as static map images.

    This is part of the imperative shell - it handles I/O (fetching map tiles
    and rendering images).
    """

    def __init__(self, tile_url: str | None = None) -> None:
        """Initialize static map client.

        Args:
            tile_url: Custom tile URL template. Defaults to OpenStreetMap.
        """
        # Default to OpenStreetMap tiles
        self.tile_url = tile_url or "https://tile.openstreetmap.org/{z}/{x}/{y}.png"

    def _add_event(
        self,
        static_map: StaticMap,
        viewport: Viewport,
        event: EventMarker,
        highlighted: bool,
    ) -> None:
        """Draw one earthquake.

        Ocean and highlighted events get outer rings; past-hour and
        past-day events get an X across the marker.
        """
        coords = (event.location.longitude, event.location.latitude)
        radius = get_marker_radius(event.magnitude)

        if highlighted:
            static_map.add_marker(CircleMarker(coords, HIGHLIGHT_COLOR, radius + 6))
        if not event.is_on_land:
            static_map.add_marker(CircleMarker(coords, OCEAN_OUTLINE_COLOR, radius + 3))

        color = DEPTH_COLORS[get_depth_category(event.depth_km)]
        static_map.add_marker(CircleMarker(coords, color, radius))

        style = AGE_CROSS_STYLES.get(event.age)
        if style is not None:
            cross_color, line_width = style
            arm = radius * 0.7
            for offsets in ([(-arm, -arm), (arm, arm)], [(-arm, arm), (arm, -arm)]):
                static_map.add_line(Line(
                    offset_shape(viewport, event.location, offsets),
                    cross_color,
                    line_width,
                ))

    def _add_city(
        self,
        static_map: StaticMap,
        viewport: Viewport,
        city: CityMarker,
        radius: float,
        highlighted: bool,
    ) -> None:
        """Draw one city: a triangle for coastal or high-lying cities, else a dot."""
        coords = (city.location.longitude, city.location.latitude)

        if highlighted:
            static_map.add_marker(CircleMarker(coords, HIGHLIGHT_COLOR, radius + 4))

        if city.coastal or city.high_lying:
            # Coastal cities point down, high-lying cities point up
            offsets = _triangle_offsets(radius, pointing_up=not city.coastal)
            static_map.add_polygon(Polygon(
                offset_shape(viewport, city.location, offsets),
                CITY_COLOR,
                CITY_COLOR,
            ))
        else:
            static_map.add_marker(CircleMarker(coords, CITY_COLOR, radius))

    def render_registry(
        self,
        registry: MarkerRegistry,
        viewport: Viewport,
        city_radius_px: float = DEFAULT_CITY_RADIUS_PX,
    ) -> MapImageResult:
        """Render every visible marker of the registry.

        This method performs I/O (fetches map tiles from tile server).

        Args:
            registry: Markers and their visibility/selection flags
            viewport: Map window to render
            city_radius_px: Pixel radius of city markers, the same radius
                the hit tester uses

        Returns:
            MapImageResult with image bytes or error
        """
        events = registry.visible_events()
        cities = registry.visible_cities()

        logger.info(
            "Rendering snapshot with %d earthquakes and %d cities at zoom %d",
            len(events),
            len(cities),
            viewport.zoom,
        )

        try:
            static_map = StaticMap(
                viewport.width,
                viewport.height,
                url_template=self.tile_url,
            )

            clicked = registry.selection.last_clicked
            if isinstance(clicked, EventMarker):
                ring = circle_points(clicked.location, clicked.threat_radius())
                center_lon = clicked.location.longitude
                static_map.add_polygon(Polygon(
                    [(unwrap_longitude(p.longitude, center_lon), p.latitude) for p in ring],
                    None,
                    THREAT_CIRCLE_COLOR,
                ))

            for city in cities:
                highlighted = registry.is_hovered(city) or registry.is_clicked(city)
                self._add_city(static_map, viewport, city, city_radius_px, highlighted)

            for event in events:
                highlighted = registry.is_hovered(event) or registry.is_clicked(event)
                self._add_event(static_map, viewport, event, highlighted)

            image = static_map.render(
                zoom=viewport.zoom,
                center=(viewport.center.longitude, viewport.center.latitude),
            )

            # Convert to PNG bytes
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            image_bytes = buffer.getvalue()

            logger.info(
                "Generated map image: %d bytes",
                len(image_bytes),
            )

            return MapImageResult(
                success=True,
                image_bytes=image_bytes,
            )

        except Exception as e:
            logger.error("Failed to generate map: %s", str(e))
            return MapImageResult(
                success=False,
                error=str(e),
            )

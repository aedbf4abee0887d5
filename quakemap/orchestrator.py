"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components. A QuakeMapSession owns the
marker registry for one interactive map: it loads countries and cities
once, rebuilds the earthquake set whenever the feed selection changes,
and forwards cursor and click input to the selection state machine.

Everything runs on the caller's thread. A rebuild completes before the
next input is handled.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from quakemap.core.classifier import QuakeCountReport, classify_events, count_quakes_by_country
from quakemap.core.config import Config, FeedWindow
from quakemap.core.earthquake import EventMarker, parse_events
from quakemap.core.formatter import format_country_report, format_rank_report
from quakemap.core.geo import GeoPoint
from quakemap.core.projection import Viewport, make_hit_tester
from quakemap.core.ranking import rank_report
from quakemap.core.registry import MarkerRegistry
from quakemap.core.selection import HitTester, SelectionState, handle_click, handle_cursor_move
from quakemap.core.threat import annotate_threat_radii
from quakemap.shell.feature_loader import load_cities, load_regions
from quakemap.shell.static_map_client import MapImageResult, StaticMapClient
from quakemap.shell.usgs_feed_client import USGSFeedClient


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RebuildResult:
    """Result of loading a new earthquake set.

    Attributes:
        window: Feed window that was requested
        events_loaded: Earthquakes now in the registry
        land_count: Earthquakes classified on land
        ocean_count: Earthquakes classified in the ocean
        errors: Any errors that occurred
    """
    window: FeedWindow
    events_loaded: int = 0
    land_count: int = 0
    ocean_count: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Returns True if no errors occurred."""
        return len(self.errors) == 0

    @property
    def summary(self) -> str:
        """Human-readable summary of the rebuild."""
        return (
            f"Loaded {self.events_loaded} earthquakes from the past {self.window.value}: "
            f"{self.land_count} on land, {self.ocean_count} in the ocean"
        )


class QuakeMapSession:
    """Coordinates feed loading, classification and selection for one map.

    This class wires together:
    - USGS feed client (fetches earthquake data)
    - Feature loader (country and city files)
    - Core functions (parsing, classification, threat circles, selection)
    - Static map client (snapshots of the current state)
    """

    def __init__(
        self,
        config: Config,
        feed_client: USGSFeedClient | None = None,
        map_client: StaticMapClient | None = None,
        hit_test: HitTester | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize session with configuration.

        Args:
            config: Application configuration
            feed_client: USGS feed client (created if not provided)
            map_client: Static map client (created if not provided)
            hit_test: Screen hit tester (derived from the viewport if not provided)
            clock: Source of the reference time for event ages
        """
        self.config = config
        self.feed_client = feed_client or USGSFeedClient()
        self.map_client = map_client or StaticMapClient()
        self.clock = clock
        self.registry = MarkerRegistry()
        self.window = config.feed_window

        vp = config.viewport
        self.viewport = Viewport(
            center=GeoPoint(vp.center_latitude, vp.center_longitude),
            zoom=vp.zoom,
            width=vp.width,
            height=vp.height,
        )
        self.hit_test = hit_test or make_hit_tester(self.viewport, vp.city_radius_px)

    def load_features(self) -> None:
        """Load countries and cities from the configured files.

        This method performs file I/O. Countries and cities are loaded once
        and never change afterwards.

        Raises:
            FileNotFoundError: If a feature file doesn't exist
        """
        self.registry.regions = load_regions(self.config.countries_path)
        self.registry.cities = load_cities(self.config.cities_path)
        self.registry.reset_all_visible()

    def rebuild(self, events: list[EventMarker], window: FeedWindow | None = None) -> RebuildResult:
        """Classify and annotate a new earthquake set and swap it in.

        Args:
            events: Freshly parsed earthquakes
            window: Feed window they came from (defaults to the current one)

        Returns:
            RebuildResult describing the new set
        """
        window = window or self.window

        classify_events(events, self.registry.regions)
        annotate_threat_radii(events, self.config.threat_circle)
        self.registry.replace_events(events)
        self.window = window

        counts = count_quakes_by_country(events, self.registry.regions)
        return RebuildResult(
            window=window,
            events_loaded=len(events),
            land_count=counts.land,
            ocean_count=counts.ocean,
        )

    def select_feed(self, window: FeedWindow | None = None) -> RebuildResult:
        """Fetch a feed and rebuild the earthquake set from it.

        On a fetch failure the previous earthquake set stays in place.

        Args:
            window: Feed window to load (defaults to the current one)

        Returns:
            RebuildResult with details of what happened
        """
        window = window or self.window

        try:
            geojson = self.feed_client.fetch_feed(window, self.config.feed_magnitude_level)
        except Exception as e:
            error_msg = f"Failed to fetch earthquakes: {e}"
            logger.error(error_msg)
            return RebuildResult(
                window=window,
                events_loaded=len(self.registry.events),
                errors=[error_msg],
            )

        # Pure core function
        events = parse_events(geojson, self.clock())
        result = self.rebuild(events, window)

        logger.info("%s", result.summary)
        logger.info("Top earthquakes:\n%s", format_rank_report(self.ranking()))
        logger.info("Earthquakes by country:\n%s", format_country_report(self.country_report()))

        return result

    def cursor_moved(self, x: float, y: float) -> SelectionState:
        """Update the hover target for a cursor position."""
        return handle_cursor_move(self.registry, x, y, self.hit_test)

    def clicked(self, x: float, y: float) -> SelectionState:
        """Apply a click at a screen position."""
        return handle_click(self.registry, x, y, self.hit_test)

    def ranking(self, n: int | None = None) -> list[tuple[int, str]]:
        """(rank, title) pairs for the most severe earthquakes."""
        return rank_report(self.registry.events, self.config.top_n if n is None else n)

    def country_report(self) -> QuakeCountReport:
        """Earthquake counts per country for the current set."""
        return count_quakes_by_country(self.registry.events, self.registry.regions)

    def render_snapshot(self) -> MapImageResult:
        """Render the current map state to PNG bytes."""
        return self.map_client.render_registry(
            self.registry,
            self.viewport,
            self.config.viewport.city_radius_px,
        )

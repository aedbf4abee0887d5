"""USGS Summary Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS real-time summary
feeds. All I/O is contained here; parsing is in the core module.
"""

import logging
from typing import Any

import requests

from quakemap.core.config import FeedWindow


logger = logging.getLogger(__name__)


# USGS real-time GeoJSON summary feeds
USGS_FEED_BASE = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"

# Default timeout for feed requests (seconds)
DEFAULT_TIMEOUT = 30


class USGSFeedClient:
    """Client for fetching earthquake summary feeds from USGS.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = USGS_FEED_BASE,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize feed client.

        Args:
            base_url: Base URL of the summary feeds
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def feed_url(self, window: FeedWindow, level: str = "4.5") -> str:
        """Build the URL of a summary feed.

        Args:
            window: Feed time window
            level: Magnitude level (e.g., "4.5", "significant", "all")

        Returns:
            Feed URL
        """
        return f"{self.base_url}/{level}_{window.value}.geojson"

    def fetch_feed(self, window: FeedWindow, level: str = "4.5") -> dict[str, Any]:
        """Fetch a summary feed.

        This method performs HTTP I/O.

        Args:
            window: Feed time window
            level: Magnitude level

        Returns:
            Raw GeoJSON FeatureCollection

        Raises:
            requests.RequestException: If the request fails
        """
        url = self.feed_url(window, level)

        logger.info("Fetching earthquake feed %s", url)

        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        count = data.get("metadata", {}).get("count", len(data.get("features", [])))

        logger.info("Fetched %d earthquakes from USGS", count)

        return data

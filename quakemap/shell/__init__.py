"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS summary feed client (HTTP)
- Country/city GeoJSON loading (files)
- Configuration loading (YAML/environment)
- Static map snapshots (tile fetching and image rendering)

Keep this layer thin and simple. All business logic should be in core.
"""

from quakemap.shell.usgs_feed_client import USGSFeedClient
from quakemap.shell.feature_loader import load_cities, load_regions
from quakemap.shell.config_loader import load_config, Config
from quakemap.shell.static_map_client import StaticMapClient

__all__ = [
    "USGSFeedClient",
    "load_cities",
    "load_regions",
    "load_config",
    "Config",
    "StaticMapClient",
]

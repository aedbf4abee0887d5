"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, ViewportConfig) are defined in quakemap/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakemap.core.config import Config, FeedWindow, ViewportConfig
from quakemap.core.threat import ThreatCircleConfig


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _resolve_optional_path(value: Any) -> str | None:
    """Resolve an optional path setting.

    Missing values, empty strings and placeholders whose variable is unset
    all mean "not configured".
    """
    resolved = _resolve_value(value)
    if not resolved:
        return None

    resolved = str(resolved)
    if resolved.startswith("${") and resolved.endswith("}"):
        return None
    return resolved


def _parse_feed_window(value: str) -> FeedWindow:
    """Parse a feed window name (hour, day, week, month).

    Raises:
        ValueError: If the name is not a known window
    """
    try:
        return FeedWindow(str(value).lower())
    except ValueError:
        valid = ", ".join(w.value for w in FeedWindow)
        raise ValueError(f"Unknown feed window '{value}', expected one of {valid}") from None


def _parse_threat_circle(data: dict[str, Any]) -> ThreatCircleConfig:
    """Parse threat circle constants from config data."""
    defaults = ThreatCircleConfig()
    return ThreatCircleConfig(
        scale_km=float(data.get("scale_km", defaults.scale_km)),
        exponent=float(data.get("exponent", defaults.exponent)),
    )


def _parse_viewport(data: dict[str, Any]) -> ViewportConfig:
    """Parse the map viewport from config data."""
    defaults = ViewportConfig()
    return ViewportConfig(
        center_latitude=float(data.get("center_latitude", defaults.center_latitude)),
        center_longitude=float(data.get("center_longitude", defaults.center_longitude)),
        zoom=int(data.get("zoom", defaults.zoom)),
        width=int(data.get("width", defaults.width)),
        height=int(data.get("height", defaults.height)),
        city_radius_px=float(data.get("city_radius_px", defaults.city_radius_px)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()

    feed = data.get("feed", {})
    map_output_path = _resolve_optional_path(data.get("map_output_path"))

    return Config(
        feed_window=_parse_feed_window(feed.get("window", defaults.feed_window.value)),
        feed_magnitude_level=str(feed.get("magnitude_level", defaults.feed_magnitude_level)),
        countries_path=_resolve_value(data.get("countries_path", defaults.countries_path)),
        cities_path=_resolve_value(data.get("cities_path", defaults.cities_path)),
        threat_circle=_parse_threat_circle(data.get("threat_circle", {})),
        viewport=_parse_viewport(data.get("viewport", {})),
        top_n=int(data.get("top_n", defaults.top_n)),
        map_output_path=map_output_path,
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: %s feed, level %s, top %d",
        config.feed_window.value,
        config.feed_magnitude_level,
        config.top_n,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for quick runs without a YAML file.

    Environment variables:
        FEED_WINDOW: hour, day, week or month
        FEED_LEVEL: USGS summary feed magnitude level
        COUNTRIES_PATH: Country GeoJSON file
        CITIES_PATH: City GeoJSON file
        TOP_N: Number of earthquakes in the ranking report
        MAP_OUTPUT_PATH: Where to write the map snapshot

    Returns:
        Config object from environment
    """
    defaults = Config()

    return Config(
        feed_window=_parse_feed_window(
            os.environ.get("FEED_WINDOW", defaults.feed_window.value)
        ),
        feed_magnitude_level=os.environ.get("FEED_LEVEL", defaults.feed_magnitude_level),
        countries_path=os.environ.get("COUNTRIES_PATH", defaults.countries_path),
        cities_path=os.environ.get("CITIES_PATH", defaults.cities_path),
        top_n=int(os.environ.get("TOP_N", str(defaults.top_n))),
        map_output_path=os.environ.get("MAP_OUTPUT_PATH") or None,
    )

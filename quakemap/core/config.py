"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from enum import Enum

from quakemap.core.threat import ThreatCircleConfig


class FeedWindow(Enum):
    """Time window of a USGS summary feed."""
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


# Magnitude levels published as USGS summary feeds
FEED_MAGNITUDE_LEVELS = ("significant", "4.5", "2.5", "1.0", "all")


@dataclass
class ViewportConfig:
    """Map window used for hit testing and snapshots.

    Attributes:
        center_latitude: Latitude at the window center
        center_longitude: Longitude at the window center
        zoom: Tile zoom level
        width: Window width in pixels
        height: Window height in pixels
        city_radius_px: Pixel radius of city markers
    """
    center_latitude: float = 20.0
    center_longitude: float = 0.0
    zoom: int = 2
    width: int = 1280
    height: int = 720
    city_radius_px: float = 6.0


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_window: Time window of the earthquake feed
        feed_magnitude_level: USGS summary feed level (e.g., "4.5")
        countries_path: GeoJSON file with country polygons
        cities_path: GeoJSON file with city points
        threat_circle: Threat circle calibration
        viewport: Map window
        top_n: How many earthquakes to list in the ranking report
        map_output_path: Where to write snapshots (None to skip)
    """
    feed_window: FeedWindow = FeedWindow.WEEK
    feed_magnitude_level: str = "4.5"
    countries_path: str = "data/countries.geo.json"
    cities_path: str = "data/city-data.json"
    threat_circle: ThreatCircleConfig = field(default_factory=ThreatCircleConfig)
    viewport: ViewportConfig = field(default_factory=ViewportConfig)
    top_n: int = 10
    map_output_path: str | None = None


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if config.feed_magnitude_level not in FEED_MAGNITUDE_LEVELS:
        errors.append(ValidationError(
            field="feed_magnitude_level",
            message=(
                f"Unknown feed level '{config.feed_magnitude_level}', "
                f"expected one of {', '.join(FEED_MAGNITUDE_LEVELS)}"
            ),
        ))

    # Threat circle must grow with magnitude
    if config.threat_circle.scale_km <= 0:
        errors.append(ValidationError(
            field="threat_circle.scale_km",
            message=f"Scale must be positive, got {config.threat_circle.scale_km}",
        ))
    if config.threat_circle.exponent <= 0:
        errors.append(ValidationError(
            field="threat_circle.exponent",
            message=f"Exponent must be positive, got {config.threat_circle.exponent}",
        ))

    viewport = config.viewport
    errors.extend(validate_coordinates(
        viewport.center_latitude, viewport.center_longitude, "viewport.center",
    ))
    if not 0 <= viewport.zoom <= 18:
        errors.append(ValidationError(
            field="viewport.zoom",
            message=f"Zoom {viewport.zoom} out of range [0, 18]",
        ))
    if viewport.width <= 0 or viewport.height <= 0:
        errors.append(ValidationError(
            field="viewport",
            message=f"Viewport size must be positive, got {viewport.width}x{viewport.height}",
        ))

    if config.top_n <= 0:
        errors.append(ValidationError(
            field="top_n",
            message=f"top_n is {config.top_n}, ranking report will be empty",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )

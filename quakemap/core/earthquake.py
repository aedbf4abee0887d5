"""Earthquake markers and feed parsing - Pure functions.

This module defines the EventMarker model, its land/ocean classification
variant, and parsing of USGS GeoJSON features into markers. Parsing is
pure: the reference time used for age categories is passed in.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from quakemap.core import threat
from quakemap.core.geo import GeoPoint, InvalidCoordinateError


logger = logging.getLogger(__name__)


class AgeCategory(Enum):
    """How long ago an earthquake happened, relative to the feed fetch."""
    PAST_HOUR = "Past Hour"
    PAST_DAY = "Past Day"
    PAST_WEEK = "Past Week"
    OLDER = "Older"


@dataclass(frozen=True)
class Land:
    """Earthquake located inside a country.

    Attributes:
        country: Name of the containing region
    """
    country: str


@dataclass(frozen=True)
class Ocean:
    """Earthquake not located inside any known country."""


@dataclass(frozen=True)
class Unclassified:
    """Earthquake that has not been classified yet."""


EventKind = Land | Ocean | Unclassified

OCEAN = Ocean()
UNCLASSIFIED = Unclassified()


@dataclass(eq=False)
class EventMarker:
    """An earthquake on the map.

    Markers compare and hash by identity so that two events with identical
    readings remain distinct entries in the marker registry. `kind` and
    `threat_radius_km` are written during the load-time pass; everything
    else is fixed once parsed.

    Attributes:
        location: Epicenter
        magnitude: Earthquake magnitude
        depth_km: Depth in kilometers (>= 0)
        age: Age category relative to the feed fetch
        kind: Land/ocean classification
        threat_radius_km: Threat circle radius, None until annotated
        id: USGS event ID
        title: Feed title (e.g., "M 6.1 - 30 km SW of Somewhere")
        place: Human-readable location description
        time: Event timestamp (UTC)
        url: USGS event detail URL
    """
    location: GeoPoint
    magnitude: float
    depth_km: float
    age: AgeCategory = AgeCategory.OLDER
    kind: EventKind = UNCLASSIFIED
    threat_radius_km: float | None = None
    id: str = ""
    title: str = ""
    place: str = ""
    time: datetime | None = None
    url: str = ""

    def __post_init__(self) -> None:
        if self.depth_km < 0:
            raise ValueError(f"Depth {self.depth_km} km is negative")
        if not self.title:
            self.title = f"M {self.magnitude:.1f} - {self.place or 'Unknown location'}"

    @property
    def is_on_land(self) -> bool:
        return isinstance(self.kind, Land)

    @property
    def country(self) -> str | None:
        """Containing country name, None for ocean or unclassified events."""
        if isinstance(self.kind, Land):
            return self.kind.country
        return None

    def threat_radius(self) -> float:
        """Threat circle radius in km, using default constants if not annotated."""
        if self.threat_radius_km is not None:
            return self.threat_radius_km
        return threat.threat_radius_km(self.magnitude)


def categorize_age(event_time: datetime, now: datetime) -> AgeCategory:
    """Bucket an event time into an age category.

    Pure function. Events stamped after the reference time (clock skew
    between the feed and the local clock) count as past hour.

    Args:
        event_time: When the earthquake happened
        now: Reference time (usually the fetch time)

    Returns:
        The narrowest category the event falls into
    """
    age = now - event_time

    if age < timedelta(0):
        return AgeCategory.PAST_HOUR
    if age <= timedelta(hours=1):
        return AgeCategory.PAST_HOUR
    if age <= timedelta(days=1):
        return AgeCategory.PAST_DAY
    if age <= timedelta(days=7):
        return AgeCategory.PAST_WEEK
    return AgeCategory.OLDER


def parse_event(feature: dict[str, Any], now: datetime) -> EventMarker | None:
    """Parse a single GeoJSON feature into an EventMarker.

    Pure function: takes raw dict, returns a marker or None if the feature
    lacks a magnitude, time or coordinates.

    Args:
        feature: GeoJSON feature dict from a USGS feed
        now: Reference time for the age category

    Returns:
        EventMarker or None if parsing fails

    Raises:
        InvalidCoordinateError: If the coordinates are out of range
    """
    try:
        props = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}
        coords = geometry.get("coordinates", [])

        if len(coords) < 3:
            return None

        # USGS uses milliseconds since epoch
        time_ms = props.get("time")
        if time_ms is None:
            return None

        event_time = datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)

        magnitude = props.get("mag")
        if magnitude is None:
            return None

        location = GeoPoint(latitude=float(coords[1]), longitude=float(coords[0]))

        return EventMarker(
            location=location,
            magnitude=float(magnitude),
            # Shallow events are occasionally reported slightly above sea level
            depth_km=max(float(coords[2]), 0.0),
            age=categorize_age(event_time, now),
            id=feature.get("id", ""),
            title=props.get("title") or "",
            place=props.get("place") or "Unknown location",
            time=event_time,
            url=props.get("url") or "",
        )
    except InvalidCoordinateError:
        raise
    except (KeyError, TypeError, ValueError):
        return None


def parse_events(geojson: dict[str, Any], now: datetime) -> list[EventMarker]:
    """Parse a USGS GeoJSON FeatureCollection into EventMarkers.

    Filters out unusable features and features with out-of-range
    coordinates, keeping feed order.

    Args:
        geojson: Full GeoJSON FeatureCollection
        now: Reference time for age categories

    Returns:
        List of valid EventMarkers
    """
    events = []

    for feature in geojson.get("features", []):
        try:
            event = parse_event(feature, now)
        except InvalidCoordinateError as e:
            logger.warning("Skipping event %s: %s", feature.get("id", "?"), e)
            continue
        if event is not None:
            events.append(event)

    return events

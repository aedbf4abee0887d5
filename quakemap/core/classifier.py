"""Land/ocean classification of earthquakes - Pure logic.

Each earthquake is assigned to the first region that contains its
epicenter, or to the ocean if none does. Regions are scanned in the order
given, so callers must pass them in a stable order for reproducible
results when regions overlap.
"""

from dataclasses import dataclass, field

from quakemap.core.earthquake import OCEAN, EventKind, EventMarker, Land
from quakemap.core.polygon import Region, contains


def classify(event: EventMarker, regions: list[Region]) -> EventKind:
    """Classify an earthquake as land (with country) or ocean.

    Records the result on `event.kind` and returns it.

    Args:
        event: Earthquake to classify
        regions: Regions in priority order

    Returns:
        Land(region name) for the first containing region, else OCEAN
    """
    kind: EventKind = OCEAN

    for region in regions:
        if contains(region, event.location):
            kind = Land(region.name)
            break

    event.kind = kind
    return kind


def classify_events(events: list[EventMarker], regions: list[Region]) -> None:
    """Classify every earthquake in place."""
    for event in events:
        classify(event, regions)


@dataclass(frozen=True)
class QuakeCountReport:
    """Earthquake counts per country plus the ocean total.

    Attributes:
        by_country: (country, count) pairs in region order, zero counts omitted
        ocean: Number of earthquakes not on land
    """
    by_country: tuple[tuple[str, int], ...] = field(default_factory=tuple)
    ocean: int = 0

    @property
    def land(self) -> int:
        return sum(count for _, count in self.by_country)


def count_quakes_by_country(
    events: list[EventMarker],
    regions: list[Region],
) -> QuakeCountReport:
    """Count classified earthquakes per country.

    Pure function. Events must already be classified; unclassified events
    are counted as ocean.

    Args:
        events: Classified earthquakes
        regions: Regions, in the order the report should list them

    Returns:
        QuakeCountReport
    """
    counts: dict[str, int] = {}
    for event in events:
        if event.country is not None:
            counts[event.country] = counts.get(event.country, 0) + 1

    by_country = []
    seen: set[str] = set()
    for region in regions:
        if region.name in counts and region.name not in seen:
            by_country.append((region.name, counts[region.name]))
            seen.add(region.name)

    land = sum(count for _, count in by_country)

    return QuakeCountReport(
        by_country=tuple(by_country),
        ocean=len(events) - land,
    )

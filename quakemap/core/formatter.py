"""Report formatting - Pure functions.

This module formats earthquakes, rankings and country counts into text
for logs and the console. All functions are pure with no side effects.
"""

from datetime import timezone

from quakemap.core.city import CityMarker
from quakemap.core.classifier import QuakeCountReport
from quakemap.core.earthquake import AgeCategory, EventMarker


# Depth thresholds in kilometers
INTERMEDIATE_DEPTH_KM = 70.0
DEEP_DEPTH_KM = 300.0

# Lower magnitude bound of each class, largest first
SEVERITY_LABELS = (
    (8.0, "Great"),
    (7.0, "Major"),
    (6.0, "Strong"),
    (5.0, "Moderate"),
    (4.0, "Light"),
    (3.0, "Minor"),
)


def get_severity_label(magnitude: float) -> str:
    """Name the magnitude class an earthquake falls into.

    Pure function. Magnitudes below the smallest threshold are "Micro".
    """
    for threshold, label in SEVERITY_LABELS:
        if magnitude >= threshold:
            return label
    return "Micro"


def get_depth_category(depth_km: float) -> str:
    """Classify focal depth as shallow, intermediate or deep.

    Pure function.
    """
    if depth_km >= DEEP_DEPTH_KM:
        return "deep"
    elif depth_km >= INTERMEDIATE_DEPTH_KM:
        return "intermediate"
    return "shallow"


def format_event_summary(event: EventMarker) -> str:
    """Format a one-line summary of an earthquake.

    Pure function.

    Args:
        event: Earthquake to summarize

    Returns:
        One-line summary string
    """
    where = event.country if event.country is not None else "ocean"
    summary = (
        f"M{event.magnitude:.1f} ({get_severity_label(event.magnitude)}) - "
        f"{event.place or event.title} [{where}] "
        f"depth {event.depth_km:.1f}km ({get_depth_category(event.depth_km)})"
    )
    if event.time is not None:
        time_str = event.time.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
        summary += f" at {time_str}"
    if event.age in (AgeCategory.PAST_HOUR, AgeCategory.PAST_DAY):
        summary += f" ({event.age.value.lower()})"
    return summary


def format_city_summary(city: CityMarker) -> str:
    """Format a one-line summary of a city.

    Pure function.
    """
    summary = city.name
    if city.country:
        summary += f", {city.country}"
    if city.population:
        summary += f" - pop. {city.population:.1f}M"

    features = [
        label for label, present in (("coastal", city.coastal), ("high-lying", city.high_lying))
        if present
    ]
    if features:
        summary += f" ({', '.join(features)})"
    return summary


def format_rank_report(ranking: list[tuple[int, str]]) -> str:
    """Format (rank, title) pairs, one per line.

    Pure function.
    """
    if not ranking:
        return "No earthquakes to rank."
    return "\n".join(f"#{rank}: {title}" for rank, title in ranking)


def format_country_report(report: QuakeCountReport) -> str:
    """Format earthquake counts per country and the ocean total.

    Pure function.
    """
    lines = [f"{country}: {count}" for country, count in report.by_country]
    lines.append(f"OCEAN QUAKES: {report.ocean}")
    return "\n".join(lines)

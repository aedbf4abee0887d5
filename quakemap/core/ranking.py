"""Severity ranking of earthquakes - Pure functions."""

from quakemap.core.earthquake import EventMarker


def severity_key(indexed: tuple[int, EventMarker]) -> tuple[float, int]:
    """Sort key: higher magnitude first, then original position."""
    position, event = indexed
    return (-event.magnitude, position)


def top_n(events: list[EventMarker], n: int) -> list[EventMarker]:
    """Return the n most severe earthquakes, strongest first.

    Pure function. The input list is not reordered; ties keep their
    original relative order.

    Args:
        events: Earthquakes to rank
        n: How many to return

    Returns:
        Up to n earthquakes sorted by descending magnitude
    """
    if n <= 0:
        return []

    ranked = sorted(enumerate(events), key=severity_key)
    return [event for _, event in ranked[:n]]


def rank_report(events: list[EventMarker], n: int) -> list[tuple[int, str]]:
    """Return (rank, title) pairs for the n most severe earthquakes.

    Pure function. Ranks start at 1.
    """
    return [(rank, event.title) for rank, event in enumerate(top_n(events, n), start=1)]

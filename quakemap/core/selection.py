"""Hover and click selection - State machine over the marker registry.

Two inputs drive the state machine:

- Cursor moves recompute the hover target. Hover is transient and at most
  one marker is hovered at a time. While a marker is clicked, hover is
  suppressed.
- Clicks toggle a sticky selection. Clicking an earthquake hides every
  other earthquake and every city outside its threat circle. Clicking a
  city hides every other city and every earthquake whose threat circle
  does not reach it. Any click while something is selected clears the
  selection and shows all markers again.

Earthquakes are scanned before cities, so overlapping shapes resolve in
favor of the earthquake.

Screen hit testing belongs to the renderer and is passed in as a
HitTester callable.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable

from quakemap.core.city import CityMarker
from quakemap.core.earthquake import EventMarker
from quakemap.core.geo import distance_km

if TYPE_CHECKING:
    from quakemap.core.registry import Marker, MarkerRegistry


logger = logging.getLogger(__name__)


# marker_contains_screen_point(marker, x, y) -> bool
HitTester = Callable[["Marker", float, float], bool]


class SelectionPhase(Enum):
    IDLE = "idle"
    HOVERING = "hovering"
    CLICKED = "clicked"


@dataclass(frozen=True)
class SelectionState:
    """Current hover and click targets.

    Attributes:
        last_hovered: Marker under the cursor, if any
        last_clicked: Marker selected by the last click, if any
    """
    last_hovered: "Marker | None" = None
    last_clicked: "Marker | None" = None

    @property
    def phase(self) -> SelectionPhase:
        if self.last_clicked is not None:
            return SelectionPhase.CLICKED
        if self.last_hovered is not None:
            return SelectionPhase.HOVERING
        return SelectionPhase.IDLE


IDLE = SelectionState()


def _first_hit(
    markers: Iterable["Marker"],
    registry: "MarkerRegistry",
    x: float,
    y: float,
    hit_test: HitTester,
) -> "Marker | None":
    """Return the first visible marker whose shape contains (x, y)."""
    for marker in markers:
        if not registry.is_hidden(marker) and hit_test(marker, x, y):
            return marker
    return None


def handle_cursor_move(
    registry: "MarkerRegistry",
    x: float,
    y: float,
    hit_test: HitTester,
) -> SelectionState:
    """Recompute the hover target for a cursor position.

    Args:
        registry: Markers and their current state
        x: Cursor x in screen coordinates
        y: Cursor y in screen coordinates
        hit_test: Renderer's screen-space containment check

    Returns:
        The new selection state (also stored on the registry)
    """
    state = registry.selection
    hovered = None

    if state.last_clicked is None:
        hovered = _first_hit(registry.events, registry, x, y, hit_test)
        if hovered is None:
            hovered = _first_hit(registry.cities, registry, x, y, hit_test)

    new_state = SelectionState(last_hovered=hovered, last_clicked=state.last_clicked)
    registry.selection = new_state
    return new_state


def _select_event(registry: "MarkerRegistry", clicked: EventMarker) -> None:
    """Show only the clicked earthquake and the cities inside its threat circle."""
    radius = clicked.threat_radius()

    for event in registry.events:
        if event is not clicked:
            registry.set_hidden(event, True)

    for city in registry.cities:
        if distance_km(city.location, clicked.location) > radius:
            registry.set_hidden(city, True)


def _select_city(registry: "MarkerRegistry", clicked: CityMarker) -> None:
    """Show only the clicked city and the earthquakes that threaten it."""
    for city in registry.cities:
        if city is not clicked:
            registry.set_hidden(city, True)

    for event in registry.events:
        if distance_km(event.location, clicked.location) > event.threat_radius():
            registry.set_hidden(event, True)


def handle_click(
    registry: "MarkerRegistry",
    x: float,
    y: float,
    hit_test: HitTester,
) -> SelectionState:
    """Apply a click at a screen position.

    Args:
        registry: Markers and their current state
        x: Click x in screen coordinates
        y: Click y in screen coordinates
        hit_test: Renderer's screen-space containment check

    Returns:
        The new selection state (also stored on the registry)
    """
    state = registry.selection

    if state.last_clicked is not None:
        # Any click clears an active selection, wherever it lands
        registry.reset_all_visible()
        logger.debug("Selection cleared")
        return registry.selection

    clicked = _first_hit(registry.events, registry, x, y, hit_test)
    if clicked is not None:
        _select_event(registry, clicked)
        logger.debug("Selected earthquake %s", clicked.title)
    else:
        clicked = _first_hit(registry.cities, registry, x, y, hit_test)
        if clicked is not None:
            _select_city(registry, clicked)
            logger.debug("Selected city %s", clicked.name)

    if clicked is None:
        return state

    new_state = SelectionState(last_hovered=state.last_hovered, last_clicked=clicked)
    registry.selection = new_state
    return new_state

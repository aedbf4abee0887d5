"""Marker registry - In-memory state read by the renderer.

Holds the three marker collections (regions, cities, earthquakes), which
markers are hidden, and the current selection state. It contains no
business logic; the selection state machine decides what to hide.
"""

import logging

from quakemap.core.city import CityMarker
from quakemap.core.earthquake import EventMarker
from quakemap.core.polygon import Region
from quakemap.core.selection import IDLE, SelectionState


logger = logging.getLogger(__name__)


Marker = EventMarker | CityMarker


class MarkerRegistry:
    """Marker collections plus per-marker visibility and the selection.

    Visibility is keyed by marker identity. Every marker starts visible.
    """

    def __init__(
        self,
        regions: list[Region] | None = None,
        cities: list[CityMarker] | None = None,
        events: list[EventMarker] | None = None,
    ) -> None:
        self.regions: list[Region] = list(regions or [])
        self.cities: list[CityMarker] = list(cities or [])
        self.events: list[EventMarker] = list(events or [])
        self.selection: SelectionState = IDLE
        self._hidden: set[Marker] = set()

    def set_hidden(self, marker: Marker, hidden: bool) -> None:
        if hidden:
            self._hidden.add(marker)
        else:
            self._hidden.discard(marker)

    def is_hidden(self, marker: Marker) -> bool:
        return marker in self._hidden

    def reset_all_visible(self) -> None:
        """Show every marker and clear hover and click."""
        self._hidden.clear()
        self.selection = IDLE

    def replace_events(self, events: list[EventMarker]) -> None:
        """Swap in a freshly loaded earthquake set.

        The previous set is discarded, and visibility and selection are
        reset because they may refer to discarded markers.
        """
        self.events = list(events)
        self.reset_all_visible()
        logger.debug("Registry now holds %d earthquakes", len(self.events))

    def is_hovered(self, marker: Marker) -> bool:
        return self.selection.last_hovered is marker

    def is_clicked(self, marker: Marker) -> bool:
        return self.selection.last_clicked is marker

    def visible_events(self) -> list[EventMarker]:
        return [e for e in self.events if not self.is_hidden(e)]

    def visible_cities(self) -> list[CityMarker]:
        return [c for c in self.cities if not self.is_hidden(c)]

"""Unit tests for the hover/click selection state machine.

Screen hit testing is replaced by a fake that places each marker at a
fixed screen position and treats it as a 5-pixel circle.
"""

import math

import pytest

from quakemap.core.city import CityMarker
from quakemap.core.earthquake import EventMarker
from quakemap.core.geo import GeoPoint
from quakemap.core.registry import MarkerRegistry
from quakemap.core.selection import (
    SelectionPhase,
    SelectionState,
    handle_click,
    handle_cursor_move,
)
from quakemap.core.threat import annotate_threat_radii, threat_radius_km


HIT_RADIUS_PX = 5


class FakeScreen:
    """Maps markers to screen positions and hit-tests them."""

    def __init__(self) -> None:
        self.positions = {}

    def place(self, marker, x: float, y: float):
        self.positions[marker] = (x, y)
        return marker

    def __call__(self, marker, x: float, y: float) -> bool:
        if marker not in self.positions:
            return False
        mx, my = self.positions[marker]
        return math.hypot(x - mx, y - my) <= HIT_RADIUS_PX


@pytest.fixture
def screen():
    return FakeScreen()


@pytest.fixture
def quake(screen):
    """M6.0 at (0, 0), drawn at (100, 100)."""
    event = EventMarker(location=GeoPoint(0.0, 0.0), magnitude=6.0, depth_km=10.0, title="M 6.0 - Center")
    return screen.place(event, 100, 100)


@pytest.fixture
def far_quake(screen):
    """M5.0 at (30, 30), drawn at (400, 100)."""
    event = EventMarker(location=GeoPoint(30.0, 30.0), magnitude=5.0, depth_km=10.0, title="M 5.0 - Far")
    return screen.place(event, 400, 100)


@pytest.fixture
def near_city(screen):
    """About 56 km from the M6.0 quake, drawn at (110, 100)."""
    city = CityMarker(location=GeoPoint(0.5, 0.0), name="Near")
    return screen.place(city, 110, 100)


@pytest.fixture
def far_city(screen):
    """About 556 km from the M6.0 quake, drawn at (200, 100)."""
    city = CityMarker(location=GeoPoint(5.0, 0.0), name="Far")
    return screen.place(city, 200, 100)


@pytest.fixture
def registry(quake, far_quake, near_city, far_city):
    events = [quake, far_quake]
    annotate_threat_radii(events)
    return MarkerRegistry(cities=[near_city, far_city], events=events)


def clicked_count(registry: MarkerRegistry) -> int:
    markers = [*registry.events, *registry.cities]
    return sum(1 for m in markers if registry.is_clicked(m))


class TestSelectionState:
    """Tests for SelectionState.phase."""

    def test_phases(self, quake, near_city):
        """Phase reflects which references are set."""
        assert SelectionState().phase == SelectionPhase.IDLE
        assert SelectionState(last_hovered=near_city).phase == SelectionPhase.HOVERING
        assert SelectionState(last_hovered=near_city, last_clicked=quake).phase == SelectionPhase.CLICKED


class TestHandleCursorMove:
    """Tests for handle_cursor_move()."""

    def test_hovers_marker_under_cursor(self, registry, screen, quake):
        """The marker under the cursor becomes the hover target."""
        state = handle_cursor_move(registry, 101, 99, screen)

        assert state.last_hovered is quake
        assert state.phase == SelectionPhase.HOVERING
        assert registry.is_hovered(quake) is True

    def test_hovers_city(self, registry, screen, far_city):
        """Cities can be hovered."""
        state = handle_cursor_move(registry, 200, 100, screen)
        assert state.last_hovered is far_city

    def test_miss_clears_hover(self, registry, screen, quake):
        """Moving off a marker clears the hover."""
        handle_cursor_move(registry, 100, 100, screen)
        state = handle_cursor_move(registry, 600, 600, screen)

        assert state.last_hovered is None
        assert state.phase == SelectionPhase.IDLE
        assert registry.is_hovered(quake) is False

    def test_moving_between_markers_keeps_single_hover(self, registry, screen, quake, far_city):
        """Only the latest marker is hovered."""
        handle_cursor_move(registry, 100, 100, screen)
        state = handle_cursor_move(registry, 200, 100, screen)

        assert state.last_hovered is far_city
        assert registry.is_hovered(quake) is False

    def test_events_win_over_cities(self, registry, screen, quake, near_city):
        """Where an event and a city overlap, the event is hovered."""
        screen.place(near_city, 102, 100)
        state = handle_cursor_move(registry, 101, 100, screen)
        assert state.last_hovered is quake

    def test_first_event_in_collection_order_wins(self, registry, screen, quake, far_quake):
        """Overlapping events resolve to collection order."""
        screen.place(far_quake, 100, 100)
        state = handle_cursor_move(registry, 100, 100, screen)
        assert state.last_hovered is quake

    def test_hidden_markers_are_not_hovered(self, registry, screen, quake):
        """Hidden markers are skipped by the scan."""
        registry.set_hidden(quake, True)
        state = handle_cursor_move(registry, 100, 100, screen)
        assert state.last_hovered is None

    def test_hover_suppressed_while_clicked(self, registry, screen, quake, far_city):
        """While a marker is clicked, hover scanning is skipped."""
        handle_click(registry, 100, 100, screen)

        state = handle_cursor_move(registry, 400, 100, screen)

        assert state.last_hovered is None
        assert state.last_clicked is quake
        assert state.phase == SelectionPhase.CLICKED

    def test_empty_registry(self, screen):
        """Nothing to hover in an empty registry."""
        registry = MarkerRegistry()
        state = handle_cursor_move(registry, 0, 0, screen)
        assert state.phase == SelectionPhase.IDLE


class TestHandleClickOnEvent:
    """Tests for clicking an earthquake."""

    def test_click_selects_event(self, registry, screen, quake):
        """Clicking an event makes it the clicked marker."""
        state = handle_click(registry, 100, 100, screen)

        assert state.last_clicked is quake
        assert state.phase == SelectionPhase.CLICKED
        assert registry.selection is state

    def test_hides_other_events(self, registry, screen, quake, far_quake):
        """Every other event is hidden."""
        handle_click(registry, 100, 100, screen)

        assert registry.is_hidden(quake) is False
        assert registry.is_hidden(far_quake) is True

    def test_threat_circle_filters_cities(self, registry, screen, near_city, far_city):
        """Cities inside the M6.0 threat circle stay, others are hidden."""
        radius = threat_radius_km(6.0)
        assert 56 < radius < 556

        handle_click(registry, 100, 100, screen)

        assert registry.is_hidden(near_city) is False
        assert registry.is_hidden(far_city) is True

    def test_event_takes_priority_over_overlapping_city(self, registry, screen, quake, near_city):
        """A click on overlapping shapes selects the event."""
        screen.place(near_city, 100, 100)
        state = handle_click(registry, 100, 100, screen)
        assert state.last_clicked is quake

    def test_hidden_event_cannot_be_clicked(self, registry, screen, quake, near_city):
        """Clicks ignore hidden events and fall through to cities."""
        registry.set_hidden(quake, True)
        screen.place(near_city, 100, 100)

        state = handle_click(registry, 100, 100, screen)

        assert state.last_clicked is near_city


class TestHandleClickOnCity:
    """Tests for clicking a city."""

    def test_click_selects_city(self, registry, screen, far_city):
        """Clicking a city makes it the clicked marker."""
        state = handle_click(registry, 200, 100, screen)
        assert state.last_clicked is far_city

    def test_hides_other_cities(self, registry, screen, near_city, far_city):
        """Every other city is hidden."""
        handle_click(registry, 200, 100, screen)

        assert registry.is_hidden(far_city) is False
        assert registry.is_hidden(near_city) is True

    def test_hides_events_that_cannot_reach_city(self, registry, screen, quake, far_quake):
        """Events stay only if the city is inside their own threat circle."""
        handle_click(registry, 110, 100, screen)  # near city, ~56 km from quake

        assert registry.is_hidden(quake) is False
        assert registry.is_hidden(far_quake) is True

    def test_far_city_sees_no_threat(self, registry, screen, quake, far_quake):
        """A city outside every threat circle hides all events."""
        handle_click(registry, 200, 100, screen)  # ~556 km from quake

        assert registry.is_hidden(quake) is True
        assert registry.is_hidden(far_quake) is True

    def test_uses_each_events_own_radius(self, screen, far_city):
        """A larger event reaches a city a smaller one cannot."""
        big = screen.place(
            EventMarker(location=GeoPoint(0.0, 0.0), magnitude=8.0, depth_km=10.0), 100, 100,
        )
        small = screen.place(
            EventMarker(location=GeoPoint(0.0, 0.1), magnitude=4.0, depth_km=10.0), 120, 100,
        )
        annotate_threat_radii([big, small])
        registry = MarkerRegistry(cities=[far_city], events=[big, small])

        handle_click(registry, 200, 100, screen)

        assert registry.is_hidden(big) is False
        assert registry.is_hidden(small) is True


class TestHandleClickToggle:
    """Tests for clearing a selection and missed clicks."""

    def test_click_elsewhere_clears_selection(self, registry, screen, quake, far_quake, near_city, far_city):
        """Any click while something is clicked resets to idle and shows all."""
        handle_click(registry, 100, 100, screen)

        state = handle_click(registry, 700, 700, screen)

        assert state.phase == SelectionPhase.IDLE
        assert state.last_clicked is None
        for marker in (quake, far_quake, near_city, far_city):
            assert registry.is_hidden(marker) is False

    def test_click_on_another_marker_still_only_clears(self, registry, screen, near_city):
        """The clearing click doesn't select what it lands on."""
        handle_click(registry, 100, 100, screen)

        state = handle_click(registry, 110, 100, screen)

        assert state.last_clicked is None
        assert registry.is_clicked(near_city) is False

    def test_missed_click_stays_idle(self, registry, screen, quake, far_city):
        """A click on empty map changes nothing."""
        state = handle_click(registry, 700, 700, screen)

        assert state.phase == SelectionPhase.IDLE
        assert registry.is_hidden(quake) is False
        assert registry.is_hidden(far_city) is False

    def test_missed_click_keeps_hover(self, registry, screen, quake):
        """A click that hits nothing leaves the hover in place."""
        handle_cursor_move(registry, 100, 100, screen)
        registry.set_hidden(quake, True)

        state = handle_click(registry, 100, 100, screen)

        assert state.last_hovered is quake
        assert state.last_clicked is None

    def test_at_most_one_clicked_marker(self, registry, screen):
        """The single-clicked invariant holds across a click sequence."""
        for x, y in [(100, 100), (200, 100), (200, 100), (110, 100), (110, 100), (400, 100), (5, 5)]:
            handle_click(registry, x, y, screen)
            assert clicked_count(registry) <= 1

    def test_empty_registry(self, screen):
        """Clicks on an empty registry find nothing."""
        registry = MarkerRegistry()
        state = handle_click(registry, 0, 0, screen)
        assert state.phase == SelectionPhase.IDLE

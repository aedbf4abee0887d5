"""Tests for the command-line entry point.

The session and config loader are mocked; no files or network are used.
"""

from unittest.mock import patch

import pytest

from quakemap.core.city import CityMarker
from quakemap.core.classifier import QuakeCountReport
from quakemap.core.config import Config, FeedWindow
from quakemap.core.earthquake import EventMarker, Land
from quakemap.core.geo import GeoPoint
from quakemap.core.selection import SelectionState
from quakemap.main import build_parser, main
from quakemap.orchestrator import RebuildResult
from quakemap.shell.static_map_client import MapImageResult


@pytest.fixture
def mock_session():
    with patch("quakemap.main.QuakeMapSession") as mock_class:
        session = mock_class.return_value
        session.select_feed.return_value = RebuildResult(
            window=FeedWindow.DAY, events_loaded=2, land_count=1, ocean_count=1,
        )
        session.ranking.return_value = [(1, "M 6.0 - Somewhere")]
        session.country_report.return_value = QuakeCountReport(by_country=(("Chile", 1),), ocean=1)
        session.clicked.return_value = SelectionState()
        yield mock_class, session


@pytest.fixture
def mock_load_config(monkeypatch):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    monkeypatch.delenv("FEED_WINDOW", raising=False)
    with patch("quakemap.main.load_config") as mock_load:
        mock_load.return_value = Config()
        yield mock_load


class TestBuildParser:
    """Tests for build_parser()."""

    def test_parses_clicks(self):
        """--click can repeat and takes two numbers."""
        args = build_parser().parse_args(["--click", "1", "2", "--click", "3.5", "4"])
        assert args.click == [[1.0, 2.0], [3.5, 4.0]]

    def test_rejects_unknown_window(self):
        """Only known feed windows are accepted."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--window", "year"])


class TestMain:
    """Tests for main()."""

    def test_prints_reports(self, mock_session, mock_load_config, capsys):
        """A successful run prints the summary and both reports."""
        exit_code = main(["--config", "custom.yaml"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Loaded 2 earthquakes from the past day" in out
        assert "#1: M 6.0 - Somewhere" in out
        assert "Chile: 1" in out
        assert "OCEAN QUAKES: 1" in out
        mock_load_config.assert_called_once_with("custom.yaml")

    def test_overrides_window_and_top(self, mock_session, mock_load_config):
        """Command-line options override the config file."""
        mock_class, _ = mock_session

        main(["--window", "hour", "--top", "3"])

        config = mock_class.call_args.args[0]
        assert config.feed_window == FeedWindow.HOUR
        assert config.top_n == 3

    def test_invalid_config_exits_2(self, mock_session, mock_load_config):
        """Validation errors stop the run before any I/O."""
        mock_class, _ = mock_session
        mock_load_config.return_value = Config(feed_magnitude_level="9.9")

        assert main([]) == 2
        mock_class.assert_not_called()

    def test_missing_features_exits_1(self, mock_session, mock_load_config):
        """Missing country or city files fail the run."""
        _, session = mock_session
        session.load_features.side_effect = FileNotFoundError("data/countries.geo.json")

        assert main([]) == 1

    def test_fetch_failure_exits_1(self, mock_session, mock_load_config):
        """A failed feed fetch fails the run."""
        _, session = mock_session
        session.select_feed.return_value = RebuildResult(window=FeedWindow.DAY, errors=["boom"])

        assert main([]) == 1

    def test_replays_clicks(self, mock_session, mock_load_config):
        """Each --click is forwarded in order."""
        _, session = mock_session

        main(["--click", "10", "20", "--click", "30", "40"])

        assert [c.args for c in session.clicked.call_args_list] == [(10.0, 20.0), (30.0, 40.0)]

    def test_clicked_event_is_summarized(self, mock_session, mock_load_config, capsys):
        """Selecting an earthquake prints its summary."""
        _, session = mock_session
        quake = EventMarker(
            location=GeoPoint(-33.3, -71.9), magnitude=6.1, depth_km=24.5,
            kind=Land("Chile"), place="45 km SW of Valparaiso, Chile",
        )
        session.clicked.return_value = SelectionState(last_clicked=quake)

        main(["--click", "10", "20"])

        out = capsys.readouterr().out
        assert "M6.1 (Strong) - 45 km SW of Valparaiso, Chile [Chile]" in out

    def test_clicked_city_is_summarized(self, mock_session, mock_load_config, capsys):
        """Selecting a city prints its summary."""
        _, session = mock_session
        city = CityMarker(location=GeoPoint(-33.05, -71.6), name="Valparaiso", coastal=True)
        session.clicked.return_value = SelectionState(last_clicked=city)

        main(["--click", "10", "20"])

        assert "Valparaiso (coastal)" in capsys.readouterr().out

    def test_deselecting_click_prints_nothing_extra(self, mock_session, mock_load_config, capsys):
        """A click that clears the selection adds no summary line."""
        main(["--click", "10", "20"])

        assert capsys.readouterr().out.rstrip().endswith("OCEAN QUAKES: 1")

    def test_writes_snapshot(self, mock_session, mock_load_config, tmp_path):
        """--snapshot writes the rendered PNG."""
        _, session = mock_session
        session.render_snapshot.return_value = MapImageResult(success=True, image_bytes=b"PNG")
        path = tmp_path / "map.png"

        assert main(["--snapshot", str(path)]) == 0
        assert path.read_bytes() == b"PNG"

    def test_snapshot_failure_exits_1(self, mock_session, mock_load_config, tmp_path):
        """A failed render fails the run without writing a file."""
        _, session = mock_session
        session.render_snapshot.return_value = MapImageResult(success=False, error="tiles down")
        path = tmp_path / "map.png"

        assert main(["--snapshot", str(path)]) == 1
        assert not path.exists()


class TestGetConfig:
    """Tests for choosing the configuration source."""

    def test_env_vars_used_without_config_file(self, mock_session, mock_load_config, monkeypatch):
        """FEED_WINDOW without CONFIG_PATH reads settings from the environment."""
        monkeypatch.setenv("FEED_WINDOW", "week")

        with patch("quakemap.main.load_config_from_env") as mock_from_env:
            mock_from_env.return_value = Config(feed_window=FeedWindow.WEEK)
            assert main([]) == 0

        mock_from_env.assert_called_once_with()
        mock_load_config.assert_not_called()

    def test_config_path_env_wins_over_env_vars(self, mock_session, mock_load_config, monkeypatch):
        """CONFIG_PATH takes precedence over individual variables."""
        monkeypatch.setenv("CONFIG_PATH", "/etc/quakemap.yaml")
        monkeypatch.setenv("FEED_WINDOW", "week")

        with patch("quakemap.main.load_config_from_env") as mock_from_env:
            main([])

        mock_load_config.assert_called_once_with()
        mock_from_env.assert_not_called()

    def test_config_flag_wins(self, mock_session, mock_load_config, monkeypatch):
        """--config is used even when environment settings exist."""
        monkeypatch.setenv("FEED_WINDOW", "week")

        main(["--config", "custom.yaml"])

        mock_load_config.assert_called_once_with("custom.yaml")

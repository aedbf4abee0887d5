"""Command-line entry point.

Loads configuration, countries and cities, fetches one earthquake feed,
prints the ranking and per-country reports, and optionally replays clicks
and writes a snapshot of the resulting map.

Usage:
    python -m quakemap.main --window day --top 5
    python -m quakemap.main --click 640 360 --snapshot map.png

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
    FEED_WINDOW: Without a config file, read all settings from the
        environment (see load_config_from_env)
    LOG_LEVEL: Logging level (default: INFO)
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from quakemap.core.city import CityMarker
from quakemap.core.config import Config, FeedWindow, validate_config
from quakemap.core.earthquake import EventMarker
from quakemap.core.formatter import (
    format_city_summary,
    format_country_report,
    format_event_summary,
    format_rank_report,
)
from quakemap.orchestrator import QuakeMapSession
from quakemap.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify recent earthquakes and filter them against cities",
    )
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument(
        "--window",
        choices=[w.value for w in FeedWindow],
        help="Feed time window (overrides config)",
    )
    parser.add_argument("--top", type=int, help="Number of earthquakes to rank")
    parser.add_argument(
        "--click",
        nargs=2,
        type=float,
        action="append",
        metavar=("X", "Y"),
        help="Replay a click at screen coordinates (repeatable)",
    )
    parser.add_argument("--snapshot", help="Write a PNG snapshot of the map to this path")
    return parser


def _get_config(config_path: str | None) -> Config:
    """Load configuration from --config, CONFIG_PATH or environment variables."""
    if config_path:
        return load_config(config_path)
    elif os.environ.get("CONFIG_PATH"):
        return load_config()
    elif os.environ.get("FEED_WINDOW"):
        return load_config_from_env()
    else:
        return load_config()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = _get_config(args.config)
    if args.window:
        config.feed_window = FeedWindow(args.window)
    if args.top is not None:
        config.top_n = args.top

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("%s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            logger.error("%s: %s", error.field, error.message)
        return 2

    session = QuakeMapSession(config)

    try:
        session.load_features()
    except FileNotFoundError as e:
        logger.error("Cannot load map features: %s", e)
        return 1

    result = session.select_feed()
    if not result.success:
        for error in result.errors:
            logger.error("Error: %s", error)
        return 1

    print(result.summary)
    print(format_rank_report(session.ranking()))
    print(format_country_report(session.country_report()))

    for x, y in args.click or []:
        state = session.clicked(x, y)
        logger.info("Click at (%.0f, %.0f): %s", x, y, state.phase.value)
        if isinstance(state.last_clicked, EventMarker):
            print(format_event_summary(state.last_clicked))
        elif isinstance(state.last_clicked, CityMarker):
            print(format_city_summary(state.last_clicked))

    snapshot_path = args.snapshot or config.map_output_path
    if snapshot_path:
        image = session.render_snapshot()
        if not image.success:
            logger.error("Snapshot failed: %s", image.error)
            return 1
        Path(snapshot_path).write_bytes(image.image_bytes)
        print(f"Snapshot written to {snapshot_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

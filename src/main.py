"""Cloud Function Entry Point.

This module provides the entry point for Google Cloud Functions.
It's a thin wrapper that loads configuration, runs one fetch in the
background and returns what the screen ended up showing.
"""

import logging
import os
import json
from dataclasses import asdict
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import functions_framework
from flask import Request

from src.background import EarthquakeTask
from src.core.config import Config
from src.orchestrator import Orchestrator
from src.shell.config_loader import load_config, load_config_from_env
from src.shell.display import EarthquakeScreen


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("USGS_REQUEST_URL"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def _display_zone(config: Config) -> ZoneInfo | None:
    """Resolve the configured display time zone, None for local time."""
    if not config.display_timezone:
        return None
    try:
        return ZoneInfo(config.display_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(
            "Unknown time zone %s, using local time",
            config.display_timezone,
        )
        return None


def run_screen(config: Config) -> EarthquakeScreen:
    """Create a screen, fetch in the background and deliver the result.

    Args:
        config: Application configuration

    Returns:
        The screen, updated if an earthquake was found
    """
    screen = EarthquakeScreen(
        tz=_display_zone(config),
        labels=config.alert_labels,
    )

    task = EarthquakeTask(Orchestrator(config))
    task.execute()
    result = task.deliver(screen)

    logger.info("Completed: %s", result.summary)
    return screen


@functions_framework.http
def earthquake_screen(request: Request) -> tuple[dict[str, Any], int]:
    """HTTP Cloud Function entry point.

    Failures in the fetch pipeline are not reported to the client: the
    response carries empty fields, as the screen would show.

    Args:
        request: Flask request object (not used, but required by framework)

    Returns:
        Tuple of (response dict, HTTP status code)
    """
    logger.info("Starting earthquake fetch")

    try:
        config = _get_config()
        screen = run_screen(config)
        return asdict(screen.snapshot()), 200

    except Exception as e:
        logger.exception("Unexpected error in earthquake screen")
        return {
            "status": "error",
            "message": str(e),
        }, 500


# For local testing
if __name__ == "__main__":
    # Mock request for local testing
    class MockRequest:
        pass

    response, status = earthquake_screen(MockRequest())
    print(f"\nResponse ({status}):")
    print(json.dumps(response, indent=2))

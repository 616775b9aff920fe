"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Request target building and URL validation
- Earthquake event extraction
- Display formatting
- Configuration models and validation

All functions here are deterministic and have no I/O.
"""

from src.core.errors import ErrorKind
from src.core.event import EarthquakeEvent, extract_event, extract_feature_from_json
from src.core.request import RequestTarget, build_request, build_query_url
from src.core.formatter import format_date, format_tsunami_alert, format_event_display

__all__ = [
    # Errors
    "ErrorKind",
    # Event
    "EarthquakeEvent",
    "extract_event",
    "extract_feature_from_json",
    # Request
    "RequestTarget",
    "build_request",
    "build_query_url",
    # Formatter
    "format_date",
    "format_tsunami_alert",
    "format_event_display",
]

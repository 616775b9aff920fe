"""Earthquake event model and extraction - Pure functions.

This module parses a USGS GeoJSON response body into a single typed
EarthquakeEvent. Only the first feature is read.
All functions are pure with no side effects.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from src.core.errors import ErrorKind


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Event times must stay displayable in any zone, so keep a day clear of
# the datetime range limits
MIN_EVENT_MILLIS = (datetime(1, 1, 2, tzinfo=timezone.utc) - EPOCH) // timedelta(milliseconds=1)
MAX_EVENT_MILLIS = (datetime(9999, 12, 30, tzinfo=timezone.utc) - EPOCH) // timedelta(milliseconds=1)


@dataclass(frozen=True)
class EarthquakeEvent:
    """Immutable earthquake event.

    Attributes:
        title: Human-readable description, e.g. "M 7.1 - 10km SW of X"
        occurred_at_epoch_millis: Event time in milliseconds since epoch (UTC)
        tsunami_alert: 0 = no alert, 1 = alert issued, other = unknown
    """
    title: str
    occurred_at_epoch_millis: int
    tsunami_alert: int

    @property
    def occurred_at(self) -> datetime:
        """Return the event time as an aware UTC datetime."""
        return EPOCH + timedelta(milliseconds=self.occurred_at_epoch_millis)


@dataclass
class ExtractionResult:
    """Outcome of extracting an event from a response body.

    Attributes:
        event: The parsed event, None if nothing could be extracted
        error: PARSE_FAILURE or EMPTY_RESULT when event is None
        detail: Human-readable reason for the failure
    """
    event: EarthquakeEvent | None
    error: ErrorKind | None = None
    detail: str | None = None


class _MalformedFeature(ValueError):
    """Raised internally when the document does not have the expected shape."""


def _require_object(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _MalformedFeature(f"'{name}' is not an object")
    return value


def _require_int(props: dict[str, Any], key: str) -> int:
    if key not in props:
        raise _MalformedFeature(f"missing '{key}'")
    value = props[key]
    # bool is an int subclass; JSON true/false is not a valid code
    if isinstance(value, bool) or not isinstance(value, int):
        raise _MalformedFeature(f"'{key}' is not an integer: {value!r}")
    return value


def _require_str(props: dict[str, Any], key: str) -> str:
    if key not in props:
        raise _MalformedFeature(f"missing '{key}'")
    value = props[key]
    if not isinstance(value, str):
        raise _MalformedFeature(f"'{key}' is not a string: {value!r}")
    return value


def _require_time(props: dict[str, Any]) -> int:
    value = _require_int(props, "time")
    if not MIN_EVENT_MILLIS <= value <= MAX_EVENT_MILLIS:
        raise _MalformedFeature(f"'time' is out of range: {value}")
    return value


def parse_event_properties(properties: dict[str, Any]) -> EarthquakeEvent:
    """Build an EarthquakeEvent from a feature's properties object.

    Pure function.

    Args:
        properties: The 'properties' object of a GeoJSON feature

    Returns:
        EarthquakeEvent

    Raises:
        ValueError: If a required field is missing, mistyped or out of range
    """
    return EarthquakeEvent(
        title=_require_str(properties, "title"),
        occurred_at_epoch_millis=_require_time(properties),
        tsunami_alert=_require_int(properties, "tsunami"),
    )


def extract_event(json_text: str | None) -> ExtractionResult:
    """Parse a response body and extract the first earthquake.

    Pure function: expected failures are returned, never raised.

    Args:
        json_text: Decoded response body

    Returns:
        ExtractionResult with the event, or the reason there is none
    """
    if not json_text or not json_text.strip():
        return ExtractionResult(
            event=None,
            error=ErrorKind.EMPTY_RESULT,
            detail="Response body is empty",
        )

    try:
        document = _require_object(json.loads(json_text), "response")

        if "features" not in document:
            raise _MalformedFeature("missing 'features'")
        features = document["features"]
        if not isinstance(features, list):
            raise _MalformedFeature("'features' is not an array")

        if not features:
            return ExtractionResult(
                event=None,
                error=ErrorKind.EMPTY_RESULT,
                detail="Response contains no features",
            )

        first_feature = _require_object(features[0], "features[0]")
        if "properties" not in first_feature:
            raise _MalformedFeature("missing 'properties'")
        properties = _require_object(first_feature["properties"], "properties")

        return ExtractionResult(event=parse_event_properties(properties))

    except (ValueError, RecursionError) as e:
        # json.JSONDecodeError is a ValueError too; RecursionError comes
        # from deeply nested documents
        return ExtractionResult(
            event=None,
            error=ErrorKind.PARSE_FAILURE,
            detail=str(e),
        )


def extract_feature_from_json(json_text: str | None) -> EarthquakeEvent | None:
    """Return the first earthquake in a response body, or None.

    Pure function.

    Args:
        json_text: Decoded response body

    Returns:
        EarthquakeEvent, or None for empty, malformed or featureless input
    """
    return extract_event(json_text).event

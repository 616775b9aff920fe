"""Request target building - Pure functions.

This module turns a configured endpoint string into a validated
request target. No network call is made here.
"""

from dataclasses import dataclass
from datetime import date
from urllib.parse import urlencode, urlsplit

from src.core.errors import ErrorKind


# USGS FDSN Event Web Service base URL
USGS_API_BASE = "https://earthquake.usgs.gov/fdsnws/event/1/query"

# Schemes the transport knows how to speak
SUPPORTED_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class EventQuery:
    """Fixed query parameters for the USGS event service.

    Attributes:
        start_date: Only events on or after this date
        end_date: Only events before this date
        min_magnitude: Minimum magnitude threshold
        response_format: Response format requested from USGS
    """
    start_date: date = date(2014, 1, 1)
    end_date: date = date(2014, 12, 1)
    min_magnitude: float = 7
    response_format: str = "geojson"


@dataclass(frozen=True)
class RequestTarget:
    """A validated absolute URL ready for the transport.

    Attributes:
        url: The full URL string, unchanged
        scheme: Lower-cased URL scheme
        host: Host name
        port: Explicit port, or None for the scheme default
    """
    url: str
    scheme: str
    host: str
    port: int | None = None


@dataclass
class RequestBuildResult:
    """Outcome of validating an endpoint string.

    Attributes:
        target: The request target, None if validation failed
        error: ErrorKind.INVALID_URL on failure
        detail: Human-readable reason for the failure
    """
    target: RequestTarget | None
    error: ErrorKind | None = None
    detail: str | None = None

    @property
    def success(self) -> bool:
        """Returns True if a request target was built."""
        return self.target is not None


def _format_magnitude(magnitude: float) -> str:
    """Render whole magnitudes without a trailing '.0'."""
    if float(magnitude).is_integer():
        return str(int(magnitude))
    return str(magnitude)


def build_query_url(query: EventQuery, base_url: str = USGS_API_BASE) -> str:
    """Render an EventQuery into a request URL.

    Pure function.

    Args:
        query: Query parameters
        base_url: Event service base URL

    Returns:
        URL string with the query string appended
    """
    params = {
        "format": query.response_format,
        "starttime": query.start_date.isoformat(),
        "endtime": query.end_date.isoformat(),
        "minmagnitude": _format_magnitude(query.min_magnitude),
    }
    return f"{base_url}?{urlencode(params)}"


# The URL the app queries when nothing else is configured
DEFAULT_REQUEST_URL = build_query_url(EventQuery())


def _invalid(detail: str) -> RequestBuildResult:
    return RequestBuildResult(
        target=None,
        error=ErrorKind.INVALID_URL,
        detail=detail,
    )


def build_request(url_string: str | None) -> RequestBuildResult:
    """Validate an endpoint string and build a request target.

    Pure function: never raises for bad input.

    Args:
        url_string: Absolute URL to request

    Returns:
        RequestBuildResult with a target, or with INVALID_URL set
    """
    if not isinstance(url_string, str) or not url_string:
        return _invalid("URL is empty")

    if any(c.isspace() or ord(c) < 0x20 or ord(c) == 0x7F for c in url_string):
        return _invalid("URL contains whitespace or control characters")

    try:
        parts = urlsplit(url_string)
        port = parts.port
    except ValueError as e:
        return _invalid(f"URL could not be parsed: {e}")

    scheme = parts.scheme.lower()
    if not scheme:
        return _invalid("URL has no scheme")
    if scheme not in SUPPORTED_SCHEMES:
        return _invalid(f"Unsupported URL scheme: {scheme}")

    host = parts.hostname
    if not host:
        return _invalid("URL has no host")

    return RequestBuildResult(
        target=RequestTarget(
            url=url_string,
            scheme=scheme,
            host=host,
            port=port,
        ),
    )

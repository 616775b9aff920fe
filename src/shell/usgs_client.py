"""USGS API Client - Imperative Shell.

This module handles HTTP communication with the USGS Earthquake API.
All I/O is contained here; parsing is in the core module.
"""

import logging
from dataclasses import dataclass

import requests

from src.core.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DecodeMode,
)
from src.core.errors import ErrorKind
from src.core.request import RequestTarget
from src.shell.stream_decoder import CHUNK_SIZE, read_from_stream


logger = logging.getLogger(__name__)


# The only status that carries usable data
HTTP_OK = 200


@dataclass
class FetchResult:
    """Response from the USGS API.

    Attributes:
        status_code: HTTP status code (0 if no response was received)
        body: Decoded response body ("" unless status was 200)
        error: Why there is no body, if there is none
        detail: Human-readable error description
    """
    status_code: int
    body: str = ""
    error: ErrorKind | None = None
    detail: str | None = None

    @property
    def success(self) -> bool:
        """Returns True if a 200 response was read completely."""
        return self.error is None


class USGSClient:
    """Client for fetching earthquake data from USGS API.

    This is part of the imperative shell - it handles HTTP I/O.
    Failures never propagate: they are logged and returned as a
    FetchResult with an empty body.
    """

    def __init__(
        self,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        decode_mode: DecodeMode = DecodeMode.JOIN_LINES,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize USGS client.

        Args:
            connect_timeout: Seconds to wait for the connection
            read_timeout: Seconds to wait between bytes of the response
            decode_mode: How the response body is read into text
            session: HTTP session (created and owned if not provided)
        """
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.decode_mode = decode_mode
        self._owns_session = session is None
        self.session = session or requests.Session()

    def __enter__(self) -> "USGSClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    @property
    def timeout(self) -> tuple[float, float]:
        """(connect, read) timeout tuple as requests expects it."""
        return (self.connect_timeout, self.read_timeout)

    def fetch(self, target: RequestTarget) -> FetchResult:
        """Fetch and decode the response body for a request target.

        This method performs HTTP I/O. The response is released on
        every exit path.

        Args:
            target: Validated request target

        Returns:
            FetchResult with the body, or with an empty body and an error
        """
        logger.info("Fetching earthquakes from USGS: %s", target.url)

        try:
            with self.session.get(
                target.url,
                timeout=self.timeout,
                stream=True,
            ) as response:
                if response.status_code != HTTP_OK:
                    logger.warning(
                        "USGS returned non-200: %d",
                        response.status_code,
                    )
                    return FetchResult(
                        status_code=response.status_code,
                        error=ErrorKind.NON_SUCCESS_STATUS,
                        detail=f"HTTP {response.status_code}",
                    )

                body = read_from_stream(
                    response.iter_content(chunk_size=CHUNK_SIZE),
                    self.decode_mode,
                )

        except requests.Timeout:
            logger.error("USGS request timed out")
            return FetchResult(
                status_code=0,
                error=ErrorKind.NETWORK_FAILURE,
                detail="Request timed out",
            )
        except requests.RequestException as e:
            logger.error("USGS request failed: %s", str(e))
            return FetchResult(
                status_code=0,
                error=ErrorKind.NETWORK_FAILURE,
                detail=str(e),
            )

        logger.info("Read %d characters from USGS", len(body))

        return FetchResult(status_code=HTTP_OK, body=body)

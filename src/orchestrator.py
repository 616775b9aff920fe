"""Orchestrator - Wires Functional Core and Imperative Shell.

This module runs the fetch pipeline once:

    build_request -> USGSClient.fetch -> extract_event

Every stage reports failure as a value. The orchestrator logs it and
moves on, so the caller always gets a PipelineResult, never an
exception.
"""

import logging
from dataclasses import dataclass, field

from src.core.config import Config
from src.core.errors import ErrorKind
from src.core.event import EarthquakeEvent, extract_event
from src.core.formatter import format_event_summary
from src.core.request import build_request
from src.shell.usgs_client import USGSClient


logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Result of one fetch cycle.

    Attributes:
        event: The first earthquake in the response, if any
        status_code: HTTP status code (0 if no request was answered)
        errors: Error kinds encountered, in pipeline order
    """
    event: EarthquakeEvent | None
    status_code: int = 0
    errors: list[ErrorKind] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Returns True if an event was extracted."""
        return self.event is not None

    @property
    def summary(self) -> str:
        """Human-readable summary of the fetch cycle."""
        if self.event is not None:
            return f"Fetched event: {self.event.title}"
        reasons = ", ".join(e.value for e in self.errors) or "unknown"
        return f"No event ({reasons})"


class Orchestrator:
    """Coordinates one earthquake fetch.

    This class wires together:
    - Request building (validates the configured URL)
    - USGS client (fetches and decodes the response body)
    - Event extraction (parses the first feature)
    """

    def __init__(
        self,
        config: Config,
        usgs_client: USGSClient | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            usgs_client: USGS client (created from config if not provided)
        """
        self.config = config
        self._owns_client = usgs_client is None
        self.usgs_client = usgs_client or USGSClient(
            connect_timeout=config.connect_timeout_seconds,
            read_timeout=config.read_timeout_seconds,
            decode_mode=config.decode_mode,
        )

    def close(self) -> None:
        """Release the USGS client if this orchestrator created it."""
        if self._owns_client:
            self.usgs_client.close()

    def process(self) -> PipelineResult:
        """Run the complete fetch pipeline.

        Returns:
            PipelineResult with the event, or the errors that prevented one
        """
        # Step 1: Build the request target
        built = build_request(self.config.request_url)
        if built.target is None:
            logger.error("Error with creating URL: %s", built.detail)
            return PipelineResult(event=None, errors=[ErrorKind.INVALID_URL])

        # Step 2: Fetch and decode the response body
        fetched = self.usgs_client.fetch(built.target)
        errors: list[ErrorKind] = []
        if fetched.error is not None:
            errors.append(fetched.error)

        # Step 3: Extract the first feature (an empty body yields no event)
        extracted = extract_event(fetched.body)
        if extracted.event is None:
            if fetched.error is None:
                if extracted.error == ErrorKind.PARSE_FAILURE:
                    logger.error(
                        "Problem parsing the earthquake JSON results: %s",
                        extracted.detail,
                    )
                else:
                    logger.info("No earthquake in response: %s", extracted.detail)
                if extracted.error is not None:
                    errors.append(extracted.error)
            return PipelineResult(
                event=None,
                status_code=fetched.status_code,
                errors=errors,
            )

        logger.info("Extracted %s", format_event_summary(extracted.event))

        return PipelineResult(
            event=extracted.event,
            status_code=fetched.status_code,
            errors=errors,
        )

"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.core.formatter import AlertLabels
from src.core.request import DEFAULT_REQUEST_URL, build_request


# Transport timeouts (seconds)
DEFAULT_CONNECT_TIMEOUT = 15.0
DEFAULT_READ_TIMEOUT = 10.0


class DecodeMode(str, Enum):
    """How a response body stream is turned into text.

    JOIN_LINES reads line by line and concatenates the lines without
    separators. FULL_BLOCK reads the stream as a single block.
    """
    JOIN_LINES = "join_lines"
    FULL_BLOCK = "full_block"


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        request_url: Endpoint queried for earthquake data
        connect_timeout_seconds: Bound on establishing the connection
        read_timeout_seconds: Bound on waiting for response data
        decode_mode: How the response body is read into text
        display_timezone: IANA zone name for dates, None for local time
        alert_labels: Display strings for tsunami alert codes
    """
    request_url: str = DEFAULT_REQUEST_URL
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout_seconds: float = DEFAULT_READ_TIMEOUT
    decode_mode: DecodeMode = DecodeMode.JOIN_LINES
    display_timezone: str | None = None
    alert_labels: AlertLabels = field(default_factory=AlertLabels)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_timeout(value: float, field_name: str) -> list[ValidationError]:
    """Validate a timeout value.

    Pure function.

    Args:
        value: Timeout in seconds
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    if value <= 0:
        return [ValidationError(
            field=field_name,
            message=f"Timeout must be positive, got {value}",
        )]
    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function. An unusable request URL is only a warning: the
    pipeline already treats it as "no data" at fetch time.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    built = build_request(config.request_url)
    if config.request_url and config.request_url.startswith("${"):
        errors.append(ValidationError(
            field="request_url",
            message="Request URL not resolved (still contains placeholder)",
            severity="warning",
        ))
    elif not built.success:
        errors.append(ValidationError(
            field="request_url",
            message=f"Request URL is invalid: {built.detail}",
            severity="warning",
        ))

    errors.extend(validate_timeout(
        config.connect_timeout_seconds,
        "connect_timeout_seconds",
    ))
    errors.extend(validate_timeout(
        config.read_timeout_seconds,
        "read_timeout_seconds",
    ))

    if config.display_timezone is not None:
        try:
            ZoneInfo(config.display_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(ValidationError(
                field="display_timezone",
                message=f"Unknown time zone '{config.display_timezone}'",
            ))

    labels = config.alert_labels
    for name in ("no", "yes", "not_available"):
        if not getattr(labels, name):
            errors.append(ValidationError(
                field=f"alert_labels.{name}",
                message="Alert label is empty",
                severity="warning",
            ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )

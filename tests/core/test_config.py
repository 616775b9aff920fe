"""Unit tests for configuration models and validation.

Pure function tests - no mocks needed.
"""

from src.core.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    Config,
    DecodeMode,
    ValidationError,
    ValidationResult,
    validate_config,
    validate_timeout,
)
from src.core.formatter import AlertLabels
from src.core.request import DEFAULT_REQUEST_URL


class TestConfigDefaults:
    """Tests for Config default values."""

    def test_defaults(self):
        config = Config()

        assert config.request_url == DEFAULT_REQUEST_URL
        assert config.connect_timeout_seconds == DEFAULT_CONNECT_TIMEOUT == 15.0
        assert config.read_timeout_seconds == DEFAULT_READ_TIMEOUT == 10.0
        assert config.decode_mode == DecodeMode.JOIN_LINES
        assert config.display_timezone is None
        assert config.alert_labels == AlertLabels()

    def test_default_config_is_valid(self):
        result = validate_config(Config())

        assert result.valid is True
        assert result.errors == []


class TestValidateTimeout:
    """Tests for validate_timeout() function."""

    def test_positive_is_valid(self):
        assert validate_timeout(0.5, "t") == []

    def test_zero_is_invalid(self):
        errors = validate_timeout(0, "connect_timeout_seconds")

        assert len(errors) == 1
        assert errors[0].field == "connect_timeout_seconds"
        assert errors[0].severity == "error"

    def test_negative_is_invalid(self):
        assert len(validate_timeout(-1, "t")) == 1


class TestValidateConfig:
    """Tests for validate_config() function."""

    def test_invalid_url_is_warning(self):
        """A bad URL degrades to "no data" at fetch time, so only warn."""
        result = validate_config(Config(request_url="not a url"))

        assert result.valid is True
        assert len(result.warnings) == 1
        assert result.warnings[0].field == "request_url"

    def test_unresolved_placeholder_is_warning(self):
        result = validate_config(Config(request_url="${USGS_REQUEST_URL}"))

        assert result.valid is True
        assert "placeholder" in result.warnings[0].message

    def test_bad_timeouts_are_errors(self):
        result = validate_config(Config(
            connect_timeout_seconds=0,
            read_timeout_seconds=-5,
        ))

        assert result.valid is False
        fields = {e.field for e in result.critical_errors}
        assert fields == {"connect_timeout_seconds", "read_timeout_seconds"}

    def test_known_timezone_is_valid(self):
        result = validate_config(Config(display_timezone="America/Los_Angeles"))

        assert result.valid is True

    def test_unknown_timezone_is_error(self):
        result = validate_config(Config(display_timezone="Mars/Olympus_Mons"))

        assert result.valid is False
        assert result.critical_errors[0].field == "display_timezone"

    def test_empty_label_is_warning(self):
        result = validate_config(Config(alert_labels=AlertLabels(yes="")))

        assert result.valid is True
        assert [w.field for w in result.warnings] == ["alert_labels.yes"]


class TestValidationResult:
    """Tests for ValidationResult helpers."""

    def test_splits_warnings_and_errors(self):
        result = ValidationResult(
            valid=False,
            errors=[
                ValidationError(field="a", message="bad"),
                ValidationError(field="b", message="meh", severity="warning"),
            ],
        )

        assert [e.field for e in result.critical_errors] == ["a"]
        assert [e.field for e in result.warnings] == ["b"]

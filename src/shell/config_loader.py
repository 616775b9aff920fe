"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, DecodeMode) are defined in src/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from src.core.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    Config,
    DecodeMode,
    validate_config,
)
from src.core.formatter import AlertLabels
from src.core.request import DEFAULT_REQUEST_URL, USGS_API_BASE, EventQuery, build_query_url


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Args:
        value: Value to resolve

    Returns:
        Resolved value, or the value unchanged if it is not a placeholder
        or the variable is not set
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_date(value: Any) -> date:
    """Parse a date from YAML (already a date) or an ISO string."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _parse_query(data: dict[str, Any]) -> str:
    """Build a request URL from a 'query' config section."""
    defaults = EventQuery()
    query = EventQuery(
        start_date=_parse_date(data.get("start_date", defaults.start_date)),
        end_date=_parse_date(data.get("end_date", defaults.end_date)),
        min_magnitude=float(data.get("min_magnitude", defaults.min_magnitude)),
        response_format=data.get("format", defaults.response_format),
    )
    return build_query_url(query, data.get("base_url", USGS_API_BASE))


def _parse_alert_labels(data: dict[str, Any]) -> AlertLabels:
    """Parse tsunami alert labels from config data.

    YAML 1.1 loads unquoted no/yes keys as booleans, so those are
    accepted too.
    """
    defaults = AlertLabels()
    return AlertLabels(
        no=data.get("no", data.get(False, defaults.no)),
        yes=data.get("yes", data.get(True, defaults.yes)),
        not_available=data.get("not_available", defaults.not_available),
    )


def _parse_decode_mode(value: Any) -> DecodeMode:
    """Parse a decode mode name, falling back to JOIN_LINES."""
    try:
        return DecodeMode(str(value).lower())
    except ValueError:
        logger.warning("Unknown decode mode %r, using %s", value, DecodeMode.JOIN_LINES.value)
        return DecodeMode.JOIN_LINES


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).
    An explicit 'request_url' wins over a 'query' section.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    if "request_url" in data:
        request_url = _resolve_value(data["request_url"])
    elif "query" in data:
        request_url = _parse_query(data["query"] or {})
    else:
        request_url = DEFAULT_REQUEST_URL

    return Config(
        request_url=request_url,
        connect_timeout_seconds=float(
            data.get("connect_timeout_seconds", DEFAULT_CONNECT_TIMEOUT)
        ),
        read_timeout_seconds=float(
            data.get("read_timeout_seconds", DEFAULT_READ_TIMEOUT)
        ),
        decode_mode=_parse_decode_mode(data.get("decode_mode", DecodeMode.JOIN_LINES.value)),
        display_timezone=data.get("display_timezone"),
        alert_labels=_parse_alert_labels(data.get("alert_labels") or {}),
    )


def _log_validation(config: Config) -> None:
    result = validate_config(config)
    for error in result.errors:
        if error.severity == "error":
            logger.error("Config error in %s: %s", error.field, error.message)
        else:
            logger.warning("Config warning in %s: %s", error.field, error.message)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)
    _log_validation(config)

    logger.info(
        "Loaded config: url=%s, timeouts=%.1fs/%.1fs, decode=%s",
        config.request_url,
        config.connect_timeout_seconds,
        config.read_timeout_seconds,
        config.decode_mode.value,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        USGS_REQUEST_URL: Endpoint to query
        CONNECT_TIMEOUT: Connect timeout in seconds
        READ_TIMEOUT: Read timeout in seconds
        DECODE_MODE: join_lines or full_block
        DISPLAY_TIMEZONE: IANA time zone for dates (default: local)

    Returns:
        Config object from environment
    """
    config = Config(
        request_url=os.environ.get("USGS_REQUEST_URL", DEFAULT_REQUEST_URL),
        connect_timeout_seconds=float(
            os.environ.get("CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT)
        ),
        read_timeout_seconds=float(
            os.environ.get("READ_TIMEOUT", DEFAULT_READ_TIMEOUT)
        ),
        decode_mode=_parse_decode_mode(
            os.environ.get("DECODE_MODE", DecodeMode.JOIN_LINES.value)
        ),
        display_timezone=os.environ.get("DISPLAY_TIMEZONE") or None,
    )
    _log_validation(config)
    return config

"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS API client (HTTP)
- Response body decoding (streams)
- Earthquake screen (display boundary)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.usgs_client import USGSClient
from src.shell.stream_decoder import read_from_stream
from src.shell.display import EarthquakeScreen
from src.shell.config_loader import load_config, Config

__all__ = [
    "USGSClient",
    "read_from_stream",
    "EarthquakeScreen",
    "load_config",
    "Config",
]

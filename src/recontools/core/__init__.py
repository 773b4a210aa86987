"""Core module - configuration, logging, and interfaces."""

from recontools.core.config import Settings, get_settings
from recontools.core.exceptions import (
    ReconError,
    ScanError,
    ValidationError,
    NetworkError,
    HttpError,
    ConfigError,
    TimeoutError,
    MalformedResponseError,
)

__all__ = [
    "Settings",
    "get_settings",
    "ReconError",
    "ScanError",
    "ValidationError",
    "NetworkError",
    "HttpError",
    "ConfigError",
    "TimeoutError",
    "MalformedResponseError",
]

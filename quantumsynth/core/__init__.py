"""
Core module containing configuration, errors, metrics and utilities.
"""

from .config import Settings
from .exceptions import (
    SynthError,
    InvalidArgumentError,
    InternalFailureError,
    CapacityExceededError,
    ConfigError
)
from .metrics import MetricsRegistry
from .utils import configure_logging, get_timestamp, utc_now

__all__ = [
    "Settings",
    "SynthError",
    "InvalidArgumentError",
    "InternalFailureError",
    "CapacityExceededError",
    "ConfigError",
    "MetricsRegistry",
    "configure_logging",
    "get_timestamp",
    "utc_now"
]

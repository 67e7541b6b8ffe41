"""
Exception hierarchy for QuantumSynth.

Every error raised by the core derives from SynthError and carries the
HTTP status, error title and detail message the API layer returns.
"""

from typing import Optional


class SynthError(Exception):
    """Base exception for all QuantumSynth errors."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, detail: str, error: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if error is not None:
            self.error = error


class InvalidArgumentError(SynthError):
    """A required field is empty or a value is out of range."""

    status_code = 400
    error = "Invalid input"


class InternalFailureError(SynthError):
    """Synthesis failed unexpectedly."""

    status_code = 500
    error = "Processing failed"


class CapacityExceededError(SynthError):
    """More jobs are in flight than quantum.max_jobs allows."""

    status_code = 503
    error = "Service busy"


class ConfigError(SynthError):
    """Configuration could not be read or holds an invalid value."""

    error = "Invalid configuration"

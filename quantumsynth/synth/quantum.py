"""
Quantum-inspired numeric helpers.

noise() draws from a generator built for that call alone, so the helpers
hold no shared random state and are safe to call from many threads.
"""

import math
import time
from typing import Sequence

import numpy as np

from ..core.exceptions import InvalidArgumentError

_INT64_SPAN = 1 << 64
_INT64_MIN = -(1 << 63)


def _wrap_int64(seed: int) -> int:
    """Fold an arbitrary Python int into the signed 64-bit range."""
    return (seed - _INT64_MIN) % _INT64_SPAN + _INT64_MIN


def noise(seed: int) -> float:
    """
    Simulated quantum noise for stochastic processes.

    A standard normal draw scaled by sin(seed mod pi). The same seed
    always produces the same value.

    Args:
        seed: Any integer; values outside int64 wrap into it

    Returns:
        A finite float
    """
    seed = _wrap_int64(int(seed))
    # numpy seeds must be non-negative; keep the two's complement bits
    rng = np.random.default_rng(seed % _INT64_SPAN)
    value = float(rng.standard_normal()) * math.sin(math.fmod(float(seed), math.pi))
    if not math.isfinite(value):
        return 0.0
    return value


def random_matrix(size: int) -> np.ndarray:
    """
    Square matrix of noise values.

    Cell (i, j) is seeded from the current time in nanoseconds plus i*j.

    Args:
        size: Side length, must be positive

    Returns:
        A (size, size) float64 array

    Raises:
        InvalidArgumentError: If size is not a positive integer
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise InvalidArgumentError(f"matrix size must be an integer, got {size!r}")
    if size <= 0:
        raise InvalidArgumentError(f"matrix size must be positive, got {size}")

    matrix = np.empty((size, size), dtype=np.float64)
    for i in range(size):
        for j in range(size):
            matrix[i, j] = noise(time.time_ns() + i * j)
    return matrix


def collapse(data: Sequence[float], threshold: float) -> list[int]:
    """
    Collapse values into binary indicators.

    Args:
        data: Real values
        threshold: Magnitude a value must exceed to collapse to 1

    Returns:
        One 0/1 int per input value, in order
    """
    values = np.asarray(data, dtype=np.float64)
    if values.size == 0:
        return []
    return (np.abs(values) > threshold).astype(int).tolist()

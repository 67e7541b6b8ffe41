"""
In-memory service metrics.

Counters live for the lifetime of the process and reset on restart.
All mutation happens under a single lock so concurrent requests
served from the thread pool never lose an increment.
"""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .exceptions import CapacityExceededError

logger = logging.getLogger(__name__)


class MetricsRegistry:
    """
    Process-wide request and job counters.

    The dispatcher records a request on entry, holds an active session
    while the job runs, and records a completed job on success.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._started_at = clock()
        self._requests_total = 0
        self._active_sessions = 0
        self._jobs_run = 0

    def record_request(self) -> None:
        """Count one inbound dispatch."""
        with self._lock:
            self._requests_total += 1

    def record_job(self) -> None:
        """Count one successfully completed job."""
        with self._lock:
            self._jobs_run += 1

    @contextmanager
    def session(self, limit: Optional[int] = None) -> Iterator[None]:
        """
        Hold one active session for the duration of the block.

        Args:
            limit: Maximum concurrent sessions; None means unbounded

        Raises:
            CapacityExceededError: If limit sessions are already active
        """
        with self._lock:
            if limit is not None and self._active_sessions >= limit:
                logger.warning(f"Rejecting job: {self._active_sessions} of {limit} slots in use")
                raise CapacityExceededError(
                    f"Too many jobs in flight (limit {limit}). Please retry."
                )
            self._active_sessions += 1
        try:
            yield
        finally:
            with self._lock:
                self._active_sessions -= 1

    def uptime_seconds(self) -> int:
        """Whole seconds elapsed since the registry was created."""
        return int(self._clock() - self._started_at)

    @property
    def requests_total(self) -> int:
        with self._lock:
            return self._requests_total

    @property
    def active_sessions(self) -> int:
        with self._lock:
            return self._active_sessions

    @property
    def jobs_run(self) -> int:
        with self._lock:
            return self._jobs_run

    def snapshot(self) -> dict[str, int]:
        """Consistent view of every counter, keyed as /metrics reports them."""
        with self._lock:
            return {
                "uptime_seconds": int(self._clock() - self._started_at),
                "requests_total": self._requests_total,
                "active_sessions": self._active_sessions,
                "quantum_jobs_run": self._jobs_run,
            }

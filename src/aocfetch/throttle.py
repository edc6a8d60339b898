from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .errors import ClockAnomalyError

log = logging.getLogger(__name__)

DEFAULT_MIN_INTERVAL_S = 180.0
SKEW_BACKOFF_S = 1.0


class ThrottleGate:
    """Pre-request gate keeping outbound requests ``min_interval_s`` apart.

    Call ``acquire()`` immediately before each request. The last-request
    timestamp is seeded from the durable store so the spacing holds across
    process restarts.
    """

    def __init__(
        self,
        last_request_at: float = 0.0,
        *,
        min_interval_s: float = DEFAULT_MIN_INTERVAL_S,
        skew_backoff_s: float = SKEW_BACKOFF_S,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval_s < 0:
            raise ValueError("min_interval_s must be >= 0")
        self._last_request_at = float(last_request_at)
        self.min_interval_s = min_interval_s
        self.skew_backoff_s = skew_backoff_s
        self._clock = clock
        self._sleep = sleep

    @property
    def last_request_at(self) -> float:
        return self._last_request_at

    def _elapsed(self) -> float:
        now = self._clock()
        elapsed = now - self._last_request_at
        if elapsed < 0:
            raise ClockAnomalyError(self._last_request_at, now)
        return elapsed

    def acquire(self) -> float:
        """Block until a request may be sent; return the seconds slept."""
        waited = 0.0
        while True:
            try:
                elapsed = self._elapsed()
            except ClockAnomalyError as e:
                # Time arithmetic can't be trusted; never go out unthrottled.
                log.warning("%s; retrying in %.1fs", e, self.skew_backoff_s)
                self._sleep(self.skew_backoff_s)
                waited += self.skew_backoff_s
                continue
            break

        if elapsed < self.min_interval_s:
            wait_s = self.min_interval_s - elapsed
            log.info("throttling: waiting %.1fs before next request", wait_s)
            self._sleep(wait_s)
            waited += wait_s

        self._last_request_at = self._clock()
        return waited

"""Rolling-window request pacing."""
from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RateLimiter:
    """Allow at most ``max_requests`` requests per rolling ``window`` seconds.

    ``margin`` is added to the window to absorb clock and network jitter.
    The limiter only ever delays the caller; it never raises or retries.
    Requests are expected to be issued serially: call ``acquire()`` then
    ``record()`` for each request.
    """

    def __init__(
        self,
        max_requests: int = 3,
        window: float = 60.0,
        margin: float = 0.2,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        verbose: bool = False,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window < 0 or margin < 0:
            raise ValueError("window and margin must be non-negative")
        self.max_requests = max_requests
        self.window = window
        self.margin = margin
        self._clock = clock
        self._sleep = sleep
        self._log_level = logging.INFO if verbose else logging.DEBUG
        self._timeline: deque[float] = deque(maxlen=max_requests)

    @property
    def span(self) -> float:
        """Effective window length, margin included."""
        return self.window + self.margin

    @property
    def timeline(self) -> tuple[float, ...]:
        return tuple(self._timeline)

    def acquire(self) -> float:
        """Wait until one more request fits in the window. Returns seconds slept."""
        now = self._clock()
        # Aged-out entries must go before the admission check.
        while self._timeline and now - self._timeline[0] >= self.span:
            self._timeline.popleft()

        slept = 0.0
        if len(self._timeline) >= self.max_requests:
            slept = self.span - (now - self._timeline[0])
            if slept > 0:
                logger.log(
                    self._log_level,
                    "Sleeping for %.3f s",
                    slept,
                    extra={"rate_limit_sleep_seconds": slept},
                )
                self._sleep(slept)
            else:
                slept = 0.0

        while len(self._timeline) >= self.max_requests:
            self._timeline.popleft()
        return slept

    def record(self, timestamp: float | None = None) -> float:
        """Store the issue time of a request that is about to be sent."""
        ts = self._clock() if timestamp is None else timestamp
        self._timeline.append(ts)
        return ts

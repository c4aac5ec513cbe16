from __future__ import annotations

import threading
import time
from typing import Callable

DEFAULT_MIN_INTERVAL_SECONDS = 0.5

Clock = Callable[[], float]
Sleep = Callable[[float], None]


class RateLimiter:
    """Enforces a minimum spacing between outbound requests.

    The only shared mutable state of the verification core: the time at which
    the previous request was allowed through.
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_INTERVAL_SECONDS,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = time.sleep,
    ) -> None:
        self.min_interval = max(0.0, min_interval)
        self._clock = clock
        self._sleep = sleep
        self._last_request: float | None = None
        self._lock = threading.Lock()

    def wait(self) -> float:
        """Block until the spacing is satisfied; return the seconds slept."""
        with self._lock:
            slept = 0.0
            if self._last_request is not None:
                remaining = self.min_interval - (self._clock() - self._last_request)
                if remaining > 0:
                    self._sleep(remaining)
                    slept = remaining
            self._last_request = self._clock()
            return slept

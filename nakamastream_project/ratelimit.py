"""
Rate limiters used by the clients.

Both limiters only answer whether a call may go out; the caller records a
call after it has succeeded, so failed requests never consume the budget.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional


logger = logging.getLogger(__name__)


class ElapsedTimeLimiter:
    """Permits a call once `window` seconds have passed since the last recorded success."""

    def __init__(self, window: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.window = window
        self._clock = clock
        self._last: Optional[float] = None

    def allows(self) -> bool:
        return self.remaining() <= 0

    def remaining(self) -> float:
        """Seconds until the next call is permitted (0 when it already is)."""
        if self._last is None:
            return 0.0
        return max(0.0, self.window - (self._clock() - self._last))

    def record(self) -> None:
        self._last = self._clock()


class CountingWindowLimiter:
    """Permits up to `max_requests` successes between two counter resets.

    The counter is reset by a background thread every `interval` seconds
    once `start()` has been called, regardless of request activity.
    """

    def __init__(self, max_requests: int, *, interval: float = 60.0) -> None:
        self.max_requests = max_requests
        self.interval = interval
        self.count = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def allows(self) -> bool:
        return self.count < self.max_requests

    def record(self) -> None:
        self.count += 1

    def reset(self) -> None:
        self.count = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="captcha-counter-reset", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            logger.debug("Resetting request counter (was %d)", self.count)
            self.reset()

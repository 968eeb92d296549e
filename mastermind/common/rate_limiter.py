"""Token-bucket rate limiter for LLM requests."""

from __future__ import annotations

import threading
import time


class RateLimiter:
    """Blocking token bucket refilled once per ``60 / requests_per_minute`` seconds.

    A ``requests_per_minute`` of ``None`` or ``<= 0`` disables limiting.
    A single Gemini chat may issue several requests when the model calls
    tools, so every request draws its own token.
    """

    def __init__(self, requests_per_minute: int | None, clock=time.monotonic, sleep=time.sleep) -> None:
        self.capacity = requests_per_minute if requests_per_minute and requests_per_minute > 0 else None
        self.tokens = float(self.capacity or 0)
        self.refill_interval = 60.0 / self.capacity if self.capacity else 0.0
        self._clock = clock
        self._sleep = sleep
        self.last_refill = clock()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.capacity is not None

    def _refill(self) -> None:
        elapsed = self._clock() - self.last_refill
        earned = int(elapsed // self.refill_interval)
        if earned > 0:
            self.tokens = min(float(self.capacity), self.tokens + earned)
            self.last_refill += earned * self.refill_interval

    def try_acquire(self) -> bool:
        """Take a token if one is available, without blocking."""
        if not self.enabled:
            return True
        with self._lock:
            self._refill()
            if self.tokens >= 1:
                self.tokens -= 1
                return True
            return False

    def acquire(self) -> None:
        """Block until a token is available."""
        while not self.try_acquire():
            with self._lock:
                wait_time = self.refill_interval - (self._clock() - self.last_refill)
            # Sleep outside the lock so other threads can refill
            self._sleep(wait_time if wait_time > 0 else self.refill_interval)

"""Per-client sliding-window request counter."""

import threading
import time
from typing import Optional


class RateLimiter:
    def __init__(self, max_requests: int, window_seconds: int):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: dict[str, list[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = 0.0

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, now: float) -> None:
        # Drop clients whose newest request has left the window.
        expired = [key for key, hits in self._hits.items() if now - hits[-1] >= self.window_seconds]
        for key in expired:
            del self._hits[key]
        self._last_sweep = now

    def allow(self, key: str, now: Optional[float] = None) -> bool:
        """Record a request for `key`; False once the window is full."""
        now = time.time() if now is None else now
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
            bucket = [t for t in self._hits.get(key, []) if now - t < self.window_seconds]
            if len(bucket) >= self.max_requests:
                self._hits[key] = bucket
                return False
            bucket.append(now)
            self._hits[key] = bucket
            return True

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = 0.0

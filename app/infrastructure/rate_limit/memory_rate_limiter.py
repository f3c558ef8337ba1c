import threading
import time
from collections import deque
from typing import Callable, Deque, Dict

from ...application.ports.rate_limiter import RateLimiter


class InMemoryRateLimiter(RateLimiter):
    """Sliding-window limiter; state lives in this process only."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._last_sweep = clock()

    def allow(self, key: str, max_requests: int, window_seconds: int) -> bool:
        now = self._clock()
        window_start = now - window_seconds
        with self._lock:
            if now - self._last_sweep >= window_seconds:
                self._sweep(window_start)
                self._last_sweep = now
            hits = self._hits.get(key)
            if hits is None:
                hits = deque()
            # prune
            while hits and hits[0] <= window_start:
                hits.popleft()
            if len(hits) >= max_requests:
                if hits:
                    self._hits[key] = hits
                else:
                    self._hits.pop(key, None)
                return False
            hits.append(now)
            self._hits[key] = hits
            return True

    def _sweep(self, window_start: float) -> None:
        # Drop clients whose newest hit has left the window
        stale = [k for k, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for k in stale:
            del self._hits[k]

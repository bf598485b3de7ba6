# Rate limiting logic
import threading
import time
from collections import defaultdict, deque
from typing import Deque, Dict

from fastapi import HTTPException, Request, status

from accounts.core.config import settings


class SlidingWindowRateLimiter:
    """In-memory sliding window keyed by client IP."""

    def __init__(self, max_requests: int, window_seconds: int):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()

    def allow(self, client_id: str, now: float | None = None) -> bool:
        """Record a hit for client_id unless it is over the limit."""
        now = time.monotonic() if now is None else now
        cutoff = now - self.window_seconds
        with self._lock:
            self._drop_idle_clients(cutoff)
            hits = self._hits[client_id]
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if len(hits) >= self.max_requests:
                return False
            hits.append(now)
            return True

    def _drop_idle_clients(self, cutoff: float) -> None:
        """Forget clients with no hits left inside the window. Caller holds the lock."""
        idle = [cid for cid, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for cid in idle:
            del self._hits[cid]

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


limiter = SlidingWindowRateLimiter(
    settings.RATE_LIMIT_REQUESTS, settings.RATE_LIMIT_WINDOW_SECONDS
)


def _get_client_id(request: Request) -> str:
    """Get client identifier (IP address)."""
    if request.client:
        return request.client.host
    return "unknown"


def check_rate_limit(request: Request) -> None:
    """FastAPI dependency. Raises HTTPException when the limit is exceeded."""
    if not limiter.allow(_get_client_id(request)):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded: {limiter.max_requests} requests per {limiter.window_seconds} seconds"
        )

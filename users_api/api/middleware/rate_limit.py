"""
Rate limiting middleware

Per-client request limit on selected path prefixes.
"""

# Standard library imports
import logging
import math
import time
from collections import deque
from typing import Any, Callable, Deque, Dict, Tuple

# External package imports
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding one-second window limiter keyed by client host"""

    def __init__(
        self,
        app: Any,
        requests_per_second: int = 1,
        path_prefixes: Tuple[str, ...] = ("/users",),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(app)
        self.requests_per_second = requests_per_second
        self.path_prefixes = path_prefixes
        self.clock = clock
        self._requests: Dict[str, Deque[float]] = {}
        self._last_sweep = 0.0

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        if self.requests_per_second <= 0 or not request.url.path.startswith(self.path_prefixes):
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        now = self.clock()
        self._sweep_idle_clients(now)
        window = self._requests.setdefault(client_id, deque())
        while window and now - window[0] >= 1.0:
            window.popleft()

        if len(window) >= self.requests_per_second:
            retry_after = max(1, math.ceil(1.0 - (now - window[0])))
            logger.warning(f"Rate limit exceeded for {client_id} on {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": "Rate limit exceeded"},
                headers={"Retry-After": str(retry_after)},
            )

        window.append(now)
        return await call_next(request)

    def _sweep_idle_clients(self, now: float) -> None:
        """Forget clients with no request inside the window, at most once per second"""
        if now - self._last_sweep < 1.0:
            return
        self._last_sweep = now
        idle = [client for client, window in self._requests.items() if not window or now - window[-1] >= 1.0]
        for client in idle:
            del self._requests[client]

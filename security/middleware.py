"""
security/middleware.py
----------------------
HTTP-boundary protection: per-client rate limiting, request body size
ceiling and default security headers.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from utils.logger import get_logger

logger = get_logger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Sliding-window limiter keyed by client address.

    Keeps request timestamps per client in memory; a client that already
    made ``max_requests`` requests inside the last ``window_seconds`` gets 429.
    """

    def __init__(self, app, max_requests: int = 100, window_seconds: int = 60):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        # {client: [timestamp1, timestamp2, ...]}
        self._timestamps: dict[str, list[float]] = {}
        self._last_sweep = time.monotonic()

    def _cleanup(self, client: str, now: float) -> None:
        cutoff = now - self.window_seconds
        kept = [t for t in self._timestamps.get(client, ()) if t > cutoff]
        if kept:
            self._timestamps[client] = kept
        else:
            self._timestamps.pop(client, None)

    def _sweep(self, now: float) -> None:
        # 한동안 요청이 없던 클라이언트 키 제거, 윈도우당 한 번
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        for client in list(self._timestamps):
            self._cleanup(client, now)

    async def dispatch(self, request: Request, call_next):
        client = request.client.host if request.client else "unknown"
        now = time.monotonic()
        self._sweep(now)
        self._cleanup(client, now)

        hits = self._timestamps.setdefault(client, [])
        if len(hits) >= self.max_requests:
            retry_after = max(1, int(hits[0] + self.window_seconds - now) + 1)
            logger.warning(f"Rate limit hit for client {client}")
            return JSONResponse(
                status_code=429,
                content={
                    "statusCode": 429,
                    "error": "Too Many Requests",
                    "message": f"Rate limit exceeded, retry in {retry_after} seconds",
                },
                headers={"Retry-After": str(retry_after)},
            )

        hits.append(now)
        return await call_next(request)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared Content-Length exceeds ``max_bytes``."""

    def __init__(self, app, max_bytes: int = 10 * 1024 * 1024):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next):
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > self.max_bytes:
            return JSONResponse(
                status_code=413,
                content={
                    "statusCode": 413,
                    "error": "Payload Too Large",
                    "message": f"Request body is too large (limit {self.max_bytes} bytes)",
                },
            )
        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

"""HTTP Middleware — per-client rate limiting and security response headers.

Invariants:
    - Only paths under settings.rate_limit_path_prefix are counted; exempt paths
      (health probes) and skipped hosts (loopback) never consume quota
    - A rejected request answers 429 with the standard error envelope and a
      Retry-After header; the route handler is never reached
    - Every counted response carries X-RateLimit-Limit / -Remaining / -Reset
    - Security headers are added to every response, errors included

Design Decisions:
    - `limits` fixed-window strategy over an async storage URI: memory by default,
      async+redis:// shares counters across workers without code changes
    - Limiter built per app in create_app and kept on app.state: tests get a fresh
      counter per app instance
    - No Content-Security-Policy: the interactive /docs page loads its assets from a CDN
"""

import logging
import math
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from limits import RateLimitItemPerSecond
from limits.aio.strategies import FixedWindowRateLimiter
from limits.storage import storage_from_string

from customers_api.api.error_handlers import status_for
from customers_api.config import Settings
from customers_api.core.errors import ErrorContext, RateLimitExceededError

logger = logging.getLogger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class RequestRateLimiter:
    """Fixed-window request quota keyed by client address."""

    def __init__(
        self,
        requests: int,
        window_seconds: int,
        storage_uri: str = "async+memory://",
        path_prefix: str = "/api/",
        exempt_paths: list[str] | None = None,
        skip_hosts: list[str] | None = None,
    ):
        self.item = RateLimitItemPerSecond(requests, window_seconds)
        self._strategy = FixedWindowRateLimiter(storage_from_string(storage_uri))
        self._path_prefix = path_prefix
        self._exempt_paths = tuple(exempt_paths or ())
        self._skip_hosts = frozenset(skip_hosts or ())

    @classmethod
    def from_settings(cls, settings: Settings) -> "RequestRateLimiter":
        return cls(
            settings.rate_limit_requests,
            settings.rate_limit_window_seconds,
            storage_uri=settings.rate_limit_storage_uri,
            path_prefix=settings.rate_limit_path_prefix,
            exempt_paths=settings.rate_limit_exempt_paths,
            skip_hosts=settings.rate_limit_skip_hosts,
        )

    def applies_to(self, path: str, host: str) -> bool:
        if host in self._skip_hosts:
            return False
        if not path.startswith(self._path_prefix):
            return False
        return not path.startswith(self._exempt_paths)

    async def hit(self, host: str) -> tuple[bool, int, int]:
        """Count one request. Returns (allowed, remaining, reset_epoch_seconds)."""
        allowed = await self._strategy.hit(self.item, host)
        reset_time, remaining = await self._strategy.get_window_stats(self.item, host)
        return allowed, remaining, math.ceil(reset_time)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def rate_limit_requests(request: Request, call_next):
    """HTTP middleware: reject clients over their quota with 429."""
    limiter: RequestRateLimiter | None = getattr(request.app.state, "rate_limiter", None)
    host = _client_host(request)
    if limiter is None or not limiter.applies_to(request.url.path, host):
        return await call_next(request)

    allowed, remaining, reset_at = await limiter.hit(host)
    headers = {
        "X-RateLimit-Limit": str(limiter.item.amount),
        "X-RateLimit-Remaining": str(remaining),
        "X-RateLimit-Reset": str(reset_at),
    }
    if not allowed:
        retry_after = max(reset_at - int(time.time()), 1)
        error = RateLimitExceededError(
            retry_after, ErrorContext(debug_info={"client": host}),
        )
        logger.warning(
            "Rate limit exceeded",
            extra={
                "error_code": error.code,
                "path": request.url.path,
                "method": request.method,
            },
        )
        headers["Retry-After"] = str(retry_after)
        return JSONResponse(
            status_code=status_for(error.kind),
            content=error.to_response(),
            headers=headers,
        )

    response = await call_next(request)
    response.headers.update(headers)
    return response


async def add_security_headers(request: Request, call_next):
    """HTTP middleware: conservative browser security headers on every response."""
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response

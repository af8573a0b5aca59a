"""HTTP Middleware: request logging, CORS, and token-bucket rate limiting.

Invariants:
    - Fixed order, outermost first: request logging → CORS → rate limiting →
      unhandled-error catch → route match → handler
    - Rate-limited requests get 429 RATE_LIMITED with a Retry-After header and
      still pass through CORS (browsers can read the rejection)
    - Request logging records every response, including rejections and 500s
    - Unhandled exceptions become the 500 envelope innermost, so error
      responses carry CORS headers like every other response

Design Decisions:
    - Starlette wraps middleware in reverse registration order, so
      register_middleware adds them innermost first
    - Limiter state lives on app.state: one limiter per app instance
"""

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from taskboard.api.error_handlers import error_body, internal_error_response
from taskboard.config import Settings
from taskboard.core.rate_limit import RateLimiter

logger = logging.getLogger("taskboard.http")

_REDACTED_HEADERS = frozenset({"authorization", "cookie"})


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Register middleware innermost first (Starlette reverses the order)."""
    app.add_middleware(BaseHTTPMiddleware, dispatch=catch_unhandled)

    if settings.rate_limit_enabled:
        app.state.rate_limiter = RateLimiter(
            requests_per_minute=settings.rate_limit_requests_per_minute,
            burst=settings.rate_limit_burst,
        )
        app.add_middleware(BaseHTTPMiddleware, dispatch=rate_limit)
        logger.info(
            f"Rate limiting enabled: {settings.rate_limit_requests_per_minute} "
            f"req/min, burst {settings.rate_limit_burst}",
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    if settings.http_log_enabled:
        app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)
        logger.info("HTTP request logging enabled")


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def catch_unhandled(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        return internal_error_response(request, exc)


async def rate_limit(request: Request, call_next):
    limiter: RateLimiter = request.app.state.rate_limiter
    allowed, retry_after = limiter.check(_client_key(request), time.monotonic())
    if not allowed:
        logger.warning(
            "Rate limit exceeded",
            extra={"client": _client_key(request), "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=error_body("RATE_LIMITED", "Too many requests"),
            headers={"Retry-After": str(retry_after)},
        )
    return await call_next(request)


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    extra = {
        "method": request.method,
        "path": request.url.path,
        "client": _client_key(request),
    }
    if request.app.state.settings.http_log_headers:
        extra["headers"] = {
            k: ("<redacted>" if k.lower() in _REDACTED_HEADERS else v)
            for k, v in request.headers.items()
        }
    try:
        response = await call_next(request)
    except Exception:
        extra["status_code"] = 500
        extra["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
        logger.error(f"{request.method} {request.url.path} failed", extra=extra)
        raise
    extra["status_code"] = response.status_code
    extra["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
    logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        extra=extra,
    )
    return response

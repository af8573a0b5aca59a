"""Middleware: CORS headers, token-bucket rate limiting, request logging.

Tests cover:
    - CORS headers present on responses for cross-origin requests
    - Requests beyond the burst get 429 RATE_LIMITED with Retry-After
    - Request logging emits one record per request with status and duration
    - Unhandled exceptions answer 500 INTERNAL_ERROR with CORS headers
"""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.config import Settings
from taskboard.main import create_app


@pytest.fixture
async def limited_client():
    app = create_app(Settings(
        rate_limit_enabled=True,
        rate_limit_requests_per_minute=1,
        rate_limit_burst=2,
        http_log_enabled=False,
    ))
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


async def test_cors_headers_present(client):
    res = await client.get("/health", headers={"Origin": "http://example.com"})
    assert res.headers["access-control-allow-origin"] == "*"


async def test_cors_preflight(client):
    res = await client.options(
        "/api/v1/users",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert res.status_code == 200
    assert "POST" in res.headers["access-control-allow-methods"]


async def test_rate_limit_rejects_after_burst(limited_client):
    assert (await limited_client.get("/health")).status_code == 200
    assert (await limited_client.get("/health")).status_code == 200
    res = await limited_client.get("/health", headers={"Origin": "http://x.com"})
    assert res.status_code == 429
    assert res.json()["error"] == "RATE_LIMITED"
    assert int(res.headers["retry-after"]) >= 1
    assert res.headers["access-control-allow-origin"] == "*"


async def test_request_logging(caplog):
    app = create_app(Settings(rate_limit_enabled=False, http_log_enabled=True))
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        with caplog.at_level(logging.INFO, logger="taskboard.http"):
            await c.get("/health")
    records = [
        r for r in caplog.records
        if r.name == "taskboard.http" and hasattr(r, "status_code")
    ]
    assert len(records) == 1
    assert records[0].status_code == 200
    assert records[0].method == "GET"
    assert records[0].duration_ms >= 0


async def test_unhandled_exception_is_500_with_cors_headers():
    app = create_app(Settings(rate_limit_enabled=False, http_log_enabled=False))

    @app.get("/explode")
    async def explode():
        raise RuntimeError("secret internals")

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        res = await c.get("/explode", headers={"Origin": "http://example.com"})
    assert res.status_code == 500
    assert res.json()["error"] == "INTERNAL_ERROR"
    assert "secret" not in res.text
    assert res.headers["access-control-allow-origin"] == "*"

from __future__ import annotations

import asyncio

import httpx

from ardoq_adapter.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
    build_retry,
)

FAST_RETRY = RetryPolicy(total=2, backoff_factor=0.0, backoff_jitter=0.0)


def _flaky_handler(calls: list[str], failures: int) -> httpx.MockTransport:
    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.method)
        if len(calls) <= failures:
            return httpx.Response(503)
        return httpx.Response(200, json={"ok": True})

    return httpx.MockTransport(handler)


def test_build_retry_only_retries_idempotent_methods() -> None:
    retry = build_retry(RetryPolicy())

    assert retry.is_retryable_method("GET")
    assert not retry.is_retryable_method("POST")
    assert not retry.is_retryable_method("PATCH")
    assert retry.is_retryable_status_code(503)
    assert not retry.is_retryable_status_code(404)


def test_get_is_retried_until_success() -> None:
    calls: list[str] = []
    config = ResilienceConfig(name="test", base_url="https://example.test", retry=FAST_RETRY)

    async def fetch() -> httpx.Response:
        transport = _flaky_handler(calls, failures=2)
        async with ResilientClient(config, transport=transport) as client:
            return await client.get("/api/v2/components")

    response = asyncio.run(fetch())

    assert response.status_code == 200
    assert calls == ["GET", "GET", "GET"]


def test_post_is_not_retried() -> None:
    calls: list[str] = []
    config = ResilienceConfig(name="test", base_url="https://example.test", retry=FAST_RETRY)

    async def create() -> httpx.Response:
        transport = _flaky_handler(calls, failures=1)
        async with ResilientClient(config, transport=transport) as client:
            return await client.post("/api/v2/components", json={"name": "lodash"})

    response = asyncio.run(create())

    assert response.status_code == 503
    assert calls == ["POST"]


def test_client_applies_base_url_headers_and_rate_limit() -> None:
    seen: list[httpx.Request] = []
    config = ResilienceConfig(
        name="test",
        base_url="https://example.test",
        ratelimit=RateLimit(max_calls=100, per_seconds=1.0),
        default_headers={"Authorization": "Token token=abc"},
    )

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    async def fetch_many() -> None:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            await asyncio.gather(*(client.get("/ping") for _ in range(3)))

    asyncio.run(fetch_many())

    assert len(seen) == 3
    assert all(str(request.url) == "https://example.test/ping" for request in seen)
    assert all(request.headers["Authorization"] == "Token token=abc" for request in seen)

from __future__ import annotations

import asyncio

import httpx
import pytest

from guardianbee.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
    translate_http_errors,
)
from guardianbee.domain.errors import FetchTimeout, FetchUnavailable

URL = "https://registry.test/list"

# No waiting between attempts keeps the retry tests instant.
NO_WAIT = RetryPolicy(total=2, backoff_factor=0.0, backoff_jitter=0.0)


def _send(
    transport: httpx.MockTransport,
    retry: RetryPolicy = NO_WAIT,
    *,
    method: str = "GET",
    ratelimit: RateLimit | None = None,
) -> httpx.Response:
    async def run() -> httpx.Response:
        config = ResilienceConfig(name="test", retry=retry, ratelimit=ratelimit)
        async with ResilientClient(config, transport=transport) as client:
            return await client.request(method, URL)

    return asyncio.run(run())


class CountingHandler:
    """Answers with ``statuses`` in order, repeating the last one."""

    def __init__(self, *statuses: int) -> None:
        self.statuses = list(statuses)
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        status = self.statuses[min(self.calls, len(self.statuses) - 1)]
        self.calls += 1
        return httpx.Response(status, text="ok")


def test_retries_retryable_status_until_success() -> None:
    handler = CountingHandler(503, 502, 200)

    response = _send(httpx.MockTransport(handler))

    assert response.status_code == 200
    assert handler.calls == 3


def test_post_requests_are_retried() -> None:
    handler = CountingHandler(500, 200)

    response = _send(httpx.MockTransport(handler), method="POST")

    assert response.status_code == 200
    assert handler.calls == 2


def test_retry_after_header_is_accepted() -> None:
    responses = iter([httpx.Response(429, headers={"Retry-After": "0"}), httpx.Response(200)])

    response = _send(httpx.MockTransport(lambda request: next(responses)))

    assert response.status_code == 200


def test_exhausted_retries_return_last_response() -> None:
    handler = CountingHandler(503)

    response = _send(httpx.MockTransport(handler))

    assert response.status_code == 503
    assert handler.calls == 3


def test_non_retryable_status_is_returned_immediately() -> None:
    handler = CountingHandler(404)

    response = _send(httpx.MockTransport(handler))

    assert response.status_code == 404
    assert handler.calls == 1


def test_transport_errors_are_retried() -> None:
    attempts = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200)

    response = _send(httpx.MockTransport(handler))

    assert response.status_code == 200
    assert attempts == 2


def test_transport_errors_propagate_when_retries_exhausted() -> None:
    attempts = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal attempts
        attempts += 1
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(httpx.ReadTimeout):
        _send(httpx.MockTransport(handler))

    assert attempts == 3


def test_zero_total_disables_retries() -> None:
    handler = CountingHandler(503, 200)

    response = _send(httpx.MockTransport(handler), RetryPolicy(total=0))

    assert response.status_code == 503
    assert handler.calls == 1


def test_paced_client_still_serves_requests() -> None:
    handler = CountingHandler(200)

    response = _send(httpx.MockTransport(handler), ratelimit=RateLimit.paced(0.01))

    assert response.status_code == 200


@pytest.mark.parametrize(
    ("error", "expected", "message"),
    [
        (httpx.ReadTimeout("too slow"), FetchTimeout, "timed out"),
        (httpx.ConnectError("refused"), FetchUnavailable, "request failed"),
        (
            httpx.HTTPStatusError(
                "server error",
                request=httpx.Request("GET", URL),
                response=httpx.Response(500, request=httpx.Request("GET", URL)),
            ),
            FetchUnavailable,
            "HTTP 500",
        ),
    ],
)
def test_translate_http_errors(
    error: httpx.HTTPError, expected: type[Exception], message: str
) -> None:
    async def run() -> None:
        async with translate_http_errors("crc"):
            raise error

    with pytest.raises(expected, match=message) as exc_info:
        asyncio.run(run())

    assert exc_info.value.source == "crc"  # type: ignore[attr-defined]

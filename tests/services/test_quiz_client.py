from __future__ import annotations

import httpx
import pytest

from app.services.quiz_client import (
    FAILURE_BAD_STATUS,
    FAILURE_CONNECTION,
    FAILURE_TIMEOUT,
    QuizServiceClient,
)


def _client(handler) -> QuizServiceClient:
    return QuizServiceClient(
        base_url="http://quiz.local:8081/",
        timeout_seconds=1.5,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_call_hello_returns_raw_body_on_success() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, text="Hello from QuizService")

    result = await _client(handler).call_hello()

    assert result.ok is True
    assert result.body == "Hello from QuizService"
    assert result.failure is None
    assert seen == ["http://quiz.local:8081/quiz/hello"]


@pytest.mark.asyncio
async def test_call_hello_reports_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    result = await _client(handler).call_hello()

    assert result.ok is False
    assert result.failure == FAILURE_TIMEOUT
    assert result.body is None


@pytest.mark.asyncio
async def test_call_hello_reports_connection_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await _client(handler).call_hello()

    assert result.ok is False
    assert result.failure == FAILURE_CONNECTION


@pytest.mark.asyncio
async def test_call_hello_reports_non_success_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    result = await _client(handler).call_hello()

    assert result.ok is False
    assert result.failure == FAILURE_BAD_STATUS
    assert result.status_code == 503

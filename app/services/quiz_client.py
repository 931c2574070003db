from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

logger = structlog.get_logger(__name__)

QUIZ_HELLO_PATH = "/quiz/hello"

FAILURE_CONNECTION = "connection"
FAILURE_TIMEOUT = "timeout"
FAILURE_BAD_STATUS = "bad_status"


@dataclass(frozen=True, slots=True)
class QuizServiceCallResult:
    ok: bool
    body: str | None = None
    failure: str | None = None
    status_code: int | None = None

    @classmethod
    def success(cls, *, body: str, status_code: int) -> QuizServiceCallResult:
        return cls(ok=True, body=body, status_code=status_code)

    @classmethod
    def failed(cls, failure: str, *, status_code: int | None = None) -> QuizServiceCallResult:
        return cls(ok=False, failure=failure, status_code=status_code)


class QuizServiceClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def hello_url(self) -> str:
        return f"{self._base_url}{QUIZ_HELLO_PATH}"

    async def call_hello(self) -> QuizServiceCallResult:
        url = self.hello_url
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds, transport=self._transport) as client:
                response = await client.get(url)
        except httpx.TimeoutException:
            logger.exception("quiz_service_call_failed", url=url, failure=FAILURE_TIMEOUT)
            return QuizServiceCallResult.failed(FAILURE_TIMEOUT)
        except httpx.HTTPError:
            logger.exception("quiz_service_call_failed", url=url, failure=FAILURE_CONNECTION)
            return QuizServiceCallResult.failed(FAILURE_CONNECTION)

        if not response.is_success:
            logger.warning(
                "quiz_service_call_failed",
                url=url,
                failure=FAILURE_BAD_STATUS,
                status_code=response.status_code,
            )
            return QuizServiceCallResult.failed(FAILURE_BAD_STATUS, status_code=response.status_code)

        logger.info("quiz_service_call_succeeded", url=url, status_code=response.status_code)
        return QuizServiceCallResult.success(body=response.text, status_code=response.status_code)

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager

import structlog
from fastapi import APIRouter, Body, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.questions.errors import InvalidQuizRequestError, QuestionStoreUnavailableError
from app.questions.service import QuestionService
from app.questions.store import SqlQuestionStore
from app.services.quiz_client import (
    FAILURE_BAD_STATUS,
    FAILURE_TIMEOUT,
    QuizServiceCallResult,
    QuizServiceClient,
)

from .questions_models import (
    QuestionPayload,
    QuestionResponse,
    QuestionWrapperResponse,
    ResponsePayload,
)

router = APIRouter(prefix="/question", tags=["questions"])
logger = structlog.get_logger(__name__)

QUIZ_SERVICE_ERROR_MESSAGE = "Error calling QuizService"


@asynccontextmanager
async def _question_service() -> AsyncIterator[QuestionService]:
    settings = get_settings()
    try:
        async with SessionLocal.begin() as session:
            store = SqlQuestionStore(session, case_sensitive=settings.category_match_case_sensitive)
            yield QuestionService(store, logger=logger)
    except (SQLAlchemyError, OSError) as exc:
        raise QuestionStoreUnavailableError("question store transaction failed") from exc


def _quiz_client() -> QuizServiceClient:
    settings = get_settings()
    return QuizServiceClient(
        base_url=settings.quiz_service_base_url,
        timeout_seconds=settings.quiz_service_timeout_seconds,
    )


@contextmanager
def _domain_errors() -> Iterator[None]:
    try:
        yield
    except QuestionStoreUnavailableError as exc:
        logger.exception("question_store_unavailable")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"code": "E_STORE_UNAVAILABLE", "message": "question store is unavailable"},
        ) from exc
    except InvalidQuizRequestError as exc:
        raise HTTPException(
            status_code=422,
            detail={"code": "E_INVALID_REQUEST", "message": str(exc)},
        ) from exc


def _quiz_call_error(result: QuizServiceCallResult) -> HTTPException:
    if result.failure == FAILURE_TIMEOUT:
        return HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail={"code": "E_QUIZ_SERVICE_TIMEOUT", "message": QUIZ_SERVICE_ERROR_MESSAGE},
        )
    if result.failure == FAILURE_BAD_STATUS:
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "code": "E_QUIZ_SERVICE_BAD_STATUS",
                "message": QUIZ_SERVICE_ERROR_MESSAGE,
                "upstream_status": result.status_code,
            },
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={"code": "E_QUIZ_SERVICE_UNREACHABLE", "message": QUIZ_SERVICE_ERROR_MESSAGE},
    )


@router.get("/allQuestions", response_model=list[QuestionResponse])
async def get_all_questions() -> list[QuestionResponse]:
    logger.info("question_api_request", route="allQuestions")
    with _domain_errors():
        async with _question_service() as service:
            questions = await service.get_all_questions()
    return [QuestionResponse.from_question(question) for question in questions]


@router.get("/category/{category}", response_model=list[QuestionResponse])
async def get_questions_by_category(category: str) -> list[QuestionResponse]:
    logger.info("question_api_request", route="category", category=category)
    with _domain_errors():
        async with _question_service() as service:
            questions = await service.get_questions_by_category(category)
    return [QuestionResponse.from_question(question) for question in questions]


@router.get("/id/{question_id}", response_model=QuestionResponse)
async def get_question(question_id: int) -> QuestionResponse:
    logger.info("question_api_request", route="id", question_id=question_id)
    with _domain_errors():
        async with _question_service() as service:
            question = await service.get_question(question_id)
    if question is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "E_QUESTION_NOT_FOUND", "message": f"question {question_id} not found"},
        )
    return QuestionResponse.from_question(question)


@router.post("/add", status_code=status.HTTP_201_CREATED, response_class=PlainTextResponse)
async def add_question(payload: QuestionPayload) -> PlainTextResponse:
    logger.info("question_api_request", route="add", category=payload.category)
    with _domain_errors():
        async with _question_service() as service:
            stored = await service.add_question(payload.to_question())
    return PlainTextResponse(
        "success",
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/question/id/{stored.id}"},
    )


@router.get("/generate", response_model=list[int])
async def generate_quiz(
    category_name: str = Query(alias="categoryName"),
    num_questions: int = Query(alias="numQuestions"),
) -> list[int]:
    logger.info(
        "question_api_request",
        route="generate",
        category=category_name,
        num_questions=num_questions,
    )
    with _domain_errors():
        async with _question_service() as service:
            return await service.generate_quiz(category_name, num_questions)


@router.post("/getQuestions", response_model=list[QuestionWrapperResponse])
async def get_questions_from_ids(
    question_ids: list[int] = Body(),
) -> list[QuestionWrapperResponse]:
    logger.info("question_api_request", route="getQuestions", question_ids=question_ids)
    with _domain_errors():
        async with _question_service() as service:
            wrappers = await service.get_question_wrappers(question_ids)
    return [QuestionWrapperResponse.from_wrapper(wrapper) for wrapper in wrappers]


@router.post("/getScore", response_model=int)
async def get_score(responses: list[ResponsePayload] = Body()) -> int:
    logger.info("question_api_request", route="getScore", responses=len(responses))
    with _domain_errors():
        async with _question_service() as service:
            result = await service.score_responses([item.to_response() for item in responses])
    return result.correct


@router.get("/call-quiz", response_class=PlainTextResponse)
async def call_quiz_service() -> PlainTextResponse:
    logger.info("question_api_request", route="call-quiz")
    result = await _quiz_client().call_hello()
    if not result.ok:
        raise _quiz_call_error(result)
    return PlainTextResponse(result.body or "")

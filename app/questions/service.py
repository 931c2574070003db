from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from app.questions.errors import InvalidQuizRequestError
from app.questions.store import QuestionStore
from app.questions.types import (
    Question,
    QuestionResolution,
    QuestionWrapper,
    Response,
    ScoreResult,
    to_wrapper,
)


async def resolve_questions(
    store: QuestionStore,
    question_ids: Sequence[int],
) -> list[QuestionResolution]:
    """Look up every id independently, keeping input order and misses."""
    return [
        QuestionResolution(question_id=question_id, question=await store.find_by_id(question_id))
        for question_id in question_ids
    ]


class QuestionService:
    def __init__(
        self,
        store: QuestionStore,
        *,
        logger: Any | None = None,
    ) -> None:
        self._store = store
        self._logger = logger if logger is not None else structlog.get_logger(__name__)

    async def get_all_questions(self) -> list[Question]:
        questions = await self._store.find_all()
        self._logger.info("questions_listed", count=len(questions))
        return questions

    async def get_questions_by_category(self, category: str) -> list[Question]:
        questions = await self._store.find_by_category(category)
        self._logger.info("questions_listed_by_category", category=category, count=len(questions))
        return questions

    async def get_question(self, question_id: int) -> Question | None:
        return await self._store.find_by_id(question_id)

    async def add_question(self, question: Question) -> Question:
        stored = await self._store.save(question)
        self._logger.info("question_added", question_id=stored.id, category=stored.category)
        return stored

    async def generate_quiz(self, category_name: str, num_questions: int) -> list[int]:
        if num_questions <= 0:
            raise InvalidQuizRequestError("numQuestions must be a positive integer")

        question_ids = await self._store.find_random_ids_by_category(category_name, num_questions)
        self._logger.info(
            "quiz_generated",
            category=category_name,
            requested=num_questions,
            generated=len(question_ids),
        )
        return question_ids

    async def get_question_wrappers(self, question_ids: Sequence[int]) -> list[QuestionWrapper]:
        if not question_ids:
            raise InvalidQuizRequestError("question id list must not be empty")

        wrappers: list[QuestionWrapper] = []
        for resolution in await resolve_questions(self._store, question_ids):
            if resolution.question is None:
                self._logger.warning("question_not_found", question_id=resolution.question_id)
                continue
            wrappers.append(to_wrapper(resolution.question))

        self._logger.info("question_wrappers_built", requested=len(question_ids), returned=len(wrappers))
        return wrappers

    async def score_responses(self, responses: Sequence[Response]) -> ScoreResult:
        if not responses:
            raise InvalidQuizRequestError("response list must not be empty")

        resolutions = await resolve_questions(self._store, [response.id for response in responses])
        correct = 0
        resolved = 0
        for response, resolution in zip(responses, resolutions):
            if resolution.question is None:
                self._logger.warning("question_not_found_for_response", question_id=response.id)
                continue
            resolved += 1
            if response.response == resolution.question.correct_answer:
                correct += 1

        result = ScoreResult(correct=correct, resolved=resolved, submitted=len(responses))
        self._logger.info(
            "score_calculated",
            correct=result.correct,
            resolved=result.resolved,
            submitted=result.submitted,
        )
        return result

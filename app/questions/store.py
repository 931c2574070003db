from __future__ import annotations

import random
from dataclasses import replace
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.questions import QUESTION_ID_MAX, QUESTION_ID_MIN, QuestionRecord
from app.db.repo.questions_repo import QuestionsRepo
from app.questions.errors import QuestionStoreUnavailableError
from app.questions.types import Question


class QuestionStore(Protocol):
    async def find_all(self) -> list[Question]: ...

    async def find_by_category(self, category: str) -> list[Question]: ...

    async def find_by_id(self, question_id: int) -> Question | None: ...

    async def find_random_ids_by_category(self, category: str, count: int) -> list[int]: ...

    async def save(self, question: Question) -> Question: ...


def _to_question(record: QuestionRecord) -> Question:
    return Question(
        id=record.id,
        question_title=record.question_title,
        option1=record.option1,
        option2=record.option2,
        option3=record.option3,
        option4=record.option4,
        correct_answer=record.correct_answer,
        category=record.category,
        difficulty_level=record.difficulty_level,
    )


def _to_record(question: Question) -> QuestionRecord:
    # ids are always assigned by the database
    return QuestionRecord(
        question_title=question.question_title,
        option1=question.option1,
        option2=question.option2,
        option3=question.option3,
        option4=question.option4,
        correct_answer=question.correct_answer,
        category=question.category,
        difficulty_level=question.difficulty_level,
    )


class SqlQuestionStore:
    """QuestionStore backed by the ``questions`` table.

    The store never commits; the caller owns the session transaction. Every
    SQLAlchemy failure is re-raised as ``QuestionStoreUnavailableError``.
    """

    def __init__(self, session: AsyncSession, *, case_sensitive: bool = True) -> None:
        self._session = session
        self._case_sensitive = case_sensitive

    async def find_all(self) -> list[Question]:
        try:
            records = await QuestionsRepo.list_all(self._session)
        except (SQLAlchemyError, OSError) as exc:
            raise QuestionStoreUnavailableError("failed to list questions") from exc
        return [_to_question(record) for record in records]

    async def find_by_category(self, category: str) -> list[Question]:
        try:
            records = await QuestionsRepo.list_by_category(
                self._session,
                category=category,
                case_sensitive=self._case_sensitive,
            )
        except (SQLAlchemyError, OSError) as exc:
            raise QuestionStoreUnavailableError("failed to list questions by category") from exc
        return [_to_question(record) for record in records]

    async def find_by_id(self, question_id: int) -> Question | None:
        if not QUESTION_ID_MIN <= question_id <= QUESTION_ID_MAX:
            return None
        try:
            record = await QuestionsRepo.get_by_id(self._session, question_id)
        except (SQLAlchemyError, OSError) as exc:
            raise QuestionStoreUnavailableError("failed to load question") from exc
        return _to_question(record) if record is not None else None

    async def find_random_ids_by_category(self, category: str, count: int) -> list[int]:
        try:
            return await QuestionsRepo.list_random_ids_by_category(
                self._session,
                category=category,
                limit=count,
                case_sensitive=self._case_sensitive,
            )
        except (SQLAlchemyError, OSError) as exc:
            raise QuestionStoreUnavailableError("failed to sample question ids") from exc

    async def save(self, question: Question) -> Question:
        try:
            record = await QuestionsRepo.create(self._session, record=_to_record(question))
        except (SQLAlchemyError, OSError) as exc:
            raise QuestionStoreUnavailableError("failed to save question") from exc
        return _to_question(record)


class InMemoryQuestionStore:
    def __init__(
        self,
        questions: list[Question] | None = None,
        *,
        case_sensitive: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self._questions: dict[int, Question] = {}
        self._next_id = 1
        self._case_sensitive = case_sensitive
        self._rng = rng or random.Random()
        for question in questions or []:
            self._insert(question)

    def _insert(self, question: Question) -> Question:
        stored = replace(question, id=self._next_id)
        self._questions[stored.id] = stored
        self._next_id += 1
        return replace(stored)

    def _matches(self, question: Question, category: str) -> bool:
        if self._case_sensitive:
            return question.category == category
        return question.category.lower() == category.lower()

    async def find_all(self) -> list[Question]:
        return [replace(question) for question in self._questions.values()]

    async def find_by_category(self, category: str) -> list[Question]:
        return [replace(question) for question in self._questions.values() if self._matches(question, category)]

    async def find_by_id(self, question_id: int) -> Question | None:
        question = self._questions.get(question_id)
        return replace(question) if question is not None else None

    async def find_random_ids_by_category(self, category: str, count: int) -> list[int]:
        if count <= 0:
            return []
        candidate_ids = [
            question_id for question_id, question in self._questions.items() if self._matches(question, category)
        ]
        return self._rng.sample(candidate_ids, min(count, len(candidate_ids)))

    async def save(self, question: Question) -> Question:
        return self._insert(question)

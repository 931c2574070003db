from __future__ import annotations

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.questions import QuestionRecord


def _category_clause(category: str, *, case_sensitive: bool) -> ColumnElement[bool]:
    if case_sensitive:
        return QuestionRecord.category == category
    return func.lower(QuestionRecord.category) == category.lower()


class QuestionsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, question_id: int) -> QuestionRecord | None:
        return await session.get(QuestionRecord, question_id)

    @staticmethod
    async def list_all(session: AsyncSession) -> list[QuestionRecord]:
        stmt = select(QuestionRecord).order_by(QuestionRecord.id.asc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_by_category(
        session: AsyncSession,
        *,
        category: str,
        case_sensitive: bool = True,
    ) -> list[QuestionRecord]:
        stmt = (
            select(QuestionRecord)
            .where(_category_clause(category, case_sensitive=case_sensitive))
            .order_by(QuestionRecord.id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_random_ids_by_category(
        session: AsyncSession,
        *,
        category: str,
        limit: int,
        case_sensitive: bool = True,
    ) -> list[int]:
        if limit <= 0:
            return []
        stmt = (
            select(QuestionRecord.id)
            .where(_category_clause(category, case_sensitive=case_sensitive))
            .order_by(func.random())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def create(session: AsyncSession, *, record: QuestionRecord) -> QuestionRecord:
        session.add(record)
        await session.flush()
        return record

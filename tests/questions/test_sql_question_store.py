from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db.models import Base
from app.questions.errors import QuestionStoreUnavailableError
from app.questions.store import SqlQuestionStore
from tests.questions.question_fixtures import make_question


@pytest.fixture
async def session(tmp_path) -> AsyncIterator[AsyncSession]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'questions.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with session_factory() as db_session:
        yield db_session

    await engine.dispose()


async def _seed(store: SqlQuestionStore) -> None:
    await store.save(make_question("J1", category="java"))
    await store.save(make_question("J2", category="java"))
    await store.save(make_question("J3", category="Java"))
    await store.save(make_question("P1", category="python"))


class _BrokenSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, RuntimeError("connection refused"))

    async def get(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, RuntimeError("connection refused"))

    def add(self, record) -> None:
        pass

    async def flush(self, *args, **kwargs):
        raise OperationalError("INSERT INTO questions", {}, RuntimeError("connection refused"))


@pytest.mark.asyncio
async def test_save_assigns_sequential_ids(session: AsyncSession) -> None:
    store = SqlQuestionStore(session)

    first = await store.save(make_question("first"))
    second = await store.save(make_question("first"))

    assert first.id is not None
    assert second.id is not None
    assert first.id != second.id


@pytest.mark.asyncio
async def test_find_by_id_round_trips_all_fields(session: AsyncSession) -> None:
    store = SqlQuestionStore(session)
    question = make_question("Largest planet?", category="space", correct_answer="Jupiter", difficulty_level=None)

    stored = await store.save(question)
    await session.commit()
    session.expunge_all()
    fetched = await store.find_by_id(stored.id)

    assert fetched is not None
    assert fetched.id == stored.id
    assert fetched.question_title == "Largest planet?"
    assert (fetched.option1, fetched.option2, fetched.option3, fetched.option4) == ("3", "4", "5", "22")
    assert fetched.correct_answer == "Jupiter"
    assert fetched.category == "space"
    assert fetched.difficulty_level is None


@pytest.mark.asyncio
async def test_find_by_id_returns_none_for_missing_question(session: AsyncSession) -> None:
    store = SqlQuestionStore(session)

    assert await store.find_by_id(12345) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("question_id", [2**31, 2**64, -(2**31) - 1, -(2**63)])
async def test_find_by_id_returns_none_for_ids_outside_column_range(
    session: AsyncSession,
    question_id: int,
) -> None:
    store = SqlQuestionStore(session)
    await _seed(store)

    assert await store.find_by_id(question_id) is None


@pytest.mark.asyncio
async def test_out_of_range_id_does_not_touch_the_session() -> None:
    store = SqlQuestionStore(_BrokenSession())

    assert await store.find_by_id(2**64) is None


@pytest.mark.asyncio
async def test_find_all_orders_by_id(session: AsyncSession) -> None:
    store = SqlQuestionStore(session)
    await _seed(store)

    questions = await store.find_all()

    assert [question.question_title for question in questions] == ["J1", "J2", "J3", "P1"]


@pytest.mark.asyncio
async def test_find_all_on_empty_store_is_empty(session: AsyncSession) -> None:
    assert await SqlQuestionStore(session).find_all() == []


@pytest.mark.asyncio
async def test_find_by_category_matches_exactly(session: AsyncSession) -> None:
    store = SqlQuestionStore(session)
    await _seed(store)

    questions = await store.find_by_category("java")

    assert [question.question_title for question in questions] == ["J1", "J2"]
    assert await store.find_by_category("rust") == []


@pytest.mark.asyncio
async def test_find_by_category_ignores_case_when_configured(session: AsyncSession) -> None:
    store = SqlQuestionStore(session, case_sensitive=False)
    await _seed(store)

    questions = await store.find_by_category("JAVA")

    assert [question.question_title for question in questions] == ["J1", "J2", "J3"]


@pytest.mark.asyncio
async def test_find_random_ids_by_category_returns_distinct_ids_from_category(session: AsyncSession) -> None:
    store = SqlQuestionStore(session)
    await _seed(store)
    java_ids = {question.id for question in await store.find_by_category("java")}

    sampled = await store.find_random_ids_by_category("java", 1)
    capped = await store.find_random_ids_by_category("java", 10)

    assert len(sampled) == 1
    assert set(sampled) <= java_ids
    assert sorted(capped) == sorted(java_ids)


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [0, -3])
async def test_find_random_ids_by_category_with_non_positive_count_is_empty(
    session: AsyncSession,
    count: int,
) -> None:
    store = SqlQuestionStore(session)
    await _seed(store)

    assert await store.find_random_ids_by_category("java", count) == []


@pytest.mark.asyncio
async def test_store_faults_raise_unavailable_error() -> None:
    store = SqlQuestionStore(_BrokenSession())

    with pytest.raises(QuestionStoreUnavailableError):
        await store.find_all()
    with pytest.raises(QuestionStoreUnavailableError):
        await store.find_by_category("java")
    with pytest.raises(QuestionStoreUnavailableError):
        await store.find_by_id(1)
    with pytest.raises(QuestionStoreUnavailableError):
        await store.find_random_ids_by_category("java", 2)
    with pytest.raises(QuestionStoreUnavailableError):
        await store.save(make_question("Q1"))

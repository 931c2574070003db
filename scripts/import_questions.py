from __future__ import annotations

import argparse
import asyncio
import csv
from collections import Counter
from dataclasses import dataclass
from pathlib import Path

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.questions.service import QuestionService
from app.questions.store import SqlQuestionStore
from app.questions.types import Question

REQUIRED_COLUMNS = {
    "question_title",
    "option1",
    "option2",
    "option3",
    "option4",
    "correct_answer",
    "category",
}


@dataclass(slots=True)
class ImportSummary:
    total_rows_read: int = 0
    total_rows_imported: int = 0


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import questions from a CSV file into the questions table.")
    parser.add_argument("--input", type=Path, required=True)
    parser.add_argument("--dry-run", action="store_true")
    return parser.parse_args(argv)


def _read_csv(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        fieldnames = set(reader.fieldnames or [])
        missing = sorted(REQUIRED_COLUMNS - fieldnames)
        if missing:
            missing_str = ", ".join(missing)
            raise ValueError(f"{path.name}: missing required columns: {missing_str}")
        return [dict(row) for row in reader]


def _build_question(row: dict[str, str], *, location: str) -> Question:
    title = (row.get("question_title") or "").strip()
    if not title:
        raise ValueError(f"{location}: empty question_title")

    options = [(row.get(f"option{index}") or "").strip() for index in range(1, 5)]
    if not all(options):
        raise ValueError(f"{location}: all options must be non-empty")

    correct_answer = (row.get("correct_answer") or "").strip()
    if correct_answer not in options:
        raise ValueError(f"{location}: correct_answer {correct_answer!r} does not match any option")

    category = (row.get("category") or "").strip()
    if not category:
        raise ValueError(f"{location}: empty category")

    difficulty_level = (row.get("difficulty_level") or "").strip() or None
    return Question(
        question_title=title,
        option1=options[0],
        option2=options[1],
        option3=options[2],
        option4=options[3],
        correct_answer=correct_answer,
        category=category,
        difficulty_level=difficulty_level,
    )


def _build_questions(path: Path) -> tuple[list[Question], ImportSummary, Counter[str]]:
    if not path.is_file():
        raise ValueError(f"input file does not exist: {path}")

    rows = _read_csv(path)
    summary = ImportSummary(total_rows_read=len(rows))
    by_category = Counter[str]()
    questions: list[Question] = []
    for row_index, row in enumerate(rows, start=2):
        question = _build_question(row, location=f"{path.name}:{row_index}")
        questions.append(question)
        by_category[question.category] += 1

    summary.total_rows_imported = len(questions)
    return questions, summary, by_category


async def _persist_questions(questions: list[Question]) -> None:
    if not questions:
        raise ValueError("no importable rows found")

    settings = get_settings()
    async with SessionLocal.begin() as session:
        service = QuestionService(
            SqlQuestionStore(session, case_sensitive=settings.category_match_case_sensitive)
        )
        for question in questions:
            await service.add_question(question)


async def _run(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    questions, summary, by_category = _build_questions(args.input)

    if not args.dry_run:
        await _persist_questions(questions)

    category_stats = ", ".join(f"{category}={count}" for category, count in sorted(by_category.items()))
    print(  # noqa: T201
        "questions_import "
        f"rows_read={summary.total_rows_read} "
        f"rows_imported={summary.total_rows_imported} "
        f"dry_run={args.dry_run}"
    )
    print(f"questions_import_by_category {category_stats}")  # noqa: T201
    return 0


def main() -> int:
    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base

# questions.id is a 32-bit signed INTEGER
QUESTION_ID_MIN = -(2**31)
QUESTION_ID_MAX = 2**31 - 1
CATEGORY_MAX_LENGTH = 128
DIFFICULTY_LEVEL_MAX_LENGTH = 32


class QuestionRecord(Base):
    __tablename__ = "questions"
    __table_args__ = (Index("idx_questions_category", "category"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_title: Mapped[str] = mapped_column(Text, nullable=False)
    option1: Mapped[str] = mapped_column(Text, nullable=False)
    option2: Mapped[str] = mapped_column(Text, nullable=False)
    option3: Mapped[str] = mapped_column(Text, nullable=False)
    option4: Mapped[str] = mapped_column(Text, nullable=False)
    correct_answer: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(CATEGORY_MAX_LENGTH), nullable=False)
    difficulty_level: Mapped[str | None] = mapped_column(String(DIFFICULTY_LEVEL_MAX_LENGTH), nullable=True)

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Question:
    question_title: str
    option1: str
    option2: str
    option3: str
    option4: str
    correct_answer: str
    category: str
    difficulty_level: str | None = None
    id: int | None = None


@dataclass(frozen=True, slots=True)
class QuestionWrapper:
    id: int
    question_title: str
    option1: str
    option2: str
    option3: str
    option4: str


@dataclass(frozen=True, slots=True)
class Response:
    id: int
    response: str


@dataclass(frozen=True, slots=True)
class QuestionResolution:
    question_id: int
    question: Question | None

    @property
    def resolved(self) -> bool:
        return self.question is not None


@dataclass(frozen=True, slots=True)
class ScoreResult:
    correct: int
    resolved: int
    submitted: int


def to_wrapper(question: Question) -> QuestionWrapper:
    if question.id is None:
        raise ValueError("question must be persisted before it can be wrapped")
    return QuestionWrapper(
        id=question.id,
        question_title=question.question_title,
        option1=question.option1,
        option2=question.option2,
        option3=question.option3,
        option4=question.option4,
    )

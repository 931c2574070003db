from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.db.models.questions import CATEGORY_MAX_LENGTH, DIFFICULTY_LEVEL_MAX_LENGTH
from app.questions.types import Question, QuestionWrapper, Response


class QuestionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    question_title: str = Field(alias="questionTitle")
    option1: str
    option2: str
    option3: str
    option4: str
    correct_answer: str = Field(alias="correctAnswer")
    category: str = Field(max_length=CATEGORY_MAX_LENGTH)
    difficulty_level: str | None = Field(
        default=None,
        alias="difficultyLevel",
        max_length=DIFFICULTY_LEVEL_MAX_LENGTH,
    )

    def to_question(self) -> Question:
        return Question(
            question_title=self.question_title,
            option1=self.option1,
            option2=self.option2,
            option3=self.option3,
            option4=self.option4,
            correct_answer=self.correct_answer,
            category=self.category,
            difficulty_level=self.difficulty_level,
        )


class QuestionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    question_title: str = Field(alias="questionTitle")
    option1: str
    option2: str
    option3: str
    option4: str
    correct_answer: str = Field(alias="correctAnswer")
    category: str
    difficulty_level: str | None = Field(default=None, alias="difficultyLevel")

    @classmethod
    def from_question(cls, question: Question) -> QuestionResponse:
        return cls(
            id=question.id,
            question_title=question.question_title,
            option1=question.option1,
            option2=question.option2,
            option3=question.option3,
            option4=question.option4,
            correct_answer=question.correct_answer,
            category=question.category,
            difficulty_level=question.difficulty_level,
        )


class QuestionWrapperResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    question_title: str = Field(alias="questionTitle")
    option1: str
    option2: str
    option3: str
    option4: str

    @classmethod
    def from_wrapper(cls, wrapper: QuestionWrapper) -> QuestionWrapperResponse:
        return cls(
            id=wrapper.id,
            question_title=wrapper.question_title,
            option1=wrapper.option1,
            option2=wrapper.option2,
            option3=wrapper.option3,
            option4=wrapper.option4,
        )


class ResponsePayload(BaseModel):
    id: int
    response: str

    def to_response(self) -> Response:
        return Response(id=self.id, response=self.response)

from app.db.models.base import Base
from app.db.models.questions import QuestionRecord

__all__ = [
    "Base",
    "QuestionRecord",
]

"""Content request/response models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ContentKind(StrEnum):
    """Kinds of content the resolver can produce."""

    LESSON = "lesson"
    QUIZ = "quiz"
    CHAT = "chat"


class ProficiencyLevel(StrEnum):
    """Coarse skill bucket for a topic."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def from_score(cls, score: float) -> "ProficiencyLevel":
        """Determine level from a 0-100 mastery score."""
        if score < 30:
            return cls.BEGINNER
        elif score < 70:
            return cls.INTERMEDIATE
        else:
            return cls.ADVANCED


class QuizQuestion(BaseModel):
    """A multiple-choice question with 2-4 options."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(min_length=1)
    options: tuple[str, ...] = Field(min_length=2, max_length=4)
    correct: int = Field(ge=0)

    @model_validator(mode="after")
    def _correct_in_bounds(self) -> "QuizQuestion":
        if self.correct >= len(self.options):
            raise ValueError(
                f"correct index {self.correct} out of range for {len(self.options)} options"
            )
        return self


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topic: str | None = None
    user_level: str | None = Field(default=None, alias="userLevel")


class LessonRequest(_Request):
    pass


class QuizRequest(_Request):
    pass


class ChatRequest(_Request):
    message: str | None = None
    context: str | None = None


class LessonResponse(BaseModel):
    lesson: str


class QuizResponse(BaseModel):
    questions: list[QuizQuestion]


class ChatResponse(BaseModel):
    reply: str

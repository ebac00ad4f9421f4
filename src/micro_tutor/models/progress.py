"""Per-user progress record and completed-activity models."""

import re
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

MASTERY_MIN = 0
MASTERY_MAX = 100


def topic_key(topic: str) -> str:
    """Normalize a topic name into the key used for mastery scores."""
    return re.sub(r"\s+", "", topic.lower())


class ProgressRecord(BaseModel):
    """Flat progress record as persisted by the client.

    Daily lesson counts are keyed by ISO date, mastery scores by topic key,
    last-activity timestamps by the topic name as displayed.
    """

    model_config = ConfigDict(populate_by_name=True)

    daily_lessons: dict[str, int] = Field(default_factory=dict, alias="dailyLessons")
    topics: dict[str, int] = Field(default_factory=dict)
    total_lessons: int = Field(default=0, alias="totalLessons")
    total_quizzes: int = Field(default=0, alias="totalQuizzes")
    current_streak: int = Field(default=0, alias="currentStreak")
    last_activity: dict[str, datetime] = Field(default_factory=dict, alias="lastActivity")

    def mastery(self, topic: str) -> int:
        return self.topics.get(topic_key(topic), 0)

    def to_client(self) -> dict:
        """Serialize with the client's camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)


class LessonCompleted(BaseModel):
    kind: Literal["lesson"] = "lesson"
    topic: str = Field(min_length=1)
    completed_at: datetime = Field(default_factory=datetime.now)


class QuizCompleted(BaseModel):
    kind: Literal["quiz"] = "quiz"
    topic: str = Field(min_length=1)
    score: float = Field(ge=0, le=100)
    completed_at: datetime = Field(default_factory=datetime.now)


Activity = Annotated[LessonCompleted | QuizCompleted, Field(discriminator="kind")]


class ActivityRequest(BaseModel):
    """Body of an activity submission: ``{kind, topic, score?}``."""

    kind: Literal["lesson", "quiz"]
    topic: str = Field(min_length=1)
    score: float | None = Field(default=None, ge=0, le=100)

    @model_validator(mode="after")
    def _quiz_needs_score(self) -> "ActivityRequest":
        if self.kind == "quiz" and self.score is None:
            raise ValueError("score is required for quiz activities")
        return self

    def to_activity(self) -> LessonCompleted | QuizCompleted:
        if self.kind == "lesson":
            return LessonCompleted(topic=self.topic)
        return QuizCompleted(topic=self.topic, score=self.score)

"""Progress updates for completed lessons and quizzes."""

from datetime import date, timedelta

import structlog

from micro_tutor.models.content import ProficiencyLevel
from micro_tutor.models.progress import (
    MASTERY_MAX,
    MASTERY_MIN,
    Activity,
    LessonCompleted,
    ProgressRecord,
    QuizCompleted,
    topic_key,
)

logger = structlog.get_logger()

LESSON_MASTERY_GAIN = 10
QUIZ_MASTERY_GAIN = 15
QUIZ_PASS_SCORE = 80


def apply_activity(record: ProgressRecord, activity: Activity, today: date) -> ProgressRecord:
    """Return a new record with the activity applied.

    The input record is left untouched.

    Args:
        record: Current progress.
        activity: Completed lesson or quiz.
        today: Calendar day the activity counts towards.

    Returns:
        Updated copy of the record.
    """
    updated = record.model_copy(deep=True)

    if isinstance(activity, LessonCompleted):
        day = today.isoformat()
        updated.daily_lessons[day] = updated.daily_lessons.get(day, 0) + 1
        updated.total_lessons += 1
        updated.last_activity[activity.topic] = activity.completed_at
        _add_mastery(updated, activity.topic, LESSON_MASTERY_GAIN)
    elif isinstance(activity, QuizCompleted):
        updated.total_quizzes += 1
        if activity.score >= QUIZ_PASS_SCORE:
            _add_mastery(updated, activity.topic, QUIZ_MASTERY_GAIN)
    else:
        raise TypeError(f"Unsupported activity: {type(activity).__name__}")

    update_streak(updated, today)

    logger.debug(
        "activity_applied",
        kind=activity.kind,
        topic=activity.topic,
        mastery=updated.mastery(activity.topic),
        streak=updated.current_streak,
    )
    return updated


def update_streak(record: ProgressRecord, today: date) -> None:
    """Recompute the streak in place.

    Only two branches exist: both days active extends the streak, an idle
    yesterday restarts it. When yesterday was active but today is not, the
    streak is left as is.
    """
    today_count = record.daily_lessons.get(today.isoformat(), 0)
    yesterday_count = record.daily_lessons.get((today - timedelta(days=1)).isoformat(), 0)

    if today_count and yesterday_count:
        record.current_streak += 1
    elif not yesterday_count:
        record.current_streak = 1 if today_count else 0


def _add_mastery(record: ProgressRecord, topic: str, amount: int) -> None:
    key = topic_key(topic)
    score = record.topics.get(key, 0) + amount
    record.topics[key] = max(MASTERY_MIN, min(MASTERY_MAX, score))


def level_for_topic(record: ProgressRecord, topic: str) -> ProficiencyLevel:
    """Proficiency level derived from the topic's mastery score."""
    return ProficiencyLevel.from_score(record.mastery(topic))


def lessons_today(record: ProgressRecord, today: date) -> int:
    return record.daily_lessons.get(today.isoformat(), 0)

"""Plan-based access rules for starting lessons."""

from collections.abc import Iterable
from datetime import date

from micro_tutor.models.account import Plan
from micro_tutor.models.progress import ProgressRecord
from micro_tutor.progress.tracker import lessons_today


class LessonAccessDenied(Exception):
    """A lesson cannot be started on the user's plan."""

    def __init__(self, reason: str, detail: str):
        super().__init__(detail)
        self.reason = reason
        self.detail = detail


def check_lesson_access(
    plan: Plan,
    topic: str,
    record: ProgressRecord,
    today: date,
    daily_limit: int = 3,
    premium_topics: Iterable[str] = ("Advanced Topics",),
) -> None:
    """Raise LessonAccessDenied if the plan does not allow this lesson today.

    Premium accounts are never limited. Free accounts cannot open premium
    topics and get ``daily_limit`` lessons per day.
    """
    if plan is Plan.PREMIUM:
        return
    if topic in set(premium_topics):
        raise LessonAccessDenied(
            "premium_topic", f"'{topic}' is a premium topic. Upgrade to Premium to access it."
        )
    if lessons_today(record, today) >= daily_limit:
        raise LessonAccessDenied(
            "daily_limit",
            f"Daily limit reached. Free users get {daily_limit} lessons per day.",
        )

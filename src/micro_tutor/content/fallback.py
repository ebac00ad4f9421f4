"""Deterministic canned-content selection.

Every function here is total: for any topic, level and message it returns
non-empty content, so it can serve as the terminal fallback of the resolver.
"""

from collections.abc import Mapping
from enum import StrEnum

from micro_tutor.content import canned
from micro_tutor.errors import UnknownTopic
from micro_tutor.models.content import ProficiencyLevel, QuizQuestion


class MessageCategory(StrEnum):
    QUESTION = "question"
    STRUGGLE = "struggle"
    EXAMPLE = "example"
    OTHER = "other"


def lookup_leveled(table: Mapping, topic: str, level: str) -> str:
    """Look up ``(topic, level)``, falling back to the topic's beginner entry.

    Raises:
        UnknownTopic: If the topic has no entries at all.
    """
    entries = table.get(topic)
    if not entries:
        raise UnknownTopic(topic)
    return entries.get(level) or entries[ProficiencyLevel.BEGINNER.value]


def canned_lesson(topic: str, level: str) -> str:
    try:
        return lookup_leveled(canned.LESSONS, topic, level)
    except UnknownTopic:
        return canned.GENERIC_LESSON.format(topic=topic)


def canned_quiz(topic: str) -> list[QuizQuestion]:
    questions = canned.QUIZZES.get(topic)
    if questions:
        return list(questions)
    return [
        QuizQuestion(
            question=canned.GENERIC_QUIZ_QUESTION.format(topic=topic),
            options=canned.GENERIC_QUIZ_OPTIONS,
            correct=canned.GENERIC_QUIZ_CORRECT,
        )
    ]


def classify_message(message: str) -> MessageCategory:
    """Classify a chat message by keyword membership (substring match)."""
    msg = message.lower()
    if any(word in msg for word in canned.QUESTION_WORDS):
        return MessageCategory.QUESTION
    if any(word in msg for word in canned.STRUGGLE_WORDS):
        return MessageCategory.STRUGGLE
    if any(word in msg for word in canned.EXAMPLE_WORDS):
        return MessageCategory.EXAMPLE
    return MessageCategory.OTHER


def canned_chat_reply(message: str, topic: str, level: str) -> str:
    category = classify_message(message)
    if category is MessageCategory.QUESTION:
        try:
            return lookup_leveled(canned.QUESTION_REPLIES, topic, level)
        except UnknownTopic:
            return canned.GENERIC_QUESTION_REPLY.format(topic=topic)
    if category is MessageCategory.STRUGGLE:
        return canned.STRUGGLE_REPLY.format(topic=topic)
    if category is MessageCategory.EXAMPLE:
        return canned.EXAMPLE_REPLY.format(topic=topic)
    return canned.DEFAULT_REPLY.format(topic=topic)

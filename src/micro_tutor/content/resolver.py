"""Content selection with remote generation and canned fallback."""

import structlog

from micro_tutor.config import Settings
from micro_tutor.content.fallback import canned_chat_reply, canned_lesson, canned_quiz
from micro_tutor.content.quiz_parser import parse_quiz
from micro_tutor.errors import ContentError, MalformedResponse
from micro_tutor.generation.client import RemoteGenerator, build_generator
from micro_tutor.generation.prompts import build_prompt
from micro_tutor.models.content import ContentKind, ProficiencyLevel, QuizQuestion

logger = structlog.get_logger()

Content = str | list[QuizQuestion]


class ContentResolver:
    """Resolves lessons, quizzes and chat replies for a topic and level.

    Tries the remote generator when one is configured and falls back to
    canned content on any failure. ``resolve`` never raises.

    Args:
        generator: Remote generator, or None to always use canned content.
        lesson_max_length: Generation bound for lessons.
        short_max_length: Generation bound for quizzes and chat replies.
    """

    def __init__(
        self,
        generator: RemoteGenerator | None = None,
        lesson_max_length: int = 200,
        short_max_length: int = 100,
    ):
        self.generator = generator
        self.lesson_max_length = lesson_max_length
        self.short_max_length = short_max_length

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentResolver":
        return cls(
            generator=build_generator(settings),
            lesson_max_length=settings.lesson_max_length,
            short_max_length=settings.short_max_length,
        )

    async def resolve(
        self,
        kind: ContentKind,
        topic: str,
        level: str = ProficiencyLevel.BEGINNER,
        context: str | None = None,
        notes: str | None = None,
    ) -> Content:
        """Resolve content of the given kind.

        Args:
            kind: Lesson, quiz or chat.
            topic: Topic name; unknown topics get generic content.
            level: Proficiency level; unknown levels use beginner content.
            context: Free text. For chat this is the learner's message.
            notes: Extra chat background, only sent to the remote generator.

        Returns:
            Text for lessons and chat, a non-empty question list for quizzes.
        """
        level = str(level or ProficiencyLevel.BEGINNER)
        if self.generator is not None:
            try:
                return await self._generate(kind, topic, level, context, notes)
            except ContentError as e:
                logger.info(
                    "remote_generation_failed",
                    kind=kind.value,
                    topic=topic,
                    error_type=type(e).__name__,
                    error=str(e),
                )
            except Exception:
                logger.exception("remote_generation_error", kind=kind.value, topic=topic)

        logger.debug("content_fallback", kind=kind.value, topic=topic, level=level)
        return self._canned(kind, topic, level, context)

    async def lesson(self, topic: str, level: str = ProficiencyLevel.BEGINNER) -> str:
        return await self.resolve(ContentKind.LESSON, topic, level)

    async def quiz(
        self, topic: str, level: str = ProficiencyLevel.BEGINNER
    ) -> list[QuizQuestion]:
        return await self.resolve(ContentKind.QUIZ, topic, level)

    async def chat(
        self,
        message: str,
        topic: str,
        level: str = ProficiencyLevel.BEGINNER,
        notes: str | None = None,
    ) -> str:
        return await self.resolve(ContentKind.CHAT, topic, level, context=message, notes=notes)

    async def _generate(
        self,
        kind: ContentKind,
        topic: str,
        level: str,
        context: str | None,
        notes: str | None,
    ) -> Content:
        prompt = build_prompt(kind, topic, level, context, notes)
        max_length = (
            self.lesson_max_length if kind is ContentKind.LESSON else self.short_max_length
        )
        text = await self.generator.generate(prompt, max_length)

        if kind is ContentKind.QUIZ:
            questions = parse_quiz(text)
            if questions is None:
                raise MalformedResponse("generated quiz could not be parsed")
            return questions
        return text

    @staticmethod
    def _canned(kind: ContentKind, topic: str, level: str, context: str | None) -> Content:
        if kind is ContentKind.LESSON:
            return canned_lesson(topic, level)
        if kind is ContentKind.QUIZ:
            return canned_quiz(topic)
        return canned_chat_reply(context or "", topic, level)

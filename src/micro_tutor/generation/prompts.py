"""Kind-specific prompts for remote content generation."""

from micro_tutor.models.content import ContentKind

SYSTEM_PROMPT = """\
You are a friendly micro-tutor. You teach short, focused lessons to adult learners \
and answer their questions clearly and encouragingly. Keep answers concise.
"""

LESSON_PROMPT = (
    "Create a concise 5-minute {level} level lesson on {topic}. "
    "Make it engaging and educational. {context}"
)

QUIZ_PROMPT = """\
Generate 3 multiple-choice questions for {level} level {topic}.
Respond ONLY with a JSON array:
[
    {{"question": "<text>", "options": ["<a>", "<b>", "<c>", "<d>"], "correct": <index of the right option>}}
]
"""

CHAT_PROMPT = (
    "You are a helpful AI tutor. Answer this question about {topic} at {level} level: {context}"
)

_TEMPLATES: dict[ContentKind, str] = {
    ContentKind.LESSON: LESSON_PROMPT,
    ContentKind.QUIZ: QUIZ_PROMPT,
    ContentKind.CHAT: CHAT_PROMPT,
}


def build_prompt(
    kind: ContentKind,
    topic: str,
    level: str,
    context: str | None = None,
    notes: str | None = None,
) -> str:
    """Build the user prompt for a generation request.

    Args:
        kind: Content kind being generated.
        topic: Topic name.
        level: Proficiency level.
        context: Free text; the learner's message for chat requests.
        notes: Extra background for chat requests.

    Returns:
        Prompt string.
    """
    prompt = _TEMPLATES[kind].format(topic=topic, level=level, context=context or "").strip()
    if kind is ContentKind.CHAT and notes:
        prompt = f"{prompt}\n\nBackground from the lesson so far:\n{notes.strip()}"
    return prompt

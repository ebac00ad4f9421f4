"""Best-effort parsing of generated quiz text into questions.

Parsing is all-or-nothing: the result is either a complete list of valid
questions or ``None``. A partially understood quiz is never returned.
Question-like lines with no options at all are treated as prose.
"""

import json
import re

import structlog
from pydantic import ValidationError

from micro_tutor.models.content import QuizQuestion

logger = structlog.get_logger()

_OPTION_LINE = re.compile(r"^([A-Da-d])[.)]\s*(.+)$")
_ANSWER_LINE = re.compile(r"^(?:correct\s+)?answer\s*[:\-]\s*([A-Da-d])\b", re.IGNORECASE)
_LETTER_PREFIX = re.compile(r"^[A-Da-d][).:]\s+")


def parse_quiz(raw_text: str | None) -> list[QuizQuestion] | None:
    """Parse generated text as a quiz. Returns None when it is unparseable."""
    if not raw_text or not raw_text.strip():
        return None

    items = _extract_json_items(raw_text)
    if items is not None:
        questions = _questions_from_json(items)
    else:
        questions = _questions_from_lines(raw_text)

    if not questions:
        logger.info("quiz_text_unparseable", length=len(raw_text))
        return None
    return questions


def _extract_json_items(raw_text: str) -> list | None:
    data = _try_parse_json(raw_text)

    if data is None:
        match = re.search(r"```(?:json)?\s*(.+?)\s*```", raw_text, re.DOTALL)
        if match:
            data = _try_parse_json(match.group(1))

    if data is None:
        match = re.search(r"(\[\s*\{.+}\s*])", raw_text, re.DOTALL)
        if match:
            data = _try_parse_json(match.group(1))

    if isinstance(data, dict):
        data = data.get("questions")
    return data if isinstance(data, list) else None


def _try_parse_json(text: str):
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None


def _questions_from_json(items: list) -> list[QuizQuestion] | None:
    questions = []
    for item in items:
        if not isinstance(item, dict):
            return None
        question = item.get("question")
        if not isinstance(question, str) or not question.strip():
            return None
        options = _option_texts(item.get("options"))
        if options is None:
            return None
        correct = _resolve_correct(item.get("correct", item.get("answer")), options)
        if correct is None:
            return None
        try:
            questions.append(QuizQuestion(question=question.strip(), options=options, correct=correct))
        except ValidationError:
            return None
    return questions


def _option_texts(options) -> list[str] | None:
    """Option strings with letter prefixes removed; numbers are written out."""
    if not isinstance(options, list):
        return None
    texts = []
    for option in options:
        if isinstance(option, bool):
            return None
        if isinstance(option, (int, float)):
            option = str(option)
        if not isinstance(option, str):
            return None
        texts.append(_LETTER_PREFIX.sub("", option).strip())
    return texts


def _resolve_correct(value, options: list[str]) -> int | None:
    """Accept an index, an option letter, or the option text itself."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    value = value.strip()
    if value.isdigit():
        return int(value)
    if re.fullmatch(r"[A-Da-d]", value):
        return ord(value.upper()) - ord("A")
    value = _LETTER_PREFIX.sub("", value).strip()
    if value in options:
        return options.index(value)
    return None


def _questions_from_lines(raw_text: str) -> list[QuizQuestion] | None:
    """Heuristic line-prefix parser: ``?`` lines open questions, ``A.``-``D.`` lines are options."""
    blocks: list[dict] = []
    current: dict | None = None

    for line in raw_text.splitlines():
        line = line.strip()
        if not line:
            continue
        option = _OPTION_LINE.match(line)
        answer = _ANSWER_LINE.match(line)
        if option and current is not None:
            current["options"].append(option.group(2).strip())
        elif answer and current is not None:
            current["correct"] = ord(answer.group(1).upper()) - ord("A")
        elif "?" in line and not option:
            current = {"question": line, "options": [], "correct": 0}
            blocks.append(current)

    questions = []
    for block in blocks:
        if not block["options"]:
            # Prose such as "Ready to test your knowledge?"
            continue
        try:
            questions.append(QuizQuestion(**block))
        except ValidationError:
            # Too few or too many options, or an answer letter past the last option
            return None
    return questions

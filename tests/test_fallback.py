"""Tests for canned content selection."""

import pytest

from micro_tutor.content import canned
from micro_tutor.content.fallback import (
    MessageCategory,
    canned_chat_reply,
    canned_lesson,
    canned_quiz,
    classify_message,
    lookup_leveled,
)
from micro_tutor.errors import UnknownTopic

LEVELS = ["beginner", "intermediate", "advanced"]


class TestCannedLesson:
    @pytest.mark.parametrize("topic", list(canned.LESSONS))
    @pytest.mark.parametrize("level", LEVELS)
    def test_known_pairs_return_exact_entry(self, topic, level):
        assert canned_lesson(topic, level) == canned.LESSONS[topic][level]

    def test_unknown_level_uses_beginner(self):
        assert canned_lesson("Math Basics", "expert") == canned.LESSONS["Math Basics"]["beginner"]

    def test_unknown_topic_names_topic(self):
        lesson = canned_lesson("Astronomy", "advanced")
        assert lesson == "Here's your personalized lesson on Astronomy."

    def test_lookup_leveled_raises_for_unknown_topic(self):
        with pytest.raises(UnknownTopic) as exc:
            lookup_leveled(canned.LESSONS, "Astronomy", "beginner")
        assert exc.value.topic == "Astronomy"

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            canned.LESSONS["Astronomy"] = {}
        with pytest.raises(TypeError):
            canned.LESSONS["Math Basics"]["beginner"] = "changed"


class TestCannedQuiz:
    def test_known_topic(self):
        questions = canned_quiz("Basic Coding")
        assert [q.question for q in questions] == [
            "What does a variable store?",
            "Which symbol assigns a value to a variable?",
        ]

    def test_unknown_topic_generic_question(self):
        questions = canned_quiz("Astronomy")
        assert len(questions) == 1
        q = questions[0]
        assert q.question == "What's the most important concept in Astronomy?"
        assert q.options == ("Practice", "Understanding", "Application", "All of the above")
        assert q.correct == 3

    def test_returned_list_is_a_copy(self):
        questions = canned_quiz("Math Basics")
        questions.clear()
        assert len(canned_quiz("Math Basics")) == 2


class TestClassifyMessage:
    @pytest.mark.parametrize(
        "message, expected",
        [
            ("What is a variable?", MessageCategory.QUESTION),
            ("HOW do loops work", MessageCategory.QUESTION),
            ("I'm stuck on this", MessageCategory.STRUGGLE),
            ("This is difficult", MessageCategory.STRUGGLE),
            ("Give me an example", MessageCategory.EXAMPLE),
            ("Thanks!", MessageCategory.OTHER),
        ],
    )
    def test_categories(self, message, expected):
        assert classify_message(message) == expected

    def test_question_words_win_over_struggle(self):
        assert classify_message("why is this so difficult") == MessageCategory.QUESTION

    def test_substring_match(self):
        # "somehow" contains "how"
        assert classify_message("somehow it works") == MessageCategory.QUESTION

    def test_show_contains_how(self):
        assert classify_message("show me") == MessageCategory.QUESTION


class TestCannedChatReply:
    def test_question_for_known_topic_and_level(self):
        reply = canned_chat_reply("What is a variable?", "Basic Coding", "beginner")
        assert reply == canned.QUESTION_REPLIES["Basic Coding"]["beginner"]

    def test_question_unknown_level_uses_beginner(self):
        reply = canned_chat_reply("why?", "Math Basics", "guru")
        assert reply == canned.QUESTION_REPLIES["Math Basics"]["beginner"]

    def test_question_unknown_topic_generic(self):
        reply = canned_chat_reply("what now", "Chemistry", "beginner")
        assert "Chemistry" in reply
        assert reply.startswith("That's a thoughtful question")

    def test_struggle_names_topic(self):
        reply = canned_chat_reply("help me", "English Grammar", "advanced")
        assert reply.startswith("I understand English Grammar can be challenging!")

    def test_example_names_topic(self):
        reply = canned_chat_reply("an example please", "Chemistry", "beginner")
        assert reply.startswith("Examples are a great way to learn Chemistry!")

    def test_default_names_topic(self):
        reply = canned_chat_reply("ok thanks", "Chemistry", "beginner")
        assert reply.startswith("Thanks for your question about Chemistry!")

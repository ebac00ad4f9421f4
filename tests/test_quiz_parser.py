"""Tests for quiz text parsing."""

import json

import pytest

from micro_tutor.content.quiz_parser import parse_quiz


class TestJsonQuiz:
    def test_plain_json_array(self):
        text = json.dumps([
            {"question": "2 + 2?", "options": ["3", "4"], "correct": 1},
            {"question": "Capital of France?", "options": ["Paris", "Rome", "Oslo"], "correct": 0},
        ])
        questions = parse_quiz(text)
        assert questions is not None
        assert len(questions) == 2
        assert questions[0].options == ("3", "4")
        assert questions[1].correct == 0

    def test_questions_object(self):
        text = json.dumps({"questions": [{"question": "Q?", "options": ["a", "b"], "correct": 1}]})
        questions = parse_quiz(text)
        assert questions is not None and questions[0].correct == 1

    def test_fenced_json_with_preamble(self):
        text = (
            "Here is your quiz:\n```json\n"
            '[{"question": "Q?", "options": ["A) yes", "B) no"], "correct": "B"}]\n```'
        )
        questions = parse_quiz(text)
        assert questions is not None
        assert questions[0].options == ("yes", "no")
        assert questions[0].correct == 1

    def test_correct_given_as_option_text(self):
        text = json.dumps([{"question": "Q?", "options": ["red", "blue"], "answer": "blue"}])
        questions = parse_quiz(text)
        assert questions is not None and questions[0].correct == 1

    def test_single_option_question_rejects_whole_quiz(self):
        text = json.dumps([
            {"question": "Good?", "options": ["a", "b"], "correct": 0},
            {"question": "Bad?", "options": ["only"], "correct": 0},
        ])
        assert parse_quiz(text) is None

    def test_correct_out_of_range(self):
        text = json.dumps([{"question": "Q?", "options": ["a", "b"], "correct": 5}])
        assert parse_quiz(text) is None

    def test_too_many_options(self):
        text = json.dumps([{"question": "Q?", "options": list("abcde"), "correct": 0}])
        assert parse_quiz(text) is None

    def test_empty_array(self):
        assert parse_quiz("[]") is None

    @pytest.mark.parametrize("question", [None, 42, "", "   ", ["Q?"]])
    def test_question_must_be_text(self, question):
        text = json.dumps([{"question": question, "options": ["a", "b"], "correct": 0}])
        assert parse_quiz(text) is None

    def test_numeric_options_become_text(self):
        text = json.dumps([{"question": "3 * 3?", "options": [6, 9, 12.5], "correct": 1}])
        questions = parse_quiz(text)
        assert questions is not None
        assert questions[0].options == ("6", "9", "12.5")
        assert questions[0].correct == 1

    def test_boolean_options_rejected(self):
        text = json.dumps([{"question": "True?", "options": [True, False], "correct": 0}])
        assert parse_quiz(text) is None


class TestLineQuiz:
    def test_letter_options(self):
        text = """
        1. What is a noun?
        A. A person, place or thing
        B. An action
        C. A describing word
        Answer: A

        2. Which is a verb?
        A. run
        B. table
        Answer: A
        """
        questions = parse_quiz(text)
        assert questions is not None
        assert len(questions) == 2
        assert questions[0].question == "1. What is a noun?"
        assert questions[0].options == ("A person, place or thing", "An action", "A describing word")
        assert questions[1].options == ("run", "table")

    def test_correct_defaults_to_first_option(self):
        text = "Which is bigger?\nA. 10\nB. 2"
        questions = parse_quiz(text)
        assert questions is not None and questions[0].correct == 0

    def test_answer_line_sets_correct(self):
        text = "Which is bigger?\nA. 2\nB. 10\nAnswer: B"
        questions = parse_quiz(text)
        assert questions is not None and questions[0].correct == 1

    def test_question_with_one_option_is_unparseable(self):
        text = "First?\nA. one\nB. two\nSecond?\nA. lonely"
        assert parse_quiz(text) is None

    def test_answer_letter_past_options_is_unparseable(self):
        text = "Which?\nA. x\nB. y\nAnswer: D"
        assert parse_quiz(text) is None

    def test_intro_line_without_options_is_skipped(self):
        text = "Ready to test your knowledge?\n1. What is 2 + 2?\nA. 3\nB. 4\nAnswer: B"
        questions = parse_quiz(text)
        assert questions is not None
        assert len(questions) == 1
        assert questions[0].question == "1. What is 2 + 2?"
        assert questions[0].options == ("3", "4")
        assert questions[0].correct == 1

    def test_only_prose_questions_is_unparseable(self):
        assert parse_quiz("Ready?\nShall we begin?") is None


@pytest.mark.parametrize("text", [None, "", "   ", "Just some prose without questions."])
def test_unparseable_inputs(text):
    assert parse_quiz(text) is None

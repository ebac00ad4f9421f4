"""Static fallback content keyed by topic and proficiency level.

All tables are read-only mappings built once at import time.
"""

from types import MappingProxyType

from micro_tutor.models.content import QuizQuestion


def _freeze(table: dict) -> MappingProxyType:
    return MappingProxyType({
        key: _freeze(value) if isinstance(value, dict) else value
        for key, value in table.items()
    })


LESSONS = _freeze({
    "English Grammar": {
        "beginner": (
            "Welcome to English Grammar! Let's start with the basics. A sentence needs a "
            "subject (who or what) and a predicate (what they do). For example: 'The cat "
            "runs.' Here, 'cat' is the subject and 'runs' is the predicate. Practice "
            "identifying subjects and verbs in different sentences."
        ),
        "intermediate": (
            "Let's explore complex sentence structures. Compound sentences join two "
            "independent clauses with conjunctions like 'and', 'but', or 'or'. Complex "
            "sentences have a main clause and subordinate clauses. Understanding these "
            "patterns will improve your writing flow."
        ),
        "advanced": (
            "Master advanced grammar with subjunctive mood, conditional perfect tenses, and "
            "parallel structure. The subjunctive expresses hypothetical situations: 'If I "
            "were rich...' Parallel structure maintains consistency: 'I like reading, "
            "writing, and studying.'"
        ),
    },
    "Basic Coding": {
        "beginner": (
            "Programming is like giving instructions to a computer. We use variables to "
            "store information (like boxes with labels) and functions to perform actions. "
            "Think of a function as a recipe - it takes ingredients (inputs) and produces "
            "a dish (output)."
        ),
        "intermediate": (
            "Let's explore loops and conditionals. Loops repeat actions (like 'for each "
            "student, print their name'), while conditionals make decisions ('if "
            "temperature > 30, wear shorts'). These are the building blocks of complex "
            "programs."
        ),
        "advanced": (
            "Dive into algorithms and data structures. Arrays store ordered lists, objects "
            "store key-value pairs. Algorithm efficiency matters - some solutions are "
            "faster than others. Think about how to solve problems step by step."
        ),
    },
    "Math Basics": {
        "beginner": (
            "Mathematics is about patterns and problem-solving. Start with order of "
            "operations (PEMDAS): Parentheses, Exponents, Multiplication/Division, "
            "Addition/Subtraction. Always work from left to right within each operation "
            "level."
        ),
        "intermediate": (
            "Algebra introduces variables - letters that represent unknown numbers. "
            "Solving equations means finding what value makes the equation true. Think of "
            "it as a balance scale - what you do to one side, do to the other."
        ),
        "advanced": (
            "Functions show relationships between inputs and outputs. f(x) = 2x + 1 means "
            "'take a number, multiply by 2, add 1.' Functions help us model real-world "
            "situations and predict outcomes."
        ),
    },
})

QUIZZES = MappingProxyType({
    "English Grammar": (
        QuizQuestion(
            question="Which sentence is grammatically correct?",
            options=(
                "Me and John went to store",
                "John and I went to the store",
                "John and me went to store",
                "Me and John went to the store",
            ),
            correct=1,
        ),
        QuizQuestion(
            question="Choose the correct verb form:",
            options=(
                "She don't like pizza",
                "She doesn't likes pizza",
                "She doesn't like pizza",
                "She not like pizza",
            ),
            correct=2,
        ),
    ),
    "Basic Coding": (
        QuizQuestion(
            question="What does a variable store?",
            options=("Functions only", "Data/information", "Code comments", "Error messages"),
            correct=1,
        ),
        QuizQuestion(
            question="Which symbol assigns a value to a variable?",
            options=("==", "=", "!=", ">="),
            correct=1,
        ),
    ),
    "Math Basics": (
        QuizQuestion(
            question="What is 5 + 3 × 2?",
            options=("16", "11", "13", "10"),
            correct=1,
        ),
        QuizQuestion(
            question="Solve: 2x + 4 = 10",
            options=("x = 2", "x = 3", "x = 4", "x = 6"),
            correct=1,
        ),
    ),
})

QUESTION_REPLIES = _freeze({
    "English Grammar": {
        "beginner": (
            "Great question! Grammar is about understanding how words work together. "
            "Start with identifying subjects (who/what) and verbs (actions) in sentences."
        ),
        "intermediate": (
            "Good thinking! Focus on sentence types: simple (one idea), compound (two ideas "
            "joined), and complex (main idea + supporting details)."
        ),
        "advanced": (
            "Excellent inquiry! Consider the nuances of syntax, semantics, and pragmatics "
            "in your analysis."
        ),
    },
    "Basic Coding": {
        "beginner": (
            "Coding questions are the best kind! Remember: computers follow exact "
            "instructions. Break your problem into small, clear steps."
        ),
        "intermediate": (
            "That's a solid programming question! Think about algorithms (step-by-step "
            "solutions) and data structures (how to organize information)."
        ),
        "advanced": (
            "Great technical question! Consider efficiency, readability, and "
            "maintainability in your solutions."
        ),
    },
    "Math Basics": {
        "beginner": (
            "Math questions show you're thinking! Remember to work step by step and check "
            "your answers by substituting back into the original problem."
        ),
        "intermediate": (
            "Good mathematical thinking! Look for patterns and relationships between "
            "numbers. Practice with similar problems to build confidence."
        ),
        "advanced": (
            "Excellent mathematical inquiry! Consider multiple approaches and think about "
            "why methods work, not just how to apply them."
        ),
    },
})

# Generic templates, formatted with the topic name
GENERIC_LESSON = "Here's your personalized lesson on {topic}."
GENERIC_QUESTION_REPLY = (
    "That's a thoughtful question about {topic}! Keep exploring and practicing - every "
    "question brings you closer to understanding."
)
STRUGGLE_REPLY = (
    "I understand {topic} can be challenging! Break it down into smaller parts, practice "
    "regularly, and don't hesitate to review the lesson material. You're doing great by "
    "asking questions!"
)
EXAMPLE_REPLY = (
    "Examples are a great way to learn {topic}! Try working through the lesson content "
    "step by step, and practice with different scenarios to build your understanding."
)
DEFAULT_REPLY = (
    "Thanks for your question about {topic}! I encourage you to explore the lesson "
    "material and keep practicing. Learning is a journey, and every question you ask "
    "shows you're actively engaged!"
)

GENERIC_QUIZ_QUESTION = "What's the most important concept in {topic}?"
GENERIC_QUIZ_OPTIONS = ("Practice", "Understanding", "Application", "All of the above")
GENERIC_QUIZ_CORRECT = 3

# Keyword categories for classifying chat messages, checked in this order
QUESTION_WORDS = ("what", "how", "why")
STRUGGLE_WORDS = ("help", "stuck", "difficult")
EXAMPLE_WORDS = ("example", "show")

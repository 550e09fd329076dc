"""
Comprehension check questions and answer grading.

The questions and their answers are fixed; they are not derived from
the lesson record. Grading is feedback only and never blocks completion.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class QuizQuestion:
    """A multiple-choice question with one designated correct option."""
    key: str
    prompt: str
    options: tuple[str, ...]
    answer: str


QUIZ_QUESTIONS: tuple[QuizQuestion, ...] = (
    QuizQuestion(
        key="bSound",
        prompt='Which word has a "b" sound?',
        options=("bat", "dog", "pen", "top"),
        answer="bat",
    ),
    QuizQuestion(
        key="dotCharacter",
        prompt="What is Dot?",
        options=("A cat", "A dog", "A boy", "A ball"),
        answer="A dog",
    ),
)

CORRECT_ANSWERS: dict[str, str] = {q.key: q.answer for q in QUIZ_QUESTIONS}


class Feedback(str, Enum):
    """Styling feedback for one option button."""
    CORRECT = "correct"         # green
    INCORRECT = "incorrect"     # red
    NEUTRAL = "neutral"


def is_correct(question_key: str, selected_option: Optional[str]) -> bool:
    """True if the option is the designated answer for the question."""
    expected = CORRECT_ANSWERS.get(question_key)
    return expected is not None and selected_option == expected


def option_feedback(question_key: str, option: str, selected: Optional[str]) -> Feedback:
    """Feedback for `option` given the currently selected answer."""
    if selected is None or selected != option:
        return Feedback.NEUTRAL
    return Feedback.CORRECT if is_correct(question_key, option) else Feedback.INCORRECT


def calculate_quiz_score(questions: tuple[QuizQuestion, ...], answers: dict[str, str]) -> dict:
    """
    Score the current answers.

    Returns:
        Dict with score info (unanswered questions count as wrong)
    """
    total = len(questions)
    correct = sum(1 for q in questions if is_correct(q.key, answers.get(q.key)))
    if total == 0:
        return {"score": 1.0, "percent": 100, "correct": 0, "total": 0}

    score = correct / total
    return {
        "score": round(score, 2),
        "percent": round(score * 100),
        "correct": correct,
        "total": total,
    }

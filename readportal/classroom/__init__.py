"""
ReadPortal Classroom - Runtime components for sessions, routing and lessons.

This module provides:
- SessionContext: Current identity
- LessonCatalog: Read-only lesson catalog
- RouteGuard: Role-gated access to route subtrees
- Navigator: Route resolution and history
- ProgressAggregator: Dashboard progress slices
- LessonView: Lesson detail and completion state machine
- LessonEditor: Lesson create/edit/delete workflow
"""

from .session import SessionContext

from .catalog import LessonCatalog

from .guard import (
    PUBLIC_ENTRY_PATH,
    LANDING_PATHS,
    Capabilities,
    GuardDecision,
    GuardOutcome,
    RouteGuard,
    landing_path_for,
    lessons_path_for,
    resolve_capabilities,
)

from .navigator import (
    Navigator,
    Page,
    RouteMatch,
    SUBTREES,
    lesson_path,
    normalize_path,
)

from .progress import ProgressAggregator

from .quiz import (
    QUIZ_QUESTIONS,
    CORRECT_ANSWERS,
    Feedback,
    QuizQuestion,
    calculate_quiz_score,
    is_correct,
    option_feedback,
)

from .scope import ViewScope
from .remote import SimulatedBackend

from .lesson_view import (
    LessonView,
    ViewState,
    AnswerProgress,
)

from .lesson_edit import (
    LessonEditor,
    EditMode,
)

__all__ = [
    # Session / catalog
    "SessionContext",
    "LessonCatalog",
    # Guard
    "PUBLIC_ENTRY_PATH",
    "LANDING_PATHS",
    "Capabilities",
    "GuardDecision",
    "GuardOutcome",
    "RouteGuard",
    "landing_path_for",
    "lessons_path_for",
    "resolve_capabilities",
    # Navigator
    "Navigator",
    "Page",
    "RouteMatch",
    "SUBTREES",
    "lesson_path",
    "normalize_path",
    # Progress
    "ProgressAggregator",
    # Quiz
    "QUIZ_QUESTIONS",
    "CORRECT_ANSWERS",
    "Feedback",
    "QuizQuestion",
    "calculate_quiz_score",
    "is_correct",
    "option_feedback",
    # Deferred work
    "ViewScope",
    "SimulatedBackend",
    # Views
    "LessonView",
    "ViewState",
    "AnswerProgress",
    "LessonEditor",
    "EditMode",
]

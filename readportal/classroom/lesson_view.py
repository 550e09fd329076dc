"""
LessonView - Per-lesson detail view and its completion state machine.

States:
    LOADING -> FOUND | NOT_FOUND | FAILED
    FAILED  -> LOADING (retry)
    FOUND   -> COMPLETED (terminal for this view instance)

While FOUND, the answer map moves between UNANSWERED, PARTIALLY_ANSWERED
and FULLY_ANSWERED. Completion does not depend on answer correctness.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from readportal.errors import LessonNotFoundError, RemoteCallError
from readportal.schemas import Lesson

from .catalog import LessonCatalog
from .guard import Capabilities
from .navigator import Navigator, lesson_path
from .quiz import QUIZ_QUESTIONS, Feedback, QuizQuestion, calculate_quiz_score, option_feedback
from .remote import SimulatedBackend
from .scope import ViewScope

logger = logging.getLogger(__name__)


DEFAULT_LOAD_DELAY = 0.5


class ViewState(str, Enum):
    LOADING = "loading"
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"           # simulated fetch failed; retry offered
    COMPLETED = "completed"


class AnswerProgress(str, Enum):
    UNANSWERED = "unanswered"
    PARTIALLY_ANSWERED = "partially_answered"
    FULLY_ANSWERED = "fully_answered"


class LessonView:
    """
    State for one mounted lesson detail view.

    Constructed when the view is entered and closed when it is left; the
    answer map and completion flag die with it. Actions are applied in
    the order they are called.
    """

    def __init__(
        self,
        lesson_id: str,
        catalog: LessonCatalog,
        capabilities: Capabilities,
        backend: Optional[SimulatedBackend] = None,
        scope: Optional[ViewScope] = None,
        load_delay: float = DEFAULT_LOAD_DELAY,
        questions: tuple[QuizQuestion, ...] = QUIZ_QUESTIONS,
    ):
        """
        Initialize view.

        Args:
            lesson_id: Lesson to show
            catalog: Catalog to look the lesson up in (read-only)
            capabilities: Viewer capabilities from the guard
            backend: Simulated remote used for the fetch delay
            scope: Lifetime scope; a fresh one is created if omitted
            load_delay: Simulated fetch latency in seconds (0 resolves at once)
            questions: Comprehension check questions
        """
        self.lesson_id = lesson_id
        self.catalog = catalog
        self.capabilities = capabilities
        self.backend = backend or SimulatedBackend(latency=load_delay)
        self.scope = scope or ViewScope(f"lesson:{lesson_id}")
        self.load_delay = load_delay
        self.questions = questions

        self.state = ViewState.LOADING
        self.lesson: Optional[Lesson] = None
        self.error: Optional[str] = None
        self._answers: dict[str, str] = {}

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def start(self) -> asyncio.Task:
        """Begin loading in the background, tied to the view scope."""
        return self.scope.spawn(self.load())

    async def load(self) -> ViewState:
        """
        Fetch the lesson after the simulated latency.

        If the view is closed before the fetch resolves, the result is
        discarded and the state is left untouched.
        """
        if self.state not in (ViewState.LOADING, ViewState.FAILED):
            return self.state

        self.state = ViewState.LOADING
        self.error = None
        try:
            await self.backend.call("fetch_lesson", self.lesson_id, delay=self.load_delay)
        except RemoteCallError as e:
            if self.scope.closed:
                return self.state
            self.state = ViewState.FAILED
            self.error = str(e)
            return self.state

        if self.scope.closed:
            logger.debug(f"Discarding load result for closed view {self.lesson_id}")
            return self.state

        try:
            self.lesson = self.catalog.get(self.lesson_id)
        except LessonNotFoundError as e:
            self.state = ViewState.NOT_FOUND
            self.error = str(e)
            logger.info(str(e))
            return self.state

        self.state = ViewState.FOUND
        return self.state

    # -------------------------------------------------------------------------
    # Answers
    # -------------------------------------------------------------------------

    @property
    def answers(self) -> dict[str, str]:
        return dict(self._answers)

    def answer_for(self, question_key: str) -> Optional[str]:
        return self._answers.get(question_key)

    def select_answer(self, question_key: str, option: str) -> bool:
        """
        Record `option` as the answer to `question_key`, replacing any
        previous answer. Ignored (returns False) unless the lesson is
        showing and not yet completed.
        """
        if self.state != ViewState.FOUND:
            logger.debug(f"Ignoring answer for {question_key} in state {self.state.value}")
            return False
        self._answers[question_key] = option
        return True

    def feedback(self, question_key: str, option: str) -> Feedback:
        """Styling feedback for one option button."""
        return option_feedback(question_key, option, self._answers.get(question_key))

    @property
    def answer_progress(self) -> AnswerProgress:
        answered = sum(1 for q in self.questions if q.key in self._answers)
        if answered == 0:
            return AnswerProgress.UNANSWERED
        if answered < len(self.questions):
            return AnswerProgress.PARTIALLY_ANSWERED
        return AnswerProgress.FULLY_ANSWERED

    def score(self) -> dict:
        return calculate_quiz_score(self.questions, self._answers)

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------

    @property
    def completed(self) -> bool:
        return self.state == ViewState.COMPLETED

    def mark_complete(self) -> bool:
        """
        Complete the lesson regardless of answer correctness.

        Returns True on the transition, False if already completed or
        the lesson is not showing.
        """
        if self.state != ViewState.FOUND:
            return False
        self.state = ViewState.COMPLETED
        logger.info(f"Lesson {self.lesson_id} completed (score {self.score()['percent']}%)")
        return True

    @property
    def completion_message(self) -> Optional[str]:
        if not self.completed or self.lesson is None:
            return None
        return f'Great job! You\'ve completed "{self.lesson.title}".'

    @property
    def continue_path(self) -> str:
        """Where "Continue Learning" and "Back to lessons" lead."""
        return self.capabilities.landing_path

    def confirm_continue(self, navigator: Navigator) -> Optional[str]:
        """Navigate to the landing path; only valid once completed."""
        if not self.completed:
            return None
        self.close()
        return navigator.navigate(self.continue_path)

    def go_back(self, navigator: Navigator) -> str:
        """Recovery action: one step back in history."""
        self.close()
        return navigator.navigate_back()

    # -------------------------------------------------------------------------
    # Role affordances
    # -------------------------------------------------------------------------

    @property
    def show_edit_link(self) -> bool:
        return self.capabilities.can_edit_lessons and self.lesson is not None

    @property
    def show_quiz(self) -> bool:
        return self.capabilities.can_take_quiz and self.lesson is not None

    @property
    def edit_path(self) -> Optional[str]:
        if not self.show_edit_link:
            return None
        return lesson_path(self.capabilities.role, self.lesson_id, "edit")

    # -------------------------------------------------------------------------
    # Lifetime
    # -------------------------------------------------------------------------

    def close(self):
        """Leave the view: pending loads are cancelled and discarded."""
        self.scope.close()

"""Tests for the lesson detail view state machine."""

import asyncio

import pytest

from readportal.classroom import (
    AnswerProgress,
    Feedback,
    LessonView,
    SimulatedBackend,
    ViewScope,
    ViewState,
    is_correct,
    resolve_capabilities,
)
from readportal.schemas import Identity


def capabilities(role="student", username="pat"):
    return resolve_capabilities(Identity(username=username, role=role))


def loaded_view(catalog, lesson_id="1", role="student"):
    view = LessonView(lesson_id, catalog, capabilities(role), load_delay=0)
    asyncio.run(view.load())
    return view


class TestLoading:

    def test_starts_loading(self, catalog):
        view = LessonView("1", catalog, capabilities(), load_delay=0)
        assert view.state == ViewState.LOADING
        assert view.lesson is None

    def test_found(self, catalog):
        view = loaded_view(catalog)
        assert view.state == ViewState.FOUND
        assert view.lesson.id == "1"

    def test_not_found(self, catalog):
        view = loaded_view(catalog, lesson_id="missing")
        assert view.state == ViewState.NOT_FOUND
        assert view.lesson is None
        assert "missing" in view.error

    def test_not_found_go_back(self, catalog, session, navigator):
        session.login("pat", "student")
        navigator.navigate("/student/lessons")
        navigator.navigate("/student/lessons/missing")
        view = loaded_view(catalog, lesson_id="missing")

        assert view.go_back(navigator) == "/student/lessons"
        assert view.scope.closed

    def test_remote_failure_then_retry(self, catalog):
        backend = SimulatedBackend(latency=0)
        backend.fail_next()
        view = LessonView("1", catalog, capabilities(), backend=backend, load_delay=0)

        assert asyncio.run(view.load()) == ViewState.FAILED
        assert view.error

        assert asyncio.run(view.load()) == ViewState.FOUND
        assert view.error is None

    def test_load_after_found_is_noop(self, catalog):
        view = loaded_view(catalog)
        backend_calls = len(view.backend.calls)
        asyncio.run(view.load())
        assert view.state == ViewState.FOUND
        assert len(view.backend.calls) == backend_calls

    def test_close_before_load_discards_result(self, catalog):
        async def scenario():
            view = LessonView("1", catalog, capabilities(), load_delay=0.05)
            task = view.start()
            await asyncio.sleep(0)
            view.close()
            with pytest.raises(asyncio.CancelledError):
                await task
            return view

        view = asyncio.run(scenario())
        assert view.state == ViewState.LOADING
        assert view.lesson is None

    def test_closed_scope_discards_late_result(self, catalog):
        async def scenario():
            scope = ViewScope()
            view = LessonView("1", catalog, capabilities(), scope=scope, load_delay=0.01)
            load = asyncio.ensure_future(view.load())     # not owned by the scope
            await asyncio.sleep(0)
            scope.close()
            await load
            return view

        view = asyncio.run(scenario())
        assert view.state == ViewState.LOADING
        assert view.lesson is None


class TestAnswers:

    def test_select_and_overwrite(self, catalog):
        view = loaded_view(catalog)
        view.select_answer("bSound", "dog")
        view.select_answer("bSound", "bat")
        assert view.answers == {"bSound": "bat"}
        assert view.answer_for("bSound") == "bat"

    def test_reselect_unlimited(self, catalog):
        view = loaded_view(catalog)
        for option in ["bat", "dog", "pen", "top"] * 5:
            assert view.select_answer("bSound", option)
        assert view.answers == {"bSound": "top"}

    def test_answers_returns_copy(self, catalog):
        view = loaded_view(catalog)
        view.select_answer("bSound", "bat")
        view.answers["bSound"] = "dog"
        assert view.answer_for("bSound") == "bat"

    def test_selection_ignored_while_loading(self, catalog):
        view = LessonView("1", catalog, capabilities(), load_delay=0)
        assert not view.select_answer("bSound", "bat")
        assert view.answers == {}

    def test_answer_progress(self, catalog):
        view = loaded_view(catalog)
        assert view.answer_progress == AnswerProgress.UNANSWERED
        view.select_answer("bSound", "dog")
        assert view.answer_progress == AnswerProgress.PARTIALLY_ANSWERED
        view.select_answer("dotCharacter", "A cat")
        assert view.answer_progress == AnswerProgress.FULLY_ANSWERED

    def test_answers_scoped_to_view_instance(self, catalog):
        first = loaded_view(catalog)
        first.select_answer("bSound", "bat")
        second = loaded_view(catalog)
        assert second.answers == {}


class TestFeedback:

    def test_is_correct(self):
        assert is_correct("bSound", "bat")
        assert not is_correct("bSound", "dog")
        assert is_correct("dotCharacter", "A dog")
        assert not is_correct("unknown", "bat")
        assert not is_correct("bSound", None)

    def test_b_sound_feedback(self, catalog):
        view = loaded_view(catalog)
        assert view.feedback("bSound", "bat") == Feedback.NEUTRAL
        assert view.feedback("bSound", "dog") == Feedback.NEUTRAL

        view.select_answer("bSound", "bat")
        assert view.feedback("bSound", "bat") == Feedback.CORRECT
        assert view.feedback("bSound", "dog") == Feedback.NEUTRAL

        view.select_answer("bSound", "dog")
        assert view.feedback("bSound", "dog") == Feedback.INCORRECT
        assert view.feedback("bSound", "bat") == Feedback.NEUTRAL

    def test_score(self, catalog):
        view = loaded_view(catalog)
        view.select_answer("bSound", "bat")
        view.select_answer("dotCharacter", "A cat")
        assert view.score() == {"score": 0.5, "percent": 50, "correct": 1, "total": 2}


class TestCompletion:

    def test_complete_without_answers(self, catalog):
        view = loaded_view(catalog)
        assert view.mark_complete()
        assert view.completed
        assert view.state == ViewState.COMPLETED

    def test_complete_with_wrong_answers(self, catalog):
        view = loaded_view(catalog)
        view.select_answer("bSound", "dog")
        assert view.mark_complete()
        assert view.completed

    def test_idempotent(self, catalog):
        once = loaded_view(catalog)
        once.mark_complete()

        twice = loaded_view(catalog)
        twice.mark_complete()
        assert not twice.mark_complete()

        assert once.state == twice.state == ViewState.COMPLETED
        assert once.completion_message == twice.completion_message

    def test_cannot_complete_missing_lesson(self, catalog):
        view = loaded_view(catalog, lesson_id="missing")
        assert not view.mark_complete()
        assert view.state == ViewState.NOT_FOUND

    def test_answers_frozen_after_completion(self, catalog):
        view = loaded_view(catalog)
        view.select_answer("bSound", "bat")
        view.mark_complete()
        assert not view.select_answer("bSound", "dog")
        assert view.answer_for("bSound") == "bat"

    def test_completion_message(self, catalog):
        view = loaded_view(catalog)
        assert view.completion_message is None
        view.mark_complete()
        assert view.completion_message == 'Great job! You\'ve completed "Lesson 1".'

    def test_no_navigation_until_confirmed(self, catalog, session, navigator):
        session.login("pat", "student")
        navigator.navigate("/student/lessons/1")
        view = loaded_view(catalog)

        assert view.confirm_continue(navigator) is None
        view.mark_complete()
        assert navigator.current_path == "/student/lessons/1"

        assert view.confirm_continue(navigator) == "/student/lessons"
        assert navigator.current_path == "/student/lessons"

    @pytest.mark.parametrize("role, path", [
        ("student", "/student/lessons"),
        ("teacher", "/teacher/lessons"),
        ("guardian", "/guardian"),
        ("wizard", "/login"),
    ])
    def test_continue_path_by_role(self, catalog, role, path):
        assert loaded_view(catalog, role=role).continue_path == path


class TestRoleAffordances:

    def test_teacher_sees_edit_link(self, catalog):
        view = loaded_view(catalog, role="teacher")
        assert view.show_edit_link
        assert not view.show_quiz
        assert view.edit_path == "/teacher/lessons/1/edit"

    def test_student_sees_quiz(self, catalog):
        view = loaded_view(catalog, role="student")
        assert view.show_quiz
        assert not view.show_edit_link
        assert view.edit_path is None

    def test_guardian_sees_neither(self, catalog):
        view = loaded_view(catalog, role="guardian")
        assert not view.show_quiz
        assert not view.show_edit_link

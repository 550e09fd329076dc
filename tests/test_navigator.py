"""Tests for route resolution and history."""

import pytest

from readportal.classroom import PUBLIC_ENTRY_PATH, Navigator, Page, SessionContext, lesson_path, normalize_path
from readportal.errors import AccessDenied
from readportal.schemas import Role


class TestPaths:

    def test_normalize(self):
        assert normalize_path("") == "/"
        assert normalize_path("/student/") == "/student"
        assert normalize_path("teacher//lessons?x=1#top") == "/teacher/lessons"

    def test_lesson_path(self):
        assert lesson_path(Role.STUDENT, "7") == "/student/lessons/7"
        assert lesson_path(Role.TEACHER, "7", "edit") == "/teacher/lessons/7/edit"


class TestMatching:

    def test_public_routes(self, navigator):
        assert navigator.match("/").page == Page.HOME
        assert navigator.match("/login").page == Page.LOGIN
        assert navigator.match("/register").page == Page.REGISTER
        assert navigator.match("/nowhere").page == Page.NOT_FOUND

    def test_student_routes(self, session, navigator):
        session.login("pat", Role.STUDENT)
        assert navigator.match("/student").page == Page.DASHBOARD
        assert navigator.match("/student/lessons").page == Page.LESSON_LIST
        match = navigator.match("/student/lessons/3")
        assert match.page == Page.LESSON_DETAIL
        assert match.lesson_id == "3"
        assert match.capabilities.can_take_quiz

    def test_teacher_routes(self, session, navigator):
        session.login("ms", Role.TEACHER)
        assert navigator.match("/teacher/lessons/create").page == Page.LESSON_CREATE
        assert navigator.match("/teacher/lessons/3").page == Page.LESSON_DETAIL
        edit = navigator.match("/teacher/lessons/3/edit")
        assert edit.page == Page.LESSON_EDIT
        assert edit.lesson_id == "3"

    def test_guardian_routes(self, session, navigator):
        session.login("mum", Role.GUARDIAN)
        assert navigator.match("/guardian").page == Page.DASHBOARD
        assert navigator.match("/guardian/progress").page == Page.LESSON_LIST

    def test_unknown_path_inside_allowed_subtree(self, session, navigator):
        session.login("pat", Role.STUDENT)
        match = navigator.match("/student/lessons/create")
        assert match.page == Page.LESSON_DETAIL     # students have no create route
        assert navigator.match("/student/settings").page == Page.NOT_FOUND

    def test_guarded_match_raises(self, navigator):
        with pytest.raises(AccessDenied):
            navigator.match("/teacher")


class TestResolve:

    def test_unauthenticated_teacher_request_redirects_to_public_entry(self):
        navigator = Navigator(SessionContext(), start_path="/teacher")
        match = navigator.resolve()
        assert match.page == Page.LOGIN
        assert navigator.current_path == PUBLIC_ENTRY_PATH
        assert "/teacher" not in navigator.history

    def test_wrong_role_redirects_to_own_landing(self, session, navigator):
        session.login("pat", Role.STUDENT)
        navigator.navigate("/teacher/lessons/1/edit")
        match = navigator.resolve()
        assert match.page == Page.LESSON_LIST
        assert navigator.current_path == "/student/lessons"

    def test_guardian_landing(self, session, navigator):
        session.login("mum", Role.GUARDIAN)
        navigator.navigate("/student/lessons/1")
        assert navigator.resolve().page == Page.DASHBOARD
        assert navigator.current_path == "/guardian"

    def test_unknown_role_lands_on_public_entry(self, session, navigator):
        session.login("x", "wizard")
        navigator.navigate("/student")
        assert navigator.resolve().page == Page.LOGIN

    def test_guard_rechecked_each_resolution(self, session, navigator):
        session.login("pat", Role.STUDENT)
        navigator.navigate("/student/lessons/1")
        assert navigator.resolve().page == Page.LESSON_DETAIL

        session.logout()
        assert navigator.resolve().page == Page.LOGIN


class TestHistory:

    def test_navigate_and_back(self, navigator):
        navigator.navigate("/login")
        navigator.navigate("/register")
        assert navigator.history == ("/", "/login", "/register")
        assert navigator.navigate_back() == "/login"
        assert navigator.navigate_back() == "/"

    def test_back_with_no_history_stays(self, navigator):
        assert navigator.navigate_back() == "/"

    def test_navigate_same_path_does_not_duplicate(self, navigator):
        navigator.navigate("/")
        assert navigator.history == ("/",)

    def test_redirect_replaces(self, navigator):
        navigator.navigate("/teacher")
        navigator.redirect_to("/login")
        assert navigator.history == ("/", "/login")

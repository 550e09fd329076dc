"""Shared fixtures for ReadPortal tests."""

from datetime import datetime

import pytest

from readportal.classroom import LessonCatalog, Navigator, SessionContext, SimulatedBackend
from readportal.schemas import Lesson


def make_lesson(lesson_id: str, **overrides) -> Lesson:
    data = {
        "id": lesson_id,
        "title": f"Lesson {lesson_id}",
        "description": f"Description for lesson {lesson_id}",
        "content": "Pat had a big dog.",
        "difficulty": "easy",
        "uploaded_by": "Ms. Rivera",
        "created_at": datetime(2024, 1, 5, 9, 0),
    }
    data.update(overrides)
    return Lesson(**data)


@pytest.fixture
def lessons():
    return [make_lesson(str(i)) for i in range(1, 6)]


@pytest.fixture
def catalog(lessons):
    return LessonCatalog(lessons)


@pytest.fixture
def session():
    return SessionContext()


@pytest.fixture
def navigator(session):
    return Navigator(session)


@pytest.fixture
def backend():
    return SimulatedBackend(latency=0)

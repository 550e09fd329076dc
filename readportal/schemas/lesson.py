"""
Lesson schemas for ReadPortal.

Defines Pydantic models for:
- Catalog lesson records (immutable for the session)
- Lesson form drafts used by the edit workflow
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Lesson(BaseModel):
    """
    A reading lesson from the catalog.

    Difficulty is normally one of Difficulty, but any string is accepted
    so that the display layer can fall back to a neutral badge.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    content: str = ""
    file_path: Optional[str] = None
    difficulty: str = Difficulty.EASY.value
    uploaded_by: str = ""
    created_at: datetime


class LessonDraft(BaseModel):
    """Editable form state for creating or editing a lesson."""
    title: str = ""
    description: str = ""
    content: str = ""
    difficulty: Difficulty = Difficulty.EASY
    file_name: Optional[str] = None     # attachment picked in the form, never uploaded

    @classmethod
    def from_lesson(cls, lesson: Lesson) -> "LessonDraft":
        try:
            difficulty = Difficulty(lesson.difficulty)
        except ValueError:
            difficulty = Difficulty.EASY
        return cls(
            title=lesson.title,
            description=lesson.description,
            content=lesson.content or "",
            difficulty=difficulty,
        )

"""
ReadPortal Schemas - Pydantic models for the reading portal.

This module exports all schema classes for:
- Session: roles and identities
- Lesson: catalog records and form drafts
- Progress: dashboard progress slices
"""

# Session schemas
from .session import (
    Role,
    Identity,
)

# Lesson schemas
from .lesson import (
    Difficulty,
    Lesson,
    LessonDraft,
)

# Progress schemas
from .progress import (
    ProgressSlices,
)

__all__ = [
    # Session
    'Role',
    'Identity',
    # Lesson
    'Difficulty',
    'Lesson',
    'LessonDraft',
    # Progress
    'ProgressSlices',
]

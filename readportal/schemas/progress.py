"""
Progress schemas for ReadPortal.

Progress slices are a display-only projection of the catalog; no
per-student completion records exist.
"""

from pydantic import BaseModel, Field

from .lesson import Lesson


class ProgressSlices(BaseModel):
    recent: list[Lesson] = []
    in_progress: list[Lesson] = []
    completed: list[Lesson] = []
    total_available: int = Field(default=0, ge=0)

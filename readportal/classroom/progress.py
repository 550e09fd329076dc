"""
ProgressAggregator - Dashboard progress slices derived from the catalog.

The slices are positional: they come from catalog order and size, not
from stored per-student records (no such records exist). "In progress"
overlaps "recent" on purpose.
"""

import logging
from typing import Optional

from readportal.schemas import Lesson, ProgressSlices

from .catalog import LessonCatalog

logger = logging.getLogger(__name__)


DEFAULT_RECENT_COUNT = 3
DEFAULT_IN_PROGRESS_RANGE = (1, 3)
DEFAULT_COMPLETED_RANGE = (3, 5)


def _clamped_slice(lessons: list[Lesson], start: int, end: int) -> list[Lesson]:
    """Slice [start, end) clamped to the available range."""
    size = len(lessons)
    start = min(max(start, 0), size)
    end = min(max(end, start), size)
    return lessons[start:end]


class ProgressAggregator:
    """
    Project the catalog into recent / in-progress / completed slices.

    Pure: never mutates the catalog, and tolerates catalogs smaller than
    the slice boundaries by returning shorter (possibly empty) slices.
    """

    def __init__(
        self,
        catalog: LessonCatalog,
        recent_count: int = DEFAULT_RECENT_COUNT,
        in_progress_range: tuple[int, int] = DEFAULT_IN_PROGRESS_RANGE,
        completed_range: tuple[int, int] = DEFAULT_COMPLETED_RANGE,
    ):
        self.catalog = catalog
        self.recent_count = recent_count
        self.in_progress_range = in_progress_range
        self.completed_range = completed_range

    def aggregate(self) -> ProgressSlices:
        """Compute the dashboard slices."""
        lessons = self.catalog.list_all()
        slices = ProgressSlices(
            recent=_clamped_slice(lessons, 0, self.recent_count),
            in_progress=_clamped_slice(lessons, *self.in_progress_range),
            completed=_clamped_slice(lessons, *self.completed_range),
            total_available=len(lessons),
        )
        logger.debug(
            f"Progress slices: {len(slices.recent)} recent, {len(slices.in_progress)} in progress, "
            f"{len(slices.completed)} completed of {slices.total_available}"
        )
        return slices

    def get_completion_stats(self, slices: Optional[ProgressSlices] = None) -> dict:
        """Counts shown on the dashboard stat tiles."""
        slices = slices or self.aggregate()
        total = slices.total_available
        return {
            "total_lessons": total,
            "completed": len(slices.completed),
            "in_progress": len(slices.in_progress),
            "completion_percent": round(len(slices.completed) / total * 100, 1) if total > 0 else 0,
        }

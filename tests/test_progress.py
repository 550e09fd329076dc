"""Tests for dashboard progress slices."""

import pytest

from readportal.classroom import LessonCatalog, ProgressAggregator

from conftest import make_lesson


def ids(lessons):
    return [lesson.id for lesson in lessons]


class TestProgressAggregator:

    def test_empty_catalog(self):
        slices = ProgressAggregator(LessonCatalog()).aggregate()
        assert slices.recent == []
        assert slices.in_progress == []
        assert slices.completed == []
        assert slices.total_available == 0

    def test_five_lessons(self, catalog):
        slices = ProgressAggregator(catalog).aggregate()
        assert ids(slices.recent) == ["1", "2", "3"]
        assert ids(slices.in_progress) == ["2", "3"]
        assert ids(slices.completed) == ["4", "5"]
        assert slices.total_available == 5

    def test_in_progress_overlaps_recent(self, catalog):
        slices = ProgressAggregator(catalog).aggregate()
        assert set(ids(slices.in_progress)) <= set(ids(slices.recent))

    @pytest.mark.parametrize("size", range(0, 9))
    def test_never_out_of_bounds(self, size):
        catalog = LessonCatalog([make_lesson(str(i)) for i in range(size)])
        slices = ProgressAggregator(catalog).aggregate()
        assert len(slices.recent) == min(size, 3)
        assert len(slices.in_progress) == max(0, min(size, 3) - 1)
        assert len(slices.completed) == max(0, min(size, 5) - 3)
        assert slices.total_available == size

    @pytest.mark.parametrize("size", range(0, 3))
    def test_small_catalog_distinct_slices_fit(self, size):
        catalog = LessonCatalog([make_lesson(str(i)) for i in range(size)])
        slices = ProgressAggregator(catalog).aggregate()
        assert len(slices.in_progress) + len(slices.completed) <= size

    def test_recent_and_in_progress_overlap(self):
        catalog = LessonCatalog([make_lesson("a"), make_lesson("b")])
        slices = ProgressAggregator(catalog).aggregate()
        assert [lesson.id for lesson in slices.recent] == ["a", "b"]
        assert [lesson.id for lesson in slices.in_progress] == ["b"]
        assert slices.completed == []
        assert len(slices.recent) + len(slices.in_progress) + len(slices.completed) == 3

    def test_does_not_mutate_catalog(self, catalog):
        before = catalog.list_all()
        ProgressAggregator(catalog).aggregate()
        assert catalog.list_all() == before

    def test_custom_boundaries(self, catalog):
        aggregator = ProgressAggregator(catalog, recent_count=1, in_progress_range=(0, 2), completed_range=(4, 10))
        slices = aggregator.aggregate()
        assert ids(slices.recent) == ["1"]
        assert ids(slices.in_progress) == ["1", "2"]
        assert ids(slices.completed) == ["5"]

    def test_completion_stats(self, catalog):
        stats = ProgressAggregator(catalog).get_completion_stats()
        assert stats == {
            "total_lessons": 5,
            "completed": 2,
            "in_progress": 2,
            "completion_percent": 40.0,
        }

    def test_completion_stats_empty(self):
        stats = ProgressAggregator(LessonCatalog()).get_completion_stats()
        assert stats["completion_percent"] == 0

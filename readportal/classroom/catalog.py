"""
LessonCatalog - Read-only ordered collection of lessons.

Provides:
- Ordered listing in catalog order
- O(1) lookup by lesson id
- Loading from a YAML catalog file
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import ValidationError

from readportal.errors import ConfigError, LessonNotFoundError
from readportal.schemas import Lesson
from readportal.utils import load_yaml

logger = logging.getLogger(__name__)


class LessonCatalog:
    """
    Static lesson catalog shared by every view.

    Never mutated after construction; list_all() hands out copies.
    """

    def __init__(self, lessons: Iterable[Lesson] = ()):
        self._lessons: list[Lesson] = []
        self._index: dict[str, Lesson] = {}
        for lesson in lessons:
            if lesson.id in self._index:
                raise ConfigError(f"Duplicate lesson id in catalog: {lesson.id}")
            self._lessons.append(lesson)
            self._index[lesson.id] = lesson

    @classmethod
    def from_yaml(cls, path: Path) -> "LessonCatalog":
        """
        Load a catalog from YAML.

        The file holds either a list of lesson mappings or a mapping
        with a "lessons" key.

        Raises:
            ConfigError: If the file is missing, unparsable or invalid
        """
        try:
            data = load_yaml(path)
        except (FileNotFoundError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not read catalog {path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("lessons", [])
        if data is None:
            data = []
        if not isinstance(data, list):
            raise ConfigError(f"Catalog {path} must contain a list of lessons")

        try:
            lessons = [Lesson(**item) for item in data]
        except (TypeError, ValidationError) as e:
            raise ConfigError(f"Invalid lesson in catalog {path}: {e}") from e

        catalog = cls(lessons)
        logger.info(f"Loaded {len(catalog)} lessons from {path}")
        return catalog

    def __len__(self) -> int:
        return len(self._lessons)

    def __contains__(self, lesson_id: object) -> bool:
        return lesson_id in self._index

    def list_all(self) -> list[Lesson]:
        """All lessons in catalog order."""
        return list(self._lessons)

    def find_by_id(self, lesson_id: Optional[str]) -> Optional[Lesson]:
        """Get a lesson by id, or None if absent."""
        if lesson_id is None:
            return None
        return self._index.get(lesson_id)

    def get(self, lesson_id: Optional[str]) -> Lesson:
        """
        Get a lesson by id.

        Raises:
            LessonNotFoundError: If the id is not in the catalog
        """
        lesson = self.find_by_id(lesson_id)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        return lesson

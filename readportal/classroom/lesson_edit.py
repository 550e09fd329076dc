"""
LessonEditor - Create, edit and delete form over a single lesson.

Remote calls are simulated; the catalog itself is never changed.
"""

import logging
from enum import Enum
from typing import Optional

from readportal.errors import LessonNotFoundError, LessonValidationError, RemoteCallError
from readportal.schemas import Difficulty, LessonDraft

from .catalog import LessonCatalog
from .guard import Capabilities
from .navigator import Navigator
from .remote import SimulatedBackend
from .scope import ViewScope

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Lesson not found"


class EditMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class LessonEditor:
    """
    Form state for the lesson create/edit page.

    Validation failures and simulated remote failures are kept in `error`
    for inline display; neither navigates away.
    """

    def __init__(
        self,
        mode: EditMode,
        catalog: LessonCatalog,
        capabilities: Capabilities,
        backend: Optional[SimulatedBackend] = None,
        lesson_id: Optional[str] = None,
        scope: Optional[ViewScope] = None,
    ):
        self.mode = EditMode(mode)
        self.catalog = catalog
        self.capabilities = capabilities
        self.backend = backend or SimulatedBackend()
        self.lesson_id = lesson_id
        self.scope = scope or ViewScope(f"edit:{lesson_id or 'new'}")

        self.draft = LessonDraft()
        self.error: Optional[str] = None
        self.error_field: Optional[str] = None
        self.is_submitting = False
        self.confirming_delete = False
        self.not_found = False

    @property
    def heading(self) -> str:
        return "Create New Lesson" if self.mode == EditMode.CREATE else "Edit Lesson"

    @property
    def list_path(self) -> str:
        """The role's lesson list; where save, delete and cancel lead."""
        return self.capabilities.lessons_path

    @property
    def can_delete(self) -> bool:
        return self.mode == EditMode.EDIT and not self.not_found

    def open(self) -> LessonDraft:
        """Prepare the form: empty for create, prefilled for edit."""
        self.draft = LessonDraft()
        self.not_found = False
        self._clear_error()
        if self.mode == EditMode.EDIT:
            try:
                lesson = self.catalog.get(self.lesson_id)
            except LessonNotFoundError:
                self.not_found = True
                self._set_error(NOT_FOUND_MESSAGE)
            else:
                self.draft = LessonDraft.from_lesson(lesson)
        return self.draft

    def update(self, **fields) -> LessonDraft:
        """Update draft fields (title, description, content, difficulty, file_name)."""
        if "difficulty" in fields:
            fields["difficulty"] = Difficulty(fields["difficulty"])
        self.draft = self.draft.model_copy(update=fields)
        return self.draft

    def validate(self):
        """
        Raises:
            LessonValidationError: If title or description is blank
        """
        if not self.draft.title.strip():
            raise LessonValidationError("title", "Title is required")
        if not self.draft.description.strip():
            raise LessonValidationError("description", "Description is required")

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    async def submit(self, navigator: Navigator) -> bool:
        """
        Validate and save.

        Returns True when saved and navigated to the lesson list. No
        remote call is made when validation fails or the lesson being
        edited does not exist.
        """
        if self.is_submitting:
            return False
        if self.not_found:
            self._set_error(NOT_FOUND_MESSAGE)
            return False
        try:
            self.validate()
        except LessonValidationError as e:
            self._set_error(e.message, e.field)
            return False

        self._clear_error()
        operation = "create_lesson" if self.mode == EditMode.CREATE else "update_lesson"
        return await self._remote_then_leave(operation, navigator)

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def request_delete(self) -> bool:
        """First step of deletion: ask for confirmation."""
        if not self.can_delete or self.is_submitting:
            return False
        self.confirming_delete = True
        return True

    def cancel_delete(self):
        self.confirming_delete = False

    async def confirm_delete(self, navigator: Navigator) -> bool:
        """Second step of deletion; does nothing unless requested first."""
        if not self.confirming_delete or self.is_submitting:
            return False
        self.confirming_delete = False
        return await self._remote_then_leave("delete_lesson", navigator)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _remote_then_leave(self, operation: str, navigator: Navigator) -> bool:
        self.is_submitting = True
        try:
            await self.backend.call(operation, self.draft.model_dump(mode="json"))
        except RemoteCallError as e:
            if not self.scope.closed:
                self._set_error(f"Could not save changes: {e}")
            return False
        finally:
            self.is_submitting = False

        if self.scope.closed:
            logger.debug(f"Discarding {operation} result for closed editor")
            return False

        logger.info(f"{operation} succeeded for {self.lesson_id or 'new lesson'}")
        self.scope.close()
        navigator.navigate(self.list_path)
        return True

    def _set_error(self, message: str, field: Optional[str] = None):
        self.error = message
        self.error_field = field

    def _clear_error(self):
        self.error = None
        self.error_field = None

    def close(self):
        self.scope.close()

"""
Error taxonomy for ReadPortal.

Every error is handled at the component boundary where it occurs:
- AccessDenied: resolved by a silent redirect
- LessonNotFoundError: rendered as an inline recovery view
- LessonValidationError: rendered as an inline form message
- RemoteCallError: rendered inline with a retry affordance
- ConfigError: raised at startup for unusable config or catalog files
"""

from typing import Optional


class PortalError(Exception):
    """Base class for all ReadPortal errors."""


class AccessDenied(PortalError):
    """The current session may not enter a guarded route subtree."""

    def __init__(self, redirect_to: str, reason: str):
        super().__init__(f"Access denied ({reason}); redirecting to {redirect_to}")
        self.redirect_to = redirect_to
        self.reason = reason


class LessonNotFoundError(PortalError, LookupError):
    """Requested lesson id is not in the catalog."""

    def __init__(self, lesson_id: Optional[str]):
        super().__init__(f"Lesson not found: {lesson_id}")
        self.lesson_id = lesson_id


class LessonValidationError(PortalError, ValueError):
    """A required lesson form field is empty."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class RemoteCallError(PortalError):
    """A simulated remote call failed."""

    def __init__(self, operation: str, detail: str = "simulated failure"):
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.detail = detail


class ConfigError(PortalError, ValueError):
    """Configuration or catalog file could not be loaded."""

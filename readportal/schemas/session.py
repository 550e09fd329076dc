"""
Session schemas for ReadPortal.

Defines the closed role enumeration and the identity held by the
session context.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Accepted spellings that map onto a canonical role
_ROLE_ALIASES = {"admin": "teacher"}


class Role(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"     # teacher/admin
    GUARDIAN = "guardian"

    @classmethod
    def parse(cls, value: object) -> Optional["Role"]:
        """Return the matching Role, or None for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            key = str(value).strip().lower()
            return cls(_ROLE_ALIASES.get(key, key))
        except ValueError:
            return None


class Identity(BaseModel):
    """
    Who is using the portal.

    The role is kept as the raw string so that an unknown role can be
    represented; it is treated as "no access" by the guard.
    """
    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1)
    role: str

    @property
    def known_role(self) -> Optional[Role]:
        return Role.parse(self.role)

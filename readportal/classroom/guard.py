"""
RouteGuard - Role-based access to route subtrees.

Provides:
- Role -> landing path mapping
- Capability resolution (what the current role may see and do)
- Guard decisions: render the subtree or redirect
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from readportal.errors import AccessDenied
from readportal.schemas import Identity, Role

from .session import SessionContext

logger = logging.getLogger(__name__)


PUBLIC_ENTRY_PATH = "/login"

LANDING_PATHS: dict[Role, str] = {
    Role.STUDENT: "/student/lessons",
    Role.TEACHER: "/teacher/lessons",
    Role.GUARDIAN: "/guardian",
}


def landing_path_for(role: object) -> str:
    """Default landing path for a role; unknown roles get the public entry."""
    parsed = Role.parse(role) if role is not None else None
    if parsed is None:
        return PUBLIC_ENTRY_PATH
    return LANDING_PATHS.get(parsed, PUBLIC_ENTRY_PATH)


def lessons_path_for(role: Optional[Role]) -> str:
    """Lesson list for a role (guardians see their progress list)."""
    if role is None:
        return PUBLIC_ENTRY_PATH
    if role == Role.GUARDIAN:
        return "/guardian/progress"
    return f"/{role.value}/lessons"


@dataclass(frozen=True)
class Capabilities:
    """
    Everything downstream views need to know about the viewer's role.

    Resolved once per guard evaluation and passed around as plain data.
    """
    role: Optional[Role]
    username: Optional[str]
    landing_path: str
    lessons_path: str
    can_edit_lessons: bool
    can_take_quiz: bool

    @property
    def is_anonymous(self) -> bool:
        return self.username is None


def resolve_capabilities(identity: Optional[Identity]) -> Capabilities:
    """Map an identity (or none) to its capabilities."""
    if identity is None:
        return Capabilities(
            role=None,
            username=None,
            landing_path=PUBLIC_ENTRY_PATH,
            lessons_path=PUBLIC_ENTRY_PATH,
            can_edit_lessons=False,
            can_take_quiz=False,
        )

    role = identity.known_role
    return Capabilities(
        role=role,
        username=identity.username,
        landing_path=landing_path_for(role),
        lessons_path=lessons_path_for(role),
        can_edit_lessons=role == Role.TEACHER,
        can_take_quiz=role == Role.STUDENT,
    )


class GuardOutcome(str, Enum):
    RENDER = "render"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GuardDecision:
    outcome: GuardOutcome
    capabilities: Capabilities
    redirect_to: Optional[str] = None
    reason: Optional[str] = None    # "unauthenticated" | "forbidden"

    @property
    def allowed(self) -> bool:
        return self.outcome == GuardOutcome.RENDER


class RouteGuard:
    """
    Guard for one role-scoped route subtree.

    The session is read on every evaluation; identity can change while a
    subtree is mounted.
    """

    def __init__(self, session: SessionContext, allowed_roles: Iterable[Role | str]):
        """
        Initialize guard.

        Args:
            session: SessionContext to read the identity from
            allowed_roles: Roles that may render the subtree
        """
        self.session = session
        self.allowed_roles: frozenset[Role] = frozenset(
            role for role in (Role.parse(r) for r in allowed_roles) if role is not None
        )

    def evaluate(self) -> GuardDecision:
        """Decide whether the current session may render the subtree."""
        identity = self.session.get_current_identity()
        capabilities = resolve_capabilities(identity)

        if identity is None:
            return GuardDecision(
                outcome=GuardOutcome.REDIRECT,
                capabilities=capabilities,
                redirect_to=PUBLIC_ENTRY_PATH,
                reason="unauthenticated",
            )

        if capabilities.role is None or capabilities.role not in self.allowed_roles:
            return GuardDecision(
                outcome=GuardOutcome.REDIRECT,
                capabilities=capabilities,
                redirect_to=capabilities.landing_path,
                reason="forbidden",
            )

        return GuardDecision(outcome=GuardOutcome.RENDER, capabilities=capabilities)

    def enforce(self) -> Capabilities:
        """
        Return capabilities for an allowed session.

        Raises:
            AccessDenied: With the redirect target when not allowed
        """
        decision = self.evaluate()
        if not decision.allowed:
            raise AccessDenied(decision.redirect_to or PUBLIC_ENTRY_PATH, decision.reason or "forbidden")
        return decision.capabilities

"""
Navigator - Route table, guarded route resolution, and history.

Provides:
- Public routes and role-scoped route subtrees
- Path matching with parameters (/{role}/lessons/{lesson_id})
- Guard evaluation on every resolution
- Browser-like history (navigate, redirect, back)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from readportal.errors import AccessDenied
from readportal.schemas import Role

from .guard import (
    PUBLIC_ENTRY_PATH,
    Capabilities,
    RouteGuard,
    resolve_capabilities,
)
from .session import SessionContext

logger = logging.getLogger(__name__)

# Redirect chains longer than this end at the public entry point
MAX_REDIRECTS = 5


class Page(str, Enum):
    """Screens the app can render."""
    HOME = "home"
    LOGIN = "login"
    REGISTER = "register"
    DASHBOARD = "dashboard"
    LESSON_LIST = "lesson_list"
    LESSON_DETAIL = "lesson_detail"
    LESSON_CREATE = "lesson_create"
    LESSON_EDIT = "lesson_edit"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteSpec:
    """A route pattern relative to its subtree, e.g. "lessons/{lesson_id}"."""
    pattern: str
    page: Page

    def match(self, segments: list[str]) -> Optional[dict[str, str]]:
        parts = [p for p in self.pattern.split("/") if p]
        if len(parts) != len(segments):
            return None
        params = {}
        for part, segment in zip(parts, segments):
            if part.startswith("{") and part.endswith("}"):
                params[part[1:-1]] = segment
            elif part != segment:
                return None
        return params


@dataclass(frozen=True)
class Subtree:
    """Role-scoped group of routes behind one guard."""
    prefix: str
    allowed_roles: frozenset[Role]
    routes: tuple[RouteSpec, ...]


PUBLIC_ROUTES: tuple[RouteSpec, ...] = (
    RouteSpec("", Page.HOME),
    RouteSpec("login", Page.LOGIN),
    RouteSpec("register", Page.REGISTER),
)

# Fixed segments ("create") come before parameters so they win the match
SUBTREES: dict[str, Subtree] = {
    "student": Subtree(
        prefix="student",
        allowed_roles=frozenset({Role.STUDENT}),
        routes=(
            RouteSpec("", Page.DASHBOARD),
            RouteSpec("lessons", Page.LESSON_LIST),
            RouteSpec("lessons/{lesson_id}", Page.LESSON_DETAIL),
        ),
    ),
    "teacher": Subtree(
        prefix="teacher",
        allowed_roles=frozenset({Role.TEACHER}),
        routes=(
            RouteSpec("", Page.DASHBOARD),
            RouteSpec("lessons", Page.LESSON_LIST),
            RouteSpec("lessons/create", Page.LESSON_CREATE),
            RouteSpec("lessons/{lesson_id}", Page.LESSON_DETAIL),
            RouteSpec("lessons/{lesson_id}/edit", Page.LESSON_EDIT),
        ),
    ),
    "guardian": Subtree(
        prefix="guardian",
        allowed_roles=frozenset({Role.GUARDIAN}),
        routes=(
            RouteSpec("", Page.DASHBOARD),
            RouteSpec("progress", Page.LESSON_LIST),
        ),
    ),
}


@dataclass(frozen=True)
class RouteMatch:
    """Result of resolving a path the session is allowed to see."""
    path: str
    page: Page
    capabilities: Capabilities
    subtree: Optional[str] = None
    params: dict[str, str] = field(default_factory=dict)

    @property
    def lesson_id(self) -> Optional[str]:
        return self.params.get("lesson_id")


def normalize_path(path: str) -> str:
    """Strip query/fragment and trailing slashes; always start with '/'."""
    path = (path or "/").split("?", 1)[0].split("#", 1)[0]
    segments = [s for s in path.split("/") if s]
    return "/" + "/".join(segments)


def lesson_path(role: Role, lesson_id: str, action: Optional[str] = None) -> str:
    """Build /{role}/lessons/{lesson_id}[/{action}]."""
    path = f"/{role.value}/lessons/{lesson_id}"
    return f"{path}/{action}" if action else path


class Navigator:
    """
    Resolve paths against the route table, guarding role subtrees.

    Guards are evaluated on every call to match()/resolve(); nothing about
    the session is cached between navigations.
    """

    def __init__(self, session: SessionContext, start_path: str = "/"):
        """
        Initialize navigator.

        Args:
            session: SessionContext consulted by every subtree guard
            start_path: Initial history entry
        """
        self.session = session
        self._guards = {
            prefix: RouteGuard(session, subtree.allowed_roles)
            for prefix, subtree in SUBTREES.items()
        }
        self._history: list[str] = [normalize_path(start_path)]

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    @property
    def current_path(self) -> str:
        return self._history[-1]

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    def navigate(self, path: str) -> str:
        """Push a new history entry."""
        path = normalize_path(path)
        if path != self.current_path:
            self._history.append(path)
        return path

    def redirect_to(self, path: str) -> str:
        """Replace the current history entry."""
        path = normalize_path(path)
        self._history[-1] = path
        return path

    def navigate_back(self) -> str:
        """Go back one entry; stays put when there is nowhere to go."""
        if len(self._history) > 1:
            self._history.pop()
        return self.current_path

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def match(self, path: str) -> RouteMatch:
        """
        Match a path, enforcing the guard of its subtree.

        Raises:
            AccessDenied: If the path is inside a subtree the session may not enter
        """
        path = normalize_path(path)
        segments = [s for s in path.split("/") if s]

        if segments and segments[0] in SUBTREES:
            subtree = SUBTREES[segments[0]]
            capabilities = self._guards[subtree.prefix].enforce()
            for route in subtree.routes:
                params = route.match(segments[1:])
                if params is not None:
                    return RouteMatch(path, route.page, capabilities, subtree.prefix, params)
            return RouteMatch(path, Page.NOT_FOUND, capabilities, subtree.prefix)

        capabilities = resolve_capabilities(self.session.get_current_identity())
        for route in PUBLIC_ROUTES:
            if route.match(segments) is not None:
                return RouteMatch(path, route.page, capabilities)
        return RouteMatch(path, Page.NOT_FOUND, capabilities)

    def resolve(self) -> RouteMatch:
        """
        Resolve the current path, following guard redirects.

        Redirects replace the current history entry so that going back
        never lands on a page the session was refused.
        """
        for _ in range(MAX_REDIRECTS):
            try:
                return self.match(self.current_path)
            except AccessDenied as e:
                logger.info(f"Redirecting {self.current_path} -> {e.redirect_to} ({e.reason})")
                self.redirect_to(e.redirect_to)

        logger.warning(f"Too many redirects, falling back to {PUBLIC_ENTRY_PATH}")
        self.redirect_to(PUBLIC_ENTRY_PATH)
        return self.match(PUBLIC_ENTRY_PATH)

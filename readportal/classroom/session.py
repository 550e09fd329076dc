"""
SessionContext - Holds the current identity for the life of the app.

Login records the identity the user states; there is no authentication.
"""

import logging
from typing import Optional

from readportal.schemas import Identity, Role

logger = logging.getLogger(__name__)


class SessionContext:
    """
    Process-wide session state, passed explicitly to the guard.

    The identity is the only shared mutable state in the portal, so
    readers must call get_current_identity() each time rather than
    keeping a copy.
    """

    def __init__(self, identity: Optional[Identity] = None):
        self._identity = identity

    def get_current_identity(self) -> Optional[Identity]:
        """Return the current identity, or None when signed out."""
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def login(self, username: str, role: Role | str) -> Identity:
        """Record an identity for the session."""
        role_value = role.value if isinstance(role, Role) else str(role)
        self._identity = Identity(username=username, role=role_value)
        logger.info(f"Signed in {username} as {role_value}")
        return self._identity

    def logout(self):
        """Clear the identity."""
        if self._identity:
            logger.info(f"Signed out {self._identity.username}")
        self._identity = None

"""Password gate for the admin table.

Not a security boundary: a plain comparison against a configured password and
a per-session flag.
"""

from waitlyst.logging_config import get_logger
from waitlyst.settings import settings

logger = get_logger(__name__)


class AdminGate:
    """Session-scoped admin authentication."""

    def __init__(self, password: str | None = None):
        self._password = password if password is not None else settings.admin_password
        self.is_authenticated = False

    def authenticate(self, password: str) -> bool:
        """Check a password and open the session on success.

        Args:
            password: Password as typed

        Returns:
            True if it matches the configured password
        """
        if password == self._password:
            self.is_authenticated = True
            logger.info("admin_authenticated")
            return True

        logger.warning("admin_authentication_failed")
        return False

    def logout(self) -> None:
        """Close the admin session."""
        self.is_authenticated = False

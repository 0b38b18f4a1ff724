"""Waitlist store: the only component touching the persisted slots."""

import threading

from pydantic import ValidationError

from waitlyst.logging_config import get_logger
from waitlyst.settings import Settings, settings
from waitlyst.storage.backends import KeyValueBackend, create_backend
from waitlyst.storage.models import WaitlistEntry, dump_entries, load_entries

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    """Trim and lower-case an email address."""
    return email.strip().lower()


class WaitlistStore:
    """Repository for waitlist entries and the current-user marker.

    Every read goes back to the backend, so callers always see what was last
    persisted. ``lock`` serializes read-modify-write sequences within one
    process; writers in other processes are not coordinated.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        entries_key: str | None = None,
        current_user_key: str | None = None,
    ):
        self.backend = backend
        self.entries_key = entries_key or settings.entries_key
        self.current_user_key = current_user_key or settings.current_user_key
        self.lock = threading.RLock()

    # ==================== ENTRIES ====================

    def list_all(self) -> list[WaitlistEntry]:
        """All entries in creation order."""
        raw = self.backend.get(self.entries_key)
        if not raw:
            return []

        try:
            return load_entries(raw)
        except ValidationError as e:
            logger.warning(
                "storage_corrupted",
                key=self.entries_key,
                errors=e.error_count(),
            )
            return []

    def save(self, entries: list[WaitlistEntry]) -> None:
        """Replace the persisted collection with ``entries``."""
        self.backend.set(self.entries_key, dump_entries(entries))
        logger.debug("entries_saved", count=len(entries))

    def total_signups(self) -> int:
        """Number of entries on the waitlist."""
        return len(self.list_all())

    def find_by_referral_code(self, code: str) -> WaitlistEntry | None:
        """Get the entry owning a referral code."""
        return next((e for e in self.list_all() if e.referral_code == code), None)

    def find_by_email(self, email: str) -> WaitlistEntry | None:
        """Get entry by email (case and whitespace insensitive)."""
        normalized = normalize_email(email)
        return next((e for e in self.list_all() if normalize_email(e.email) == normalized), None)

    def is_email_registered(self, email: str) -> bool:
        """Check whether an email is already on the waitlist."""
        return self.find_by_email(email) is not None

    # ==================== CURRENT USER ====================

    def get_current_user(self) -> WaitlistEntry | None:
        """Resolve the current-user marker against the stored entries."""
        email = self.backend.get(self.current_user_key)
        if not email:
            return None
        return next((e for e in self.list_all() if e.email == email), None)

    def set_current_user(self, email: str) -> None:
        """Mark ``email`` as the active session's user."""
        self.backend.set(self.current_user_key, email)

    def clear_current_user(self) -> None:
        """Forget the active session's user."""
        self.backend.delete(self.current_user_key)

    def refresh_current_user(self) -> WaitlistEntry | None:
        """Re-read the current user so referral counts are up to date."""
        user = self.get_current_user()
        if not user:
            return None
        return next((e for e in self.list_all() if e.email == user.email), None)


def build_store(config: Settings | None = None) -> WaitlistStore:
    """Create a store over the configured backend.

    Args:
        config: Settings to use (defaults to the global settings)

    Returns:
        Ready-to-use store
    """
    config = config or settings
    backend = create_backend(config)
    logger.debug("store_created", backend=backend.name)
    return WaitlistStore(
        backend,
        entries_key=config.entries_key,
        current_user_key=config.current_user_key,
    )

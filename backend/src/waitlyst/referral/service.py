"""Referral ledger: signups, referral codes and referrer counters."""

import random
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from waitlyst.errors import WaitlistError
from waitlyst.logging_config import get_logger
from waitlyst.settings import settings
from waitlyst.storage.models import WaitlistEntry, utcnow
from waitlyst.storage.repository import WaitlistStore, normalize_email

logger = get_logger(__name__)

# Excludes look-alikes: 0, O, I, L, 1
REFERRAL_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
MAX_CODE_ATTEMPTS = 10


class DuplicateEmailError(WaitlistError):
    """The email is already on the waitlist."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("This email is already on the waitlist!")


def generate_referral_code(length: int | None = None, rng: random.Random | None = None) -> str:
    """Generate a readable referral code.

    Format: ABC23XYZ (8 chars by default). Pass ``rng`` for reproducible
    codes; otherwise ``secrets`` is used.
    """
    length = length or settings.referral_code_length
    choice = rng.choice if rng else secrets.choice
    return "".join(choice(REFERRAL_CODE_ALPHABET) for _ in range(length))


def generate_entry_id(rng: random.Random | None = None) -> str:
    """Opaque unique entry identifier."""
    if rng:
        return uuid.UUID(int=rng.getrandbits(128)).hex
    return uuid.uuid4().hex


@dataclass(frozen=True)
class QueueStatus:
    """Where an entry sits in the waitlist."""

    position: int
    ahead: int
    behind: int
    total: int


class ReferralLedger:
    """Signup operation layered on the waitlist store."""

    def __init__(
        self,
        store: WaitlistStore,
        clock: Callable[[], datetime] = utcnow,
        code_length: int | None = None,
    ):
        self.store = store
        self.clock = clock
        self.code_length = code_length or settings.referral_code_length
        self.logger = get_logger(__name__)

    def _mint_code(self, taken: set[str]) -> str:
        code = generate_referral_code(self.code_length)
        attempts = 0
        while code in taken and attempts < MAX_CODE_ATTEMPTS:
            code = generate_referral_code(self.code_length)
            attempts += 1
        return code

    def signup(self, email: str, referred_by_code: str | None = None) -> WaitlistEntry:
        """Add an email to the waitlist.

        The whole read-modify-write runs under the store lock and ends in a
        single save, so later reads never see a half-applied signup.

        Args:
            email: Email as typed by the user
            referred_by_code: Referral code from the ``ref`` link, if any

        Returns:
            The new entry

        Raises:
            DuplicateEmailError: if the normalized email is already listed
        """
        normalized = normalize_email(email)
        referred_by = referred_by_code or None

        with self.store.lock:
            entries = self.store.list_all()

            if any(normalize_email(e.email) == normalized for e in entries):
                self.logger.info("signup_duplicate_email", email=normalized)
                raise DuplicateEmailError(normalized)

            entry = WaitlistEntry(
                id=generate_entry_id(),
                email=normalized,
                referral_code=self._mint_code({e.referral_code for e in entries}),
                referred_by=referred_by,
                referral_count=0,
                position=len(entries) + 1,
                created_at=self.clock(),
            )

            if referred_by:
                referrer = next(
                    (e for e in entries if e.referral_code == referred_by), None
                )
                if referrer:
                    referrer.referral_count += 1
                    self.logger.info(
                        "referral_credited",
                        referrer=referrer.email,
                        referral_count=referrer.referral_count,
                    )
                else:
                    self.logger.info("referral_code_unresolved", code=referred_by)

            entries.append(entry)
            self.store.save(entries)
            self.store.set_current_user(entry.email)

        self.logger.info(
            "signup_completed",
            email=entry.email,
            position=entry.position,
            referred_by=entry.referred_by,
        )
        return entry

    def validate_code(self, code: str | None) -> WaitlistEntry | None:
        """Look up the referrer behind a code.

        Args:
            code: Referral code to validate

        Returns:
            Referrer entry if the code is known, None otherwise
        """
        if not code or not code.strip():
            return None
        return self.store.find_by_referral_code(code.strip())

    def queue_status(self, entry: WaitlistEntry) -> QueueStatus:
        """Compute how many people are ahead of and behind an entry."""
        total = self.store.total_signups()
        return QueueStatus(
            position=entry.position,
            ahead=entry.position - 1,
            behind=max(0, total - entry.position),
            total=total,
        )

"""Input checks applied before a signup reaches the ledger."""

import re

from waitlyst.errors import WaitlistError

# Something@something.something, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InvalidEmailError(WaitlistError):
    """Email input rejected at the form boundary."""
    pass


def validate_email(raw: str | None) -> str:
    """Validate a typed email address.

    Args:
        raw: Email as typed by the user

    Returns:
        The trimmed email

    Raises:
        InvalidEmailError: if the email is blank or malformed
    """
    email = (raw or "").strip()

    if not email:
        raise InvalidEmailError("Please enter your email address")

    if not EMAIL_PATTERN.match(email):
        raise InvalidEmailError("Please enter a valid email address")

    return email

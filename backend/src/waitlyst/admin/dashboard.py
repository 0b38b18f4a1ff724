"""Admin dashboard statistics and search."""

from dataclasses import dataclass
from datetime import date

from waitlyst.storage.models import WaitlistEntry


@dataclass(frozen=True)
class DashboardStats:
    """Headline numbers for the admin table."""

    total: int
    today_signups: int
    total_referrals: int
    top_referrer: WaitlistEntry | None


def dashboard_stats(entries: list[WaitlistEntry], today: date | None = None) -> DashboardStats:
    """Compute dashboard statistics.

    The top referrer is the first entry holding the highest referral count;
    nobody qualifies while every count is zero.

    Args:
        entries: All waitlist entries
        today: Local date counted as "today" (defaults to the current date)

    Returns:
        Dashboard statistics
    """
    today = today or date.today()

    top_referrer: WaitlistEntry | None = None
    for entry in entries:
        best = top_referrer.referral_count if top_referrer else 0
        if entry.referral_count > best:
            top_referrer = entry

    return DashboardStats(
        total=len(entries),
        today_signups=sum(1 for e in entries if e.created_at.astimezone().date() == today),
        total_referrals=sum(e.referral_count for e in entries),
        top_referrer=top_referrer,
    )


def filter_entries(entries: list[WaitlistEntry], query: str | None) -> list[WaitlistEntry]:
    """Filter entries by email or referral code (case-insensitive substring)."""
    if not query or not query.strip():
        return entries

    q = query.strip().lower()
    return [
        e for e in entries
        if q in e.email.lower() or q in e.referral_code.lower()
    ]

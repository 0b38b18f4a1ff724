"""Launch countdown arithmetic."""

import math
from dataclasses import dataclass
from datetime import datetime, timezone

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class TimeLeft:
    """Remaining time split into display units."""

    days: int
    hours: int
    minutes: int
    seconds: int


def _seconds_until(target: datetime, now: datetime | None) -> float:
    # Naive datetimes are local time
    now = now or datetime.now(timezone.utc)
    return (target.astimezone(timezone.utc) - now.astimezone(timezone.utc)).total_seconds()


def calculate_time_left(target: datetime, now: datetime | None = None) -> TimeLeft:
    """Time remaining until ``target``; all zeros once it has passed."""
    difference = _seconds_until(target, now)
    if difference <= 0:
        return TimeLeft(days=0, hours=0, minutes=0, seconds=0)

    total = int(difference)
    return TimeLeft(
        days=total // SECONDS_PER_DAY,
        hours=(total // 3600) % 24,
        minutes=(total // 60) % 60,
        seconds=total % 60,
    )


def days_until_launch(target: datetime, now: datetime | None = None) -> int:
    """Whole days left before launch, rounded up, never negative."""
    return max(0, math.ceil(_seconds_until(target, now) / SECONDS_PER_DAY))

"""Demo waitlist data for local runs and tests.

Never used by the signup path. Generated entries respect the same rules real
signups do: contiguous positions, ascending signup times, unique referral
codes and referral counts that match the referral links.
"""

import random
from datetime import datetime, timedelta

from waitlyst.logging_config import get_logger
from waitlyst.referral.service import generate_entry_id, generate_referral_code
from waitlyst.storage.models import WaitlistEntry, utcnow
from waitlyst.storage.repository import WaitlistStore

logger = get_logger(__name__)

DEMO_FIRST_NAMES = [
    "sarah", "alex", "jordan", "casey", "taylor",
    "morgan", "riley", "avery", "quinn", "blake",
    "drew", "sage", "reese", "skylar", "charlie",
    "finley", "hayden", "jamie", "logan", "parker",
    "emery", "rowan", "dakota", "river", "phoenix",
    "kai", "milan", "remy", "eden", "arden",
    "blair", "campbell", "devon", "ellis", "frankie",
    "grey", "hollis", "indigo", "jules", "kit",
    "lane", "marlowe", "nico", "oakley", "peyton",
    "rain", "shea", "tatum", "uri", "vale",
]

DEMO_DOMAINS = [
    "gmail.com", "outlook.com", "hey.com",
    "icloud.com", "proton.me", "yahoo.com",
    "fastmail.com", "me.com",
]

DEFAULT_DEMO_COUNT = 147
DEMO_WINDOW_DAYS = 30

# Only the first few signups act as referrers; early ones are power referrers
REFERRER_POOL = 10
REFERRER_WEIGHTS = [23, 15, 11, 3, 3, 8, 3, 3, 6, 3]


def demo_email(index: int) -> str:
    """Deterministic unique email for the ``index``-th demo signup."""
    name = DEMO_FIRST_NAMES[index % len(DEMO_FIRST_NAMES)]
    domain = DEMO_DOMAINS[index % len(DEMO_DOMAINS)]
    suffix = str(index // len(DEMO_FIRST_NAMES)) if index >= len(DEMO_FIRST_NAMES) else ""
    return f"{name}{suffix}@{domain}"


def generate_demo_entries(
    count: int = DEFAULT_DEMO_COUNT,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> list[WaitlistEntry]:
    """Build a plausible waitlist.

    Args:
        count: Number of entries
        rng: Random source; pass a seeded one for reproducible data
        now: Reference time; signups spread over the 30 days before it

    Returns:
        Entries in creation order
    """
    rng = rng or random.Random()
    now = now or utcnow()

    window = DEMO_WINDOW_DAYS * 24 * 60 * 60
    offsets = sorted((rng.uniform(0, window) for _ in range(count)), reverse=True)

    entries: list[WaitlistEntry] = []
    taken: set[str] = set()

    for i in range(count):
        code = generate_referral_code(rng=rng)
        while code in taken:
            code = generate_referral_code(rng=rng)
        taken.add(code)

        referred_by = None
        if i > REFERRER_POOL:
            referrer = rng.choices(entries[:REFERRER_POOL], weights=REFERRER_WEIGHTS)[0]
            referred_by = referrer.referral_code
            referrer.referral_count += 1

        entries.append(
            WaitlistEntry(
                id=generate_entry_id(rng),
                email=demo_email(i),
                referral_code=code,
                referred_by=referred_by,
                referral_count=0,
                position=i + 1,
                created_at=now - timedelta(seconds=offsets[i]),
            )
        )

    return entries


def seed_demo_data(
    store: WaitlistStore,
    count: int = DEFAULT_DEMO_COUNT,
    rng: random.Random | None = None,
) -> int:
    """Fill an empty store with demo entries.

    Returns:
        Number of entries written (0 when the store already has data)
    """
    with store.lock:
        if store.total_signups() > 0:
            logger.info("seed_skipped_store_not_empty")
            return 0

        entries = generate_demo_entries(count, rng=rng)
        store.save(entries)

    logger.info("demo_data_seeded", count=len(entries))
    return len(entries)

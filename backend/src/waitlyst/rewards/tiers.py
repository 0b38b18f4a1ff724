"""Reward tier definitions and progress helpers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RewardTier:
    """A reward unlocked after a number of successful referrals."""

    referrals_needed: int
    title: str
    description: str
    icon: str


# Ordered by referrals needed
REWARD_TIERS: list[RewardTier] = [
    RewardTier(
        referrals_needed=3,
        title="Early Access",
        description="Skip the line, get in before everyone else",
        icon="🎯",
    ),
    RewardTier(
        referrals_needed=10,
        title="30% Lifetime Discount",
        description="Lock in a permanent discount, forever",
        icon="💎",
    ),
    RewardTier(
        referrals_needed=25,
        title="Founding Member",
        description="Exclusive badge + early feature access",
        icon="👑",
    ),
    RewardTier(
        referrals_needed=50,
        title="VIP Launch Event",
        description="Private invite to our launch celebration",
        icon="🌟",
    ),
]


def is_unlocked(tier: RewardTier, referral_count: int) -> bool:
    """Check whether a referral count reaches a tier."""
    return referral_count >= tier.referrals_needed


def unlocked_tiers(
    referral_count: int, tiers: list[RewardTier] | None = None
) -> list[RewardTier]:
    """All tiers reached by ``referral_count``."""
    tiers = REWARD_TIERS if tiers is None else tiers
    return [t for t in tiers if is_unlocked(t, referral_count)]


def next_tier(
    referral_count: int, tiers: list[RewardTier] | None = None
) -> RewardTier | None:
    """Cheapest tier not yet reached, or None when everything is unlocked."""
    tiers = REWARD_TIERS if tiers is None else tiers
    locked = [t for t in tiers if not is_unlocked(t, referral_count)]
    return min(locked, key=lambda t: t.referrals_needed, default=None)


def tier_progress(tier: RewardTier, referral_count: int) -> float:
    """Progress towards a tier as a percentage capped at 100.

    Args:
        tier: Target tier
        referral_count: Current referral count

    Returns:
        Percentage in [0, 100]
    """
    if tier.referrals_needed <= 0:
        return 100.0
    return min(100.0, max(0, referral_count) / tier.referrals_needed * 100)

"""Reward tiers earned by referring friends."""

from waitlyst.rewards.tiers import (
    REWARD_TIERS,
    RewardTier,
    is_unlocked,
    next_tier,
    tier_progress,
    unlocked_tiers,
)

__all__ = [
    "REWARD_TIERS",
    "RewardTier",
    "is_unlocked",
    "next_tier",
    "tier_progress",
    "unlocked_tiers",
]

"""Tests for reward tiers."""

import pytest

from waitlyst.rewards import REWARD_TIERS, RewardTier, is_unlocked, next_tier, tier_progress, unlocked_tiers


def test_default_tiers():
    assert [t.referrals_needed for t in REWARD_TIERS] == [3, 10, 25, 50]
    assert REWARD_TIERS[0].title == "Early Access"
    assert REWARD_TIERS[-1].title == "VIP Launch Event"


@pytest.mark.parametrize(
    "count, unlocked, upcoming",
    [
        (0, [], 3),
        (2, [], 3),
        (3, [3], 10),
        (24, [3, 10], 25),
        (50, [3, 10, 25, 50], None),
        (120, [3, 10, 25, 50], None),
    ],
)
def test_unlocked_and_next(count, unlocked, upcoming):
    assert [t.referrals_needed for t in unlocked_tiers(count)] == unlocked
    tier = next_tier(count)
    assert (tier.referrals_needed if tier else None) == upcoming


def test_is_unlocked_at_threshold():
    tier = REWARD_TIERS[1]
    assert not is_unlocked(tier, 9)
    assert is_unlocked(tier, 10)


def test_tier_progress():
    tier = RewardTier(referrals_needed=10, title="t", description="d", icon="*")
    assert tier_progress(tier, 0) == 0
    assert tier_progress(tier, 4) == pytest.approx(40.0)
    assert tier_progress(tier, 25) == 100.0


def test_custom_tier_list():
    tiers = [RewardTier(1, "one", "", ""), RewardTier(5, "five", "", "")]
    assert [t.title for t in unlocked_tiers(1, tiers)] == ["one"]
    assert next_tier(1, tiers).title == "five"

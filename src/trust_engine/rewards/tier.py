"""RewardTier enumeration, tier cut points and the reward payout table."""
from __future__ import annotations

from enum import IntEnum


class RewardTier(IntEnum):
    """Protocol reward tiers, ordered from no reward to the top payout."""

    NO_TIER = 0
    EXPLORER = 1
    CONTRIBUTOR = 2
    BRONZE = 3
    SILVER = 4
    GOLD = 5
    DIAMOND = 6

    @property
    def label(self) -> str:
        """Display name, e.g. ``"No Tier"`` or ``"Diamond"``."""
        return self.name.replace("_", " ").title()


# Minimum on-chain activity points (0 – 20) for each tier.
REWARD_TIER_THRESHOLDS: dict[RewardTier, int] = {
    RewardTier.NO_TIER: 0,
    RewardTier.EXPLORER: 1,
    RewardTier.CONTRIBUTOR: 4,
    RewardTier.BRONZE: 8,
    RewardTier.SILVER: 11,
    RewardTier.GOLD: 14,
    RewardTier.DIAMOND: 17,
}

# Monetary reward (USD) paid out per tier.
REWARD_AMOUNTS_USD: dict[RewardTier, int] = {
    RewardTier.DIAMOND: 10_000,
    RewardTier.GOLD: 6_000,
    RewardTier.SILVER: 3_000,
    RewardTier.BRONZE: 1_000,
    RewardTier.CONTRIBUTOR: 500,
    RewardTier.EXPLORER: 100,
    RewardTier.NO_TIER: 0,
}


def derive_reward_tier(points: float) -> RewardTier:
    """Map on-chain activity points to a RewardTier.

    The highest tier whose threshold does not exceed *points* is returned.
    """
    tier = RewardTier.NO_TIER
    for candidate, threshold in sorted(REWARD_TIER_THRESHOLDS.items(), key=lambda kv: kv[1]):
        if points >= threshold:
            tier = candidate
    return tier


def reward_for_tier(tier: RewardTier) -> int:
    """Return the USD reward paid out for *tier*."""
    return REWARD_AMOUNTS_USD.get(tier, 0)

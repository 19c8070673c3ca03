"""Protocol rewards tier estimation from on-chain activity metrics."""
from __future__ import annotations

from trust_engine.rewards.calculator import (
    ACTIVITY_TABLES,
    DEMO_ACTIVITY,
    MAX_ACTIVITY_POINTS,
    ActivityMetrics,
    RequirementGap,
    RewardEstimate,
    estimate_reward,
    requirement_gaps,
)
from trust_engine.rewards.tier import (
    REWARD_AMOUNTS_USD,
    REWARD_TIER_THRESHOLDS,
    RewardTier,
    derive_reward_tier,
    reward_for_tier,
)

__all__ = [
    "ACTIVITY_TABLES",
    "ActivityMetrics",
    "DEMO_ACTIVITY",
    "MAX_ACTIVITY_POINTS",
    "REWARD_AMOUNTS_USD",
    "REWARD_TIER_THRESHOLDS",
    "RequirementGap",
    "RewardEstimate",
    "RewardTier",
    "derive_reward_tier",
    "estimate_reward",
    "requirement_gaps",
    "reward_for_tier",
]

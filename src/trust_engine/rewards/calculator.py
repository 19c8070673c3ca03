"""Protocol rewards estimation from on-chain activity.

Three independently bucketed metrics add up to at most 20 points:

- Transaction volume (USD): up to 8 points, maxed at $10,000.
- Smart contract calls:     up to 8 points, maxed at 500 calls.
- Unique wallets:           up to 4 points, maxed at 100 wallets.

The point total maps to a RewardTier and a fixed USD payout.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from trust_engine.rewards.tier import RewardTier, derive_reward_tier, reward_for_tier
from trust_engine.scoring.buckets import BucketTable, bucket_points

logger = logging.getLogger(__name__)

VOLUME_TABLE = BucketTable(
    name="transaction_volume_usd",
    buckets=((100, 2), (1_000, 4), (5_000, 6), (10_000, 8)),
)
CONTRACT_CALLS_TABLE = BucketTable(
    name="smart_contract_calls",
    buckets=((50, 2), (100, 4), (250, 6), (500, 8)),
)
UNIQUE_WALLETS_TABLE = BucketTable(
    name="unique_wallets",
    buckets=((10, 1), (25, 2), (50, 3), (100, 4)),
)

ACTIVITY_TABLES: dict[str, BucketTable] = {
    table.name: table for table in (VOLUME_TABLE, CONTRACT_CALLS_TABLE, UNIQUE_WALLETS_TABLE)
}

MAX_ACTIVITY_POINTS = sum(table.max_points for table in ACTIVITY_TABLES.values())


class ActivityMetrics(BaseModel):
    """On-chain activity over the reward period.

    Missing or unparseable values count as zero.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    transaction_volume_usd: float = Field(
        default=0.0,
        validation_alias=AliasChoices(
            "transaction_volume_usd", "transactionVolumeUSD", "transactionVolume"
        ),
    )
    smart_contract_calls: float = Field(
        default=0.0,
        validation_alias=AliasChoices("smart_contract_calls", "smartContractCalls"),
    )
    unique_wallets: float = Field(
        default=0.0, validation_alias=AliasChoices("unique_wallets", "uniqueWallets")
    )

    @field_validator("*", mode="before")
    @classmethod
    def _missing_numbers_are_zero(cls, value: Any) -> float:
        if value is None or isinstance(value, bool):
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    def as_mapping(self) -> dict[str, float]:
        return {
            VOLUME_TABLE.name: self.transaction_volume_usd,
            CONTRACT_CALLS_TABLE.name: self.smart_contract_calls,
            UNIQUE_WALLETS_TABLE.name: self.unique_wallets,
        }


ActivityInput = Union[ActivityMetrics, Mapping[str, Any]]

# Activity used by the rewards demo.
DEMO_ACTIVITY = ActivityMetrics(
    transaction_volume_usd=15_420, smart_contract_calls=627, unique_wallets=100
)


@dataclass(frozen=True)
class RewardEstimate:
    """Estimated protocol reward for a period of on-chain activity."""

    points: int
    tier: RewardTier
    reward_usd: int
    breakdown: Mapping[str, int]

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        return {
            "points": self.points,
            "max_points": MAX_ACTIVITY_POINTS,
            "tier": self.tier.label,
            "reward_usd": self.reward_usd,
            "breakdown": dict(self.breakdown),
        }


@dataclass(frozen=True)
class RequirementGap:
    """Distance of one activity metric from its maximum-points threshold."""

    metric: str
    current: float
    target: float

    @property
    def shortfall(self) -> float:
        return max(0.0, self.target - self.current)

    @property
    def met(self) -> bool:
        return self.current >= self.target

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        return {
            "metric": self.metric,
            "current": self.current,
            "target": self.target,
            "shortfall": self.shortfall,
            "met": self.met,
        }


def _as_activity(activity: Optional[ActivityInput]) -> ActivityMetrics:
    if activity is None:
        return ActivityMetrics()
    if isinstance(activity, ActivityMetrics):
        return activity
    return ActivityMetrics.model_validate(dict(activity))


def estimate_reward(activity: Optional[ActivityInput]) -> RewardEstimate:
    """Estimate the reward tier and payout for a period of on-chain activity.

    Parameters
    ----------
    activity:
        ActivityMetrics or a plain mapping with volume, calls and wallets.

    Returns
    -------
    RewardEstimate
        Points (0 – 20), tier and USD reward.
    """
    metrics = _as_activity(activity)
    breakdown = {
        name: bucket_points(value, ACTIVITY_TABLES[name])
        for name, value in metrics.as_mapping().items()
    }
    points = sum(breakdown.values())
    tier = derive_reward_tier(points)
    reward = reward_for_tier(tier)
    logger.debug("Reward estimated: points=%d tier=%s reward=%d", points, tier.label, reward)
    return RewardEstimate(
        points=points, tier=tier, reward_usd=reward, breakdown=MappingProxyType(breakdown)
    )


def requirement_gaps(activity: Optional[ActivityInput]) -> list[RequirementGap]:
    """Report how far each metric is from earning its maximum points."""
    metrics = _as_activity(activity)
    gaps: list[RequirementGap] = []
    for name, value in metrics.as_mapping().items():
        table = ACTIVITY_TABLES[name]
        target = max(threshold for threshold, _ in table.buckets)
        gaps.append(RequirementGap(metric=name, current=value, target=target))
    return gaps

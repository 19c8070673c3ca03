"""Tier benefits — LTV limits and upgrade eligibility per display tier.

Each display tier carries a base loan-to-value limit and the activity an
agent needs before it can move up. ``max_ltv`` adjusts the base limit
for the agent's scores, its collateral and market conditions.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from trust_engine.credibility.scorer import AgentScore
from trust_engine.credibility.tier import CredibilityTier, derive_display_tier
from trust_engine.scoring.buckets import BucketTable, bucket_points, clamp

# Absolute LTV bounds (percent).
LTV_FLOOR = 20
LTV_CEILING = 85


class MarketCondition(str, Enum):
    """Market regime used to adjust LTV limits."""

    NORMAL = "normal"
    BULL = "bull"
    BEAR = "bear"
    VOLATILE = "volatile"


@dataclass(frozen=True)
class TierProfile:
    """Limits and upgrade requirements of a credibility tier."""

    tier: CredibilityTier
    emoji: str
    max_ltv: int
    min_score: int
    days_required: int
    transactions_required: int
    description: str
    benefits: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        return {
            "tier": self.tier.name,
            "name": self.tier.label,
            "emoji": self.emoji,
            "max_ltv": self.max_ltv,
            "min_score": self.min_score,
            "days_required": self.days_required,
            "transactions_required": self.transactions_required,
            "description": self.description,
            "benefits": list(self.benefits),
        }


TIER_PROFILES: dict[CredibilityTier, TierProfile] = {
    CredibilityTier.BRONZE: TierProfile(
        tier=CredibilityTier.BRONZE,
        emoji="🥉",
        max_ltv=40,
        min_score=0,
        days_required=0,
        transactions_required=0,
        description="Basic tier for new agents",
        benefits=("Access to basic lending", "Standard rates"),
    ),
    CredibilityTier.SILVER: TierProfile(
        tier=CredibilityTier.SILVER,
        emoji="🥈",
        max_ltv=50,
        min_score=60,
        days_required=30,
        transactions_required=2,
        description="Established agents with proven track record",
        benefits=("Higher LTV limits", "Better rates", "Priority support"),
    ),
    CredibilityTier.GOLD: TierProfile(
        tier=CredibilityTier.GOLD,
        emoji="🥇",
        max_ltv=60,
        min_score=70,
        days_required=90,
        transactions_required=10,
        description="High-performing agents with strong reputation",
        benefits=("Premium LTV limits", "Best rates", "VIP support", "Early access to new features"),
    ),
    CredibilityTier.PLATINUM: TierProfile(
        tier=CredibilityTier.PLATINUM,
        emoji="🏆",
        max_ltv=70,
        min_score=80,
        days_required=180,
        transactions_required=25,
        description="Elite agents with exceptional scores",
        benefits=("Elite LTV limits", "Premium rates", "Dedicated support", "Governance rights"),
    ),
    CredibilityTier.DIAMOND: TierProfile(
        tier=CredibilityTier.DIAMOND,
        emoji="💎",
        max_ltv=80,
        min_score=90,
        days_required=365,
        transactions_required=50,
        description="Top-tier agents with maximum trust",
        benefits=("Maximum LTV limits", "Elite rates", "Governance voting", "Revenue sharing"),
    ),
}

# Collateral value (USD) -> LTV bonus points.
COLLATERAL_BONUS_TABLE = BucketTable(
    name="collateral_usd",
    buckets=((100_000, 1), (500_000, 2), (1_000_000, 3)),
)

# Market regime -> (LTV adjustment, bound applied after adjusting).
MARKET_ADJUSTMENTS: dict[MarketCondition, tuple[int, int]] = {
    MarketCondition.NORMAL: (0, LTV_CEILING),
    MarketCondition.BULL: (2, 85),
    MarketCondition.BEAR: (-3, 20),
    MarketCondition.VOLATILE: (-2, 25),
}

# Remaining score gap -> estimated time to upgrade.
UPGRADE_TIME_ESTIMATES: tuple[tuple[int, str], ...] = (
    (0, "Score requirement met"),
    (5, "1-2 weeks"),
    (10, "2-4 weeks"),
    (15, "1-2 months"),
)


def max_ltv(
    score: AgentScore,
    tier: Optional[CredibilityTier] = None,
    collateral_usd: float = 0.0,
    market: MarketCondition = MarketCondition.NORMAL,
) -> int:
    """Return the maximum loan-to-value percentage for an agent.

    Parameters
    ----------
    score:
        The agent's credibility score.
    tier:
        Tier whose base LTV to start from. Defaults to the display tier of
        ``score.overall``.
    collateral_usd:
        Value of posted collateral in USD.
    market:
        Current market regime.

    Returns
    -------
    int
        LTV percentage within [LTV_FLOOR, LTV_CEILING].
    """
    current = tier if tier is not None else derive_display_tier(score.overall)
    ltv = TIER_PROFILES[current].max_ltv

    ltv += min(5, score.overall // 20)
    ltv += min(3, score.verification // 33)
    ltv += min(2, score.performance // 50)
    ltv += bucket_points(collateral_usd, COLLATERAL_BONUS_TABLE)

    adjustment, bound = MARKET_ADJUSTMENTS[MarketCondition(market)]
    ltv += adjustment
    if adjustment > 0:
        ltv = min(ltv, bound)
    elif adjustment < 0:
        ltv = max(ltv, bound)

    return int(clamp(ltv, LTV_FLOOR, LTV_CEILING))


def next_tier(tier: CredibilityTier) -> Optional[CredibilityTier]:
    """Return the tier directly above *tier*, or None at the top."""
    if tier == max(CredibilityTier):
        return None
    return CredibilityTier(tier + 1)


def estimate_upgrade_time(overall: float, target: Optional[CredibilityTier]) -> str:
    """Rough time estimate for *overall* to reach *target*'s minimum score."""
    if target is None:
        return "Already at highest tier"
    gap = TIER_PROFILES[target].min_score - overall
    for limit, label in UPGRADE_TIME_ESTIMATES:
        if gap <= limit:
            return label
    return "3+ months"


@dataclass(frozen=True)
class UpgradeEligibility:
    """Result of an upgrade eligibility check."""

    eligible: bool
    current_tier: CredibilityTier
    next_tier: Optional[CredibilityTier]
    missing_requirements: tuple[str, ...]
    estimated_time: str

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        return {
            "eligible": self.eligible,
            "current_tier": self.current_tier.name,
            "next_tier": self.next_tier.name if self.next_tier is not None else None,
            "missing_requirements": list(self.missing_requirements),
            "estimated_time": self.estimated_time,
        }


def check_upgrade_eligibility(
    score: AgentScore,
    current_tier: CredibilityTier,
    days_active: int,
    successful_transactions: int,
) -> UpgradeEligibility:
    """Check whether an agent meets the requirements of the next tier.

    Parameters
    ----------
    score:
        The agent's credibility score.
    current_tier:
        The agent's current tier.
    days_active:
        Days since the agent was registered.
    successful_transactions:
        Number of successful transactions to date.
    """
    target = next_tier(current_tier)
    if target is None:
        return UpgradeEligibility(
            eligible=False,
            current_tier=current_tier,
            next_tier=None,
            missing_requirements=("Already at highest tier",),
            estimated_time=estimate_upgrade_time(score.overall, None),
        )

    profile = TIER_PROFILES[target]
    missing: list[str] = []
    if score.overall < profile.min_score:
        missing.append(f"Score {score.overall}/{profile.min_score}+ required")
    if days_active < profile.days_required:
        missing.append(f"{days_active}/{profile.days_required} days active required")
    if successful_transactions < profile.transactions_required:
        missing.append(
            f"{successful_transactions}/{profile.transactions_required}+ "
            "successful transactions required"
        )

    return UpgradeEligibility(
        eligible=not missing,
        current_tier=current_tier,
        next_tier=target,
        missing_requirements=tuple(missing),
        estimated_time=estimate_upgrade_time(score.overall, target),
    )

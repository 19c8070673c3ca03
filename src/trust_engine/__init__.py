"""defi-trust-engine — trust and credibility scoring for a DeFi yield dashboard.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import trust_engine
>>> trust_engine.__version__
'0.1.0'

Quick start
-----------
::

    from trust_engine import (
        # Opportunity scoring
        OpportunityScorer, MetricsSnapshot, ScoringPolicy, RiskLevel,
        # Agent credibility
        AgentCredibilityScorer, CredibilityTier,
        # Protocol rewards
        estimate_reward, RewardTier,
        # Tracking
        OpportunityScoreTracker,
    )
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ------------------------------------------------------------------
# Opportunity scoring
# ------------------------------------------------------------------
from trust_engine.scoring.buckets import BucketTable, LinearBand, bucket_points
from trust_engine.scoring.calculator import (
    OpportunityScore,
    OpportunityScorer,
    ScoreBreakdown,
    score_opportunity,
)
from trust_engine.scoring.metrics import TGAS, MetricsSnapshot
from trust_engine.scoring.policy import SafetyMode, ScoringPolicy
from trust_engine.scoring.risk import RiskLevel, derive_risk_level

# ------------------------------------------------------------------
# Agent credibility
# ------------------------------------------------------------------
from trust_engine.credibility.benefits import (
    MarketCondition,
    check_upgrade_eligibility,
    max_ltv,
)
from trust_engine.credibility.dimensions import CredibilityDimension
from trust_engine.credibility.policy import CredibilityPolicy
from trust_engine.credibility.scorer import AgentCredibilityScorer, AgentScore
from trust_engine.credibility.tier import CredibilityTier, derive_display_tier, derive_tier

# ------------------------------------------------------------------
# Protocol rewards
# ------------------------------------------------------------------
from trust_engine.rewards.calculator import ActivityMetrics, RewardEstimate, estimate_reward
from trust_engine.rewards.tier import RewardTier, derive_reward_tier

# ------------------------------------------------------------------
# Opportunity tracking
# ------------------------------------------------------------------
from trust_engine.tracker.record import OpportunityCategory, OpportunityScoreRecord, Trend
from trust_engine.tracker.simulation import simulate_metrics
from trust_engine.tracker.tracker import OpportunityNotFoundError, OpportunityScoreTracker

__all__ = [
    # version
    "__version__",
    # opportunity scoring
    "BucketTable",
    "LinearBand",
    "MetricsSnapshot",
    "OpportunityScore",
    "OpportunityScorer",
    "RiskLevel",
    "SafetyMode",
    "ScoreBreakdown",
    "ScoringPolicy",
    "TGAS",
    "bucket_points",
    "derive_risk_level",
    "score_opportunity",
    # agent credibility
    "AgentCredibilityScorer",
    "AgentScore",
    "CredibilityDimension",
    "CredibilityPolicy",
    "CredibilityTier",
    "MarketCondition",
    "check_upgrade_eligibility",
    "derive_display_tier",
    "derive_tier",
    "max_ltv",
    # protocol rewards
    "ActivityMetrics",
    "RewardEstimate",
    "RewardTier",
    "derive_reward_tier",
    "estimate_reward",
    # tracking
    "OpportunityCategory",
    "OpportunityNotFoundError",
    "OpportunityScoreRecord",
    "OpportunityScoreTracker",
    "Trend",
    "simulate_metrics",
]

"""Agent credibility scoring.

Credibility is computed across four dimensions — provenance, performance,
perception and verification — and aggregated into an overall score with a
confidence estimate. The overall score maps to a CredibilityTier through
one of two named boundary tables.
"""
from __future__ import annotations

from trust_engine.credibility.benefits import (
    TIER_PROFILES,
    MarketCondition,
    TierProfile,
    UpgradeEligibility,
    check_upgrade_eligibility,
    max_ltv,
    next_tier,
)
from trust_engine.credibility.confidence import (
    ConfidenceFactors,
    derive_confidence_factors,
    weighted_confidence,
)
from trust_engine.credibility.dimensions import (
    CONFIDENCE_WEIGHTS,
    ENHANCED_WEIGHTS,
    LEGACY_WEIGHTS,
    ConfidenceFactor,
    CredibilityDimension,
)
from trust_engine.credibility.policy import CredibilityPolicy
from trust_engine.credibility.scorer import AgentCredibilityScorer, AgentScore
from trust_engine.credibility.tier import (
    ASSIGNMENT_TIER_THRESHOLDS,
    DISPLAY_TIER_THRESHOLDS,
    CredibilityTier,
    derive_display_tier,
    derive_tier,
)

__all__ = [
    "ASSIGNMENT_TIER_THRESHOLDS",
    "AgentCredibilityScorer",
    "AgentScore",
    "CONFIDENCE_WEIGHTS",
    "ConfidenceFactor",
    "ConfidenceFactors",
    "CredibilityDimension",
    "CredibilityPolicy",
    "CredibilityTier",
    "DISPLAY_TIER_THRESHOLDS",
    "ENHANCED_WEIGHTS",
    "LEGACY_WEIGHTS",
    "MarketCondition",
    "TIER_PROFILES",
    "TierProfile",
    "UpgradeEligibility",
    "check_upgrade_eligibility",
    "derive_confidence_factors",
    "derive_display_tier",
    "derive_tier",
    "max_ltv",
    "next_tier",
    "weighted_confidence",
]

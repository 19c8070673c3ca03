"""CredibilityDimension and ConfidenceFactor enums with their weight tables.

Four dimensions contribute to the overall credibility score:
- Provenance:   audit recency, source-code verification, deployment chain.
- Performance:  historical consistency and risk-adjusted returns.
- Perception:   reputation with users and counterparties.
- Verification: share of verification methods that passed.
"""
from __future__ import annotations

from enum import Enum


class CredibilityDimension(str, Enum):
    """The four axes of agent credibility measurement."""

    PROVENANCE = "provenance"
    PERFORMANCE = "performance"
    PERCEPTION = "perception"
    VERIFICATION = "verification"


class ConfidenceFactor(str, Enum):
    """Data-quality signals behind the confidence estimate."""

    DATA_QUALITY = "data_quality"
    SCORING_CONSISTENCY = "scoring_consistency"
    VERIFICATION_COVERAGE = "verification_coverage"
    HISTORICAL_STABILITY = "historical_stability"


# Default contribution weights for the overall score.
# Must sum to 1.0.
ENHANCED_WEIGHTS: dict[CredibilityDimension, float] = {
    CredibilityDimension.PROVENANCE: 0.35,
    CredibilityDimension.PERFORMANCE: 0.30,
    CredibilityDimension.PERCEPTION: 0.20,
    CredibilityDimension.VERIFICATION: 0.15,
}

# Three-dimension weighting used before verification was scored.
LEGACY_WEIGHTS: dict[CredibilityDimension, float] = {
    CredibilityDimension.PROVENANCE: 0.40,
    CredibilityDimension.PERFORMANCE: 0.40,
    CredibilityDimension.PERCEPTION: 0.20,
    CredibilityDimension.VERIFICATION: 0.0,
}

# Contribution of each factor to the confidence estimate.
# Must sum to 1.0.
CONFIDENCE_WEIGHTS: dict[ConfidenceFactor, float] = {
    ConfidenceFactor.DATA_QUALITY: 0.40,
    ConfidenceFactor.SCORING_CONSISTENCY: 0.30,
    ConfidenceFactor.VERIFICATION_COVERAGE: 0.20,
    ConfidenceFactor.HISTORICAL_STABILITY: 0.10,
}

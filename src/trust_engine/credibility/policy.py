"""CredibilityPolicy — configurable weights and tier boundaries.

Alternate weighting schemes are swapped in by constructing a different
policy, never by editing the calculator.
"""
from __future__ import annotations

from pydantic import BaseModel, Field

from trust_engine.credibility.dimensions import (
    CONFIDENCE_WEIGHTS,
    ENHANCED_WEIGHTS,
    ConfidenceFactor,
    CredibilityDimension,
)
from trust_engine.credibility.tier import ASSIGNMENT_TIER_THRESHOLDS, CredibilityTier


class CredibilityPolicy(BaseModel):
    """Configurable agent credibility scoring policy.

    Parameters
    ----------
    weights:
        Fractional weight of each dimension in the overall score.
        Values must sum to 1.0.
    confidence_weights:
        Fractional weight of each factor in the confidence estimate.
        Values must sum to 1.0.
    tier_thresholds:
        Minimum overall score per tier.
    min_score:
        Floor for sub-scores, overall and confidence.
    max_score:
        Ceiling for sub-scores, overall and confidence.
    """

    weights: dict[CredibilityDimension, float] = Field(
        default_factory=lambda: dict(ENHANCED_WEIGHTS)
    )
    confidence_weights: dict[ConfidenceFactor, float] = Field(
        default_factory=lambda: dict(CONFIDENCE_WEIGHTS)
    )
    tier_thresholds: dict[CredibilityTier, float] = Field(
        default_factory=lambda: dict(ASSIGNMENT_TIER_THRESHOLDS)
    )
    min_score: float = 0.0
    max_score: float = 100.0

    model_config = {"arbitrary_types_allowed": True}

    def validate_weights(self) -> None:
        """Raise ValueError if either weight table does not sum to 1.0."""
        for label, table in (
            ("Dimension", self.weights),
            ("Confidence", self.confidence_weights),
        ):
            total = sum(table.values())
            if abs(total - 1.0) > 1e-6:
                raise ValueError(f"{label} weights must sum to 1.0, got {total:.6f}")
        if not self.tier_thresholds:
            raise ValueError("tier_thresholds must define at least one tier")

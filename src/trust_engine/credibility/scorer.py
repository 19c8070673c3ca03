"""AgentCredibilityScorer — weighted credibility scoring for autonomous agents.

Computes a weighted overall score from four sub-scores (provenance,
performance, perception, verification), a separate confidence estimate,
and the CredibilityTier the overall score maps to. The sub-scores
themselves are produced by the caller.
"""
from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import Optional

from trust_engine.credibility.confidence import (
    ConfidenceFactors,
    derive_confidence_factors,
    weighted_confidence,
)
from trust_engine.credibility.dimensions import CredibilityDimension
from trust_engine.credibility.policy import CredibilityPolicy
from trust_engine.credibility.tier import CredibilityTier, derive_display_tier, derive_tier
from trust_engine.scoring.buckets import clamp, round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentScore:
    """Computed credibility score for a single agent at a point in time.

    Parameters
    ----------
    provenance, performance, perception, verification:
        Clamped sub-scores (0 – 100).
    overall:
        Weighted overall score (0 – 100).
    confidence:
        Confidence estimate (0 – 100).
    tier:
        CredibilityTier derived from ``overall`` with the policy's table.
    computed_at:
        UTC datetime when this score was computed.
    """

    provenance: int
    performance: int
    perception: int
    verification: int
    overall: int
    confidence: int
    tier: CredibilityTier
    computed_at: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc),
        compare=False,
    )

    @property
    def display_tier(self) -> CredibilityTier:
        """Tier under the display boundary table."""
        return derive_display_tier(self.overall)

    def sub_scores(self) -> dict[CredibilityDimension, int]:
        return {
            CredibilityDimension.PROVENANCE: self.provenance,
            CredibilityDimension.PERFORMANCE: self.performance,
            CredibilityDimension.PERCEPTION: self.perception,
            CredibilityDimension.VERIFICATION: self.verification,
        }

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        return {
            "provenance": self.provenance,
            "performance": self.performance,
            "perception": self.perception,
            "verification": self.verification,
            "overall": self.overall,
            "confidence": self.confidence,
            "tier": self.tier.name,
            "display_tier": self.display_tier.name,
            "computed_at": self.computed_at.isoformat(),
        }


class AgentCredibilityScorer:
    """Weighted agent credibility scorer.

    Parameters
    ----------
    policy:
        Credibility policy defining weights, confidence weights and tier
        thresholds. Defaults to the standard policy.
    """

    def __init__(self, policy: Optional[CredibilityPolicy] = None) -> None:
        self._policy: CredibilityPolicy = (
            policy if policy is not None else CredibilityPolicy()
        )
        self._policy.validate_weights()

    @property
    def policy(self) -> CredibilityPolicy:
        return self._policy

    def score(
        self,
        provenance: Optional[float],
        performance: Optional[float],
        perception: Optional[float],
        verification: Optional[float] = 0.0,
        quality: Optional[ConfidenceFactors] = None,
    ) -> AgentScore:
        """Compute an AgentScore from four sub-scores.

        Missing or NaN sub-scores count as 0 and every sub-score is clamped
        to [min_score, max_score] before weighting. The overall score and
        the confidence are rounded half-up and clamped to the same range.

        Parameters
        ----------
        provenance, performance, perception, verification:
            Raw sub-scores (0 – 100).
        quality:
            Caller-tracked confidence factors. When omitted, they are
            estimated from the sub-scores.

        Returns
        -------
        AgentScore
        """
        policy = self._policy
        min_s = policy.min_score
        max_s = policy.max_score

        clamped: dict[CredibilityDimension, float] = {}
        raw = {
            CredibilityDimension.PROVENANCE: provenance,
            CredibilityDimension.PERFORMANCE: performance,
            CredibilityDimension.PERCEPTION: perception,
            CredibilityDimension.VERIFICATION: verification,
        }
        for dim in CredibilityDimension:
            value = raw[dim]
            clamped[dim] = clamp(float(value) if value is not None else 0.0, min_s, max_s)

        overall_raw = sum(
            clamped[dim] * policy.weights.get(dim, 0.0) for dim in CredibilityDimension
        )
        overall = int(clamp(round_half_up(overall_raw), min_s, max_s))

        factors = quality
        if factors is None:
            factors = derive_confidence_factors(
                clamped[CredibilityDimension.PROVENANCE],
                clamped[CredibilityDimension.PERFORMANCE],
                clamped[CredibilityDimension.PERCEPTION],
                clamped[CredibilityDimension.VERIFICATION],
            )
        confidence = weighted_confidence(factors, policy.confidence_weights, min_s, max_s)

        tier = derive_tier(overall, policy.tier_thresholds)
        logger.debug(
            "Agent credibility scored: overall=%d confidence=%d tier=%s",
            overall,
            confidence,
            tier.name,
        )

        return AgentScore(
            provenance=round_half_up(clamped[CredibilityDimension.PROVENANCE]),
            performance=round_half_up(clamped[CredibilityDimension.PERFORMANCE]),
            perception=round_half_up(clamped[CredibilityDimension.PERCEPTION]),
            verification=round_half_up(clamped[CredibilityDimension.VERIFICATION]),
            overall=overall,
            confidence=confidence,
            tier=tier,
        )

"""Confidence estimate for an agent credibility score.

Confidence is a weighted sum over four data-quality factors, each on a
0 – 100 scale. Callers that track the factors themselves pass them in
directly; otherwise ``derive_confidence_factors`` estimates them from the
sub-scores alone.
"""
from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Mapping

from trust_engine.credibility.dimensions import ConfidenceFactor
from trust_engine.scoring.buckets import clamp, round_half_up

# Raw point ceilings of the derived factors before normalisation to 0 – 100.
_DATA_QUALITY_MAX = 40.0
_CONSISTENCY_MAX = 30.0
_STABILITY_MAX = 10.0


@dataclass(frozen=True)
class ConfidenceFactors:
    """Signal-quality metrics behind a credibility score (each 0 – 100).

    Parameters
    ----------
    data_quality:
        How complete and valid the underlying data is.
    scoring_consistency:
        How closely the sub-scores agree with each other.
    verification_coverage:
        Fraction of verification methods that passed, as a percentage.
    historical_stability:
        How stable the scores have been over time.
    """

    data_quality: float = 0.0
    scoring_consistency: float = 0.0
    verification_coverage: float = 0.0
    historical_stability: float = 0.0

    def as_mapping(self) -> dict[ConfidenceFactor, float]:
        return {
            ConfidenceFactor.DATA_QUALITY: self.data_quality,
            ConfidenceFactor.SCORING_CONSISTENCY: self.scoring_consistency,
            ConfidenceFactor.VERIFICATION_COVERAGE: self.verification_coverage,
            ConfidenceFactor.HISTORICAL_STABILITY: self.historical_stability,
        }

    def to_dict(self) -> dict[str, float]:
        """Serialize to a plain dictionary."""
        return {factor.value: value for factor, value in self.as_mapping().items()}


def weighted_confidence(
    factors: ConfidenceFactors,
    weights: Mapping[ConfidenceFactor, float],
    min_score: float = 0.0,
    max_score: float = 100.0,
) -> int:
    """Combine *factors* with *weights* into a rounded, clamped confidence value."""
    total = 0.0
    for factor, value in factors.as_mapping().items():
        total += clamp(value, min_score, max_score) * weights.get(factor, 0.0)
    return int(clamp(round_half_up(total), min_score, max_score))


def derive_confidence_factors(
    provenance: float,
    performance: float,
    perception: float,
    verification: float,
) -> ConfidenceFactors:
    """Estimate confidence factors from the four sub-scores.

    - Data quality: 20 points when every sub-score is present (15 without
      verification, 10 with only provenance and performance) plus up to 20
      for sub-scores inside 0 – 100.
    - Consistency: 30 points minus the coefficient of variation (in percent)
      of the non-zero sub-scores.
    - Verification coverage: the verification sub-score itself.
    - Stability: 10 points minus half the standard deviation of the non-zero
      provenance / performance / perception scores.

    Each factor is then normalised to 0 – 100.
    """
    scores = [provenance, performance, perception, verification]

    completeness = 0.0
    if all(s > 0 for s in scores):
        completeness = 20.0
    elif provenance > 0 and performance > 0 and perception > 0:
        completeness = 15.0
    elif provenance > 0 and performance > 0:
        completeness = 10.0
    valid = [s for s in scores if 0 <= s <= 100]
    validity = len(valid) / len(scores) * 20.0
    data_quality = min(_DATA_QUALITY_MAX, completeness + validity)

    consistency = 0.0
    present = [s for s in scores if s > 0]
    if len(present) >= 2:
        mean = statistics.fmean(present)
        variation = statistics.pstdev(present) / mean
        consistency = clamp(_CONSISTENCY_MAX - variation * 100.0, 0.0, _CONSISTENCY_MAX)

    coverage = clamp(verification, 0.0, 100.0)

    stability = 0.0
    core = [s for s in (provenance, performance, perception) if s > 0]
    if len(core) >= 2:
        stability = clamp(
            _STABILITY_MAX - statistics.pstdev(core) * 0.5, 0.0, _STABILITY_MAX
        )

    return ConfidenceFactors(
        data_quality=data_quality / _DATA_QUALITY_MAX * 100.0,
        scoring_consistency=consistency / _CONSISTENCY_MAX * 100.0,
        verification_coverage=coverage,
        historical_stability=stability / _STABILITY_MAX * 100.0,
    )


__all__ = [
    "ConfidenceFactors",
    "derive_confidence_factors",
    "weighted_confidence",
]

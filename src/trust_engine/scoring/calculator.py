"""OpportunityScorer — 0 – 100 trust score for a yield opportunity.

Combines three bounded sub-scores:

- Performance (0 – 40): realised APY through the APY bands.
- Reliability (0 – 40): intent success rate, gas efficiency and latency.
- Safety      (0 – 20): audit status, recent-audit bonus and incidents.

The total maps to a RiskLevel via the thresholds in scoring.risk. Scoring
never raises for bad data; degraded inputs produce degraded scores.
"""
from __future__ import annotations

import datetime
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from trust_engine.scoring.buckets import band_points, bucket_points, clamp, linear_points
from trust_engine.scoring.metrics import MetricsSnapshot
from trust_engine.scoring.policy import SafetyMode, ScoringPolicy
from trust_engine.scoring.risk import RiskLevel, derive_risk_level

logger = logging.getLogger(__name__)

MetricsInput = Union[MetricsSnapshot, Mapping[str, Any]]


@dataclass(frozen=True)
class ScoreBreakdown:
    """Sub-scores of an opportunity trust score.

    ``total`` always equals ``performance + reliability + safety``.
    """

    performance: int
    reliability: int
    safety: int
    total: int

    def to_dict(self) -> dict[str, int]:
        """Serialize to a plain dictionary."""
        return {
            "performance": self.performance,
            "reliability": self.reliability,
            "safety": self.safety,
            "total": self.total,
        }


@dataclass(frozen=True)
class OpportunityScore:
    """A ScoreBreakdown together with the RiskLevel it maps to."""

    breakdown: ScoreBreakdown
    risk_level: RiskLevel

    @property
    def total(self) -> int:
        return self.breakdown.total

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        display = self.risk_level.display
        return {
            **self.breakdown.to_dict(),
            "risk_level": self.risk_level.label,
            "emoji": display.emoji,
            "color": display.color,
            "description": display.description,
        }


def _as_snapshot(metrics: Optional[MetricsInput]) -> MetricsSnapshot:
    if metrics is None:
        return MetricsSnapshot()
    if isinstance(metrics, MetricsSnapshot):
        return metrics
    return MetricsSnapshot.from_mapping(metrics)


def _positive(value: float) -> bool:
    return not math.isnan(value) and value > 0.0


class OpportunityScorer:
    """Opportunity trust scorer.

    Parameters
    ----------
    policy:
        Scoring policy with caps, bucket tables and safety rules.
        Defaults to the standard policy.
    """

    def __init__(self, policy: Optional[ScoringPolicy] = None) -> None:
        self._policy: ScoringPolicy = policy if policy is not None else ScoringPolicy()
        self._policy.validate_caps()

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(
        self,
        metrics: Optional[MetricsInput],
        as_of: Optional[datetime.date] = None,
    ) -> OpportunityScore:
        """Compute the trust score of an opportunity.

        Parameters
        ----------
        metrics:
            A MetricsSnapshot or a plain mapping of metric values.
        as_of:
            Reference date for the DATED safety mode. Defaults to today (UTC).

        Returns
        -------
        OpportunityScore
            Breakdown and risk level. An empty snapshot yields all zeros
            and CAUTION.
        """
        snapshot = _as_snapshot(metrics)
        policy = self._policy

        performance = self.performance_points(snapshot)
        reliability = self.reliability_points(snapshot)
        safety = self.safety_points(snapshot, as_of=as_of)
        total = int(clamp(performance + reliability + safety, 0, policy.total_cap))

        breakdown = ScoreBreakdown(
            performance=performance,
            reliability=reliability,
            safety=safety,
            total=total,
        )
        risk_level = derive_risk_level(total, policy.risk_thresholds)
        logger.debug(
            "Score calculated: performance=%d reliability=%d safety=%d total=%d risk=%s",
            performance,
            reliability,
            safety,
            total,
            risk_level.label,
        )
        return OpportunityScore(breakdown=breakdown, risk_level=risk_level)

    def score_batch(
        self,
        items: Iterable[MetricsInput],
        as_of: Optional[datetime.date] = None,
    ) -> list[OpportunityScore]:
        """Score several opportunities, preserving input order."""
        return [self.score(item, as_of=as_of) for item in items]

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def performance_points(self, metrics: MetricsSnapshot) -> int:
        """Performance sub-score from the best available APY figure.

        Prefers the 30-day APY, then the 7-day APY, then (if the policy
        allows it) the target APY. Nothing positive scores 0.
        """
        policy = self._policy
        apy = 0.0
        candidates = [metrics.apy_30d, metrics.apy_7d]
        if policy.use_target_apy_fallback:
            candidates.append(metrics.target_apy)
        for candidate in candidates:
            if _positive(candidate):
                apy = candidate
                break
        points = band_points(apy, policy.apy_bands)
        return int(clamp(points, 0, policy.performance_cap))

    def reliability_points(self, metrics: MetricsSnapshot) -> int:
        """Reliability sub-score: success rate + gas efficiency + latency."""
        policy = self._policy
        if (
            policy.min_intents_for_reliability > 0
            and metrics.total_intents < policy.min_intents_for_reliability
        ):
            return int(clamp(policy.insufficient_data_reliability, 0, policy.reliability_cap))

        success = linear_points(metrics.success_rate_pct, policy.success_rate_points)
        # Zero gas / latency means "not measured", not "free and instant".
        gas = (
            bucket_points(metrics.avg_gas_used, policy.gas_table)
            if _positive(metrics.avg_gas_used)
            else policy.gas_table.floor
        )
        latency = (
            bucket_points(metrics.avg_latency_ms, policy.latency_table)
            if _positive(metrics.avg_latency_ms)
            else policy.latency_table.floor
        )
        return int(clamp(success + gas + latency, 0, policy.reliability_cap))

    def safety_points(
        self,
        metrics: MetricsSnapshot,
        as_of: Optional[datetime.date] = None,
    ) -> int:
        """Safety sub-score from audit and incident status.

        In SIMPLE mode the recent-audit bonus is granted to every audited
        opportunity regardless of ``audit_date``.
        """
        policy = self._policy
        dated = policy.safety_mode == SafetyMode.DATED
        today = as_of if as_of is not None else datetime.datetime.now(
            datetime.timezone.utc
        ).date()

        score = 0
        if metrics.is_audited:
            score += policy.audit_points
            if not dated:
                score += policy.recent_audit_bonus
            elif metrics.audit_date is not None:
                months = self._months_between(metrics.audit_date, today)
                score += bucket_points(months, policy.audit_recency_table)

        if metrics.has_incidents:
            score -= policy.incident_penalty
            if dated and metrics.last_incident_date is not None:
                months = self._months_between(metrics.last_incident_date, today)
                score -= bucket_points(months, policy.incident_recency_table)

        return int(clamp(score, 0, policy.safety_cap))

    # ------------------------------------------------------------------
    # Transparency
    # ------------------------------------------------------------------

    def explain(self) -> dict[str, object]:
        """Describe the scoring rules for display alongside a score."""
        policy = self._policy
        bands: dict[str, dict[str, object]] = {}
        ordered = sorted(policy.risk_thresholds.items(), key=lambda kv: kv[1])
        for index, (level, threshold) in enumerate(ordered):
            upper = (
                ordered[index + 1][1] - 1 if index + 1 < len(ordered) else policy.total_cap
            )
            bands[level.name.lower()] = {
                "min": max(0, int(threshold)) if threshold != float("-inf") else 0,
                "max": int(upper),
                "emoji": level.display.emoji,
                "description": level.display.description,
            }
        return {
            "total_max_score": policy.total_cap,
            "breakdown": {
                "performance": {
                    "max_score": policy.performance_cap,
                    "description": "Based on actual APY performance (7d/30d)",
                },
                "reliability": {
                    "max_score": policy.reliability_cap,
                    "description": "Based on intent success rate, gas efficiency, latency",
                    "components": {
                        "success_rate": policy.success_rate_points,
                        "gas": policy.gas_table.max_points,
                        "latency": policy.latency_table.max_points,
                    },
                },
                "safety": {
                    "max_score": policy.safety_cap,
                    "description": "Based on audit status and incident history",
                    "mode": policy.safety_mode.value,
                },
            },
            "risk_levels": bands,
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _months_between(self, earlier: datetime.date, later: datetime.date) -> float:
        days = (later - earlier).days
        # Future-dated audits count as brand new.
        return max(0.0, days / self._policy.days_per_month)


_DEFAULT_SCORER: Optional[OpportunityScorer] = None


def score_opportunity(
    metrics: Optional[MetricsInput],
    as_of: Optional[datetime.date] = None,
) -> OpportunityScore:
    """Score *metrics* with the default policy."""
    global _DEFAULT_SCORER
    if _DEFAULT_SCORER is None:
        _DEFAULT_SCORER = OpportunityScorer()
    return _DEFAULT_SCORER.score(metrics, as_of=as_of)

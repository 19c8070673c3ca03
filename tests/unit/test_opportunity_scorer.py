"""Unit tests for trust_engine.scoring.calculator — OpportunityScorer."""
from __future__ import annotations

import datetime
import itertools

import pytest

from trust_engine.scoring.calculator import (
    OpportunityScore,
    OpportunityScorer,
    ScoreBreakdown,
    score_opportunity,
)
from trust_engine.scoring.metrics import TGAS, MetricsSnapshot
from trust_engine.scoring.policy import SafetyMode, ScoringPolicy
from trust_engine.scoring.risk import RiskLevel


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def scorer() -> OpportunityScorer:
    return OpportunityScorer()


@pytest.fixture()
def dated_scorer() -> OpportunityScorer:
    return OpportunityScorer(ScoringPolicy(safety_mode=SafetyMode.DATED))


@pytest.fixture()
def staking_pool() -> MetricsSnapshot:
    return MetricsSnapshot(
        apy_30d=12.2,
        success_rate_pct=95.5,
        avg_gas_used=45 * TGAS,
        avg_latency_ms=1800,
        is_audited=True,
        has_incidents=False,
    )


def _assert_bounded(breakdown: ScoreBreakdown) -> None:
    assert 0 <= breakdown.performance <= 40
    assert 0 <= breakdown.reliability <= 40
    assert 0 <= breakdown.safety <= 20
    assert 0 <= breakdown.total <= 100
    assert breakdown.total == breakdown.performance + breakdown.reliability + breakdown.safety


# ---------------------------------------------------------------------------
# Worked examples
# ---------------------------------------------------------------------------


class TestWorkedExamples:
    def test_staking_pool_breakdown(
        self, scorer: OpportunityScorer, staking_pool: MetricsSnapshot
    ) -> None:
        result = scorer.score(staking_pool)
        assert result.breakdown == ScoreBreakdown(
            performance=24, reliability=33, safety=18, total=75
        )
        assert result.risk_level == RiskLevel.MODERATE

    def test_camel_case_mapping_scores_the_same(
        self, scorer: OpportunityScorer, staking_pool: MetricsSnapshot
    ) -> None:
        mapping = {
            "apy30d": 12.2,
            "successRate": 95.5,
            "avgGasUsed": 45 * TGAS,
            "avgLatency": 1800,
            "isAudited": True,
            "hasIncidents": False,
        }
        assert scorer.score(mapping) == scorer.score(staking_pool)

    def test_audited_pool_with_incidents(self, scorer: OpportunityScorer) -> None:
        result = scorer.score(
            {
                "apy30d": 8.1,
                "successRate": 92.3,
                "avgGasUsed": 35 * TGAS,
                "avgLatency": 2200,
                "isAudited": True,
                "hasIncidents": True,
            }
        )
        assert result.breakdown == ScoreBreakdown(
            performance=16, reliability=34, safety=13, total=63
        )

    def test_unaudited_pool(self, scorer: OpportunityScorer) -> None:
        result = scorer.score(
            {
                "apy30d": 14.9,
                "successRate": 88.7,
                "avgGasUsed": 60 * TGAS,
                "avgLatency": 3200,
            }
        )
        assert result.breakdown == ScoreBreakdown(
            performance=29, reliability=28, safety=0, total=57
        )

    def test_best_possible_simple_score(self, scorer: OpportunityScorer) -> None:
        result = scorer.score(
            MetricsSnapshot(
                apy_30d=25.0,
                success_rate_pct=100.0,
                avg_gas_used=10 * TGAS,
                avg_latency_ms=500,
                is_audited=True,
            )
        )
        assert result.breakdown == ScoreBreakdown(
            performance=40, reliability=40, safety=18, total=98
        )
        assert result.risk_level == RiskLevel.PREFERRED


# ---------------------------------------------------------------------------
# Missing data
# ---------------------------------------------------------------------------


class TestMissingData:
    @pytest.mark.parametrize("metrics", [None, {}, MetricsSnapshot()])
    def test_empty_metrics_score_zero(self, scorer: OpportunityScorer, metrics: object) -> None:
        result = scorer.score(metrics)  # type: ignore[arg-type]
        assert result.breakdown == ScoreBreakdown(0, 0, 0, 0)
        assert result.risk_level == RiskLevel.CAUTION

    def test_nan_metrics_score_zero(self, scorer: OpportunityScorer) -> None:
        nan = float("nan")
        result = scorer.score(
            MetricsSnapshot(
                apy_30d=nan, success_rate_pct=nan, avg_gas_used=nan, avg_latency_ms=nan
            )
        )
        assert result.total == 0

    def test_zero_gas_and_latency_are_unmeasured(self, scorer: OpportunityScorer) -> None:
        assert scorer.reliability_points(MetricsSnapshot(success_rate_pct=100.0)) == 25

    def test_success_rate_above_hundred_is_capped(self, scorer: OpportunityScorer) -> None:
        assert scorer.reliability_points(MetricsSnapshot(success_rate_pct=150.0)) == 25

    @pytest.mark.parametrize(
        "metrics", [MetricsSnapshot(apy_30d=float("inf")), {"apy30d": "1e999"}]
    )
    def test_infinite_apy_scores_full_performance(
        self, scorer: OpportunityScorer, metrics: object
    ) -> None:
        result = scorer.score(metrics)  # type: ignore[arg-type]
        assert result.breakdown.performance == 40
        assert 0 <= result.total <= 100


# ---------------------------------------------------------------------------
# Performance sub-score
# ---------------------------------------------------------------------------


class TestPerformancePoints:
    def test_falls_back_to_seven_day_apy(self, scorer: OpportunityScorer) -> None:
        assert scorer.performance_points(MetricsSnapshot(apy_7d=12.2)) == 24

    def test_thirty_day_apy_preferred(self, scorer: OpportunityScorer) -> None:
        assert scorer.performance_points(MetricsSnapshot(apy_7d=20.0, apy_30d=5.0)) == 10

    def test_target_apy_ignored_by_default(self, scorer: OpportunityScorer) -> None:
        assert scorer.performance_points(MetricsSnapshot(target_apy=8.0)) == 0

    def test_target_apy_fallback_when_enabled(self) -> None:
        scorer = OpportunityScorer(ScoringPolicy(use_target_apy_fallback=True))
        assert scorer.performance_points(MetricsSnapshot(target_apy=8.0)) == 16


# ---------------------------------------------------------------------------
# Reliability sub-score
# ---------------------------------------------------------------------------


class TestReliabilityPoints:
    def test_insufficient_intents_rule_disabled_by_default(
        self, scorer: OpportunityScorer, staking_pool: MetricsSnapshot
    ) -> None:
        assert scorer.reliability_points(staking_pool) == 33

    def test_insufficient_intents_get_fixed_score(self, staking_pool: MetricsSnapshot) -> None:
        scorer = OpportunityScorer(ScoringPolicy(min_intents_for_reliability=10))
        few = staking_pool.model_copy(update={"total_intents": 5})
        assert scorer.reliability_points(few) == 15

    def test_enough_intents_are_scored(self, staking_pool: MetricsSnapshot) -> None:
        scorer = OpportunityScorer(ScoringPolicy(min_intents_for_reliability=10))
        enough = staking_pool.model_copy(update={"total_intents": 10})
        assert scorer.reliability_points(enough) == 33


# ---------------------------------------------------------------------------
# Safety sub-score
# ---------------------------------------------------------------------------


class TestSafetyPoints:
    def test_simple_mode_grants_recent_audit_bonus(self, scorer: OpportunityScorer) -> None:
        assert scorer.safety_points(MetricsSnapshot(is_audited=True)) == 18

    def test_incident_penalty(self, scorer: OpportunityScorer) -> None:
        snapshot = MetricsSnapshot(is_audited=True, has_incidents=True)
        assert scorer.safety_points(snapshot) == 13

    def test_safety_never_negative(self, scorer: OpportunityScorer) -> None:
        assert scorer.safety_points(MetricsSnapshot(has_incidents=True)) == 0

    def test_dated_mode_recent_audit(self, dated_scorer: OpportunityScorer) -> None:
        snapshot = MetricsSnapshot(is_audited=True, audit_date="2024-01-15")
        assert dated_scorer.safety_points(snapshot, as_of=datetime.date(2024, 3, 15)) == 18

    def test_dated_mode_old_audit(self, dated_scorer: OpportunityScorer) -> None:
        snapshot = MetricsSnapshot(is_audited=True, audit_date="2023-01-01")
        assert dated_scorer.safety_points(snapshot, as_of=datetime.date(2024, 3, 15)) == 16

    def test_dated_mode_very_old_audit(self, dated_scorer: OpportunityScorer) -> None:
        snapshot = MetricsSnapshot(is_audited=True, audit_date="2020-01-01")
        assert dated_scorer.safety_points(snapshot, as_of=datetime.date(2024, 3, 15)) == 15

    def test_dated_mode_without_audit_date(self, dated_scorer: OpportunityScorer) -> None:
        snapshot = MetricsSnapshot(is_audited=True)
        assert dated_scorer.safety_points(snapshot, as_of=datetime.date(2024, 3, 15)) == 15

    def test_dated_mode_recent_incident(self, dated_scorer: OpportunityScorer) -> None:
        snapshot = MetricsSnapshot(
            is_audited=True, has_incidents=True, last_incident_date="2024-02-01"
        )
        assert dated_scorer.safety_points(snapshot, as_of=datetime.date(2024, 3, 15)) == 7

    def test_dated_mode_future_audit_counts_as_new(self, dated_scorer: OpportunityScorer) -> None:
        snapshot = MetricsSnapshot(is_audited=True, audit_date="2030-01-01")
        assert dated_scorer.safety_points(snapshot, as_of=datetime.date(2024, 3, 15)) == 18


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestScoreProperties:
    def test_bounds_hold_over_a_grid(self, scorer: OpportunityScorer) -> None:
        grid = itertools.product(
            [0.0, 3.0, 12.2, 18.0, 60.0],
            [0.0, 50.0, 95.5, 120.0],
            [0.0, 15 * TGAS, 45 * TGAS, 200 * TGAS],
            [0.0, 800.0, 4_000.0, 20_000.0],
            [True, False],
            [True, False],
        )
        for apy, success, gas, latency, audited, incidents in grid:
            result = scorer.score(
                MetricsSnapshot(
                    apy_30d=apy,
                    success_rate_pct=success,
                    avg_gas_used=gas,
                    avg_latency_ms=latency,
                    is_audited=audited,
                    has_incidents=incidents,
                )
            )
            _assert_bounded(result.breakdown)

    def test_monotonic_in_success_rate(
        self, scorer: OpportunityScorer, staking_pool: MetricsSnapshot
    ) -> None:
        totals = [
            scorer.score(staking_pool.model_copy(update={"success_rate_pct": rate})).total
            for rate in range(0, 101, 5)
        ]
        assert totals == sorted(totals)

    def test_monotonic_in_thirty_day_apy(
        self, scorer: OpportunityScorer, staking_pool: MetricsSnapshot
    ) -> None:
        totals = [
            scorer.score(staking_pool.model_copy(update={"apy_30d": step / 2})).total
            for step in range(0, 61)
        ]
        assert totals == sorted(totals)

    def test_idempotent(self, scorer: OpportunityScorer, staking_pool: MetricsSnapshot) -> None:
        assert scorer.score(staking_pool) == scorer.score(staking_pool)

    def test_score_batch_preserves_order(
        self, scorer: OpportunityScorer, staking_pool: MetricsSnapshot
    ) -> None:
        results = scorer.score_batch([staking_pool, MetricsSnapshot()])
        assert [r.total for r in results] == [75, 0]

    def test_module_level_helper(self, staking_pool: MetricsSnapshot) -> None:
        assert score_opportunity(staking_pool).total == 75


# ---------------------------------------------------------------------------
# Serialisation and explanation
# ---------------------------------------------------------------------------


class TestOpportunityScoreOutput:
    def test_to_dict(self, scorer: OpportunityScorer, staking_pool: MetricsSnapshot) -> None:
        data = scorer.score(staking_pool).to_dict()
        assert data["total"] == 75
        assert data["risk_level"] == "Moderate"
        assert data["color"] == "yellow"

    def test_total_property(self) -> None:
        score = OpportunityScore(ScoreBreakdown(10, 20, 5, 35), RiskLevel.CAUTION)
        assert score.total == 35

    def test_explain_lists_caps(self, scorer: OpportunityScorer) -> None:
        info = scorer.explain()
        assert info["total_max_score"] == 100
        breakdown = info["breakdown"]
        assert breakdown["performance"]["max_score"] == 40  # type: ignore[index]
        assert breakdown["reliability"]["components"]["success_rate"] == 25  # type: ignore[index]

    def test_explain_risk_bands(self, scorer: OpportunityScorer) -> None:
        bands = scorer.explain()["risk_levels"]
        assert bands["caution"]["min"] == 0  # type: ignore[index]
        assert bands["caution"]["max"] == 49  # type: ignore[index]
        assert bands["moderate"]["min"] == 50  # type: ignore[index]
        assert bands["moderate"]["max"] == 79  # type: ignore[index]
        assert bands["preferred"]["max"] == 100  # type: ignore[index]

"""Opportunity trust scoring.

A yield opportunity is scored across three sub-scores — performance,
reliability and safety — that add up to a 0 – 100 total mapping onto one
of three risk levels (CAUTION, MODERATE, PREFERRED).
"""
from __future__ import annotations

from trust_engine.scoring.buckets import (
    BucketTable,
    LinearBand,
    band_points,
    bucket_points,
    linear_points,
)
from trust_engine.scoring.calculator import (
    OpportunityScore,
    OpportunityScorer,
    ScoreBreakdown,
    score_opportunity,
)
from trust_engine.scoring.metrics import TGAS, MetricsSnapshot
from trust_engine.scoring.policy import SafetyMode, ScoringPolicy
from trust_engine.scoring.risk import RISK_LEVEL_THRESHOLDS, RiskLevel, derive_risk_level

__all__ = [
    "BucketTable",
    "LinearBand",
    "MetricsSnapshot",
    "OpportunityScore",
    "OpportunityScorer",
    "RISK_LEVEL_THRESHOLDS",
    "RiskLevel",
    "SafetyMode",
    "ScoreBreakdown",
    "ScoringPolicy",
    "TGAS",
    "band_points",
    "bucket_points",
    "derive_risk_level",
    "linear_points",
    "score_opportunity",
]

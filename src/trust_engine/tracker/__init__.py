"""Opportunity score tracking: current scores, history and aggregate statistics."""
from __future__ import annotations

from trust_engine.tracker.record import (
    OpportunityCategory,
    OpportunityId,
    OpportunityScoreRecord,
    ScoreSnapshot,
    Trend,
)
from trust_engine.tracker.simulation import SAMPLE_OPPORTUNITIES, simulate_metrics
from trust_engine.tracker.tracker import (
    SCORE_DISTRIBUTION_BANDS,
    OpportunityNotFoundError,
    OpportunityScoreTracker,
    ScoreStatistics,
)

__all__ = [
    "OpportunityCategory",
    "OpportunityId",
    "OpportunityNotFoundError",
    "OpportunityScoreRecord",
    "OpportunityScoreTracker",
    "SAMPLE_OPPORTUNITIES",
    "SCORE_DISTRIBUTION_BANDS",
    "ScoreSnapshot",
    "ScoreStatistics",
    "Trend",
    "simulate_metrics",
]

"""Read-only records handed out by the OpportunityScoreTracker."""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from trust_engine.scoring.calculator import OpportunityScore
from trust_engine.scoring.metrics import MetricsSnapshot

OpportunityId = Union[int, str]


class OpportunityCategory(str, Enum):
    """Kinds of yield opportunity listed on the dashboard."""

    STAKING = "staking"
    LENDING = "lending"
    LIQUIDITY = "liquidity"
    DEFI = "defi"


class Trend(str, Enum):
    """Direction of the latest score change."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class ScoreSnapshot:
    """One entry of an opportunity's score history."""

    timestamp: datetime.datetime
    score: OpportunityScore
    metrics: MetricsSnapshot

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "score": self.score.to_dict(),
            "metrics": self.metrics.to_dict(),
        }


@dataclass(frozen=True)
class OpportunityScoreRecord:
    """Immutable view of a tracked opportunity.

    Parameters
    ----------
    opportunity_id:
        Identifier the opportunity is tracked under.
    name:
        Display name.
    contract_address:
        On-chain address of the opportunity contract.
    category:
        OpportunityCategory of the opportunity.
    current_score:
        Score computed by the most recent update.
    previous_score:
        Score replaced by the most recent update, or None after the first.
    metrics:
        Metrics the current score was computed from.
    last_updated:
        UTC datetime of the most recent update.
    trend:
        Direction of the change from ``previous_score`` to ``current_score``.
    history:
        Chronologically ordered snapshots; the last one matches
        ``current_score``.
    """

    opportunity_id: OpportunityId
    name: str
    contract_address: str
    category: OpportunityCategory
    current_score: OpportunityScore
    previous_score: Optional[OpportunityScore]
    metrics: MetricsSnapshot
    last_updated: datetime.datetime
    trend: Trend
    history: tuple[ScoreSnapshot, ...]

    def to_dict(self, include_history: bool = True) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        data: dict[str, object] = {
            "opportunity_id": self.opportunity_id,
            "name": self.name,
            "contract_address": self.contract_address,
            "category": self.category.value,
            "current_score": self.current_score.to_dict(),
            "previous_score": (
                self.previous_score.to_dict() if self.previous_score is not None else None
            ),
            "metrics": self.metrics.to_dict(),
            "last_updated": self.last_updated.isoformat(),
            "trend": self.trend.value,
        }
        if include_history:
            data["history"] = [entry.to_dict() for entry in self.history]
        return data

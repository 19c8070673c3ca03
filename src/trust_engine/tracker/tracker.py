"""OpportunityScoreTracker — current score and score history per opportunity.

Records are created on the first update for an opportunity and refreshed
by every later update. Updates for the same opportunity are serialised by
a per-opportunity lock so that the current score always matches the last
history entry; updates for different opportunities do not contend.
"""
from __future__ import annotations

import datetime
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union

from trust_engine.scoring.calculator import OpportunityScore, OpportunityScorer
from trust_engine.scoring.metrics import MetricsSnapshot
from trust_engine.tracker.record import (
    OpportunityCategory,
    OpportunityId,
    OpportunityScoreRecord,
    ScoreSnapshot,
    Trend,
)

logger = logging.getLogger(__name__)

# Lower bound of each score distribution band, highest first.
SCORE_DISTRIBUTION_BANDS: tuple[tuple[int, str], ...] = (
    (90, "Excellent (90-100)"),
    (80, "Good (80-89)"),
    (70, "Fair (70-79)"),
    (60, "Poor (60-69)"),
    (0, "Very Poor (0-59)"),
)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class OpportunityNotFoundError(KeyError):
    """Raised when an opportunity id is not tracked."""

    def __init__(self, opportunity_id: OpportunityId) -> None:
        super().__init__(f"Opportunity {opportunity_id!r} is not tracked.")


@dataclass
class _RecordState:
    """Internal mutable state for a single opportunity."""

    opportunity_id: OpportunityId
    name: str
    contract_address: str
    category: OpportunityCategory
    current: OpportunityScore
    metrics: MetricsSnapshot
    last_updated: datetime.datetime
    previous: Optional[OpportunityScore] = None
    trend: Trend = Trend.STABLE
    history: list[ScoreSnapshot] = field(default_factory=list)

    def view(self) -> OpportunityScoreRecord:
        return OpportunityScoreRecord(
            opportunity_id=self.opportunity_id,
            name=self.name,
            contract_address=self.contract_address,
            category=self.category,
            current_score=self.current,
            previous_score=self.previous,
            metrics=self.metrics,
            last_updated=self.last_updated,
            trend=self.trend,
            history=tuple(self.history),
        )


@dataclass(frozen=True)
class ScoreStatistics:
    """Aggregate view over every tracked opportunity."""

    total_opportunities: int
    average_score: float
    score_distribution: dict[str, int]
    category_averages: dict[str, float]
    top_performer: Optional[OpportunityScoreRecord]
    worst_performer: Optional[OpportunityScoreRecord]

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dictionary."""
        return {
            "total_opportunities": self.total_opportunities,
            "average_score": self.average_score,
            "score_distribution": dict(self.score_distribution),
            "category_averages": dict(self.category_averages),
            "top_performer": (
                self.top_performer.to_dict(include_history=False)
                if self.top_performer is not None
                else None
            ),
            "worst_performer": (
                self.worst_performer.to_dict(include_history=False)
                if self.worst_performer is not None
                else None
            ),
        }


class OpportunityScoreTracker:
    """In-memory store of opportunity scores and their history.

    Parameters
    ----------
    scorer:
        Scorer used to recompute scores. Defaults to the standard policy.
    clock:
        Zero-argument callable returning the current UTC datetime.
        Defaults to ``datetime.now(timezone.utc)``.
    history_retention:
        If set, snapshots older than this window are dropped on update.
        Defaults to None (history is kept for the lifetime of the tracker).
    trend_threshold:
        Minimum change in total score for a trend to count as up or down.
        Defaults to 2.

    Raises
    ------
    ValueError
        If *history_retention* is zero or negative.
    """

    def __init__(
        self,
        scorer: Optional[OpportunityScorer] = None,
        clock: Optional[Callable[[], datetime.datetime]] = None,
        history_retention: Optional[datetime.timedelta] = None,
        trend_threshold: float = 2.0,
    ) -> None:
        if history_retention is not None and history_retention <= datetime.timedelta(0):
            raise ValueError(
                f"history_retention must be positive, got {history_retention}"
            )
        self._scorer = scorer if scorer is not None else OpportunityScorer()
        self._clock = clock if clock is not None else _utcnow
        self._retention = history_retention
        self._trend_threshold = trend_threshold
        self._records: dict[OpportunityId, _RecordState] = {}
        self._locks: dict[OpportunityId, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def update(
        self,
        opportunity_id: OpportunityId,
        name: str,
        contract_address: str,
        metrics: Union[MetricsSnapshot, Mapping[str, Any], None],
        category: Union[OpportunityCategory, str] = OpportunityCategory.DEFI,
    ) -> OpportunityScoreRecord:
        """Recompute the score of an opportunity from fresh metrics.

        Creates the record on first use. Replaces the current score,
        appends a timestamped snapshot to the history and returns a
        read-only view of the updated record.

        Parameters
        ----------
        opportunity_id:
            Identifier of the opportunity.
        name:
            Display name.
        contract_address:
            On-chain address of the opportunity contract.
        metrics:
            Fresh metrics (MetricsSnapshot or plain mapping).
        category:
            OpportunityCategory or its string value.

        Returns
        -------
        OpportunityScoreRecord

        Raises
        ------
        ValueError
            If ``category`` is not a known OpportunityCategory.
        """
        resolved_category = OpportunityCategory(category)
        if isinstance(metrics, MetricsSnapshot):
            snapshot = metrics
        elif metrics is None:
            snapshot = MetricsSnapshot()
        else:
            snapshot = MetricsSnapshot.from_mapping(metrics)

        with self._lock_for(opportunity_id):
            now = self._clock()
            score = self._scorer.score(snapshot, as_of=now.date())
            entry = ScoreSnapshot(timestamp=now, score=score, metrics=snapshot)

            with self._registry_lock:
                state = self._records.get(opportunity_id)
                if state is None:
                    state = _RecordState(
                        opportunity_id=opportunity_id,
                        name=name,
                        contract_address=contract_address,
                        category=resolved_category,
                        current=score,
                        metrics=snapshot,
                        last_updated=now,
                    )
                    self._records[opportunity_id] = state
                    created = True
                else:
                    created = False

            if not created:
                state.previous = state.current
                state.trend = self._trend(state.previous, score)
            state.name = name
            state.contract_address = contract_address
            state.category = resolved_category
            state.current = score
            state.metrics = snapshot
            state.last_updated = now
            state.history.append(entry)
            self._prune(state, now)
            record = state.view()

        if created:
            logger.info(
                "Tracking opportunity %r (%s) with score %d",
                opportunity_id,
                name,
                score.total,
            )
        else:
            logger.debug(
                "Opportunity %r rescored: %d -> %d (%s)",
                opportunity_id,
                record.previous_score.total if record.previous_score else 0,
                score.total,
                record.trend.value,
            )
        return record

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, opportunity_id: OpportunityId) -> Optional[OpportunityScoreRecord]:
        """Return the record of an opportunity, or None if it is not tracked.

        Never recomputes a score.
        """
        with self._registry_lock:
            state = self._records.get(opportunity_id)
            lock = self._locks.get(opportunity_id)
        if state is None or lock is None:
            return None
        with lock:
            return state.view()

    def require(self, opportunity_id: OpportunityId) -> OpportunityScoreRecord:
        """Return the record of an opportunity.

        Raises
        ------
        OpportunityNotFoundError
            If the opportunity is not tracked.
        """
        record = self.get(opportunity_id)
        if record is None:
            raise OpportunityNotFoundError(opportunity_id)
        return record

    def opportunity_ids(self) -> list[OpportunityId]:
        """Return tracked opportunity ids in insertion order."""
        with self._registry_lock:
            return list(self._records.keys())

    def all_records(self) -> list[OpportunityScoreRecord]:
        """Return every tracked record in insertion order."""
        records = [self.get(opportunity_id) for opportunity_id in self.opportunity_ids()]
        return [record for record in records if record is not None]

    def by_category(
        self, category: Union[OpportunityCategory, str]
    ) -> list[OpportunityScoreRecord]:
        """Return records in *category*."""
        wanted = OpportunityCategory(category)
        return [record for record in self.all_records() if record.category == wanted]

    def top(self, limit: int = 10) -> list[OpportunityScoreRecord]:
        """Return up to *limit* records ordered by total score, best first."""
        ranked = sorted(
            self.all_records(), key=lambda record: record.current_score.total, reverse=True
        )
        return ranked[: max(0, limit)]

    def history(
        self,
        opportunity_id: OpportunityId,
        since: Optional[datetime.datetime] = None,
    ) -> list[ScoreSnapshot]:
        """Return snapshots of an opportunity, optionally only those at or after *since*.

        Unknown opportunities have an empty history.
        """
        record = self.get(opportunity_id)
        if record is None:
            return []
        if since is None:
            return list(record.history)
        return [entry for entry in record.history if entry.timestamp >= since]

    def statistics(self) -> ScoreStatistics:
        """Summarise every tracked opportunity."""
        records = self.all_records()
        if not records:
            return ScoreStatistics(
                total_opportunities=0,
                average_score=0.0,
                score_distribution={},
                category_averages={},
                top_performer=None,
                worst_performer=None,
            )

        totals = [record.current_score.total for record in records]
        distribution = {label: 0 for _, label in SCORE_DISTRIBUTION_BANDS}
        for total in totals:
            for lower, label in SCORE_DISTRIBUTION_BANDS:
                if total >= lower:
                    distribution[label] += 1
                    break

        per_category: dict[str, list[int]] = {}
        for record in records:
            per_category.setdefault(record.category.value, []).append(
                record.current_score.total
            )
        category_averages = {
            category: sum(values) / len(values) for category, values in per_category.items()
        }

        ranked = sorted(records, key=lambda record: record.current_score.total, reverse=True)
        return ScoreStatistics(
            total_opportunities=len(records),
            average_score=round(sum(totals) / len(totals), 1),
            score_distribution=distribution,
            category_averages=category_averages,
            top_performer=ranked[0],
            worst_performer=ranked[-1],
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _lock_for(self, opportunity_id: OpportunityId) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(opportunity_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[opportunity_id] = lock
            return lock

    def _trend(self, previous: OpportunityScore, current: OpportunityScore) -> Trend:
        diff = current.total - previous.total
        if diff > self._trend_threshold:
            return Trend.UP
        if diff < -self._trend_threshold:
            return Trend.DOWN
        return Trend.STABLE

    def _prune(self, state: _RecordState, now: datetime.datetime) -> None:
        if self._retention is None:
            return
        cutoff = now - self._retention
        state.history = [entry for entry in state.history if entry.timestamp > cutoff]

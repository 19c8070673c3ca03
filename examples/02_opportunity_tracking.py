#!/usr/bin/env python3
"""Example: Opportunity Tracking

Tracks the sample opportunities, rescoring them with simulated metrics,
and prints the dashboard statistics.

Usage:
    python examples/02_opportunity_tracking.py

Requirements:
    pip install defi-trust-engine
"""
from __future__ import annotations

import datetime

from trust_engine import OpportunityScoreTracker, simulate_metrics
from trust_engine.tracker import SAMPLE_OPPORTUNITIES


def main() -> None:
    tracker = OpportunityScoreTracker(history_retention=datetime.timedelta(days=30))

    # Step 1: Seed the tracker with the sample opportunities
    for sample in SAMPLE_OPPORTUNITIES:
        tracker.update(
            opportunity_id=sample["opportunity_id"],
            name=sample["name"],
            contract_address=sample["contract_address"],
            metrics=sample["metrics"],
            category=sample["category"],
        )

    # Step 2: Rescore each one from simulated metrics
    for record in tracker.all_records():
        updated = tracker.update(
            opportunity_id=record.opportunity_id,
            name=record.name,
            contract_address=record.contract_address,
            metrics=simulate_metrics(record.opportunity_id),
            category=record.category,
        )
        previous = updated.previous_score.total if updated.previous_score else 0
        print(
            f"{updated.name}: {previous} -> {updated.current_score.total} "
            f"({updated.trend.value}, {len(updated.history)} snapshots)"
        )

    # Step 3: Summarise
    stats = tracker.statistics()
    print(f"\nAverage score: {stats.average_score}")
    for band, count in stats.score_distribution.items():
        print(f"  {band}: {count}")
    if stats.top_performer is not None:
        print(f"Top performer: {stats.top_performer.name}")


if __name__ == "__main__":
    main()

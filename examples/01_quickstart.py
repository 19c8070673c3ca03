#!/usr/bin/env python3
"""Example: Quickstart

Scores a yield opportunity and an agent with the default policies.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install defi-trust-engine
"""
from __future__ import annotations

import trust_engine
from trust_engine import (
    TGAS,
    AgentCredibilityScorer,
    MetricsSnapshot,
    OpportunityScorer,
    max_ltv,
)


def main() -> None:
    print(f"defi-trust-engine version: {trust_engine.__version__}")

    # Step 1: Score a staking pool from its operational metrics
    metrics = MetricsSnapshot(
        apy_30d=12.2,
        success_rate_pct=95.5,
        avg_gas_used=45 * TGAS,
        avg_latency_ms=1800,
        is_audited=True,
    )
    score = OpportunityScorer().score(metrics)
    print("\nNEAR Staking Pool:")
    for component, points in score.breakdown.to_dict().items():
        print(f"  {component}: {points}")
    print(f"  risk level: {score.risk_level.display.emoji} {score.risk_level.label}")

    # Step 2: Score an agent's credibility
    agent = AgentCredibilityScorer().score(
        provenance=85, performance=78, perception=70, verification=90
    )
    print("\nAgent credibility:")
    print(f"  overall:      {agent.overall}")
    print(f"  confidence:   {agent.confidence}")
    print(f"  tier:         {agent.tier.label}")
    print(f"  display tier: {agent.display_tier.label}")
    print(f"  max LTV:      {max_ltv(agent)}%")


if __name__ == "__main__":
    main()

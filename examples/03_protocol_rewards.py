#!/usr/bin/env python3
"""Example: Protocol Rewards

Estimates the monthly protocol reward for a period of on-chain activity
and shows what is still missing for the maximum score.

Usage:
    python examples/03_protocol_rewards.py

Requirements:
    pip install defi-trust-engine
"""
from __future__ import annotations

from trust_engine import ActivityMetrics, estimate_reward
from trust_engine.rewards import requirement_gaps


def main() -> None:
    activity = ActivityMetrics(
        transaction_volume_usd=4_200, smart_contract_calls=310, unique_wallets=32
    )

    estimate = estimate_reward(activity)
    print(f"Points: {estimate.points}")
    print(f"Tier:   {estimate.tier.label}")
    print(f"Reward: ${estimate.reward_usd:,}")

    print("\nRequirements for maximum points:")
    for gap in requirement_gaps(activity):
        status = "met" if gap.met else f"need {gap.shortfall:,.0f} more"
        print(f"  {gap.metric}: {gap.current:,.0f}/{gap.target:,.0f} ({status})")


if __name__ == "__main__":
    main()

"""CredibilityTier enumeration and the two tier boundary tables.

Agents are tiered in two places with different cut points, and both are
kept as separate named tables:

ASSIGNMENT_TIER_THRESHOLDS
    Used when an agent is created: 80+ PLATINUM, 60+ GOLD, else SILVER.
DISPLAY_TIER_THRESHOLDS
    Used for colouring, benefits and LTV limits: 90+ DIAMOND, 80+ PLATINUM,
    70+ GOLD, 60+ SILVER, else BRONZE.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Mapping, Optional


class CredibilityTier(IntEnum):
    """Credibility tiers for an agent, ordered from lowest to highest."""

    BRONZE = 0
    SILVER = 1
    GOLD = 2
    PLATINUM = 3
    DIAMOND = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Minimum overall score for each tier at agent creation.
# Scores below GOLD's threshold map to SILVER.
ASSIGNMENT_TIER_THRESHOLDS: dict[CredibilityTier, float] = {
    CredibilityTier.SILVER: 0.0,
    CredibilityTier.GOLD: 60.0,
    CredibilityTier.PLATINUM: 80.0,
}

# Minimum overall score for each displayed tier.
DISPLAY_TIER_THRESHOLDS: dict[CredibilityTier, float] = {
    CredibilityTier.BRONZE: 0.0,
    CredibilityTier.SILVER: 60.0,
    CredibilityTier.GOLD: 70.0,
    CredibilityTier.PLATINUM: 80.0,
    CredibilityTier.DIAMOND: 90.0,
}


def derive_tier(
    overall: float,
    thresholds: Optional[Mapping[CredibilityTier, float]] = None,
) -> CredibilityTier:
    """Map an overall credibility score to a tier.

    The highest tier whose threshold does not exceed *overall* is returned;
    below every threshold the table's lowest tier is returned.

    Parameters
    ----------
    overall:
        Overall credibility score (0 – 100).
    thresholds:
        Boundary table to use. Defaults to ASSIGNMENT_TIER_THRESHOLDS.
    """
    table = thresholds if thresholds is not None else ASSIGNMENT_TIER_THRESHOLDS
    ordered = sorted(table.items(), key=lambda kv: kv[1])
    tier = ordered[0][0]
    for candidate, threshold in ordered:
        if overall >= threshold:
            tier = candidate
    return tier


def derive_display_tier(overall: float) -> CredibilityTier:
    """Map an overall credibility score to its display tier."""
    return derive_tier(overall, DISPLAY_TIER_THRESHOLDS)

"""RiskLevel enumeration and level derivation from opportunity trust scores.

Three risk levels are defined. Level boundaries use half-open intervals
so that each total maps to exactly one level.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Mapping, Optional


class RiskLevel(IntEnum):
    """Risk label of a yield opportunity, ordered from riskiest to safest.

    CAUTION (0):
        High risk — proceed with caution.
    MODERATE (1):
        Medium risk — acceptable for most users.
    PREFERRED (2):
        Low risk — recommended opportunity.
    """

    CAUTION = 0
    MODERATE = 1
    PREFERRED = 2

    @property
    def label(self) -> str:
        """Title-case display name, e.g. ``"Preferred"``."""
        return self.name.capitalize()

    @property
    def display(self) -> "RiskDisplay":
        return RISK_LEVEL_DISPLAY[self]


# Minimum total score required to reach each level.
RISK_LEVEL_THRESHOLDS: dict[RiskLevel, float] = {
    RiskLevel.CAUTION: 0.0,
    RiskLevel.MODERATE: 50.0,
    RiskLevel.PREFERRED: 80.0,
}


@dataclass(frozen=True)
class RiskDisplay:
    """Presentation metadata attached to a risk level."""

    emoji: str
    color: str
    description: str


RISK_LEVEL_DISPLAY: dict[RiskLevel, RiskDisplay] = {
    RiskLevel.CAUTION: RiskDisplay("🚨", "red", "High risk - proceed with caution"),
    RiskLevel.MODERATE: RiskDisplay("✅", "yellow", "Medium risk - acceptable for most users"),
    RiskLevel.PREFERRED: RiskDisplay("⭐", "green", "Low risk - recommended opportunity"),
}


def derive_risk_level(
    total: float,
    thresholds: Optional[Mapping[RiskLevel, float]] = None,
) -> RiskLevel:
    """Map a 0 – 100 trust score total to a RiskLevel.

    The highest level whose threshold does not exceed *total* is returned.
    NaN maps to CAUTION.

    Parameters
    ----------
    total:
        Opportunity trust score total.
    thresholds:
        Alternate boundary table. Defaults to RISK_LEVEL_THRESHOLDS.
    """
    table = thresholds if thresholds is not None else RISK_LEVEL_THRESHOLDS
    level = RiskLevel.CAUTION
    for candidate, threshold in sorted(table.items(), key=lambda kv: kv[1]):
        if total >= threshold:
            level = candidate
    return level

"""ScoringPolicy — configurable caps, bucket tables and safety rules.

Every threshold used by the opportunity trust score lives here as data.
Operators can swap tables (or load a whole policy from JSON) without
touching calculation logic. Sensible defaults reproduce the production
scoring rules.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field

from trust_engine.scoring.buckets import BucketTable, LinearBand
from trust_engine.scoring.metrics import TGAS
from trust_engine.scoring.risk import RISK_LEVEL_THRESHOLDS, RiskLevel


class SafetyMode(str, Enum):
    """How the recent-audit bonus and incident penalties are applied.

    SIMPLE:
        Audited opportunities always receive the recent-audit bonus and
        incidents cost a flat penalty. Dates are ignored.
    DATED:
        The bonus and an extra incident penalty scale with the age of the
        audit / last incident.
    """

    SIMPLE = "simple"
    DATED = "dated"


# APY (percent) -> performance points. Four bands of up to 10 points each.
APY_BANDS: tuple[LinearBand, ...] = (
    LinearBand(lower=0.0, base=0),
    LinearBand(lower=5.0, base=10),
    LinearBand(lower=10.0, base=20),
    LinearBand(lower=15.0, base=30, stepped=True),
)

# Average gas per intent (raw gas units) -> efficiency points.
GAS_TABLE = BucketTable(
    name="avg_gas_used",
    buckets=(
        (20 * TGAS, 10),
        (40 * TGAS, 8),
        (60 * TGAS, 6),
        (80 * TGAS, 4),
        (100 * TGAS, 2),
    ),
    lower_is_better=True,
)

# Average latency (ms) -> latency points.
LATENCY_TABLE = BucketTable(
    name="avg_latency_ms",
    buckets=(
        (1_000, 5),
        (2_000, 4),
        (3_000, 3),
        (5_000, 2),
        (10_000, 1),
    ),
    lower_is_better=True,
)

# Audit age (30-day months) -> bonus points, DATED mode only.
AUDIT_RECENCY_TABLE = BucketTable(
    name="audit_age_months",
    buckets=((6, 3), (12, 2), (24, 1)),
    lower_is_better=True,
)

# Last incident age (30-day months) -> extra penalty points, DATED mode only.
INCIDENT_RECENCY_TABLE = BucketTable(
    name="incident_age_months",
    buckets=((6, 3), (12, 2), (24, 1)),
    lower_is_better=True,
)


class ScoringPolicy(BaseModel):
    """Configurable opportunity scoring policy.

    Parameters
    ----------
    performance_cap, reliability_cap, safety_cap:
        Maximum points of each sub-score. Must add up to ``total_cap``.
    total_cap:
        Maximum total score.
    apy_bands:
        Piecewise-linear APY bands for the performance sub-score.
    use_target_apy_fallback:
        Fall back to ``target_apy`` when neither realised APY is available.
    success_rate_points:
        Points for a 100 % intent success rate (scaled linearly).
    gas_table, latency_table:
        Reliability bucket tables.
    min_intents_for_reliability:
        When positive, opportunities with fewer intents receive
        ``insufficient_data_reliability`` instead of a computed score.
    insufficient_data_reliability:
        Reliability score used when there is not enough intent data.
    safety_mode:
        SIMPLE or DATED recent-audit handling.
    audit_points:
        Base points for an audited opportunity.
    recent_audit_bonus:
        Bonus added to audited opportunities in SIMPLE mode.
    incident_penalty:
        Flat penalty for an opportunity with incidents.
    audit_recency_table, incident_recency_table:
        Age-in-months tables used in DATED mode.
    days_per_month:
        Month length used to convert ages.
    risk_thresholds:
        Total-score boundaries of each RiskLevel.
    """

    performance_cap: int = 40
    reliability_cap: int = 40
    safety_cap: int = 20
    total_cap: int = 100
    apy_bands: tuple[LinearBand, ...] = APY_BANDS
    use_target_apy_fallback: bool = False
    success_rate_points: int = 25
    gas_table: BucketTable = GAS_TABLE
    latency_table: BucketTable = LATENCY_TABLE
    min_intents_for_reliability: int = Field(default=0, ge=0)
    insufficient_data_reliability: int = 15
    safety_mode: SafetyMode = SafetyMode.SIMPLE
    audit_points: int = 15
    recent_audit_bonus: int = 3
    incident_penalty: int = 5
    audit_recency_table: BucketTable = AUDIT_RECENCY_TABLE
    incident_recency_table: BucketTable = INCIDENT_RECENCY_TABLE
    days_per_month: float = Field(default=30.0, gt=0.0)
    risk_thresholds: dict[RiskLevel, float] = Field(
        default_factory=lambda: dict(RISK_LEVEL_THRESHOLDS)
    )

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    def validate_caps(self) -> None:
        """Raise ValueError if the sub-score caps do not add up to the total cap."""
        caps = self.performance_cap + self.reliability_cap + self.safety_cap
        if caps != self.total_cap:
            raise ValueError(
                f"Sub-score caps must add up to {self.total_cap}, got {caps}"
            )

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "ScoringPolicy":
        """Load a policy from a JSON document. Omitted keys keep their defaults."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

"""MetricsSnapshot — the raw operational metrics of one yield opportunity.

Callers resolve metrics from wherever they live (registry contracts, an
indexer, manual input) and hand them over as a plain mapping or keyword
arguments. Both snake_case and the dashboard's camelCase keys are
accepted. Anything missing, ``None`` or unparseable degrades to zero /
False / no date instead of raising.
"""
from __future__ import annotations

import datetime
import math
from typing import Any, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# 1 TGas expressed in raw gas units.
TGAS = 1e12

# Nested groups used by legacy opportunity payloads.
_METRIC_GROUPS = ("performance", "reliability", "safety")


def _number(value: Any) -> float:
    if value is None or isinstance(value, str) and not value.strip():
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class MetricsSnapshot(BaseModel):
    """Immutable snapshot of an opportunity's performance, reliability and safety metrics.

    Parameters
    ----------
    apy_7d, apy_30d, target_apy:
        Annual percentage yields in percent (``12.2`` means 12.2 %).
    success_rate_pct:
        Intent success rate in percent (0 – 100).
    avg_gas_used:
        Average gas per intent in raw gas units (see ``TGAS``).
    avg_latency_ms:
        Average intent latency in milliseconds.
    total_intents:
        Number of intents the reliability figures are based on.
    is_audited, has_incidents:
        Safety flags.
    audit_date, last_incident_date:
        Dates used by the dated safety mode. Unparseable values become None.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    apy_7d: float = Field(default=0.0, validation_alias=AliasChoices("apy_7d", "apy7d"))
    apy_30d: float = Field(default=0.0, validation_alias=AliasChoices("apy_30d", "apy30d"))
    target_apy: float = Field(
        default=0.0, validation_alias=AliasChoices("target_apy", "targetApy")
    )
    success_rate_pct: float = Field(
        default=0.0,
        validation_alias=AliasChoices("success_rate_pct", "successRatePct", "successRate"),
    )
    avg_gas_used: float = Field(
        default=0.0, validation_alias=AliasChoices("avg_gas_used", "avgGasUsed")
    )
    avg_latency_ms: float = Field(
        default=0.0,
        validation_alias=AliasChoices("avg_latency_ms", "avgLatencyMs", "avgLatency"),
    )
    total_intents: int = Field(
        default=0, validation_alias=AliasChoices("total_intents", "totalIntents")
    )
    is_audited: bool = Field(
        default=False, validation_alias=AliasChoices("is_audited", "isAudited")
    )
    has_incidents: bool = Field(
        default=False, validation_alias=AliasChoices("has_incidents", "hasIncidents")
    )
    audit_date: Optional[datetime.date] = Field(
        default=None, validation_alias=AliasChoices("audit_date", "auditDate")
    )
    last_incident_date: Optional[datetime.date] = Field(
        default=None,
        validation_alias=AliasChoices(
            "last_incident_date", "lastIncidentDate", "lastIncident"
        ),
    )

    @field_validator(
        "apy_7d",
        "apy_30d",
        "target_apy",
        "success_rate_pct",
        "avg_gas_used",
        "avg_latency_ms",
        mode="before",
    )
    @classmethod
    def _missing_numbers_are_zero(cls, value: Any) -> float:
        return _number(value)

    @field_validator("total_intents", mode="before")
    @classmethod
    def _missing_counts_are_zero(cls, value: Any) -> int:
        number = _number(value)
        if math.isnan(number) or math.isinf(number):
            return 0
        return int(number)

    @field_validator("is_audited", "has_incidents", mode="before")
    @classmethod
    def _missing_flags_are_false(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"true", "yes", "y", "1"}
        return bool(value)

    @field_validator("audit_date", "last_incident_date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Optional[datetime.date]:
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        if isinstance(value, str) and value.strip():
            try:
                return datetime.date.fromisoformat(value.strip()[:10])
            except ValueError:
                return None
        return None

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MetricsSnapshot":
        """Build a snapshot from a plain mapping.

        Nested ``performance`` / ``reliability`` / ``safety`` groups are
        flattened first. Unknown keys are ignored.
        """
        flat: dict[str, Any] = {}
        for key, value in data.items():
            if key in _METRIC_GROUPS and isinstance(value, Mapping):
                flat.update(value)
            else:
                flat[key] = value
        return cls.model_validate(flat)

    @property
    def avg_gas_tgas(self) -> float:
        """Average gas per intent in TGas."""
        return self.avg_gas_used / TGAS

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain JSON-compatible dictionary."""
        return self.model_dump(mode="json")

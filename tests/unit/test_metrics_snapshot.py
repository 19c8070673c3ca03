"""Unit tests for trust_engine.scoring.metrics — MetricsSnapshot parsing."""
from __future__ import annotations

import datetime

import pytest
from pydantic import ValidationError

from trust_engine.scoring.metrics import TGAS, MetricsSnapshot


class TestMetricsSnapshotDefaults:
    def test_empty_snapshot_is_all_zero(self) -> None:
        snapshot = MetricsSnapshot()
        assert snapshot.apy_30d == 0.0
        assert snapshot.success_rate_pct == 0.0
        assert snapshot.total_intents == 0
        assert snapshot.is_audited is False
        assert snapshot.audit_date is None

    def test_none_numbers_become_zero(self) -> None:
        snapshot = MetricsSnapshot(apy_30d=None, avg_latency_ms=None)
        assert snapshot.apy_30d == 0.0
        assert snapshot.avg_latency_ms == 0.0

    def test_unparseable_numbers_become_zero(self) -> None:
        snapshot = MetricsSnapshot.from_mapping({"apy30d": "n/a", "successRate": ""})
        assert snapshot.apy_30d == 0.0
        assert snapshot.success_rate_pct == 0.0

    def test_string_numbers_are_parsed(self) -> None:
        snapshot = MetricsSnapshot.from_mapping({"apy30d": "12.2", "totalIntents": "150"})
        assert snapshot.apy_30d == pytest.approx(12.2)
        assert snapshot.total_intents == 150

    def test_nan_intent_count_becomes_zero(self) -> None:
        snapshot = MetricsSnapshot(total_intents=float("nan"))
        assert snapshot.total_intents == 0

    def test_unknown_keys_are_ignored(self) -> None:
        snapshot = MetricsSnapshot.from_mapping({"tvl": 1_000_000, "apy30d": 5})
        assert snapshot.apy_30d == 5.0


class TestMetricsSnapshotAliases:
    def test_camel_case_keys(self) -> None:
        snapshot = MetricsSnapshot.from_mapping(
            {
                "apy7d": 12.5,
                "apy30d": 12.2,
                "targetApy": 12.0,
                "successRate": 95.5,
                "avgGasUsed": 45 * TGAS,
                "avgLatency": 1800,
                "isAudited": True,
                "hasIncidents": False,
            }
        )
        assert snapshot.apy_7d == pytest.approx(12.5)
        assert snapshot.success_rate_pct == pytest.approx(95.5)
        assert snapshot.avg_gas_tgas == pytest.approx(45.0)
        assert snapshot.avg_latency_ms == pytest.approx(1800.0)
        assert snapshot.is_audited is True

    def test_nested_groups_are_flattened(self) -> None:
        snapshot = MetricsSnapshot.from_mapping(
            {
                "performance": {"apy30d": 8.1},
                "reliability": {"successRate": 92.3},
                "safety": {"isAudited": True, "lastIncident": "2024-02-01"},
            }
        )
        assert snapshot.apy_30d == pytest.approx(8.1)
        assert snapshot.success_rate_pct == pytest.approx(92.3)
        assert snapshot.last_incident_date == datetime.date(2024, 2, 1)


class TestMetricsSnapshotFlagsAndDates:
    @pytest.mark.parametrize("value", ["true", "Yes", "1", True, 1])
    def test_truthy_flags(self, value: object) -> None:
        assert MetricsSnapshot(is_audited=value).is_audited is True

    @pytest.mark.parametrize("value", ["false", "no", "", None, 0])
    def test_falsy_flags(self, value: object) -> None:
        assert MetricsSnapshot(is_audited=value).is_audited is False

    def test_iso_timestamp_is_truncated_to_date(self) -> None:
        snapshot = MetricsSnapshot(audit_date="2024-01-15T10:30:00Z")
        assert snapshot.audit_date == datetime.date(2024, 1, 15)

    def test_datetime_is_converted_to_date(self) -> None:
        moment = datetime.datetime(2024, 1, 15, 8, 0, tzinfo=datetime.timezone.utc)
        assert MetricsSnapshot(audit_date=moment).audit_date == datetime.date(2024, 1, 15)

    def test_unparseable_date_becomes_none(self) -> None:
        assert MetricsSnapshot(audit_date="last spring").audit_date is None


class TestMetricsSnapshotImmutability:
    def test_assignment_raises(self) -> None:
        snapshot = MetricsSnapshot(apy_30d=5.0)
        with pytest.raises(ValidationError):
            snapshot.apy_30d = 6.0  # type: ignore[misc]

    def test_to_dict_is_json_compatible(self) -> None:
        data = MetricsSnapshot(apy_30d=5.0, audit_date="2024-01-15").to_dict()
        assert data["apy_30d"] == 5.0
        assert data["audit_date"] == "2024-01-15"

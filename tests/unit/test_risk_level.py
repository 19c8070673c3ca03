"""Unit tests for trust_engine.scoring.risk — RiskLevel enum and derive_risk_level."""
from __future__ import annotations

import pytest

from trust_engine.scoring.risk import (
    RISK_LEVEL_DISPLAY,
    RISK_LEVEL_THRESHOLDS,
    RiskLevel,
    derive_risk_level,
)


class TestRiskLevelEnum:
    def test_levels_are_ordered(self) -> None:
        assert RiskLevel.CAUTION < RiskLevel.MODERATE < RiskLevel.PREFERRED

    def test_label_is_title_case(self) -> None:
        assert RiskLevel.PREFERRED.label == "Preferred"

    def test_every_level_has_display_metadata(self) -> None:
        assert set(RISK_LEVEL_DISPLAY) == set(RiskLevel)

    def test_display_colors(self) -> None:
        assert RiskLevel.CAUTION.display.color == "red"
        assert RiskLevel.MODERATE.display.color == "yellow"
        assert RiskLevel.PREFERRED.display.color == "green"

    def test_every_level_has_threshold(self) -> None:
        assert set(RISK_LEVEL_THRESHOLDS) == set(RiskLevel)


class TestDeriveRiskLevel:
    @pytest.mark.parametrize(
        ("total", "expected"),
        [
            (0, RiskLevel.CAUTION),
            (49, RiskLevel.CAUTION),
            (50, RiskLevel.MODERATE),
            (79, RiskLevel.MODERATE),
            (80, RiskLevel.PREFERRED),
            (100, RiskLevel.PREFERRED),
        ],
    )
    def test_boundaries(self, total: int, expected: RiskLevel) -> None:
        assert derive_risk_level(total) == expected

    def test_nan_is_caution(self) -> None:
        assert derive_risk_level(float("nan")) == RiskLevel.CAUTION

    def test_custom_thresholds(self) -> None:
        thresholds = {
            RiskLevel.CAUTION: float("-inf"),
            RiskLevel.MODERATE: 40.0,
            RiskLevel.PREFERRED: 90.0,
        }
        assert derive_risk_level(45, thresholds) == RiskLevel.MODERATE
        assert derive_risk_level(85, thresholds) == RiskLevel.MODERATE
        assert derive_risk_level(90, thresholds) == RiskLevel.PREFERRED

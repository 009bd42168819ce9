"""
Tests for HRV-based blood pressure estimation and classification.

Covers:
- Reference point (no adjustment at baseline HRV and age 30)
- Age and HRV adjustments, including the +/-10% quiet zone
- Clamping and confidence policy as properties over wide inputs
- Category thresholds at their exact boundaries
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from core.domain.models import BiologicalSex, Confidence, Risk
from core.errors import InputRangeError, InvalidBaselineError
from core.services.bp_estimator import (
    categorize_bp,
    estimate_bp,
    round_half_up,
)


class TestEstimateBP:
    def test_baseline_hrv_at_age_30_returns_population_average(self) -> None:
        reading = estimate_bp(hrv=55, baseline_hrv=55, age=30)

        assert (reading.systolic, reading.diastolic) == (120, 80)
        assert reading.confidence == Confidence.HIGH
        assert reading.method == "hrv_based"

    def test_no_age_adjustment_below_30(self) -> None:
        reading = estimate_bp(hrv=55, baseline_hrv=55, age=18)
        assert (reading.systolic, reading.diastolic) == (120, 80)

    def test_age_adjustment_above_30(self) -> None:
        reading = estimate_bp(hrv=55, baseline_hrv=55, age=50)
        # age_adj = 10 -> systolic +10, diastolic +6
        assert (reading.systolic, reading.diastolic) == (130, 86)

    def test_half_values_round_up(self) -> None:
        # age 31 -> systolic 120.5, diastolic 80.3
        reading = estimate_bp(hrv=55, baseline_hrv=55, age=31)
        assert reading.systolic == 121
        assert reading.diastolic == 80

    def test_depressed_hrv_raises_estimate(self) -> None:
        # delta -30.9% -> hrv_adj 9.27
        reading = estimate_bp(hrv=38, baseline_hrv=55, age=30)

        assert (reading.systolic, reading.diastolic) == (129, 86)
        assert reading.confidence == Confidence.MEDIUM

    def test_elevated_hrv_lowers_estimate(self) -> None:
        # delta +20% -> hrv_adj 6 -> systolic -3, diastolic -2.4
        reading = estimate_bp(hrv=66, baseline_hrv=55, age=30)

        assert (reading.systolic, reading.diastolic) == (117, 78)
        assert reading.confidence == Confidence.MEDIUM

    def test_quiet_zone_applies_no_hrv_adjustment(self) -> None:
        # delta -9.1% sits inside +/-10%
        reading = estimate_bp(hrv=50, baseline_hrv=55, age=30)

        assert (reading.systolic, reading.diastolic) == (120, 80)
        assert reading.confidence == Confidence.MEDIUM

    def test_small_delta_gives_high_confidence(self) -> None:
        assert estimate_bp(hrv=53, baseline_hrv=55, age=40).confidence == Confidence.HIGH

    def test_zero_hrv_is_clamped_not_rejected(self) -> None:
        reading = estimate_bp(hrv=0, baseline_hrv=55, age=30)

        assert (reading.systolic, reading.diastolic) == (150, 101)
        assert reading.confidence == Confidence.LOW

    def test_extreme_hrv_clamps_to_floor(self) -> None:
        reading = estimate_bp(hrv=1000, baseline_hrv=55, age=30)

        assert (reading.systolic, reading.diastolic) == (90, 60)
        assert reading.confidence == Confidence.LOW

    def test_extreme_depression_and_age_clamp_to_ceiling(self) -> None:
        reading = estimate_bp(hrv=1, baseline_hrv=200, age=120)
        assert (reading.systolic, reading.diastolic) == (180, 120)

    def test_biological_sex_does_not_alter_estimate(self) -> None:
        readings = {
            sex: estimate_bp(hrv=42, baseline_hrv=55, age=47, sex=sex) for sex in BiologicalSex
        }
        assert len(set(readings.values())) == 1

    @pytest.mark.parametrize("baseline_hrv", [0, -5, -0.1])
    def test_non_positive_baseline_raises(self, baseline_hrv: float) -> None:
        with pytest.raises(InvalidBaselineError):
            estimate_bp(hrv=50, baseline_hrv=baseline_hrv, age=30)

    def test_negative_age_rejected(self) -> None:
        with pytest.raises(InputRangeError, match="Age"):
            estimate_bp(hrv=50, baseline_hrv=55, age=-1)

    def test_negative_hrv_rejected(self) -> None:
        with pytest.raises(ValueError):
            estimate_bp(hrv=-3, baseline_hrv=55, age=30)

    @given(
        hrv=st.floats(min_value=0.0, max_value=1000.0),
        baseline_hrv=st.floats(min_value=1.0, max_value=250.0),
        age=st.floats(min_value=0.0, max_value=120.0),
    )
    def test_estimate_always_within_clamped_ranges(
        self, hrv: float, baseline_hrv: float, age: float
    ) -> None:
        """Property-based test: extreme inputs never escape the physiological ranges."""
        reading = estimate_bp(hrv=hrv, baseline_hrv=baseline_hrv, age=age)

        assert 90 <= reading.systolic <= 180
        assert 60 <= reading.diastolic <= 120

    @given(
        hrv=st.one_of(
            st.floats(min_value=0.0, max_value=19.999),
            st.floats(min_value=100.001, max_value=1000.0),
        ),
        baseline_hrv=st.floats(min_value=1.0, max_value=250.0),
    )
    def test_implausible_hrv_always_low_confidence(self, hrv: float, baseline_hrv: float) -> None:
        reading = estimate_bp(hrv=hrv, baseline_hrv=baseline_hrv, age=30)
        assert reading.confidence == Confidence.LOW

    @given(hrv=st.floats(min_value=20.0, max_value=100.0))
    def test_hrv_at_baseline_is_reference_reading(self, hrv: float) -> None:
        reading = estimate_bp(hrv=hrv, baseline_hrv=hrv, age=30)

        assert (reading.systolic, reading.diastolic) == (120, 80)
        assert reading.confidence == Confidence.HIGH


def test_round_half_up() -> None:
    assert round_half_up(120.5) == 121
    assert round_half_up(80.49) == 80
    assert round_half_up(-0.5) == 0


class TestCategorizeBP:
    @pytest.mark.parametrize(
        "systolic,diastolic,category,risk",
        [
            (119, 79, "Normal", Risk.LOW),
            (125, 78, "Elevated", Risk.MODERATE),
            (135, 85, "Stage 1 Hypertension", Risk.HIGH),
            (150, 95, "Stage 2 Hypertension", Risk.HIGH),
        ],
    )
    def test_reference_categories(
        self, systolic: int, diastolic: int, category: str, risk: Risk
    ) -> None:
        result = categorize_bp(systolic, diastolic)

        assert result.category == category
        assert result.risk == risk
        assert result.recommendation

    @pytest.mark.parametrize(
        "systolic,diastolic,category",
        [
            (120, 79, "Elevated"),  # systolic 120 is not < 120
            (120, 80, "Stage 1 Hypertension"),  # population average lands in stage 1
            (119, 80, "Stage 1 Hypertension"),  # diastolic 80 fails both lower rules
            (130, 79, "Stage 1 Hypertension"),
            (140, 89, "Stage 1 Hypertension"),  # diastolic < 90 still matches
            (139, 95, "Stage 1 Hypertension"),  # systolic < 140 still matches
            (140, 90, "Stage 2 Hypertension"),
        ],
    )
    def test_boundaries_follow_ordered_rules(
        self, systolic: int, diastolic: int, category: str
    ) -> None:
        assert categorize_bp(systolic, diastolic).category == category

    def test_high_risk_recommends_physical_reading(self) -> None:
        assert "healthcare provider" in categorize_bp(135, 85).recommendation
        assert "immediately" in categorize_bp(150, 95).recommendation

"""
Blood pressure estimation from HRV deviation.

Research on rPPG-based estimation shows HRV trends correlate with BP changes:
a 10-15% HRV drop tracks roughly a 5-10 mmHg rise. This is an estimate, not a
measurement; every category recommends a physical reading once BP looks high.
"""

import math

from core.domain.models import BiologicalSex, BPCategory, BPReading, Confidence, Risk
from core.errors import InputRangeError, InvalidBaselineError
from core.log import get_logger

logger = get_logger(__name__)

# Population averages before any adjustment
BASE_SYSTOLIC = 120.0
BASE_DIASTOLIC = 80.0

# Age adjustment (BP tends to increase with age)
AGE_REFERENCE_YEARS = 30
AGE_SYSTOLIC_PER_YEAR = 0.5
AGE_DIASTOLIC_RATIO = 0.6

# HRV adjustment outside the +/-10% quiet zone
HRV_QUIET_ZONE_PCT = 10.0
HRV_BP_FACTOR = 0.3
DEPRESSED_DIASTOLIC_RATIO = 0.7
ELEVATED_SYSTOLIC_RATIO = 0.5
ELEVATED_DIASTOLIC_RATIO = 0.4

SYSTOLIC_RANGE = (90, 180)
DIASTOLIC_RANGE = (60, 120)

# Confidence policy
PLAUSIBLE_HRV_RANGE = (20.0, 100.0)
HIGH_CONFIDENCE_DELTA_PCT = 5.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (round() is banker's rounding)."""
    return math.floor(value + 0.5)


def hrv_delta_pct(hrv: float, baseline_hrv: float) -> float:
    """Percent deviation of HRV from baseline HRV."""
    if baseline_hrv <= 0:
        raise InvalidBaselineError(f"Baseline HRV must be positive, got {baseline_hrv}")
    return (hrv - baseline_hrv) / baseline_hrv * 100


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(high, value))


def estimate_bp(
    hrv: float,
    baseline_hrv: float,
    age: float,
    sex: BiologicalSex = BiologicalSex.OTHER,
) -> BPReading:
    """
    Estimate systolic/diastolic pressure from HRV relative to the personal baseline.

    Lower HRV relative to baseline means a higher BP estimate. Values are always
    clamped to physiologically plausible ranges, so extreme HRV never produces
    an out-of-range reading; it lowers confidence instead.

    ``sex`` is accepted for parity with user profiles but does not alter the
    formula: there is no sourced coefficient for it yet.
    """
    if age < 0:
        raise InputRangeError(f"Age must be non-negative, got {age}")
    if hrv < 0:
        raise InputRangeError(f"HRV must be non-negative, got {hrv}")

    delta = hrv_delta_pct(hrv, baseline_hrv)

    systolic = BASE_SYSTOLIC
    diastolic = BASE_DIASTOLIC

    age_adjustment = max(0.0, (age - AGE_REFERENCE_YEARS) * AGE_SYSTOLIC_PER_YEAR)
    systolic += age_adjustment
    diastolic += age_adjustment * AGE_DIASTOLIC_RATIO

    hrv_adjustment = abs(delta) * HRV_BP_FACTOR
    if delta < -HRV_QUIET_ZONE_PCT:
        systolic += hrv_adjustment
        diastolic += hrv_adjustment * DEPRESSED_DIASTOLIC_RATIO
    elif delta > HRV_QUIET_ZONE_PCT:
        systolic -= hrv_adjustment * ELEVATED_SYSTOLIC_RATIO
        diastolic -= hrv_adjustment * ELEVATED_DIASTOLIC_RATIO

    low_hrv, high_hrv = PLAUSIBLE_HRV_RANGE
    if hrv < low_hrv or hrv > high_hrv:
        confidence = Confidence.LOW  # signal may be noisy
    elif abs(delta) < HIGH_CONFIDENCE_DELTA_PCT:
        confidence = Confidence.HIGH
    else:
        confidence = Confidence.MEDIUM

    reading = BPReading(
        systolic=_clamp(round_half_up(systolic), SYSTOLIC_RANGE),
        diastolic=_clamp(round_half_up(diastolic), DIASTOLIC_RANGE),
        confidence=confidence,
    )
    logger.debug(
        "bp_estimated",
        hrv_delta_pct=round(delta, 1),
        systolic=reading.systolic,
        diastolic=reading.diastolic,
        confidence=reading.confidence.value,
        sex=sex.value,
    )
    return reading


def categorize_bp(systolic: float, diastolic: float) -> BPCategory:
    """Classify a reading. Rules are ordered; the first match wins."""
    if systolic < 120 and diastolic < 80:
        return BPCategory(
            category="Normal",
            risk=Risk.LOW,
            recommendation=(
                "Your estimated BP is in the normal range. "
                "Continue maintaining healthy habits."
            ),
        )
    if systolic < 130 and diastolic < 80:
        return BPCategory(
            category="Elevated",
            risk=Risk.MODERATE,
            recommendation=(
                "Your estimated BP is slightly elevated. "
                "Consider lifestyle changes and monitor trends."
            ),
        )
    if systolic < 140 or diastolic < 90:
        return BPCategory(
            category="Stage 1 Hypertension",
            risk=Risk.HIGH,
            recommendation=(
                "Your estimated BP suggests elevated levels. "
                "Please get a physical BP reading from a healthcare provider."
            ),
        )
    return BPCategory(
        category="Stage 2 Hypertension",
        risk=Risk.HIGH,
        recommendation=(
            "Your estimated BP suggests significantly elevated levels. "
            "Please consult a healthcare provider immediately."
        ),
    )

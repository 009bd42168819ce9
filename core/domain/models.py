"""
Domain models for health signal scoring.

These models represent the core business concepts and are framework-agnostic.
All of them are immutable; attribute names are snake_case while the JSON
aliases keep the camelCase shape the mobile client consumes.
"""

from datetime import date as Date
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_FROZEN = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Trend(str, Enum):
    """Direction of cardiovascular stress over the trend window."""

    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"


class Confidence(str, Enum):
    """Qualitative reliability of an estimate, derived from signal plausibility."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Risk(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class BiologicalSex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class FoodImpactLevel(str, Enum):
    """Expected blood-pressure impact of a logged meal."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class DailyReading(BaseModel):
    """One calendar day's physiological summary for a user."""

    model_config = _FROZEN

    date: Date
    hrv: float = Field(gt=0.0, description="Heart-rate variability in milliseconds")
    heart_rate: float | None = Field(None, gt=0.0, description="Beats per minute")
    sedentary_hours: float = Field(ge=0.0, le=24.0)
    sleep_quality: int = Field(ge=0, le=10)
    screen_stress_index: float | None = Field(None, ge=0.0)
    food_impact: float | None = Field(
        None, ge=0.0, le=1.0, description="Attached after a food log on the same day"
    )


class Baseline(BaseModel):
    """A user's personal reference point, overwritten wholesale on recalibration."""

    model_config = _FROZEN

    hrv: float = Field(gt=0.0)
    sedentary_hours: float = Field(ge=0.0, le=24.0)
    sleep_quality: float = Field(ge=0.0, le=10.0)
    screen_stress_index: float | None = Field(None, ge=0.0)


class CSSResult(BaseModel):
    """Cardiovascular Stress Score snapshot, derived on demand."""

    model_config = _FROZEN

    score: int = Field(ge=0, le=100, description="Higher means more stress")
    trend: Trend
    worsening_days: int = Field(ge=0)
    should_alert: bool
    hrv_delta: float = Field(description="Signed percent change of HRV from baseline")


class BPReading(BaseModel):
    """Blood pressure estimated from HRV deviation. Advisory only."""

    model_config = _FROZEN

    systolic: int = Field(ge=90, le=180, description="mmHg")
    diastolic: int = Field(ge=60, le=120, description="mmHg")
    confidence: Confidence
    method: Literal["hrv_based"] = "hrv_based"


class BPCategory(BaseModel):
    model_config = _FROZEN

    category: str
    risk: Risk
    recommendation: str


class BPAssessment(BaseModel):
    """Estimated reading paired with its category, as handed to consumers."""

    model_config = _FROZEN

    reading: BPReading
    category: BPCategory
    hrv: float
    hrv_baseline: float


class HealthContext(BaseModel):
    """
    Read-only snapshot consumed by narrative and alerting layers.

    Recomputed on every request; downstream code must not reach into raw
    readings directly.
    """

    model_config = _FROZEN

    css: int = Field(ge=0, le=100)
    trend: Trend
    worsening_days: int = Field(ge=0)
    should_alert: bool
    hrv_delta: float
    hrv: float
    hrv_baseline: float
    sedentary_hours: float
    sleep_quality: int
    screen_stress_index: float | None = None
    baseline_is_default: bool = False

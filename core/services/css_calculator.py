"""
Cardiovascular Stress Score (CSS) calculation.

Turns an ordered history of daily readings plus a personal baseline into a
0-100 score, a trend, a consecutive worsening-day streak and an alert gate.

The daily score is a weighted composite of three normalized components:
- HRV depression below baseline (saturates at HRV_DEPRESSION_SCALE_PCT)
- Sedentary hours in excess of baseline (saturates at SEDENTARY_EXCESS_SCALE_HOURS)
- Inverse sleep quality ((10 - quality) / 10)

Weights and thresholds are defined in core.config.ScoringConfig.
"""

from collections.abc import Sequence
from datetime import date, timedelta
from statistics import fmean

from core.config import ScoringConfig, get_config
from core.domain.models import Baseline, CSSResult, DailyReading, Trend
from core.errors import InputRangeError, InvalidBaselineError
from core.log import get_logger
from core.services.bp_estimator import hrv_delta_pct, round_half_up

logger = get_logger(__name__)

SLEEP_SCALE = 10.0


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def window_readings(
    readings: Sequence[DailyReading], as_of: date | None = None
) -> list[DailyReading]:
    """
    Sort readings by date and drop those after the reference date.

    Raises InputRangeError on duplicate dates; a day has exactly one reading.
    """
    ordered = sorted(readings, key=lambda r: r.date)
    for previous, current in zip(ordered, ordered[1:]):
        if previous.date == current.date:
            raise InputRangeError(f"Duplicate reading for {current.date.isoformat()}")
    if as_of is not None:
        ordered = [r for r in ordered if r.date <= as_of]
    return ordered


def resolve_baseline(
    baseline: Baseline | None, default_baseline: Baseline | None = None
) -> Baseline:
    """
    Pick the personal baseline, falling back to the population default.

    Without an explicit ``default_baseline`` the configured one is used
    (DEFAULT_BASELINE_* environment overrides apply).
    """
    if baseline is not None:
        effective = baseline
    elif default_baseline is not None:
        effective = default_baseline
    else:
        effective = get_config().default_baseline.to_baseline()
    if effective.hrv <= 0:
        raise InvalidBaselineError(f"Baseline HRV must be positive, got {effective.hrv}")
    return effective


def daily_score(
    hrv: float,
    sedentary_hours: float,
    sleep_quality: float,
    baseline: Baseline,
    config: ScoringConfig,
) -> float:
    """Unrounded 0-100 stress score for a single day."""
    hrv_component = _clamp_unit(
        -hrv_delta_pct(hrv, baseline.hrv) / config.hrv_depression_scale_pct
    )
    sedentary_component = _clamp_unit(
        (sedentary_hours - baseline.sedentary_hours) / config.sedentary_excess_scale_hours
    )
    sleep_component = _clamp_unit((SLEEP_SCALE - sleep_quality) / SLEEP_SCALE)

    composite = (
        config.hrv_weight * hrv_component
        + config.sedentary_weight * sedentary_component
        + config.sleep_weight * sleep_component
    )
    return max(0.0, min(100.0, composite * 100))


def _reading_score(reading: DailyReading, baseline: Baseline, config: ScoringConfig) -> float:
    return daily_score(
        reading.hrv, reading.sedentary_hours, reading.sleep_quality, baseline, config
    )


def classify_trend(scores: Sequence[float], config: ScoringConfig) -> Trend:
    """Compare the newest window of daily scores against the window before it."""
    window = config.trend_window_days
    if len(scores) < window * 2:
        return Trend.STABLE

    recent = fmean(scores[-window:])
    older = fmean(scores[-2 * window : -window])

    if recent - older > config.trend_margin:
        return Trend.WORSENING
    if older - recent > config.trend_margin:
        return Trend.IMPROVING
    return Trend.STABLE


def count_worsening_days(
    readings: Sequence[DailyReading],
    scores: Sequence[float],
    config: ScoringConfig,
) -> int:
    """
    Number of days in the current run of consecutive worsening days.

    Walks backward from the newest reading while each day scores more than
    ``noise_threshold`` above the day before it. The day that starts the run
    counts too, so N strictly worsening days give N. A calendar gap between
    two readings ends the run.
    """
    steps = 0
    for index in range(len(scores) - 1, 0, -1):
        if readings[index].date - readings[index - 1].date != timedelta(days=1):
            break
        if scores[index] - scores[index - 1] > config.noise_threshold:
            steps += 1
        else:
            break
    return steps + 1 if steps else 0


def compute_css(
    readings: Sequence[DailyReading],
    baseline: Baseline | None,
    *,
    as_of: date | None = None,
    default_baseline: Baseline | None = None,
    config: ScoringConfig | None = None,
) -> CSSResult:
    """
    Compute the Cardiovascular Stress Score for a reading history.

    A missing baseline is not an error: ``default_baseline`` stands in. An
    empty history yields a neutral result. Omitted defaults and ``config``
    come from the application configuration.
    """
    config = config or get_config().scoring
    effective = resolve_baseline(baseline, default_baseline)
    ordered = window_readings(readings, as_of)

    if not ordered:
        return CSSResult(
            score=0, trend=Trend.STABLE, worsening_days=0, should_alert=False, hrv_delta=0.0
        )

    scores = [_reading_score(r, effective, config) for r in ordered]
    worsening_days = count_worsening_days(ordered, scores, config)
    latest = ordered[-1]

    result = CSSResult(
        score=round_half_up(scores[-1]),
        trend=classify_trend(scores, config),
        worsening_days=worsening_days,
        should_alert=worsening_days >= config.alert_trigger_days,
        hrv_delta=round(hrv_delta_pct(latest.hrv, effective.hrv), 1),
    )
    logger.debug(
        "css_computed",
        readings=len(ordered),
        score=result.score,
        trend=result.trend.value,
        worsening_days=result.worsening_days,
        should_alert=result.should_alert,
        default_baseline=baseline is None,
    )
    return result

"""Assembles the HealthContext snapshot handed to downstream consumers."""

from collections.abc import Sequence
from datetime import date

from core.config import ScoringConfig
from core.domain.models import Baseline, DailyReading, HealthContext
from core.errors import NoReadingsError
from core.services.css_calculator import compute_css, resolve_baseline, window_readings


def assemble_health_context(
    readings: Sequence[DailyReading],
    baseline: Baseline | None,
    *,
    as_of: date | None = None,
    default_baseline: Baseline | None = None,
    config: ScoringConfig | None = None,
) -> HealthContext:
    """
    Combine the latest reading, the CSS result and the effective baseline.

    Raises NoReadingsError when there is nothing to report. A missing
    baseline is tolerated and flagged through ``baseline_is_default``.
    """
    ordered = window_readings(readings, as_of)
    if not ordered:
        raise NoReadingsError("No daily readings recorded yet")

    effective = resolve_baseline(baseline, default_baseline)
    css = compute_css(ordered, baseline, default_baseline=default_baseline, config=config)
    latest = ordered[-1]

    return HealthContext(
        css=css.score,
        trend=css.trend,
        worsening_days=css.worsening_days,
        should_alert=css.should_alert,
        hrv_delta=css.hrv_delta,
        hrv=latest.hrv,
        hrv_baseline=effective.hrv,
        sedentary_hours=latest.sedentary_hours,
        sleep_quality=latest.sleep_quality,
        screen_stress_index=latest.screen_stress_index,
        baseline_is_default=baseline is None,
    )

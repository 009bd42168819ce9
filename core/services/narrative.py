"""
Presentation layer: turns structured scoring output into text.

Narrative generators (LLM prompts, alert copy, push notifications) build on
these strings. Nothing here feeds back into scoring.
"""

import textwrap
from typing import TYPE_CHECKING

from core.domain.models import BPCategory, BPReading, FoodImpactLevel, HealthContext
from core.errors import InvalidBaselineError, NoReadingsError, ScoringError

if TYPE_CHECKING:
    from core.services.health_signals import AlertEvent


def format_health_context(ctx: HealthContext) -> str:
    """Render the context block that prefixes conversational prompts."""
    baseline_note = " (population default)" if ctx.baseline_is_default else ""
    return textwrap.dedent(
        f"""\
        Current user health context:
        - Cardiovascular Stress Score (CSS): {ctx.css} / 100
        - CSS trend: {ctx.trend.value} (improving / stable / worsening)
        - HRV today: {ctx.hrv:g}ms (personal baseline: {ctx.hrv_baseline:g}ms{baseline_note})
        - HRV change from baseline: {ctx.hrv_delta:+.1f}%
        - Sedentary hours today: {ctx.sedentary_hours:g}
        - Sleep quality last night: {ctx.sleep_quality} / 10
        - Consecutive worsening days: {ctx.worsening_days}
        - Screen stress index: {ctx.screen_stress_index or 0:g}"""
    )


def format_bp_summary(reading: BPReading, category: BPCategory) -> str:
    return (
        f"Estimated BP: {reading.systolic}/{reading.diastolic} mmHg "
        f"({reading.confidence.value} confidence, {category.category})\n"
        f"{category.recommendation}"
    )


def format_food_impact(
    food_name: str, sodium_mg: float, level: FoodImpactLevel, details: str | None = None
) -> str:
    """Advice for a logged meal, keyed on its classified impact level."""
    if level == FoodImpactLevel.HIGH:
        message = (
            f"{food_name} is high in sodium (~{sodium_mg:g}mg). This may elevate your "
            "blood pressure over the next few hours. Consider drinking water and "
            "reducing salt at your next meal."
        )
    elif level == FoodImpactLevel.MODERATE:
        message = (
            f"{food_name} has moderate sodium (~{sodium_mg:g}mg). Be mindful of your "
            "salt intake for the rest of the day."
        )
    else:
        message = (
            f"{food_name} is a heart-friendly choice! Low sodium (~{sodium_mg:g}mg) and "
            "good for your cardiovascular health."
        )
    if details:
        message += f" {details}"
    return message


def format_alert(event: "AlertEvent") -> str:
    return (
        f"{event.title}: cardiovascular stress has been worsening for "
        f"{event.worsening_days} consecutive days (CSS {event.css}/100)."
    )


def describe_unavailable(error: ScoringError) -> str:
    """Degraded, user-facing text for a scoring failure."""
    if isinstance(error, NoReadingsError):
        return "Not enough data yet. Take your first reading to see your heart health trends."
    if isinstance(error, InvalidBaselineError):
        return "Your personal baseline needs recalibrating before we can compare readings."
    return "We couldn't score your latest readings. Please try again after your next check-in."

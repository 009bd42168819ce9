"""Blood-pressure impact of a logged meal, attached to the same day's reading."""

from core.domain.models import FoodImpactLevel
from core.errors import InputRangeError

HIGH_SODIUM_MG = 1500
MODERATE_SODIUM_MG = 800

FOOD_IMPACT_SCORES: dict[FoodImpactLevel, float] = {
    FoodImpactLevel.LOW: 0.0,
    FoodImpactLevel.MODERATE: 0.5,
    FoodImpactLevel.HIGH: 1.0,
}


def classify_food_impact(
    sodium_mg: float, reported: FoodImpactLevel | None = None
) -> FoodImpactLevel:
    """
    Classify a meal by sodium content, never below what the analyzer reported.

    The image analyzer's own verdict is an upstream input; sodium can only
    raise it.
    """
    if sodium_mg < 0:
        raise InputRangeError(f"Sodium must be non-negative, got {sodium_mg}")

    if reported == FoodImpactLevel.HIGH or sodium_mg > HIGH_SODIUM_MG:
        return FoodImpactLevel.HIGH
    if reported == FoodImpactLevel.MODERATE or sodium_mg > MODERATE_SODIUM_MG:
        return FoodImpactLevel.MODERATE
    return FoodImpactLevel.LOW


def food_impact_score(level: FoodImpactLevel) -> float:
    """Map an impact level onto the 0-1 score stored on DailyReading.food_impact."""
    return FOOD_IMPACT_SCORES[level]

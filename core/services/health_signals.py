"""
Service that joins the stores to the scoring engine.

Pipeline:
1. Fetch a consistent snapshot (baseline + readings) for a user
2. Score it with the pure engine (CSS, BP estimate)
3. Return results as Result values so callers can degrade gracefully
4. Turn sustained worsening into proactive alerts
"""

import asyncio
import inspect
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime

from core.config import AppConfig, get_config
from core.domain.models import (
    Baseline,
    BiologicalSex,
    BPAssessment,
    DailyReading,
    FoodImpactLevel,
    HealthContext,
)
from core.errors import NoReadingsError, ScoringError
from core.log import get_logger
from core.services.bp_estimator import categorize_bp, estimate_bp
from core.services.food_impact import classify_food_impact, food_impact_score
from core.services.health_context import assemble_health_context
from core.services.narrative import format_alert
from core.services.result import Result
from core.services.stores import BaselineStore, ReadingStore

logger = get_logger(__name__)


@dataclass
class AlertEvent:
    """Proactive alert raised when stress keeps worsening day after day."""

    timestamp: datetime
    user_id: str
    title: str
    css: int
    worsening_days: int
    context: HealthContext


class ProactiveAlertManager:
    """Turns health contexts into alerts and dispatches them."""

    def __init__(self) -> None:
        self.alert_history: deque[AlertEvent] = deque(maxlen=1000)
        self.logger = logger.bind(component="alert_manager")

    def process(self, user_id: str, context: HealthContext) -> list[AlertEvent]:
        """Emit an alert for a context whose worsening streak crossed the trigger."""
        if not context.should_alert:
            return []

        alert = AlertEvent(
            timestamp=datetime.now(UTC),
            user_id=user_id,
            title="Cardiovascular stress rising",
            css=context.css,
            worsening_days=context.worsening_days,
            context=context,
        )
        self.alert_history.append(alert)
        self.logger.info(
            "alert_generated",
            user_id=user_id,
            css=context.css,
            worsening_days=context.worsening_days,
        )
        return [alert]

    async def dispatch_alerts(
        self,
        alerts: list[AlertEvent],
        handlers: list[Callable[[AlertEvent], None]] | None = None,
    ) -> None:
        """Dispatch alerts to configured handlers (push, SMS, narrative generator, etc.)."""

        if not alerts:
            return

        if not handlers:
            handlers = [self._log_alert_handler]

        for alert in alerts:
            for handler in handlers:
                try:
                    if inspect.iscoroutinefunction(handler):
                        await handler(alert)
                    else:
                        handler(alert)
                except Exception as e:
                    self.logger.error(
                        "alert_dispatch_failed", error=str(e), user_id=alert.user_id
                    )

    def _log_alert_handler(self, alert: AlertEvent) -> None:
        self.logger.warning("proactive_alert", user_id=alert.user_id, message=format_alert(alert))


class HealthSignalService:
    """
    Entry point for request handlers.

    Every read returns a Result: absent history or baseline is the normal
    state for a new user, so it never surfaces as a raised exception.
    """

    def __init__(
        self,
        baseline_store: BaselineStore,
        reading_store: ReadingStore,
        config: AppConfig | None = None,
    ) -> None:
        self.config = config or get_config()
        self.baseline_store = baseline_store
        self.reading_store = reading_store
        self.default_baseline = self.config.default_baseline.to_baseline()
        self.alert_manager = ProactiveAlertManager()
        self.logger = logger.bind(component="health_signal_service")

    async def calibrate(self, user_id: str, baseline: Baseline) -> None:
        """Overwrite the user's baseline. Future deltas are relative to this one."""
        await self.baseline_store.set(user_id, baseline)

    async def record_reading(self, user_id: str, reading: DailyReading) -> None:
        await self.reading_store.upsert(user_id, reading)

    async def attach_food_impact(
        self,
        user_id: str,
        day: date,
        sodium_mg: float,
        reported: FoodImpactLevel | None = None,
    ) -> Result[FoodImpactLevel, ScoringError]:
        """Classify a logged meal and patch the score onto that day's reading."""
        try:
            level = classify_food_impact(sodium_mg, reported)
        except ScoringError as e:
            self.logger.warning("food_impact_rejected", user_id=user_id, error=e.code)
            return Result.err(e)

        readings = await self.reading_store.list(user_id)
        existing = next((r for r in readings if r.date == day), None)
        if existing is None:
            self.logger.warning(
                "food_impact_without_reading", user_id=user_id, date=day.isoformat()
            )
            return Result.err(NoReadingsError(f"No reading recorded on {day.isoformat()}"))

        await self.reading_store.upsert(
            user_id, existing.model_copy(update={"food_impact": food_impact_score(level)})
        )
        self.logger.info("food_impact_attached", user_id=user_id, level=level.value)
        return Result.ok(level)

    async def _snapshot(self, user_id: str) -> tuple[Baseline | None, list[DailyReading]]:
        baseline, readings = await asyncio.gather(
            self.baseline_store.get(user_id), self.reading_store.list(user_id)
        )
        return baseline, readings

    async def get_health_context(
        self, user_id: str, as_of: date | None = None
    ) -> Result[HealthContext, ScoringError]:
        baseline, readings = await self._snapshot(user_id)
        try:
            context = assemble_health_context(
                readings,
                baseline,
                as_of=as_of,
                default_baseline=self.default_baseline,
                config=self.config.scoring,
            )
        except ScoringError as e:
            self.logger.warning("health_context_unavailable", user_id=user_id, error=e.code)
            return Result.err(e)

        self.logger.info(
            "health_context_assembled",
            user_id=user_id,
            css=context.css,
            trend=context.trend.value,
            baseline_is_default=context.baseline_is_default,
        )
        return Result.ok(context)

    async def estimate_blood_pressure(
        self,
        user_id: str,
        age: float,
        sex: BiologicalSex = BiologicalSex.OTHER,
        hrv: float | None = None,
    ) -> Result[BPAssessment, ScoringError]:
        """
        Estimate BP from a fresh HRV sample, or the latest stored reading.

        Falls back to the default baseline HRV when the user has not calibrated.
        """
        baseline, readings = await self._snapshot(user_id)
        if hrv is None:
            if not readings:
                return Result.err(NoReadingsError("No HRV sample or stored reading available"))
            hrv = max(readings, key=lambda r: r.date).hrv

        baseline_hrv = (baseline or self.default_baseline).hrv
        try:
            reading = estimate_bp(hrv, baseline_hrv, age, sex)
        except ScoringError as e:
            self.logger.warning("bp_estimate_failed", user_id=user_id, error=e.code)
            return Result.err(e)

        return Result.ok(
            BPAssessment(
                reading=reading,
                category=categorize_bp(reading.systolic, reading.diastolic),
                hrv=hrv,
                hrv_baseline=baseline_hrv,
            )
        )

    async def check_alerts(
        self,
        user_id: str,
        as_of: date | None = None,
        handlers: list[Callable[[AlertEvent], None]] | None = None,
    ) -> list[AlertEvent]:
        """Assemble the context, raise proactive alerts and dispatch them."""
        result = await self.get_health_context(user_id, as_of)
        if result.is_err():
            return []

        alerts = self.alert_manager.process(user_id, result.unwrap())
        await self.alert_manager.dispatch_alerts(alerts, handlers)
        return alerts

"""
End-to-end walkthrough of the scoring pipeline on the demo user.

This script shows:
1. Configuration loading
2. Degraded mode for a brand-new user (no readings, no baseline)
3. Seeding six days of worsening readings
4. Health context, BP estimate, food impact and proactive alert for the seeded user

Run with: uv run python run_demo.py
"""

import asyncio
from datetime import date

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from adapters.demo.seed import DEMO_BASELINE, DEMO_READINGS, seed_demo_data
from core.config import get_config, setup_logging
from core.domain.models import BiologicalSex, DailyReading
from core.services.bp_estimator import categorize_bp, estimate_bp
from core.services.css_calculator import compute_css
from core.services.health_signals import AlertEvent, HealthSignalService
from core.services.narrative import (
    describe_unavailable,
    format_alert,
    format_bp_summary,
    format_food_impact,
    format_health_context,
)
from core.services.stores import InMemoryBaselineStore, InMemoryReadingStore

console = Console()


def readings_table(readings: list[DailyReading]) -> Table:
    table = Table(title="Daily readings")
    table.add_column("Date")
    table.add_column("HRV (ms)", justify="right")
    table.add_column("Sedentary (h)", justify="right")
    table.add_column("Sleep", justify="right")
    table.add_column("CSS so far", justify="right")

    for index, reading in enumerate(readings):
        css = compute_css(readings[: index + 1], DEMO_BASELINE)
        table.add_row(
            reading.date.isoformat(),
            f"{reading.hrv:g}",
            f"{reading.sedentary_hours:g}",
            str(reading.sleep_quality),
            str(css.score),
        )
    return table


async def main() -> None:
    config = get_config()
    setup_logging(config)
    console.print(Panel(f"Environment: {config.environment}", title="Health Signal Engine"))

    service = HealthSignalService(InMemoryBaselineStore(), InMemoryReadingStore(), config)

    # New user: nothing recorded yet
    result = await service.get_health_context("new-user")
    if result.is_err():
        console.print(Panel(describe_unavailable(result.unwrap_err()), title="New user"))

    await seed_demo_data("demo-user", service.baseline_store, service.reading_store)
    console.print(readings_table(DEMO_READINGS))

    result = await service.get_health_context("demo-user", as_of=date(2026, 2, 20))
    context = result.unwrap()
    console.print(Panel(format_health_context(context), title="Health context"))

    assessment = (
        await service.estimate_blood_pressure("demo-user", age=45, sex=BiologicalSex.FEMALE)
    ).unwrap()
    console.print(
        Panel(format_bp_summary(assessment.reading, assessment.category), title="BP estimate")
    )

    # Lunch logged on demo day
    meal = await service.attach_food_impact("demo-user", date(2026, 2, 20), sodium_mg=1800)
    console.print(
        Panel(format_food_impact("Ramen", 1800, meal.unwrap()), title="Food impact")
    )

    def print_alert(alert: AlertEvent) -> None:
        console.print(Panel(format_alert(alert), title="Proactive alert", style="red"))

    alerts = await service.check_alerts(
        "demo-user", as_of=date(2026, 2, 20), handlers=[print_alert]
    )
    if not alerts:
        console.print("[green]No alerts raised[/green]")

    # Live reading on demo day, scored directly against the demo baseline
    live = estimate_bp(hrv=35, baseline_hrv=55, age=45)
    category = categorize_bp(live.systolic, live.diastolic)
    console.print(Panel(format_bp_summary(live, category), title="Live rPPG reading (HRV 35ms)"))


if __name__ == "__main__":
    asyncio.run(main())

"""
Demo seeded data.

Six days of steadily worsening readings: HRV drifts down, sedentary time
creeps up and sleep degrades. Scoring it against DEMO_BASELINE yields a
six-day worsening streak, which trips the proactive alert.
"""

from datetime import date

from core.domain.models import Baseline, DailyReading
from core.services.stores import BaselineStore, ReadingStore

DEMO_READINGS: list[DailyReading] = [
    DailyReading(date=date(2026, 2, 15), hrv=52, sedentary_hours=5, sleep_quality=8),
    DailyReading(date=date(2026, 2, 16), hrv=49, sedentary_hours=6, sleep_quality=7),
    DailyReading(date=date(2026, 2, 17), hrv=47, sedentary_hours=7, sleep_quality=6),
    DailyReading(date=date(2026, 2, 18), hrv=44, sedentary_hours=7, sleep_quality=5),
    DailyReading(date=date(2026, 2, 19), hrv=41, sedentary_hours=8, sleep_quality=5),
    DailyReading(date=date(2026, 2, 20), hrv=38, sedentary_hours=9, sleep_quality=4),
]

DEMO_BASELINE = Baseline(hrv=55, sedentary_hours=5, sleep_quality=8)


async def seed_demo_data(
    user_id: str, baseline_store: BaselineStore, reading_store: ReadingStore
) -> None:
    """Load the demo baseline and history for a user."""
    await baseline_store.set(user_id, DEMO_BASELINE)
    for reading in DEMO_READINGS:
        await reading_store.upsert(user_id, reading)

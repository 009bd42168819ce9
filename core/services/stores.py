"""
Storage collaborators the engine reads snapshots from.

The hosted data store lives outside this package; these protocols describe
the seam and the in-memory implementations back the demo and the tests.
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Protocol

from core.domain.models import Baseline, DailyReading
from core.log import get_logger

logger = get_logger(__name__)


class BaselineStore(Protocol):
    """Per-user baseline, written wholesale on (re)calibration."""

    async def get(self, user_id: str) -> Baseline | None: ...

    async def set(self, user_id: str, baseline: Baseline) -> None: ...


class ReadingStore(Protocol):
    """Per-user daily readings, one per calendar date."""

    async def list(self, user_id: str) -> list[DailyReading]:
        """Return readings ascending by date."""
        ...

    async def upsert(self, user_id: str, reading: DailyReading) -> None:
        """Insert a new day or replace the same day's reading."""
        ...


class InMemoryBaselineStore:
    def __init__(self) -> None:
        self._baselines: dict[str, Baseline] = {}
        self._lock = asyncio.Lock()
        self.logger = logger.bind(component="baseline_store")

    async def get(self, user_id: str) -> Baseline | None:
        return self._baselines.get(user_id)

    async def set(self, user_id: str, baseline: Baseline) -> None:
        async with self._lock:
            replaced = user_id in self._baselines
            self._baselines[user_id] = baseline
        self.logger.info("baseline_set", user_id=user_id, recalibration=replaced)


class InMemoryReadingStore:
    def __init__(self) -> None:
        self._readings: dict[str, dict[date, DailyReading]] = {}
        self._lock = asyncio.Lock()
        self.logger = logger.bind(component="reading_store")

    async def list(self, user_id: str) -> list[DailyReading]:
        by_date = self._readings.get(user_id, {})
        return [by_date[day] for day in sorted(by_date)]

    async def upsert(self, user_id: str, reading: DailyReading) -> None:
        async with self._lock:
            by_date = self._readings.setdefault(user_id, {})
            replaced = reading.date in by_date
            by_date[reading.date] = reading
        self.logger.info(
            "reading_upserted", user_id=user_id, date=reading.date.isoformat(), replaced=replaced
        )

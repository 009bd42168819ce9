"""
Tests for configuration management in `core/config.py`.

Covers:
- Environment parsing and debug defaults
- Logging level coercion to the expected Literal
- Scoring weight overrides and the sum-to-one check
- Default baseline overrides
- get_config cache behavior
- AppConfig validation (debug only allowed in development)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from core.config import (
    AppConfig,
    DefaultBaselineConfig,
    LoggingConfig,
    ScoringConfig,
    get_config,
    load_config_from_env,
    setup_logging,
)

_SCORING_VARS = (
    "CSS_WEIGHT_HRV",
    "CSS_WEIGHT_SEDENTARY",
    "CSS_WEIGHT_SLEEP",
    "CSS_TREND_MARGIN",
    "CSS_NOISE_THRESHOLD",
    "CSS_ALERT_TRIGGER_DAYS",
    "DEFAULT_BASELINE_HRV",
    "DEFAULT_BASELINE_SEDENTARY_HOURS",
    "DEFAULT_BASELINE_SLEEP_QUALITY",
)


@pytest.fixture(autouse=True)
def clear_config_cache(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear the get_config cache and any scoring overrides around each test."""
    for name in _SCORING_VARS:
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_load_config_dev_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    config = load_config_from_env()

    assert config.environment == "development"
    assert config.debug is True
    assert config.logging.level == "INFO"
    assert config.logging.format == "console"
    assert config.scoring == ScoringConfig()
    assert config.default_baseline == DefaultBaselineConfig()


def test_production_logs_json_without_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "prod")

    config = load_config_from_env()

    assert config.environment == "production"
    assert config.debug is False
    assert config.logging.format == "json"


def test_logging_level_literal_coercion(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")

    monkeypatch.setenv("LOG_LEVEL", "unknown")
    assert load_config_from_env().logging.level == "INFO"

    monkeypatch.setenv("LOG_LEVEL", "error")
    assert load_config_from_env().logging.level == "ERROR"


def test_scoring_overrides_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CSS_WEIGHT_HRV", "0.6")
    monkeypatch.setenv("CSS_WEIGHT_SEDENTARY", "0.1")
    monkeypatch.setenv("CSS_WEIGHT_SLEEP", "0.3")
    monkeypatch.setenv("CSS_ALERT_TRIGGER_DAYS", "4")
    monkeypatch.setenv("CSS_TREND_MARGIN", "2.5")

    scoring = load_config_from_env().scoring

    assert scoring.hrv_weight == 0.6
    assert scoring.sedentary_weight == 0.1
    assert scoring.alert_trigger_days == 4
    assert scoring.trend_margin == 2.5


def test_weights_not_summing_to_one_fail_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CSS_WEIGHT_HRV", "0.9")

    with pytest.raises(ValueError, match="sum to 1.0"):
        load_config_from_env()


def test_default_baseline_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFAULT_BASELINE_HRV", "62")
    monkeypatch.setenv("DEFAULT_BASELINE_SLEEP_QUALITY", "6")

    baseline = load_config_from_env().default_baseline.to_baseline()

    assert baseline.hrv == 62.0
    assert baseline.sedentary_hours == 6.0
    assert baseline.sleep_quality == 6.0


def test_default_baseline_must_be_positive() -> None:
    with pytest.raises(ValueError):
        DefaultBaselineConfig(hrv=0)


def test_get_config_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")

    c1 = get_config()
    c2 = get_config()
    assert c1 is c2


def test_app_config_debug_only_in_dev_validation() -> None:
    with pytest.raises(ValueError, match="debug mode"):
        AppConfig(environment="production", debug=True)

    cfg = AppConfig(environment="development", debug=True)
    assert cfg.debug is True


def test_setup_logging_applies_level() -> None:
    config = AppConfig(logging=LoggingConfig(level="WARNING", format="console"))

    setup_logging(config)

    assert logging.getLogger().level == logging.WARNING
    setup_logging(AppConfig())

"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Scoring weights documented here, overridable per deployment
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from core.domain.models import Baseline
from core.log import LogFormat, LogLevel, configure_logging

# Load environment variables from .env file
load_dotenv()

# CSS composite weights. Behavior depends on their ratios, so they must sum to 1.
HRV_WEIGHT = 0.5
SEDENTARY_WEIGHT = 0.2
SLEEP_WEIGHT = 0.3

# Normalization scales: deviation at which a component saturates at 1.0
HRV_DEPRESSION_SCALE_PCT = 50.0
SEDENTARY_EXCESS_SCALE_HOURS = 8.0

# Trend and streak policy
TREND_WINDOW_DAYS = 3
TREND_MARGIN = 5.0
NOISE_THRESHOLD = 1.0
ALERT_TRIGGER_DAYS = 6


class ScoringConfig(BaseModel):
    """Cardiovascular Stress Score weights and thresholds."""

    hrv_weight: float = Field(default=HRV_WEIGHT, ge=0.0, le=1.0)
    sedentary_weight: float = Field(default=SEDENTARY_WEIGHT, ge=0.0, le=1.0)
    sleep_weight: float = Field(default=SLEEP_WEIGHT, ge=0.0, le=1.0)

    hrv_depression_scale_pct: float = Field(
        default=HRV_DEPRESSION_SCALE_PCT,
        gt=0.0,
        description="HRV drop below baseline (percent) that maxes out the HRV component",
    )
    sedentary_excess_scale_hours: float = Field(
        default=SEDENTARY_EXCESS_SCALE_HOURS,
        gt=0.0,
        description="Sedentary hours above baseline that max out the sedentary component",
    )

    trend_window_days: int = Field(default=TREND_WINDOW_DAYS, gt=0)
    trend_margin: float = Field(
        default=TREND_MARGIN, ge=0.0, description="Score points separating stable from a trend"
    )
    noise_threshold: float = Field(
        default=NOISE_THRESHOLD,
        ge=0.0,
        description="Day-over-day score increase needed to count as a worsening day",
    )
    alert_trigger_days: int = Field(default=ALERT_TRIGGER_DAYS, gt=0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "ScoringConfig":
        total = self.hrv_weight + self.sedentary_weight + self.sleep_weight
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"CSS weights must sum to 1.0, got {total:.3f}")
        return self


class DefaultBaselineConfig(BaseModel):
    """Population defaults standing in for a user who has not calibrated yet."""

    hrv: float = Field(default=50.0, gt=0.0, description="Milliseconds")
    sedentary_hours: float = Field(default=6.0, ge=0.0, le=24.0)
    sleep_quality: float = Field(default=7.0, ge=0.0, le=10.0)

    def to_baseline(self) -> Baseline:
        return Baseline(
            hrv=self.hrv,
            sedentary_hours=self.sedentary_hours,
            sleep_quality=self.sleep_quality,
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: LogFormat = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    default_baseline: DefaultBaselineConfig = Field(default_factory=DefaultBaselineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> LogLevel:
        v = val.strip().upper()
        return cast(LogLevel, v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO")

    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    scoring_config = ScoringConfig(
        hrv_weight=float(os.getenv("CSS_WEIGHT_HRV", str(HRV_WEIGHT))),
        sedentary_weight=float(os.getenv("CSS_WEIGHT_SEDENTARY", str(SEDENTARY_WEIGHT))),
        sleep_weight=float(os.getenv("CSS_WEIGHT_SLEEP", str(SLEEP_WEIGHT))),
        trend_margin=float(os.getenv("CSS_TREND_MARGIN", str(TREND_MARGIN))),
        noise_threshold=float(os.getenv("CSS_NOISE_THRESHOLD", str(NOISE_THRESHOLD))),
        alert_trigger_days=int(os.getenv("CSS_ALERT_TRIGGER_DAYS", str(ALERT_TRIGGER_DAYS))),
    )

    default_baseline_config = DefaultBaselineConfig(
        hrv=float(os.getenv("DEFAULT_BASELINE_HRV", "50.0")),
        sedentary_hours=float(os.getenv("DEFAULT_BASELINE_SEDENTARY_HOURS", "6.0")),
        sleep_quality=float(os.getenv("DEFAULT_BASELINE_SLEEP_QUALITY", "7.0")),
    )

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        scoring=scoring_config,
        default_baseline=default_baseline_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def setup_logging(config: AppConfig | None = None) -> None:
    """Apply the logging section of the configuration."""
    config = config or get_config()
    configure_logging(config.logging.level, config.logging.format)


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\nCONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level}")

    print("\nSCORING")
    print(
        f"Weights: hrv={config.scoring.hrv_weight} "
        f"sedentary={config.scoring.sedentary_weight} sleep={config.scoring.sleep_weight}"
    )
    print(f"Trend Margin: {config.scoring.trend_margin}")
    print(f"Alert After: {config.scoring.alert_trigger_days} worsening days")

    print("\nDEFAULT BASELINE")
    print(f"HRV: {config.default_baseline.hrv}ms")
    print(f"Sedentary: {config.default_baseline.sedentary_hours}h")
    print(f"Sleep Quality: {config.default_baseline.sleep_quality}/10")


if __name__ == "__main__":
    print_config_summary()

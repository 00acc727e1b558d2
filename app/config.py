"""Configuration settings for the Weather.ly backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("weatherly.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_optional_int(env_var: str) -> int | None:
    value = os.getenv(env_var)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-integer value for %s: %r", env_var, value)
        return None


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    weatherly_env: str = os.getenv("WEATHERLY_ENV", "local")
    log_level: str = os.getenv("WEATHERLY_LOG_LEVEL", "INFO")

    # Forecast provider
    forecast_base_url: str = os.getenv(
        "FORECAST_BASE_URL", "https://api.open-meteo.com/v1/forecast"
    )
    forecast_timeout: float = float(os.getenv("FORECAST_TIMEOUT", "10.0"))
    forecast_days: int = int(os.getenv("FORECAST_DAYS", "7"))
    ensemble_base_url: str = os.getenv(
        "ENSEMBLE_BASE_URL", "https://ensemble-api.open-meteo.com/v1/ensemble"
    )
    ensemble_model: str = os.getenv("ENSEMBLE_MODEL", "icon_seamless")

    # Default comfort policy, always Celsius
    comfort_min_temperature_c: float = float(os.getenv("COMFORT_MIN_TEMPERATURE_C", "18"))
    comfort_max_temperature_c: float = float(os.getenv("COMFORT_MAX_TEMPERATURE_C", "28"))
    comfort_max_humidity_pct: float = float(os.getenv("COMFORT_MAX_HUMIDITY_PCT", "70"))
    comfort_max_uv_index: float = float(os.getenv("COMFORT_MAX_UV_INDEX", "6"))
    comfort_max_cloud_cover_pct: float = float(os.getenv("COMFORT_MAX_CLOUD_COVER_PCT", "60"))
    comfort_allow_precipitation: bool = _get_bool("COMFORT_ALLOW_PRECIPITATION", default=False)

    # Work hours band; disabled unless both ends are configured
    work_hours_start: int | None = _get_optional_int("WORK_HOURS_START")
    work_hours_end: int | None = _get_optional_int("WORK_HOURS_END")

    reminder_lead_minutes: int = int(os.getenv("REMINDER_LEAD_MINUTES", "30"))


settings = Settings()

__all__ = ["settings", "Settings"]

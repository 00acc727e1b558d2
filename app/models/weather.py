"""Forecast data models consumed by the window computations."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class HourlySample(BaseModel):
    """One hourly observation or forecast point, canonical units (Celsius)."""

    time: datetime = Field(..., description="Start of the hour the sample describes")
    temperature_c: float = Field(default=0.0, description="Air temperature in Celsius")
    humidity_pct: float = Field(default=0.0, description="Relative humidity in percent")
    precipitation_probability_pct: float = Field(
        default=0.0, description="Probability of precipitation in percent",
    )
    uv_index: float = Field(default=0.0, description="UV index")
    cloud_cover_pct: float = Field(default=0.0, description="Cloud cover percentage")


class DailyForecast(BaseModel):
    """Aggregate of one calendar day of hourly samples."""

    day: date = Field(..., description="Calendar day in the location timezone")
    max_temperature_c: float = Field(..., description="Highest hourly temperature")
    min_temperature_c: float = Field(..., description="Lowest hourly temperature")
    avg_temperature_c: float = Field(
        ..., description="Average of the day's max and min temperature",
    )
    avg_humidity_pct: float = Field(..., description="Mean hourly humidity")
    avg_precipitation_probability_pct: float = Field(
        ..., description="Mean hourly precipitation probability",
    )
    max_uv_index: float = Field(..., description="Peak UV index of the day")
    is_good_day: bool = Field(
        default=False, description="Whether the aggregate satisfies the comfort policy",
    )


class ForecastHour(HourlySample):
    """An hourly sample with the ensemble median temperature alongside."""

    median_temperature_c: Optional[float] = Field(
        default=None, description="Ensemble median temperature, null when unavailable",
    )


class ForecastDay(BaseModel):
    """The hours of one calendar day in the location timezone."""

    day: date = Field(..., description="Calendar day in the location timezone")
    hours: list[ForecastHour] = Field(default_factory=list, description="Hours ordered by time")


class ForecastResponse(BaseModel):
    location_id: str = Field(..., description="Location the forecast belongs to")
    timezone: str = Field(..., description="IANA timezone the days are cut in")
    days: list[ForecastDay] = Field(default_factory=list, description="Days ascending")


__all__ = [
    "DailyForecast",
    "ForecastDay",
    "ForecastHour",
    "ForecastResponse",
    "HourlySample",
]

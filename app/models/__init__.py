"""Pydantic models for the Weather.ly backend."""

from .locations import Location, LocationCreate
from .weather import (
    DailyForecast,
    ForecastDay,
    ForecastHour,
    ForecastResponse,
    HourlySample,
)
from .windows import (
    ComfortPolicy,
    Reminder,
    Window,
    WindowAnnotation,
    WindowListResponse,
    WindowRefreshRequest,
    WorkHoursBand,
)

__all__ = [
    "ComfortPolicy",
    "DailyForecast",
    "ForecastDay",
    "ForecastHour",
    "ForecastResponse",
    "HourlySample",
    "Location",
    "LocationCreate",
    "Reminder",
    "Window",
    "WindowAnnotation",
    "WindowListResponse",
    "WindowRefreshRequest",
    "WorkHoursBand",
]

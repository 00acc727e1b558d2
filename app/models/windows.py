"""Comfort policy and good-window models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.weather import DailyForecast


def new_window_id() -> str:
    """Mint an opaque window identifier."""

    return uuid4().hex


class ComfortPolicy(BaseModel):
    """User thresholds defining an acceptable hour. All bounds are inclusive."""

    model_config = ConfigDict(frozen=True)

    min_temperature_c: float = Field(..., description="Lowest acceptable temperature")
    max_temperature_c: float = Field(..., description="Highest acceptable temperature")
    max_humidity_pct: float = Field(..., description="Humidity ceiling in percent")
    max_uv_index: float = Field(..., description="UV index ceiling")
    max_cloud_cover_pct: float = Field(..., description="Cloud cover ceiling in percent")
    allow_precipitation: bool = Field(
        default=False,
        description="When false, hours with 20% or more chance of rain fail",
    )


class WorkHoursBand(BaseModel):
    """Daily local-time interval ``[start_hour, end_hour)`` used to slice windows."""

    model_config = ConfigDict(frozen=True)

    start_hour: int = Field(..., description="Hour the band opens")
    end_hour: int = Field(..., description="Hour the band closes; 24 means midnight")


class Window(BaseModel):
    """A contiguous run of hours satisfying a comfort policy."""

    id: str = Field(default_factory=new_window_id, description="Opaque window identifier")
    start: datetime = Field(..., description="Time of the first passing hour")
    end: datetime = Field(..., description="Time of the last passing hour (inclusive)")
    min_temperature_c: float = Field(..., description="Lowest temperature over the run")
    max_temperature_c: float = Field(..., description="Highest temperature over the run")
    max_humidity_pct: float = Field(..., description="Highest humidity over the run")
    max_uv_index: float = Field(..., description="Highest UV index over the run")
    max_cloud_cover_pct: float = Field(..., description="Highest cloud cover over the run")
    plan: Optional[str] = Field(default=None, description="User plan for this window")
    skipped: bool = Field(default=False, description="Whether the user skipped this window")

    @property
    def is_annotated(self) -> bool:
        return self.plan is not None or self.skipped


class WindowAnnotation(BaseModel):
    """Partial update of a window's user annotation."""

    plan: Optional[str] = Field(
        default=None, description="New plan text; null or blank text clears it",
    )
    skipped: Optional[bool] = Field(default=None, description="New skipped flag")

    @field_validator("plan")
    @classmethod
    def _blank_plan_clears(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class WindowRefreshRequest(BaseModel):
    """Parameters for recomputing a location's windows."""

    policy: Optional[ComfortPolicy] = Field(
        default=None, description="Comfort policy; server defaults when omitted",
    )
    work_hours: Optional[WorkHoursBand] = Field(
        default=None, description="Work hours band; server default when omitted",
    )

    @model_validator(mode="after")
    def _check_ranges(self) -> "WindowRefreshRequest":
        policy = self.policy
        if policy is not None and policy.min_temperature_c > policy.max_temperature_c:
            raise ValueError("min_temperature_c must not exceed max_temperature_c")
        band = self.work_hours
        if band is not None:
            if not 0 <= band.start_hour < band.end_hour <= 24:
                raise ValueError("work hours must satisfy 0 <= start_hour < end_hour <= 24")
        return self


class WindowListResponse(BaseModel):
    """Windows stored for a location, optionally with the daily outlook."""

    location_id: str = Field(..., description="Location the windows belong to")
    windows: list[Window] = Field(default_factory=list, description="Windows ordered by start")
    days: list[DailyForecast] = Field(
        default_factory=list, description="Daily summaries from the latest fetch",
    )


class Reminder(BaseModel):
    """A reminder the notification subsystem should schedule."""

    key: str = Field(..., description="Addressable key, <location_id>-<window_id>")
    location_id: str
    window_id: str
    fire_at: datetime = Field(..., description="When the reminder should fire")
    window_start: datetime = Field(..., description="Start of the window being announced")


__all__ = [
    "ComfortPolicy",
    "Reminder",
    "Window",
    "WindowAnnotation",
    "WindowListResponse",
    "WindowRefreshRequest",
    "WorkHoursBand",
    "new_window_id",
]

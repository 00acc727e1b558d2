"""Location request and response models."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class LocationCreate(BaseModel):
    """Payload for saving a forecast location."""

    name: str = Field(..., min_length=1, description="Display name of the location")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    timezone: str = Field(
        default="UTC", description="IANA timezone used for day boundaries",
    )

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


class Location(LocationCreate):
    """A saved location."""

    id: str = Field(..., description="Server-assigned location identifier")


__all__ = ["Location", "LocationCreate"]

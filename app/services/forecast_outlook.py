"""Hourly forecast grouped by local day, with the ensemble median alongside."""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Optional
from zoneinfo import ZoneInfo

from app.domain import group_by_day, median_by_time
from app.ingestors import ForecastIngestor
from app.models.locations import Location
from app.models.weather import ForecastDay, ForecastHour

logger = logging.getLogger("weatherly.forecast_outlook")


class ForecastOutlook:
    """Builds the per-day hourly view of a location's forecast."""

    def __init__(self, ingestor: Optional[ForecastIngestor] = None) -> None:
        self.ingestor = ingestor or ForecastIngestor()

    async def build(
        self,
        location: Location,
        include_median: bool = True,
        days: Optional[int] = None,
    ) -> list[ForecastDay]:
        """Fetch the hourly forecast and cut it into local calendar days.

        A failing hourly fetch raises ``RuntimeError``. A failing ensemble
        fetch only costs the median column, which is then left empty.
        """

        samples = await self.ingestor.get_hourly(location.latitude, location.longitude, days)

        medians: dict[datetime, float] = {}
        if include_median:
            try:
                members = await self.ingestor.get_ensemble_temperatures(
                    location.latitude, location.longitude, days
                )
            except RuntimeError as exc:
                logger.warning(
                    "Ensemble median unavailable for location=%s: %s", location.id, exc
                )
            else:
                medians = median_by_time(members)

        grouped = group_by_day(samples, ZoneInfo(location.timezone))
        return [
            ForecastDay(
                day=day,
                hours=[
                    ForecastHour(
                        **sample.model_dump(),
                        median_temperature_c=medians.get(sample.time),
                    )
                    for sample in hours
                ],
            )
            for day, hours in grouped.items()
        ]


__all__ = ["ForecastOutlook"]

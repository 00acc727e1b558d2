"""Recompute a location's good windows and merge them with stored history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from app.config import settings
from app.domain import extract_windows, reconcile_windows, split_windows, summarize_days
from app.ingestors import ForecastIngestor
from app.models.locations import Location
from app.models.weather import DailyForecast
from app.models.windows import ComfortPolicy, Window, WorkHoursBand
from app.services.window_store import WindowStore

logger = logging.getLogger("weatherly.window_planner")


def default_policy() -> ComfortPolicy:
    """Comfort policy built from the configured defaults."""

    return ComfortPolicy(
        min_temperature_c=settings.comfort_min_temperature_c,
        max_temperature_c=settings.comfort_max_temperature_c,
        max_humidity_pct=settings.comfort_max_humidity_pct,
        max_uv_index=settings.comfort_max_uv_index,
        max_cloud_cover_pct=settings.comfort_max_cloud_cover_pct,
        allow_precipitation=settings.comfort_allow_precipitation,
    )


def default_work_hours() -> Optional[WorkHoursBand]:
    if settings.work_hours_start is None or settings.work_hours_end is None:
        return None
    return WorkHoursBand(
        start_hour=settings.work_hours_start, end_hour=settings.work_hours_end
    )


@dataclass
class WindowPlan:
    """Outcome of a refresh: merged windows and the daily outlook."""

    location_id: str
    windows: list[Window] = field(default_factory=list)
    days: list[DailyForecast] = field(default_factory=list)


class WindowPlanner:
    """Orchestrates fetch, extraction, splitting, reconciliation and storage."""

    def __init__(self, ingestor: Optional[ForecastIngestor] = None) -> None:
        self.ingestor = ingestor or ForecastIngestor()

    async def refresh(
        self,
        db: Session,
        location: Location,
        policy: ComfortPolicy,
        band: Optional[WorkHoursBand] = None,
        now: Optional[datetime] = None,
    ) -> WindowPlan:
        """Recompute and store the windows of one location.

        The expiry purge that follows is global: ended windows of every
        location are removed, not only those of ``location``.
        """

        tz = ZoneInfo(location.timezone)
        samples = await self.ingestor.get_hourly(location.latitude, location.longitude)

        fresh = split_windows(extract_windows(samples, policy), band, tz)

        store = WindowStore(db)
        previous = store.load(location.id)
        merged = reconcile_windows(fresh, previous)
        store.replace(location.id, merged)
        purged = store.purge_expired(now)

        windows = sorted(store.load(location.id), key=lambda w: w.start)
        days = summarize_days(samples, policy, tz)

        logger.info(
            "Refreshed location=%s samples=%d fresh=%d stored=%d good_days=%d "
            "purged_all_locations=%d",
            location.id,
            len(samples),
            len(fresh),
            len(windows),
            sum(1 for day in days if day.is_good_day),
            purged,
        )
        return WindowPlan(location_id=location.id, windows=windows, days=days)


__all__ = ["WindowPlan", "WindowPlanner", "default_policy", "default_work_hours"]

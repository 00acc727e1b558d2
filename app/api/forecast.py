"""Hourly forecast endpoint, grouped by the location's calendar days."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.db import get_db
from app.ingestors.forecast import MAX_FORECAST_DAYS
from app.models import ForecastResponse
from app.services import ForecastOutlook, WindowStore

router = APIRouter(prefix="/api/v1", tags=["forecast"])

logger = logging.getLogger("weatherly.forecast")

_default_outlook = ForecastOutlook()


def get_forecast_outlook() -> ForecastOutlook:
    return _default_outlook


@router.get(
    "/locations/{location_id}/forecast",
    response_model=ForecastResponse,
    summary="Hourly forecast grouped by local day",
)
async def get_forecast(
    location_id: str,
    median: bool = Query(default=True, description="Include the ensemble median"),
    days: Optional[int] = Query(
        default=None, ge=1, le=MAX_FORECAST_DAYS, description="Forecast horizon in days"
    ),
    db: Session = Depends(get_db),
    outlook: ForecastOutlook = Depends(get_forecast_outlook),
) -> ForecastResponse:
    location = WindowStore(db).get_location(location_id)
    if location is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Location not found"
        )

    try:
        forecast_days = await outlook.build(location, include_median=median, days=days)
    except RuntimeError as exc:
        logger.warning("Forecast failed for location=%s: %s", location_id, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc

    return ForecastResponse(
        location_id=location.id, timezone=location.timezone, days=forecast_days
    )

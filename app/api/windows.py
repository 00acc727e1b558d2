"""Good-window endpoints: refresh, list, annotate, reminders."""

from datetime import timedelta
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.config import settings
from app.db import get_db
from app.models import (
    Location,
    Reminder,
    Window,
    WindowAnnotation,
    WindowListResponse,
    WindowRefreshRequest,
)
from app.services import (
    WindowPlanner,
    WindowStore,
    default_policy,
    default_work_hours,
    plan_reminders,
)

router = APIRouter(prefix="/api/v1", tags=["windows"])

logger = logging.getLogger("weatherly.windows")

_default_planner = WindowPlanner()


def get_window_planner() -> WindowPlanner:
    return _default_planner


def _require_location(store: WindowStore, location_id: str) -> Location:
    location = store.get_location(location_id)
    if location is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Location not found"
        )
    return location


@router.post(
    "/locations/{location_id}/windows/refresh",
    response_model=WindowListResponse,
    summary="Fetch the forecast and recompute good windows",
)
async def refresh_windows(
    location_id: str,
    request: Optional[WindowRefreshRequest] = Body(default=None),
    db: Session = Depends(get_db),
    planner: WindowPlanner = Depends(get_window_planner),
) -> WindowListResponse:
    """Recompute windows, keeping plans and skips from the stored list."""

    location = _require_location(WindowStore(db), location_id)
    request = request or WindowRefreshRequest()
    policy = request.policy or default_policy()
    band = request.work_hours if request.work_hours is not None else default_work_hours()

    try:
        plan = await planner.refresh(db, location, policy, band)
    except RuntimeError as exc:
        logger.warning("Refresh failed for location=%s: %s", location_id, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc

    return WindowListResponse(
        location_id=plan.location_id, windows=plan.windows, days=plan.days
    )


@router.get(
    "/locations/{location_id}/windows",
    response_model=WindowListResponse,
    summary="List stored windows for a location",
)
def list_windows(location_id: str, db: Session = Depends(get_db)) -> WindowListResponse:
    store = WindowStore(db)
    _require_location(store, location_id)
    windows = sorted(store.load(location_id), key=lambda w: w.start)
    return WindowListResponse(location_id=location_id, windows=windows)


@router.patch(
    "/locations/{location_id}/windows/{window_id}",
    response_model=Window,
    summary="Set the plan or skipped flag of a window",
)
def annotate_window(
    location_id: str,
    window_id: str,
    annotation: WindowAnnotation,
    db: Session = Depends(get_db),
) -> Window:
    store = WindowStore(db)
    _require_location(store, location_id)
    window = store.annotate(location_id, window_id, annotation)
    if window is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Window not found"
        )
    logger.info(
        "Window annotated: location=%s window=%s plan=%s skipped=%s",
        location_id,
        window_id,
        window.plan is not None,
        window.skipped,
    )
    return window


@router.get(
    "/locations/{location_id}/reminders",
    response_model=list[Reminder],
    summary="Reminders to schedule for upcoming windows",
)
def list_reminders(
    location_id: str,
    lead_minutes: Optional[int] = Query(
        default=None, ge=0, le=1440, description="Minutes before a window opens"
    ),
    db: Session = Depends(get_db),
) -> list[Reminder]:
    store = WindowStore(db)
    _require_location(store, location_id)
    lead = timedelta(
        minutes=lead_minutes if lead_minutes is not None else settings.reminder_lead_minutes
    )
    return plan_reminders(location_id, store.load(location_id), lead)

"""Saved location endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.db import get_db
from app.models import Location, LocationCreate
from app.services import WindowStore

router = APIRouter(prefix="/api/v1", tags=["locations"])

logger = logging.getLogger("weatherly.locations")


@router.post(
    "/locations",
    response_model=Location,
    status_code=status.HTTP_201_CREATED,
    summary="Save a location",
)
def create_location(payload: LocationCreate, db: Session = Depends(get_db)) -> Location:
    return WindowStore(db).add_location(payload)


@router.get("/locations", response_model=list[Location], summary="List saved locations")
def list_locations(db: Session = Depends(get_db)) -> list[Location]:
    return WindowStore(db).list_locations()


@router.delete(
    "/locations/{location_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a location and its windows",
)
def delete_location(location_id: str, db: Session = Depends(get_db)) -> Response:
    if not WindowStore(db).delete_location(location_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Location not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

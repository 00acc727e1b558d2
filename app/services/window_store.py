"""Persistence of locations and their windows."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Optional, Sequence
from uuid import uuid4

from sqlalchemy.orm import Session

from app import db_models
from app.db import purge_expired_windows
from app.models.locations import Location, LocationCreate
from app.models.windows import Window, WindowAnnotation

logger = logging.getLogger("weatherly.window_store")


def _to_storage(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def _from_storage(moment: datetime) -> datetime:
    return moment.replace(tzinfo=timezone.utc)


def _to_location(record: db_models.LocationRecord) -> Location:
    return Location(
        id=record.id,
        name=record.name,
        latitude=record.latitude,
        longitude=record.longitude,
        timezone=record.timezone,
    )


def _to_window(record: db_models.WindowRecord) -> Window:
    return Window(
        id=record.window_id,
        start=_from_storage(record.start),
        end=_from_storage(record.end),
        min_temperature_c=record.min_temperature_c,
        max_temperature_c=record.max_temperature_c,
        max_humidity_pct=record.max_humidity_pct,
        max_uv_index=record.max_uv_index,
        max_cloud_cover_pct=record.max_cloud_cover_pct,
        plan=record.plan,
        skipped=record.skipped,
    )


class WindowStore:
    """Mapping from location id to its list of windows, backed by SQLAlchemy."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # Locations -------------------------------------------------------------

    def add_location(self, payload: LocationCreate) -> Location:
        record = db_models.LocationRecord(
            id=uuid4().hex,
            name=payload.name,
            latitude=payload.latitude,
            longitude=payload.longitude,
            timezone=payload.timezone,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info("Saved location %s (%s)", record.id, record.name)
        return _to_location(record)

    def list_locations(self) -> list[Location]:
        records = (
            self.db.query(db_models.LocationRecord)
            .order_by(db_models.LocationRecord.created_at, db_models.LocationRecord.name)
            .all()
        )
        return [_to_location(record) for record in records]

    def get_location(self, location_id: str) -> Optional[Location]:
        record = self.db.get(db_models.LocationRecord, location_id)
        return _to_location(record) if record else None

    def delete_location(self, location_id: str) -> bool:
        record = self.db.get(db_models.LocationRecord, location_id)
        if record is None:
            return False
        self.db.query(db_models.WindowRecord).filter(
            db_models.WindowRecord.location_id == location_id
        ).delete(synchronize_session=False)
        self.db.delete(record)
        self.db.commit()
        logger.info("Deleted location %s", location_id)
        return True

    # Windows ---------------------------------------------------------------

    def load(self, location_id: str) -> list[Window]:
        """Return the stored windows in the order they were saved."""

        records = (
            self.db.query(db_models.WindowRecord)
            .filter(db_models.WindowRecord.location_id == location_id)
            .order_by(db_models.WindowRecord.position)
            .all()
        )
        return [_to_window(record) for record in records]

    def replace(self, location_id: str, windows: Sequence[Window]) -> None:
        """Overwrite the stored list for a location."""

        self.db.query(db_models.WindowRecord).filter(
            db_models.WindowRecord.location_id == location_id
        ).delete(synchronize_session=False)
        self.db.add_all(
            [
                db_models.WindowRecord(
                    location_id=location_id,
                    window_id=window.id,
                    position=position,
                    start=_to_storage(window.start),
                    end=_to_storage(window.end),
                    min_temperature_c=window.min_temperature_c,
                    max_temperature_c=window.max_temperature_c,
                    max_humidity_pct=window.max_humidity_pct,
                    max_uv_index=window.max_uv_index,
                    max_cloud_cover_pct=window.max_cloud_cover_pct,
                    plan=window.plan,
                    skipped=window.skipped,
                )
                for position, window in enumerate(windows)
            ]
        )
        self.db.commit()
        logger.debug("Stored %d windows for location %s", len(windows), location_id)

    def annotate(
        self, location_id: str, window_id: str, annotation: WindowAnnotation
    ) -> Optional[Window]:
        """Apply the fields present in ``annotation`` to one stored window."""

        record = (
            self.db.query(db_models.WindowRecord)
            .filter(
                db_models.WindowRecord.location_id == location_id,
                db_models.WindowRecord.window_id == window_id,
            )
            .first()
        )
        if record is None:
            return None

        if "plan" in annotation.model_fields_set:
            record.plan = annotation.plan
        if "skipped" in annotation.model_fields_set and annotation.skipped is not None:
            record.skipped = annotation.skipped
        self.db.commit()
        self.db.refresh(record)
        return _to_window(record)

    def purge_expired(self, now: datetime | None = None) -> int:
        return purge_expired_windows(self.db, now=now)


__all__ = ["WindowStore"]

"""SQLAlchemy ORM models for the Weather.ly backend."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db import Base


class LocationRecord(Base):
    """A saved forecast location."""

    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class WindowRecord(Base):
    """A persisted good window. Times are stored as naive UTC."""

    __tablename__ = "windows"
    __table_args__ = (
        Index("ix_windows_location_start", "location_id", "start"),
        Index("ix_windows_end", "end"),
    )

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("locations.id", ondelete="CASCADE"), nullable=False
    )
    window_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    start: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    min_temperature_c: Mapped[float] = mapped_column(Float, nullable=False)
    max_temperature_c: Mapped[float] = mapped_column(Float, nullable=False)
    max_humidity_pct: Mapped[float] = mapped_column(Float, nullable=False)
    max_uv_index: Mapped[float] = mapped_column(Float, nullable=False)
    max_cloud_cover_pct: Mapped[float] = mapped_column(Float, nullable=False)
    plan: Mapped[str | None] = mapped_column(Text, nullable=True)
    skipped: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

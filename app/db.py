"""Database configuration and helpers for the Weather.ly backend."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

DATABASE_URL = os.getenv("WEATHERLY_DB_URL", "sqlite:///./weatherly.db")

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

logger = logging.getLogger("weatherly.db")


def get_db() -> Generator:
    """Yield a SQLAlchemy session and ensure it is closed."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create database tables if they do not exist."""

    import app.db_models  # noqa: F401 - models are imported for side effects

    Base.metadata.create_all(bind=engine)


def purge_expired_windows(db: Session, now: datetime | None = None) -> int:
    """
    Delete stored windows whose end time has passed.

    - Comparison is done on naive UTC, the storage convention.
    - Fail-soft: log on error but never break the caller's normal write.

    Returns the number of rows removed.
    """

    cutoff = now or datetime.now(timezone.utc)
    if cutoff.tzinfo is not None:
        cutoff = cutoff.astimezone(timezone.utc).replace(tzinfo=None)

    try:
        import app.db_models as models

        removed = (
            db.query(models.WindowRecord)
            .filter(models.WindowRecord.end < cutoff)
            .delete(synchronize_session=False)
        )
        db.commit()
    except Exception as exc:  # pragma: no cover - defensive logging
        db.rollback()
        logger.warning("Expired window purge failed: %s", exc)
        return 0

    if removed:
        logger.info("Purged %d expired windows", removed)
    return removed

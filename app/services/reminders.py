"""Reminder keys and fire times for the notification subsystem."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Sequence

from app.models.windows import Reminder, Window


def reminder_key(location_id: str, window_id: str) -> str:
    """Key used to schedule, and later cancel, a window's reminder."""

    return f"{location_id}-{window_id}"


def plan_reminders(
    location_id: str,
    windows: Sequence[Window],
    lead: timedelta,
    now: datetime | None = None,
) -> list[Reminder]:
    """One reminder per window the user has not skipped, ``lead`` before it opens.

    Reminders whose fire time is already past are left out.
    """

    current = now or datetime.now(timezone.utc)
    reminders = []
    for window in sorted(windows, key=lambda w: w.start):
        if window.skipped:
            continue
        fire_at = window.start - lead
        if fire_at <= current:
            continue
        reminders.append(
            Reminder(
                key=reminder_key(location_id, window.id),
                location_id=location_id,
                window_id=window.id,
                fire_at=fire_at,
                window_start=window.start,
            )
        )
    return reminders


__all__ = ["plan_reminders", "reminder_key"]

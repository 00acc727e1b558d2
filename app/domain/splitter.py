"""Partition windows around a daily work-hours band."""

from __future__ import annotations

from datetime import datetime, time, timedelta, tzinfo
from typing import Optional, Sequence

from app.models.windows import Window, WorkHoursBand, new_window_id


def band_bounds(
    moment: datetime, band: WorkHoursBand, tz: Optional[tzinfo] = None
) -> tuple[datetime, datetime]:
    """Return the band's start and end on the calendar day of ``moment``.

    The day is taken in ``tz`` when given, otherwise in ``moment``'s own
    timezone (or naive wall time). An ``end_hour`` of 24 lands on the next
    midnight. The bounds are expressed in ``moment``'s timezone so they
    compare and serialize consistently with the window they cut.
    """

    local = moment.astimezone(tz) if tz is not None and moment.tzinfo is not None else moment
    midnight = datetime.combine(local.date(), time.min, tzinfo=local.tzinfo)
    band_start = midnight + timedelta(hours=band.start_hour)
    band_end = midnight + timedelta(hours=band.end_hour)
    if moment.tzinfo is not None:
        band_start = band_start.astimezone(moment.tzinfo)
        band_end = band_end.astimezone(moment.tzinfo)
    return band_start, band_end


def _slice(window: Window, start: datetime, end: datetime) -> Window:
    # Slices keep the parent's full-run statistics; annotations do not carry.
    return window.model_copy(
        update={
            "id": new_window_id(),
            "start": start,
            "end": end,
            "plan": None,
            "skipped": False,
        }
    )


def split_windows(
    windows: Sequence[Window],
    band: Optional[WorkHoursBand],
    tz: Optional[tzinfo] = None,
) -> list[Window]:
    """Cut each window into before/during/after pieces relative to ``band``.

    Without a band the input is returned as is. Windows that do not touch
    the band on their start day pass through with their id. Intersecting
    windows are replaced by up to three slices with fresh ids; the
    overlapping slice is always kept. The result is ordered by start.
    """

    if band is None:
        return list(windows)

    result: list[Window] = []
    for window in windows:
        band_start, band_end = band_bounds(window.start, band, tz)

        if window.end <= band_start or window.start >= band_end:
            result.append(window)
            continue

        if window.start < band_start:
            result.append(_slice(window, window.start, band_start))
        result.append(
            _slice(window, max(window.start, band_start), min(window.end, band_end))
        )
        if window.end > band_end:
            result.append(_slice(window, band_end, window.end))

    return sorted(result, key=lambda w: w.start)


__all__ = ["band_bounds", "split_windows"]

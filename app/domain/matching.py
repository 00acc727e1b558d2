"""Fuzzy identity between windows computed from different fetches."""

from __future__ import annotations

from datetime import timedelta

from app.models.windows import Window

NEAR_EQUAL_TOLERANCE = timedelta(seconds=60)


def contains(outer: Window, inner: Window) -> bool:
    """True if ``inner``'s range lies within ``outer``'s, bounds inclusive."""

    return outer.start <= inner.start and inner.end <= outer.end


def nearly_equal(a: Window, b: Window) -> bool:
    """True if both bounds differ by strictly less than a minute."""

    return (
        abs(a.start - b.start) < NEAR_EQUAL_TOLERANCE
        and abs(a.end - b.end) < NEAR_EQUAL_TOLERANCE
    )


def same_place(previous: Window, candidate: Window) -> bool:
    """Whether ``candidate`` describes the same real-world span as ``previous``."""

    return contains(candidate, previous) or nearly_equal(previous, candidate)


__all__ = ["NEAR_EQUAL_TOLERANCE", "contains", "nearly_equal", "same_place"]

"""Reduce ensemble forecast members to one value per hour."""

from __future__ import annotations

from datetime import datetime
import math
from typing import Iterable, Mapping, Optional


def upper_median(values: Iterable[float]) -> Optional[float]:
    """Middle value of the sorted finite inputs, upper one for even counts."""

    ordered = sorted(v for v in values if math.isfinite(v))
    if not ordered:
        return None
    return ordered[len(ordered) // 2]


def median_by_time(members: Mapping[datetime, Iterable[float]]) -> dict[datetime, float]:
    """Per-hour median across ensemble members; hours without data are left out."""

    medians: dict[datetime, float] = {}
    for moment, values in members.items():
        median = upper_median(values)
        if median is not None:
            medians[moment] = median
    return medians


__all__ = ["median_by_time", "upper_median"]

"""Pure good-window computations: predicate, extraction, splitting, reconciliation."""

from .daily import group_by_day, is_good_day, summarize_days
from .ensemble import median_by_time, upper_median
from .extractor import extract_windows
from .matching import contains, nearly_equal, same_place
from .predicate import PRECIPITATION_THRESHOLD_PCT, passes
from .reconciler import reconcile_windows
from .splitter import band_bounds, split_windows

__all__ = [
    "PRECIPITATION_THRESHOLD_PCT",
    "band_bounds",
    "contains",
    "extract_windows",
    "group_by_day",
    "is_good_day",
    "median_by_time",
    "nearly_equal",
    "passes",
    "reconcile_windows",
    "same_place",
    "split_windows",
    "summarize_days",
    "upper_median",
]

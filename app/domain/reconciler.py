"""Carry user annotations from previously stored windows onto fresh ones."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from app.domain.matching import same_place
from app.models.windows import Window

logger = logging.getLogger("weatherly.reconciler")


def _first_match(candidate: Window, previous: Sequence[Window]) -> Optional[Window]:
    for old in previous:
        if same_place(old, candidate):
            return old
    return None


def reconcile_windows(
    fresh: Sequence[Window], previous: Sequence[Window]
) -> list[Window]:
    """Merge a new computation with the stored history.

    Each fresh window takes ``plan`` and ``skipped`` from the first previous
    window it contains or nearly equals. It also takes that window's ``id``
    unless an earlier fresh window already claimed it, so an unchanged
    forecast keeps its ids and reminder keys. Annotated previous windows
    that no merged window accounts for are appended unchanged, in their
    original order, so a saved plan is never dropped just because the
    forecast moved. The result is not re-sorted.
    """

    merged: list[Window] = []
    claimed: set[str] = set()
    for window in fresh:
        match = _first_match(window, previous)
        if match is None:
            merged.append(window)
            continue

        update = {"plan": match.plan, "skipped": match.skipped}
        if match.id not in claimed:
            update["id"] = match.id
            claimed.add(match.id)
        merged.append(window.model_copy(update=update))

    orphans = [
        old
        for old in previous
        if old.is_annotated and not any(same_place(old, window) for window in merged)
    ]
    if orphans:
        logger.debug("Keeping %d orphaned annotated windows", len(orphans))

    return merged + orphans


__all__ = ["reconcile_windows"]

"""Contiguous good-window extraction from an hourly series."""

from __future__ import annotations

from typing import Sequence

from app.domain.predicate import passes
from app.models.weather import HourlySample
from app.models.windows import ComfortPolicy, Window


def _window_from_run(run: Sequence[HourlySample]) -> Window:
    temperatures = [sample.temperature_c for sample in run]
    return Window(
        start=run[0].time,
        end=run[-1].time,
        min_temperature_c=min(temperatures),
        max_temperature_c=max(temperatures),
        max_humidity_pct=max(sample.humidity_pct for sample in run),
        max_uv_index=max(sample.uv_index for sample in run),
        max_cloud_cover_pct=max(sample.cloud_cover_pct for sample in run),
    )


def extract_windows(
    samples: Sequence[HourlySample], policy: ComfortPolicy
) -> list[Window]:
    """Return the maximal runs of consecutive passing samples as windows.

    ``samples`` must already be sorted ascending by time; unsorted input
    yields meaningless boundaries. Windows come back in input order and
    never overlap.
    """

    windows: list[Window] = []
    run_start: int | None = None

    for index, sample in enumerate(samples):
        if passes(policy, sample):
            if run_start is None:
                run_start = index
        elif run_start is not None:
            windows.append(_window_from_run(samples[run_start:index]))
            run_start = None

    if run_start is not None:
        windows.append(_window_from_run(samples[run_start:]))

    return windows


__all__ = ["extract_windows"]

"""Whole-day outlook derived from hourly samples."""

from __future__ import annotations

from datetime import date, tzinfo
from statistics import mean
from typing import Optional, Sequence

from app.domain.predicate import precipitation_ok
from app.models.weather import DailyForecast, HourlySample
from app.models.windows import ComfortPolicy


def is_good_day(policy: ComfortPolicy, day: DailyForecast) -> bool:
    """Apply the comfort policy to a day's aggregate numbers.

    Temperature is judged on the average of the day's max and min; cloud
    cover is not part of the daily aggregate and is ignored here.
    """

    return (
        policy.min_temperature_c <= day.avg_temperature_c <= policy.max_temperature_c
        and day.avg_humidity_pct <= policy.max_humidity_pct
        and day.max_uv_index <= policy.max_uv_index
        and precipitation_ok(policy, day.avg_precipitation_probability_pct)
    )


def group_by_day(
    samples: Sequence[HourlySample], tz: Optional[tzinfo] = None
) -> dict[date, list[HourlySample]]:
    """Bucket samples by calendar day, days ascending and hours sorted."""

    groups: dict[date, list[HourlySample]] = {}
    for sample in samples:
        moment = sample.time
        if tz is not None and moment.tzinfo is not None:
            moment = moment.astimezone(tz)
        groups.setdefault(moment.date(), []).append(sample)
    return {
        day: sorted(groups[day], key=lambda s: s.time) for day in sorted(groups)
    }


def summarize_days(
    samples: Sequence[HourlySample],
    policy: ComfortPolicy,
    tz: Optional[tzinfo] = None,
) -> list[DailyForecast]:
    days: list[DailyForecast] = []
    for day, hours in group_by_day(samples, tz).items():
        temperatures = [h.temperature_c for h in hours]
        high, low = max(temperatures), min(temperatures)
        summary = DailyForecast(
            day=day,
            max_temperature_c=high,
            min_temperature_c=low,
            avg_temperature_c=(high + low) / 2,
            avg_humidity_pct=mean(h.humidity_pct for h in hours),
            avg_precipitation_probability_pct=mean(
                h.precipitation_probability_pct for h in hours
            ),
            max_uv_index=max(h.uv_index for h in hours),
        )
        days.append(summary.model_copy(update={"is_good_day": is_good_day(policy, summary)}))
    return days


__all__ = ["group_by_day", "is_good_day", "summarize_days"]

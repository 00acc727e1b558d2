"""Per-hour comfort predicate."""

from __future__ import annotations

from app.models.weather import HourlySample
from app.models.windows import ComfortPolicy

# Fixed rain tolerance for policies that disallow precipitation. Strict bound.
PRECIPITATION_THRESHOLD_PCT = 20.0


def precipitation_ok(policy: ComfortPolicy, probability_pct: float) -> bool:
    return policy.allow_precipitation or probability_pct < PRECIPITATION_THRESHOLD_PCT


def passes(policy: ComfortPolicy, sample: HourlySample) -> bool:
    """Return True if the hour satisfies every threshold of the policy.

    All bounds are inclusive except the precipitation cut-off, which is
    strict: 20% already fails when rain is not allowed. A policy with
    ``min_temperature_c > max_temperature_c`` simply never passes.
    """

    return (
        policy.min_temperature_c <= sample.temperature_c <= policy.max_temperature_c
        and sample.humidity_pct <= policy.max_humidity_pct
        and sample.uv_index <= policy.max_uv_index
        and sample.cloud_cover_pct <= policy.max_cloud_cover_pct
        and precipitation_ok(policy, sample.precipitation_probability_pct)
    )


__all__ = ["PRECIPITATION_THRESHOLD_PCT", "passes", "precipitation_ok"]

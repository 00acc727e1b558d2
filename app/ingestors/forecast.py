"""Hourly and ensemble forecast ingestion using Open-Meteo."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any

import httpx

from app.config import settings
from app.models.weather import HourlySample

logger = logging.getLogger("weatherly.ingestors.forecast")

HOURLY_FIELDS = {
    "temperature_c": "temperature_2m",
    "humidity_pct": "relative_humidity_2m",
    "precipitation_probability_pct": "precipitation_probability",
    "uv_index": "uv_index",
    "cloud_cover_pct": "cloud_cover",
}

MAX_FORECAST_DAYS = 16

ENSEMBLE_VARIABLE = "temperature_2m"


def _parse_time(raw_ts: Any) -> datetime | None:
    if raw_ts is None:
        return None
    try:
        if isinstance(raw_ts, (int, float)):
            return datetime.fromtimestamp(raw_ts, tz=timezone.utc)
        if isinstance(raw_ts, str):
            if raw_ts.endswith("Z"):
                raw_ts = raw_ts.replace("Z", "+00:00")
            parsed = datetime.fromisoformat(raw_ts)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug("Failed to parse forecast timestamp: %s", raw_ts)
        return None
    return None


def _value_at(values: list | None, index: int) -> float:
    # Missing values become 0 before they reach the window computations.
    if not values or index >= len(values):
        return 0.0
    value = values[index]
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_hourly(payload: dict[str, Any]) -> list[HourlySample]:
    """Convert an Open-Meteo ``hourly`` block into samples sorted by time."""

    hourly = payload.get("hourly") or {}
    times = hourly.get("time") or []

    samples: list[HourlySample] = []
    for index, raw_ts in enumerate(times):
        moment = _parse_time(raw_ts)
        if moment is None:
            continue
        values = {
            field: _value_at(hourly.get(source), index)
            for field, source in HOURLY_FIELDS.items()
        }
        samples.append(HourlySample(time=moment, **values))

    samples.sort(key=lambda sample: sample.time)
    return samples


def parse_ensemble(
    payload: dict[str, Any], variable: str = ENSEMBLE_VARIABLE
) -> dict[datetime, list[float]]:
    """Collect every member's value per hour from an Open-Meteo ensemble block.

    The control run comes back as ``<variable>`` and the perturbed members as
    ``<variable>_memberNN``; both count as members. Nulls are dropped.
    """

    hourly = payload.get("hourly") or {}
    times = hourly.get("time") or []
    series = [
        values
        for key, values in sorted(hourly.items())
        if key == variable or key.startswith(f"{variable}_member")
    ]

    members: dict[datetime, list[float]] = {}
    for index, raw_ts in enumerate(times):
        moment = _parse_time(raw_ts)
        if moment is None:
            continue
        values = members.setdefault(moment, [])
        for member in series:
            if not member or index >= len(member) or member[index] is None:
                continue
            try:
                values.append(float(member[index]))
            except (TypeError, ValueError):
                continue
    return members


class ForecastIngestor:
    """Fetch hourly and ensemble forecasts for a coordinate from Open-Meteo."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        ensemble_url: str | None = None,
        ensemble_model: str | None = None,
        timeout: float | None = None,
        forecast_days: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.forecast_base_url
        self.ensemble_url = ensemble_url or settings.ensemble_base_url
        self.ensemble_model = ensemble_model or settings.ensemble_model
        self.timeout = timeout or settings.forecast_timeout
        self.forecast_days = forecast_days or settings.forecast_days
        self.transport = transport

    def _horizon(self, days: int | None) -> int:
        return min(max(days or self.forecast_days, 1), MAX_FORECAST_DAYS)

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("Forecast request timed out: %s", exc)
            raise RuntimeError("Forecast service timeout") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Forecast service returned error: status=%s body=%s",
                exc.response.status_code,
                exc.response.text,
            )
            raise RuntimeError("Forecast service error") from exc
        except httpx.RequestError as exc:
            logger.error("Forecast request failed: %s", exc)
            raise RuntimeError("Forecast request failed") from exc

        return response.json()

    async def get_hourly(
        self, lat: float, lon: float, days: int | None = None
    ) -> list[HourlySample]:
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": ",".join(HOURLY_FIELDS.values()),
            "timeformat": "unixtime",
            "timezone": "GMT",
            "forecast_days": self._horizon(days),
        }

        samples = parse_hourly(await self._get_json(self.base_url, params))
        logger.debug(
            "Fetched %d hourly samples for lat=%s lon=%s", len(samples), lat, lon
        )
        return samples

    async def get_ensemble_temperatures(
        self, lat: float, lon: float, days: int | None = None
    ) -> dict[datetime, list[float]]:
        """Temperature of every ensemble member per hour, keyed by UTC time."""

        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": ENSEMBLE_VARIABLE,
            "models": self.ensemble_model,
            "timeformat": "unixtime",
            "timezone": "GMT",
            "forecast_days": self._horizon(days),
        }

        members = parse_ensemble(await self._get_json(self.ensemble_url, params))
        logger.debug(
            "Fetched ensemble model=%s hours=%d for lat=%s lon=%s",
            self.ensemble_model,
            len(members),
            lat,
            lon,
        )
        return members


__all__ = ["ForecastIngestor", "parse_ensemble", "parse_hourly"]

"""Data ingestors for Weather.ly."""

from .forecast import ForecastIngestor, parse_ensemble, parse_hourly

__all__ = ["ForecastIngestor", "parse_ensemble", "parse_hourly"]

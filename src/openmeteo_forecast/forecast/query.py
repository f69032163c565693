"""Outbound query construction and endpoint selection."""

from __future__ import annotations

from typing import Any

from .models import ForecastParams
from .variables import CADENCES

FREE_API_URL = "https://api.open-meteo.com/v1"
CUSTOMER_API_URL = "https://customer-api.open-meteo.com/v1"
FORECAST_PATH = "forecast"

_SCALAR_FIELDS = (
    "latitude",
    "longitude",
    "timezone",
    "temperature_unit",
    "wind_speed_unit",
    "precipitation_unit",
    "forecast_days",
    "past_days",
)


def resolve_base_url(base_url: str | None = None, api_key: str | None = None) -> str:
    """Explicit override wins; an API key alone selects the customer endpoint."""
    if base_url:
        return base_url.rstrip("/")
    if api_key:
        return CUSTOMER_API_URL
    return FREE_API_URL


def build_query_params(params: ForecastParams, api_key: str | None = None) -> dict[str, Any]:
    """Serialize a validated request into provider query parameters."""
    query: dict[str, Any] = {}
    for name in _SCALAR_FIELDS:
        value = getattr(params, name)
        if value is not None:
            query[name] = value
    query["timeformat"] = "unixtime"
    if api_key:
        query["apikey"] = api_key
    for cadence in CADENCES:
        names = params.variables(cadence)
        if names:
            query[cadence] = ",".join(names)
    return query

"""Typed client for the Open-Meteo forecast API."""

from .exceptions import (
    ForecastError,
    ParameterValidationError,
    PayloadValidationError,
    TransportError,
)
from .forecast import (
    CURRENT_VARIABLES,
    DAILY_VARIABLES,
    HOURLY_VARIABLES,
    ForecastClient,
    ForecastParams,
    ForecastResponse,
    fetch_forecast,
)

__all__ = [
    "CURRENT_VARIABLES",
    "DAILY_VARIABLES",
    "HOURLY_VARIABLES",
    "ForecastClient",
    "ForecastError",
    "ForecastParams",
    "ForecastResponse",
    "ParameterValidationError",
    "PayloadValidationError",
    "TransportError",
    "fetch_forecast",
]

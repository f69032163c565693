"""Open-Meteo forecast: catalog, validation, transform and projection."""

from .client import ForecastClient, ForecastFetchResult, fetch_forecast
from .models import ForecastParams, RawForecastResponse
from .projection import expected_sections, project_response, requested_cadences
from .query import CUSTOMER_API_URL, FREE_API_URL, build_query_params, resolve_base_url
from .responses import ForecastLocation, ForecastRecord, ForecastResponse
from .transform import (
    TransformedForecast,
    transform_current_block,
    transform_forecast_response,
    transform_series_block,
)
from .validation import validate_params, validate_raw_payload
from .variables import (
    CADENCES,
    CURRENT_VARIABLES,
    DAILY_VARIABLES,
    HOURLY_VARIABLES,
    Cadence,
    CurrentVariable,
    DailyVariable,
    HourlyVariable,
    is_known_variable,
    variables_for,
)

__all__ = [
    "CADENCES",
    "CURRENT_VARIABLES",
    "CUSTOMER_API_URL",
    "Cadence",
    "CurrentVariable",
    "DAILY_VARIABLES",
    "DailyVariable",
    "FREE_API_URL",
    "ForecastClient",
    "ForecastFetchResult",
    "ForecastLocation",
    "ForecastParams",
    "ForecastRecord",
    "ForecastResponse",
    "HOURLY_VARIABLES",
    "HourlyVariable",
    "RawForecastResponse",
    "TransformedForecast",
    "build_query_params",
    "expected_sections",
    "fetch_forecast",
    "is_known_variable",
    "project_response",
    "requested_cadences",
    "resolve_base_url",
    "transform_current_block",
    "transform_forecast_response",
    "transform_series_block",
    "validate_params",
    "validate_raw_payload",
    "variables_for",
]

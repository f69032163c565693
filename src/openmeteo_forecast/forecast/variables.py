"""Closed vocabulary of forecast variables, one ordered set per cadence.

The ``Literal`` aliases are the source of truth; the tuples and frozensets
below are derived from them, so request validation and the raw-payload
schema can never drift apart. The vocabulary is append-only.
"""

from __future__ import annotations

from typing import Literal, get_args

Cadence = Literal["hourly", "daily", "current"]
CADENCES: tuple[Cadence, ...] = get_args(Cadence)

HourlyVariable = Literal[
    "temperature_2m",
    "relative_humidity_2m",
    "dew_point_2m",
    "apparent_temperature",
    "precipitation_probability",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "snow_depth",
    "weather_code",
    "pressure_msl",
    "surface_pressure",
    "cloud_cover",
    "cloud_cover_low",
    "cloud_cover_mid",
    "cloud_cover_high",
    "visibility",
    "evapotranspiration",
    "et0_fao_evapotranspiration",
    "vapour_pressure_deficit",
    "wind_speed_10m",
    "wind_speed_80m",
    "wind_speed_120m",
    "wind_speed_180m",
    "wind_direction_10m",
    "wind_direction_80m",
    "wind_direction_120m",
    "wind_direction_180m",
    "wind_gusts_10m",
    "temperature_80m",
    "temperature_120m",
    "temperature_180m",
    "soil_temperature_0cm",
    "soil_temperature_6cm",
    "soil_temperature_18cm",
    "soil_temperature_54cm",
    "soil_moisture_0_1cm",
    "soil_moisture_1_3cm",
    "soil_moisture_3_9cm",
    "soil_moisture_9_27cm",
    "soil_moisture_27_81cm",
]

DailyVariable = Literal[
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "apparent_temperature_max",
    "apparent_temperature_min",
    "sunrise",
    "sunset",
    "daylight_duration",
    "sunshine_duration",
    "uv_index_max",
    "uv_index_clear_sky_max",
    "rain_sum",
    "showers_sum",
    "snowfall_sum",
    "precipitation_sum",
    "precipitation_hours",
    "precipitation_probability_max",
    "wind_speed_10m_max",
    "wind_gusts_10m_max",
    "wind_direction_10m_dominant",
    "shortwave_radiation_sum",
    "et0_fao_evapotranspiration",
]

CurrentVariable = Literal[
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "cloud_cover",
    "pressure_msl",
    "surface_pressure",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
]

HOURLY_VARIABLES: tuple[HourlyVariable, ...] = get_args(HourlyVariable)
DAILY_VARIABLES: tuple[DailyVariable, ...] = get_args(DailyVariable)
CURRENT_VARIABLES: tuple[CurrentVariable, ...] = get_args(CurrentVariable)

_CATALOG: dict[Cadence, tuple[str, ...]] = {
    "hourly": HOURLY_VARIABLES,
    "daily": DAILY_VARIABLES,
    "current": CURRENT_VARIABLES,
}
_MEMBERSHIP: dict[Cadence, frozenset[str]] = {
    cadence: frozenset(names) for cadence, names in _CATALOG.items()
}

# Daily fields carrying Unix seconds; scaled to milliseconds like the time axis.
UNIX_TIMESTAMP_FIELDS = frozenset({"sunrise", "sunset"})


def variables_for(cadence: Cadence) -> tuple[str, ...]:
    """Return the ordered legal variable names for a cadence."""
    return _CATALOG[cadence]


def is_known_variable(cadence: Cadence, name: str) -> bool:
    return name in _MEMBERSHIP[cadence]

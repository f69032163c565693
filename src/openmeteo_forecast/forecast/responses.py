"""Static shapes of projected forecast results.

Python typing cannot compute a result type from the literal variable lists
of a request, so sections are ``NotRequired``: a key is either present with
its units partner or absent altogether. ``projection.expected_sections``
is the runtime counterpart for a concrete request.
"""

from typing import NotRequired, TypedDict

# One row per time step: "time" (ms) plus one key per returned column.
# Values are None where a ragged column ran out before the time axis did.
ForecastRecord = dict[str, int | float | None]
ForecastUnits = dict[str, str]


class ForecastLocation(TypedDict):
    latitude: float
    longitude: float
    elevation: float
    timezone: str
    timezone_abbreviation: str
    utc_offset_seconds: int


class ForecastResponse(ForecastLocation):
    hourly: NotRequired[list[ForecastRecord]]
    hourly_units: NotRequired[ForecastUnits]
    daily: NotRequired[list[ForecastRecord]]
    daily_units: NotRequired[ForecastUnits]
    current: NotRequired[ForecastRecord]
    current_units: NotRequired[ForecastUnits]

"""Assemble the final result from transformed blocks.

A cadence section appears, together with its units map, only when the
cadence was requested with at least one variable and the provider returned
a non-empty block for it.
"""

from __future__ import annotations

from typing import Any

from .models import ForecastParams
from .responses import ForecastResponse
from .transform import TransformedForecast
from .variables import CADENCES, Cadence

LOCATION_FIELDS = (
    "latitude",
    "longitude",
    "elevation",
    "timezone",
    "timezone_abbreviation",
    "utc_offset_seconds",
)


def units_key(cadence: Cadence) -> str:
    return f"{cadence}_units"


def requested_cadences(params: ForecastParams) -> tuple[Cadence, ...]:
    """Cadences with a non-empty variable list, in canonical order."""
    return tuple(cadence for cadence in CADENCES if params.variables(cadence))


def expected_sections(params: ForecastParams) -> frozenset[str]:
    """Top-level keys a result for ``params`` may carry.

    Location fields are always present; a requested cadence contributes its
    data key and units key as a pair.
    """
    keys: set[str] = set(LOCATION_FIELDS)
    for cadence in requested_cadences(params):
        keys.add(cadence)
        keys.add(units_key(cadence))
    return frozenset(keys)


def project_response(params: ForecastParams, transformed: TransformedForecast) -> ForecastResponse:
    """Copy location fields and each requested, returned cadence pair."""
    response: dict[str, Any] = {name: transformed.location[name] for name in LOCATION_FIELDS}
    for cadence in requested_cadences(params):
        block = transformed.blocks.get(cadence)
        if block is None:
            continue
        response[cadence] = block.rows
        response[units_key(cadence)] = block.units
    return response  # type: ignore[return-value]

"""Columnar (struct-of-arrays) to row (array-of-structs) transform.

Each cadence block is converted in one pass over its time axis with the
output list allocated up front. Timestamps arrive as Unix seconds and leave
as Unix milliseconds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import RawForecastResponse
from .responses import ForecastRecord, ForecastUnits
from .variables import UNIX_TIMESTAMP_FIELDS, Cadence

MS_PER_SECOND = 1000


@dataclass(slots=True)
class CadenceBlock:
    """Transformed rows (or the single current row) plus its units map."""

    rows: list[ForecastRecord] | ForecastRecord
    units: ForecastUnits = field(default_factory=dict)


@dataclass(slots=True)
class TransformedForecast:
    location: dict[str, Any]
    blocks: dict[Cadence, CadenceBlock] = field(default_factory=dict)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def transform_series_block(
    block: Any, scaled_fields: frozenset[str] = frozenset()
) -> list[ForecastRecord]:
    """Pivot an hourly/daily block into one record per time-axis position.

    Every list-valued column becomes a key on every record. Positions past the
    end of a short column carry None rather than dropping the key. Columns in
    ``scaled_fields`` get the same seconds-to-milliseconds scaling as ``time``.
    """
    time_axis = block.time
    length = len(time_axis)
    columns = [
        (name, values, len(values), name in scaled_fields)
        for name, values in block.columns()
        if isinstance(values, list)
    ]

    rows: list[Any] = [None] * length
    for i in range(length):
        row: ForecastRecord = {"time": time_axis[i] * MS_PER_SECOND}
        for name, values, size, scaled in columns:
            value = values[i] if i < size else None
            if scaled and _is_number(value):
                value = value * MS_PER_SECOND
            row[name] = value
        rows[i] = row
    return rows


def transform_current_block(block: Any) -> ForecastRecord:
    """Build the single current record; non-numeric values are dropped."""
    row: ForecastRecord = {"time": block.time * MS_PER_SECOND}
    for name, value in block.columns():
        if _is_number(value):
            row[name] = value
    return row


def transform_forecast_response(raw: RawForecastResponse) -> TransformedForecast:
    """Transform every cadence block present in a validated payload.

    A series block with an empty time axis is treated as absent.
    """
    result = TransformedForecast(
        location={
            "latitude": raw.latitude,
            "longitude": raw.longitude,
            "elevation": raw.elevation,
            "timezone": raw.timezone,
            "timezone_abbreviation": raw.timezone_abbreviation,
            "utc_offset_seconds": raw.utc_offset_seconds,
        }
    )

    if raw.hourly is not None and raw.hourly.time:
        result.blocks["hourly"] = CadenceBlock(
            rows=transform_series_block(raw.hourly),
            units=dict(raw.hourly_units or {}),
        )
    if raw.daily is not None and raw.daily.time:
        result.blocks["daily"] = CadenceBlock(
            rows=transform_series_block(raw.daily, UNIX_TIMESTAMP_FIELDS),
            units=dict(raw.daily_units or {}),
        )
    if raw.current is not None:
        result.blocks["current"] = CadenceBlock(
            rows=transform_current_block(raw.current),
            units=dict(raw.current_units or {}),
        )
    return result

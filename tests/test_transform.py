"""Columnar-to-row transform: timestamps, ragged columns, current record."""

from __future__ import annotations

from typing import Any

from openmeteo_forecast.forecast.models import RawCurrentBlock, RawDailyBlock, RawHourlyBlock
from openmeteo_forecast.forecast.transform import (
    transform_current_block,
    transform_forecast_response,
    transform_series_block,
)
from openmeteo_forecast.forecast.validation import validate_raw_payload
from openmeteo_forecast.forecast.variables import UNIX_TIMESTAMP_FIELDS

HOUR_0 = 1_760_832_000  # 2025-10-19T00:00Z
SUNRISE = 1_760_873_040
SUNSET = 1_760_911_980


def _payload(**blocks: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "latitude": 45.4,
        "longitude": -75.7,
        "elevation": 70.0,
        "timezone": "America/Toronto",
        "timezone_abbreviation": "EDT",
        "utc_offset_seconds": -14400,
        "generationtime_ms": 0.3,
    }
    payload.update(blocks)
    return payload


def test_hourly_rows_follow_time_axis() -> None:
    block = RawHourlyBlock.model_validate(
        {
            "time": [HOUR_0, HOUR_0 + 3600, HOUR_0 + 7200],
            "temperature_2m": [1.5, 2.0, 2.5],
            "cloud_cover": [10, 20, 30],
        }
    )
    rows = transform_series_block(block)
    assert rows == [
        {"time": HOUR_0 * 1000, "temperature_2m": 1.5, "cloud_cover": 10},
        {"time": (HOUR_0 + 3600) * 1000, "temperature_2m": 2.0, "cloud_cover": 20},
        {"time": (HOUR_0 + 7200) * 1000, "temperature_2m": 2.5, "cloud_cover": 30},
    ]
    assert all(isinstance(row["time"], int) for row in rows)


def test_record_keys_follow_payload_column_order() -> None:
    block = RawHourlyBlock.model_validate(
        {"cloud_cover": [5], "time": [HOUR_0], "rain": [0.0], "apparent_temperature": [1.0]}
    )
    (row,) = transform_series_block(block)
    assert list(row) == ["time", "cloud_cover", "rain", "apparent_temperature"]


def test_short_column_keeps_key_with_none_value() -> None:
    block = RawHourlyBlock.model_validate(
        {"time": [HOUR_0, HOUR_0 + 3600, HOUR_0 + 7200], "rain": [0.1]}
    )
    rows = transform_series_block(block)
    assert [row["rain"] for row in rows] == [0.1, None, None]
    assert all(set(row) == {"time", "rain"} for row in rows)


def test_unknown_column_never_reaches_rows() -> None:
    block = RawHourlyBlock.model_validate(
        {"time": [HOUR_0, HOUR_0 + 3600], "rain": [0.0, 0.2], "model_note": "ecmwf"}
    )
    rows = transform_series_block(block)
    assert all("model_note" not in row for row in rows)
    assert rows[1]["rain"] == 0.2


def test_null_column_is_skipped() -> None:
    block = RawHourlyBlock.model_validate({"time": [HOUR_0], "rain": None})
    assert transform_series_block(block) == [{"time": HOUR_0 * 1000}]


def test_daily_sunrise_and_sunset_are_scaled_to_milliseconds() -> None:
    block = RawDailyBlock.model_validate(
        {
            "time": [HOUR_0],
            "sunrise": [SUNRISE],
            "sunset": [SUNSET],
            "daylight_duration": [38940.5],
            "temperature_2m_max": [14.2],
        }
    )
    (row,) = transform_series_block(block, UNIX_TIMESTAMP_FIELDS)
    assert row == {
        "time": HOUR_0 * 1000,
        "sunrise": SUNRISE * 1000,
        "sunset": SUNSET * 1000,
        "daylight_duration": 38940.5,
        "temperature_2m_max": 14.2,
    }


def test_null_timestamp_field_is_not_scaled() -> None:
    block = RawDailyBlock.model_validate(
        {"time": [HOUR_0, HOUR_0 + 86400], "sunrise": [None, SUNRISE]}
    )
    rows = transform_series_block(block, UNIX_TIMESTAMP_FIELDS)
    assert rows[0]["sunrise"] is None
    assert rows[1]["sunrise"] == SUNRISE * 1000


def test_timestamp_scaling_only_applies_where_requested() -> None:
    block = RawDailyBlock.model_validate({"time": [HOUR_0], "sunrise": [SUNRISE]})
    (row,) = transform_series_block(block)
    assert row["sunrise"] == SUNRISE


def test_empty_time_axis_yields_no_rows() -> None:
    block = RawHourlyBlock.model_validate({"time": [], "rain": [1.0]})
    assert transform_series_block(block) == []


def test_current_block_is_a_single_record() -> None:
    block = RawCurrentBlock.model_validate(
        {
            "time": HOUR_0,
            "interval": 900,
            "temperature_2m": 3.4,
            "is_day": 0,
            "weather_code": None,
            "note": "text",
        }
    )
    assert transform_current_block(block) == {
        "time": HOUR_0 * 1000,
        "temperature_2m": 3.4,
        "is_day": 0,
    }


def test_full_response_transform() -> None:
    raw = validate_raw_payload(
        _payload(
            hourly={"time": [HOUR_0, HOUR_0 + 3600], "temperature_2m": [1.0, 2.0]},
            hourly_units={"time": "unixtime", "temperature_2m": "°C"},
            daily={"time": [HOUR_0], "sunset": [SUNSET]},
            current={"time": HOUR_0, "interval": 900, "rain": 0.0},
            current_units={"time": "unixtime", "interval": "seconds", "rain": "mm"},
        )
    )
    transformed = transform_forecast_response(raw)
    assert transformed.location == {
        "latitude": 45.4,
        "longitude": -75.7,
        "elevation": 70.0,
        "timezone": "America/Toronto",
        "timezone_abbreviation": "EDT",
        "utc_offset_seconds": -14400,
    }
    assert set(transformed.blocks) == {"hourly", "daily", "current"}
    assert len(transformed.blocks["hourly"].rows) == 2
    assert transformed.blocks["hourly"].units == {"time": "unixtime", "temperature_2m": "°C"}
    assert transformed.blocks["daily"].rows == [{"time": HOUR_0 * 1000, "sunset": SUNSET * 1000}]
    assert transformed.blocks["daily"].units == {}
    assert transformed.blocks["current"].rows == {"time": HOUR_0 * 1000, "rain": 0.0}


def test_empty_series_blocks_are_reported_absent() -> None:
    raw = validate_raw_payload(
        _payload(hourly={"time": []}, hourly_units={}, daily={"time": [], "sunrise": []})
    )
    assert transform_forecast_response(raw).blocks == {}

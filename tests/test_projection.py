"""Result projection: sections appear only when requested and returned."""

from __future__ import annotations

from typing import Any

import pytest

from openmeteo_forecast.forecast.models import ForecastParams
from openmeteo_forecast.forecast.projection import (
    LOCATION_FIELDS,
    expected_sections,
    project_response,
    requested_cadences,
)
from openmeteo_forecast.forecast.transform import transform_forecast_response
from openmeteo_forecast.forecast.validation import validate_params, validate_raw_payload
from openmeteo_forecast.forecast.variables import (
    CURRENT_VARIABLES,
    DAILY_VARIABLES,
    HOURLY_VARIABLES,
)

HOUR_0 = 1_760_832_000
STEPS = 6


def _series(names: tuple[str, ...] | list[str], steps: int, step_seconds: int) -> dict[str, Any]:
    block: dict[str, Any] = {"time": [HOUR_0 + i * step_seconds for i in range(steps)]}
    for offset, name in enumerate(names):
        block[name] = [float(offset + i) for i in range(steps)]
    return block


def _fake_provider(params: ForecastParams, steps: int = STEPS) -> dict[str, Any]:
    """Mimic what the provider returns for a request: only requested columns."""
    payload: dict[str, Any] = {
        "latitude": 45.41,
        "longitude": -75.7,
        "elevation": 72.0,
        "timezone": "GMT",
        "timezone_abbreviation": "GMT",
        "utc_offset_seconds": 0,
        "generationtime_ms": 0.05,
    }
    if params.hourly:
        payload["hourly"] = _series(params.hourly, steps, 3600)
        payload["hourly_units"] = {"time": "unixtime", **{n: "u" for n in params.hourly}}
    if params.daily:
        block = _series(params.daily, steps, 86400)
        for name in ("sunrise", "sunset"):
            if name in block:
                offset = 6 * 3600 if name == "sunrise" else 18 * 3600
                block[name] = [t + offset for t in block["time"]]
        payload["daily"] = block
        payload["daily_units"] = {"time": "unixtime", **{n: "u" for n in params.daily}}
    if params.current:
        current: dict[str, Any] = {"time": HOUR_0, "interval": 900}
        current.update({name: 1.0 for name in params.current})
        payload["current"] = current
        payload["current_units"] = {"time": "unixtime", **{n: "u" for n in params.current}}
    return payload


def _run(request: dict[str, Any], steps: int = STEPS) -> dict[str, Any]:
    params = validate_params(request)
    raw = validate_raw_payload(_fake_provider(params, steps))
    return dict(project_response(params, transform_forecast_response(raw)))


def test_mixed_request_scenario() -> None:
    result = _run(
        {
            "latitude": 45.4112,
            "longitude": -75.6981,
            "hourly": ["temperature_2m", "cloud_cover"],
            "daily": ["temperature_2m_max"],
        }
    )
    assert set(result) == {*LOCATION_FIELDS, "hourly", "hourly_units", "daily", "daily_units"}
    assert "current" not in result
    assert "current_units" not in result
    assert all(set(row) == {"time", "temperature_2m", "cloud_cover"} for row in result["hourly"])
    assert all(set(row) == {"time", "temperature_2m_max"} for row in result["daily"])
    assert {"temperature_2m", "cloud_cover"} <= set(result["hourly_units"])
    assert "temperature_2m_max" in result["daily_units"]


def test_sunrise_sunset_scenario() -> None:
    result = _run(
        {
            "latitude": 45.4112,
            "longitude": -75.6981,
            "daily": ["sunrise", "sunset", "temperature_2m_max"],
        }
    )
    jan_1_2025_ms = 1_735_689_600_000
    for row in result["daily"]:
        assert row["sunset"] > row["sunrise"] >= jan_1_2025_ms
    assert set(result) == {*LOCATION_FIELDS, "daily", "daily_units"}


@pytest.mark.parametrize(
    ("cadence", "names"),
    [("hourly", HOURLY_VARIABLES), ("daily", DAILY_VARIABLES), ("current", CURRENT_VARIABLES)],
)
def test_every_catalog_variable_scenario(cadence: str, names: tuple[str, ...]) -> None:
    result = _run({"latitude": 0, "longitude": 0, cadence: list(names)})
    rows = result[cadence] if cadence != "current" else [result[cadence]]
    assert all(len(row) == len(names) + 1 for row in rows)


@pytest.mark.parametrize("steps", [1, 24, 169])
def test_row_count_and_time_scaling(steps: int) -> None:
    result = _run(
        {"latitude": 1, "longitude": 2, "hourly": ["rain"], "current": ["rain"]}, steps=steps
    )
    assert len(result["hourly"]) == steps
    assert [row["time"] for row in result["hourly"]] == [
        (HOUR_0 + i * 3600) * 1000 for i in range(steps)
    ]
    assert result["current"]["time"] == HOUR_0 * 1000


@pytest.mark.parametrize(
    "request_lists",
    [
        {},
        {"hourly": []},
        {"hourly": [], "daily": [], "current": []},
        {"current": ["is_day"]},
        {"daily": ["rain_sum"], "current": []},
    ],
)
def test_result_keys_match_expected_sections(request_lists: dict[str, Any]) -> None:
    request = {"latitude": 10, "longitude": 20, **request_lists}
    params = validate_params(request)
    result = _run(request)
    assert set(result) == expected_sections(params)
    for cadence in ("hourly", "daily", "current"):
        assert (cadence in result) == (f"{cadence}_units" in result)
        if not request_lists.get(cadence):
            assert cadence not in result


def test_units_keys_are_within_requested_names() -> None:
    names = ["wind_speed_10m", "wind_direction_10m"]
    result = _run({"latitude": 0, "longitude": 0, "hourly": names})
    assert set(result["hourly_units"]) - {"time"} <= set(names)


def test_unrequested_block_from_provider_is_dropped() -> None:
    params = validate_params({"latitude": 0, "longitude": 0, "daily": ["rain_sum"]})
    payload = _fake_provider(params)
    payload["hourly"] = _series(["rain"], 3, 3600)
    payload["hourly_units"] = {"rain": "mm"}
    result = project_response(
        params, transform_forecast_response(validate_raw_payload(payload))
    )
    assert "hourly" not in result
    assert "hourly_units" not in result
    assert "daily" in result


def test_requested_but_empty_block_is_omitted() -> None:
    params = validate_params({"latitude": 0, "longitude": 0, "hourly": ["rain"]})
    payload = _fake_provider(params, steps=0)
    result = project_response(
        params, transform_forecast_response(validate_raw_payload(payload))
    )
    assert "hourly" not in result
    assert "hourly_units" not in result


def test_missing_units_map_still_emits_pair() -> None:
    params = validate_params({"latitude": 0, "longitude": 0, "hourly": ["rain"]})
    payload = _fake_provider(params)
    del payload["hourly_units"]
    result = project_response(
        params, transform_forecast_response(validate_raw_payload(payload))
    )
    assert result["hourly_units"] == {}
    assert len(result["hourly"]) == STEPS


def test_requested_cadences_order() -> None:
    params = validate_params(
        {"latitude": 0, "longitude": 0, "current": ["rain"], "hourly": ["rain"], "daily": []}
    )
    assert requested_cadences(params) == ("hourly", "current")


def test_generation_time_is_not_projected() -> None:
    result = _run({"latitude": 0, "longitude": 0})
    assert set(result) == set(LOCATION_FIELDS)
    assert "generationtime_ms" not in result


def test_unknown_provider_columns_stay_out_of_records() -> None:
    params = validate_params(
        {"latitude": 0, "longitude": 0, "hourly": ["rain"], "current": ["rain"]}
    )
    payload = _fake_provider(params, steps=2)
    payload["hourly"]["mystery"] = ["x", {"a": 1}]
    payload["current"]["mystery"] = 7
    result = project_response(
        params, transform_forecast_response(validate_raw_payload(payload))
    )
    assert all(set(row) == {"time", "rain"} for row in result["hourly"])
    assert set(result["current"]) == {"time", "rain"}

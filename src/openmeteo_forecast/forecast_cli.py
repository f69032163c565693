"""CLI: fetch an Open-Meteo forecast and print the requested sections."""

from __future__ import annotations

import argparse
import sys
import uuid
from datetime import UTC, datetime
from typing import Any

from rich.console import Console
from rich.table import Table

from .config import Settings, load_settings
from .exceptions import ConfigError, ForecastError, JournalError
from .forecast.client import ForecastClient
from .forecast.models import ForecastParams
from .forecast.validation import validate_params
from .journal import JournalWriter
from .log_setup import setup_logger


def _split_names(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [name.strip() for name in value.split(",") if name.strip()]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse forecast CLI arguments."""
    parser = argparse.ArgumentParser(description="Fetch an Open-Meteo forecast for one point.")
    parser.add_argument("--lat", type=float, default=None, help="Latitude in decimal degrees.")
    parser.add_argument("--lon", type=float, default=None, help="Longitude in decimal degrees.")
    parser.add_argument("--hourly", default=None, help="Comma-separated hourly variables.")
    parser.add_argument("--daily", default=None, help="Comma-separated daily variables.")
    parser.add_argument("--current", default=None, help="Comma-separated current variables.")
    parser.add_argument("--timezone", default=None, help="IANA timezone or 'auto'.")
    parser.add_argument("--temperature-unit", choices=["celsius", "fahrenheit"], default=None)
    parser.add_argument("--wind-speed-unit", choices=["kmh", "ms", "mph", "kn"], default=None)
    parser.add_argument("--precipitation-unit", choices=["mm", "inch"], default=None)
    parser.add_argument("--forecast-days", type=int, default=None)
    parser.add_argument("--past-days", type=int, default=None)
    parser.add_argument(
        "--max-print",
        type=int,
        default=None,
        help="Number of rows to print per section.",
    )
    return parser.parse_args(argv)


def build_params(args: argparse.Namespace, settings: Settings) -> ForecastParams:
    """Turn CLI arguments (plus settings defaults) into validated parameters."""
    if args.max_print is not None and args.max_print <= 0:
        raise ForecastError("--max-print must be > 0 when provided.")

    lat = args.lat if args.lat is not None else settings.forecast_default_lat
    lon = args.lon if args.lon is not None else settings.forecast_default_lon
    if lat is None or lon is None:
        raise ForecastError(
            "Missing location input: pass --lat and --lon, or set "
            "FORECAST_DEFAULT_LAT/LON."
        )

    raw: dict[str, Any] = {
        "latitude": lat,
        "longitude": lon,
        "timezone": args.timezone,
        "temperature_unit": args.temperature_unit,
        "wind_speed_unit": args.wind_speed_unit,
        "precipitation_unit": args.precipitation_unit,
        "forecast_days": args.forecast_days,
        "past_days": args.past_days,
        "hourly": _split_names(args.hourly),
        "daily": _split_names(args.daily),
        "current": _split_names(args.current),
    }
    return validate_params({key: value for key, value in raw.items() if value is not None})


def _format_time(ms: Any, utc_offset_seconds: int) -> str:
    if not isinstance(ms, (int, float)):
        return "-"
    local = datetime.fromtimestamp(ms / 1000 + utc_offset_seconds, tz=UTC)
    return local.strftime("%Y-%m-%d %H:%M")


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _print_series(
    console: Console,
    title: str,
    rows: list[dict[str, Any]],
    units: dict[str, str],
    utc_offset_seconds: int,
    max_print: int,
) -> None:
    if not rows:
        return
    columns = [key for key in rows[0] if key != "time"]
    table = Table(title=title)
    table.add_column("Time (local)")
    for column in columns:
        unit = units.get(column)
        table.add_column(f"{column} ({unit})" if unit else column, justify="right")
    for row in rows[:max_print]:
        table.add_row(
            _format_time(row["time"], utc_offset_seconds),
            *(_format_value(row.get(column)) for column in columns),
        )
    console.print(table)


def print_forecast(console: Console, response: dict[str, Any], max_print: int) -> None:
    offset = response["utc_offset_seconds"]
    console.print(
        f"Location=({response['latitude']:.4f}, {response['longitude']:.4f}) "
        f"elevation={response['elevation']:g}m "
        f"timezone={response['timezone']} ({response['timezone_abbreviation']})"
    )
    if "current" in response:
        current = response["current"]
        units = response.get("current_units", {})
        table = Table(title=f"Current @ {_format_time(current['time'], offset)}")
        table.add_column("Variable")
        table.add_column("Value", justify="right")
        for key, value in current.items():
            if key == "time":
                continue
            unit = units.get(key, "")
            table.add_row(key, f"{_format_value(value)} {unit}".strip())
        console.print(table)
    for cadence, title in (("hourly", "Hourly"), ("daily", "Daily")):
        if cadence in response:
            _print_series(
                console,
                title,
                response[cadence],
                response.get(f"{cadence}_units", {}),
                offset,
                max_print,
            )


def main(argv: list[str] | None = None) -> int:
    """Run the forecast fetch flow."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()
    session_id = uuid.uuid4().hex[:12]

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    try:
        journal = JournalWriter(
            journal_dir=settings.journal_dir,
            raw_payload_dir=settings.raw_payload_dir,
            session_id=session_id,
        )
        journal.write_event(
            "forecast_startup",
            payload=settings.safe_summary(),
            metadata={"session_id": session_id},
        )
    except JournalError as exc:
        logger.error("Failed to initialize forecast journal: %s", exc)
        return 3

    exit_code = 0
    try:
        params = build_params(args, settings)
        journal.write_event(
            "forecast_request_start",
            payload=params.model_dump(mode="json", exclude_none=True),
            metadata={"session_id": session_id},
        )
        with ForecastClient.from_settings(settings, logger) as client:
            result = client.fetch(params)

        raw_path: str | None = None
        if settings.forecast_journal_raw_payloads:
            raw_path = str(journal.write_raw_snapshot("open_meteo_forecast", result.raw_payload))
        journal.write_event(
            "forecast_request_success",
            payload={
                "source_url": result.source_url,
                "sections": sorted(result.response.keys()),
                "hourly_rows": len(result.response.get("hourly", ())),
                "daily_rows": len(result.response.get("daily", ())),
                "raw_payload_path": raw_path,
            },
            metadata={"session_id": session_id},
        )
        print_forecast(
            console,
            result.response,
            max_print=args.max_print or settings.forecast_max_print,
        )
    except (ForecastError, JournalError) as exc:
        exit_code = 4
        logger.error("Forecast failure: %s", exc)
        try:
            journal.write_event(
                "forecast_request_failure",
                payload={
                    "error": str(exc),
                    "type": type(exc).__name__,
                    "status_code": getattr(exc, "status_code", None),
                },
                metadata={"session_id": session_id},
            )
        except JournalError:
            logger.error("Failed to write forecast_request_failure event.")
    except Exception as exc:  # pragma: no cover - last-resort catch for CLI runtime
        exit_code = 99
        logger.exception("Unexpected forecast CLI failure: %s", exc)
    finally:
        try:
            journal.write_event(
                "forecast_shutdown",
                payload={"exit_code": exit_code},
                metadata={"session_id": session_id},
            )
        except JournalError:
            logger.error("Failed to write forecast_shutdown event.")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())

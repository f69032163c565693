"""Typed models for forecast requests and raw provider payloads."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, ClassVar, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictFloat,
    StrictInt,
    StrictStr,
    create_model,
    model_validator,
)

from .variables import (
    CURRENT_VARIABLES,
    DAILY_VARIABLES,
    HOURLY_VARIABLES,
    CurrentVariable,
    DailyVariable,
    HourlyVariable,
)

TemperatureUnit = Literal["celsius", "fahrenheit"]
WindSpeedUnit = Literal["kmh", "ms", "mph", "kn"]
PrecipitationUnit = Literal["mm", "inch"]

Number = StrictInt | StrictFloat
# Provider emits null for samples it could not compute.
NumberOrNull = StrictInt | StrictFloat | None


class ForecastParams(BaseModel):
    """Validated, immutable forecast request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float = Field(ge=-90, le=90, description="Decimal degrees")
    longitude: float = Field(ge=-180, le=180, description="Decimal degrees")
    timezone: str | None = Field(default=None, description="IANA name or 'auto'")
    temperature_unit: TemperatureUnit | None = None
    wind_speed_unit: WindSpeedUnit | None = None
    precipitation_unit: PrecipitationUnit | None = None
    forecast_days: int | None = Field(default=None, ge=0, le=16)
    past_days: int | None = Field(default=None, ge=0, le=92)
    hourly: tuple[HourlyVariable, ...] | None = None
    daily: tuple[DailyVariable, ...] | None = None
    current: tuple[CurrentVariable, ...] | None = None

    def variables(self, cadence: str) -> tuple[str, ...]:
        """Requested variables for a cadence; empty when not requested."""
        return getattr(self, cadence) or ()


class _RawBlock(BaseModel):
    """Columnar block that remembers the order its columns arrived in."""

    model_config = ConfigDict(extra="ignore")

    axis_fields: ClassVar[frozenset[str]] = frozenset({"time"})
    _column_order: tuple[str, ...] = PrivateAttr(default=())

    @model_validator(mode="wrap")
    @classmethod
    def _remember_column_order(cls, data: Any, handler: Any) -> Any:
        block = handler(data)
        if isinstance(data, dict):
            block._column_order = tuple(
                key for key in data if key in cls.model_fields and key not in cls.axis_fields
            )
        return block

    def columns(self) -> Iterator[tuple[str, Any]]:
        """Yield (name, value) for every non-axis column, in payload order."""
        # Read __dict__ so a column named like a method never resolves to it.
        declared = self.__dict__
        for name in self._column_order:
            yield name, declared[name]


class _RawSeriesBlock(_RawBlock):
    time: list[Number]


class _RawCurrentBlock(_RawBlock):
    axis_fields: ClassVar[frozenset[str]] = frozenset({"time", "interval"})

    time: Number
    interval: Number


RawHourlyBlock = create_model(
    "RawHourlyBlock",
    __base__=_RawSeriesBlock,
    **{name: (list[NumberOrNull] | None, None) for name in HOURLY_VARIABLES},
)
RawDailyBlock = create_model(
    "RawDailyBlock",
    __base__=_RawSeriesBlock,
    **{name: (list[NumberOrNull] | None, None) for name in DAILY_VARIABLES},
)
RawCurrentBlock = create_model(
    "RawCurrentBlock",
    __base__=_RawCurrentBlock,
    **{name: (NumberOrNull, None) for name in CURRENT_VARIABLES},
)


class RawForecastResponse(BaseModel):
    """Provider payload as returned with ``timeformat=unixtime``."""

    model_config = ConfigDict(extra="ignore")

    latitude: Number
    longitude: Number
    elevation: Number
    timezone: StrictStr
    timezone_abbreviation: StrictStr
    utc_offset_seconds: StrictInt
    generationtime_ms: Number
    hourly: RawHourlyBlock | None = None  # type: ignore[valid-type]
    hourly_units: dict[str, str] | None = None
    daily: RawDailyBlock | None = None  # type: ignore[valid-type]
    daily_units: dict[str, str] | None = None
    current: RawCurrentBlock | None = None  # type: ignore[valid-type]
    current_units: dict[str, str] | None = None

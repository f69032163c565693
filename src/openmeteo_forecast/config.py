"""Typed settings loader for the forecast client."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    open_meteo_base_url: AnyUrl | None = Field(default=None, alias="OPEN_METEO_BASE_URL")
    open_meteo_api_key: str | None = Field(default=None, alias="OPEN_METEO_API_KEY", repr=False)
    open_meteo_timeout_seconds: float = Field(default=30.0, alias="OPEN_METEO_TIMEOUT_SECONDS")
    open_meteo_max_retries: int = Field(default=2, alias="OPEN_METEO_MAX_RETRIES")
    open_meteo_retry_delay_seconds: float = Field(
        default=0.5,
        alias="OPEN_METEO_RETRY_DELAY_SECONDS",
    )

    forecast_default_lat: float | None = Field(default=None, alias="FORECAST_DEFAULT_LAT")
    forecast_default_lon: float | None = Field(default=None, alias="FORECAST_DEFAULT_LON")
    forecast_max_print: int = Field(default=12, alias="FORECAST_MAX_PRINT")

    journal_dir: Path = Field(default=Path("./data/journal"), alias="JOURNAL_DIR")
    raw_payload_dir: Path = Field(default=Path("./data/raw"), alias="RAW_PAYLOAD_DIR")
    forecast_journal_raw_payloads: bool = Field(
        default=False,
        alias="FORECAST_JOURNAL_RAW_PAYLOADS",
    )

    @field_validator(
        "open_meteo_base_url",
        "open_meteo_api_key",
        "forecast_default_lat",
        "forecast_default_lon",
        mode="before",
    )
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        if self.open_meteo_timeout_seconds <= 0:
            raise ValueError("OPEN_METEO_TIMEOUT_SECONDS must be > 0.")
        if self.open_meteo_max_retries < 0:
            raise ValueError("OPEN_METEO_MAX_RETRIES must be >= 0.")
        if self.open_meteo_retry_delay_seconds < 0:
            raise ValueError("OPEN_METEO_RETRY_DELAY_SECONDS must be >= 0.")
        if self.forecast_max_print <= 0:
            raise ValueError("FORECAST_MAX_PRINT must be > 0.")

        has_default_lat = self.forecast_default_lat is not None
        has_default_lon = self.forecast_default_lon is not None
        if has_default_lat != has_default_lon:
            raise ValueError("FORECAST_DEFAULT_LAT and FORECAST_DEFAULT_LON must be set together.")
        if has_default_lat and not (-90 <= self.forecast_default_lat <= 90):
            raise ValueError("FORECAST_DEFAULT_LAT must be between -90 and 90.")
        if has_default_lon and not (-180 <= self.forecast_default_lon <= 180):
            raise ValueError("FORECAST_DEFAULT_LON must be between -180 and 180.")
        return self

    @property
    def base_url_override(self) -> str | None:
        if self.open_meteo_base_url is None:
            return None
        return str(self.open_meteo_base_url)

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for journaling (no credentials)."""
        return {
            "base_url_override": self.base_url_override,
            "api_key_configured": bool(self.open_meteo_api_key),
            "timeout_seconds": self.open_meteo_timeout_seconds,
            "max_retries": self.open_meteo_max_retries,
            "raw_journaling": self.forecast_journal_raw_payloads,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    settings.journal_dir.mkdir(parents=True, exist_ok=True)
    settings.raw_payload_dir.mkdir(parents=True, exist_ok=True)
    return settings

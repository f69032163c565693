"""HTTP client for the Open-Meteo forecast endpoint."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import BaseModel, Field

from ..config import Settings
from ..exceptions import TransportError
from ..redaction import sanitize_text
from .models import ForecastParams
from .projection import project_response
from .query import FORECAST_PATH, build_query_params, resolve_base_url
from .responses import ForecastResponse
from .transform import transform_forecast_response
from .validation import validate_params, validate_raw_payload

DEFAULT_TIMEOUT_SECONDS = 30.0
RETRY_STATUS_CODES = frozenset({408, 413, 429, 500, 502, 503, 504})
_BODY_PREVIEW_CHARS = 500


def _preview(body: str) -> str:
    """Redacted, truncated body for error messages and logs."""
    return sanitize_text(body[:_BODY_PREVIEW_CHARS])


class ForecastFetchResult(BaseModel):
    """Projected result plus the raw payload it was built from."""

    params: ForecastParams
    source_url: str
    retrieval_timestamp: datetime
    response: dict[str, Any]
    raw_payload: dict[str, Any] = Field(repr=False)


class ForecastClient:
    """Validates, fetches and reshapes forecasts from a single endpoint.

    One instance holds one ``httpx.Client``; reuse it across calls for
    connection pooling, or let ``fetch_forecast`` build a throwaway one.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout_seconds: float | None = None,
        logger: logging.Logger | None = None,
        max_retries: int = 2,
        retry_delay_seconds: float = 0.5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = resolve_base_url(base_url, api_key)
        self.api_key = api_key
        self.timeout_seconds = (
            DEFAULT_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        )
        self.logger = logger or logging.getLogger(__name__)
        self._max_retries = max_retries
        self._retry_delay = retry_delay_seconds
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            headers={
                "Accept": "application/json",
                "User-Agent": "openmeteo-forecast/0.1",
            },
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, logger: logging.Logger) -> ForecastClient:
        return cls(
            base_url=settings.base_url_override,
            api_key=settings.open_meteo_api_key,
            timeout_seconds=settings.open_meteo_timeout_seconds,
            logger=logger,
            max_retries=settings.open_meteo_max_retries,
            retry_delay_seconds=settings.open_meteo_retry_delay_seconds,
        )

    def __enter__(self) -> ForecastClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def forecast(self, params: ForecastParams | Mapping[str, Any]) -> ForecastResponse:
        """Fetch a forecast shaped by exactly the requested variables."""
        return self.fetch(params).response  # type: ignore[return-value]

    def fetch(self, params: ForecastParams | Mapping[str, Any]) -> ForecastFetchResult:
        """Validate, fetch, validate the payload, transform and project.

        Parameter validation happens before any network activity.
        """
        validated = validate_params(params)
        query = build_query_params(validated, api_key=self.api_key)
        self.logger.info(
            "Forecast request lat=%.4f lon=%.4f hourly=%d daily=%d current=%d",
            validated.latitude,
            validated.longitude,
            len(validated.variables("hourly")),
            len(validated.variables("daily")),
            len(validated.variables("current")),
        )

        payload = self._request_json(FORECAST_PATH, query)
        raw = validate_raw_payload(payload)
        response = project_response(validated, transform_forecast_response(raw))

        self.logger.info(
            "Forecast response sections=%s hourly_rows=%d daily_rows=%d",
            ",".join(key for key in ("hourly", "daily", "current") if key in response),
            len(response.get("hourly", ())),
            len(response.get("daily", ())),
        )
        return ForecastFetchResult(
            params=validated,
            source_url=f"{self.base_url}/{FORECAST_PATH}",
            retrieval_timestamp=datetime.now(UTC),
            response=dict(response),
            raw_payload=payload,
        )

    def _request_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        last_error: Exception | None = None
        for attempt in range(self._max_retries + 1):
            try:
                response = self._client.get(path, params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                last_error = exc
                status = exc.response.status_code
                if status in RETRY_STATUS_CODES and attempt < self._max_retries:
                    self.logger.warning(
                        "Forecast request failed (HTTP %d); retrying",
                        status,
                        extra={"attempt": attempt + 1, "max_retries": self._max_retries},
                    )
                    time.sleep(self._retry_delay)
                    continue
                body = exc.response.text
                raise TransportError(
                    f"Forecast request failed with status {status}: {_preview(body)}",
                    category=self._status_category(status),
                    status_code=status,
                    body=body,
                ) from exc
            except httpx.HTTPError as exc:
                # Timeouts, connection failures, protocol errors.
                last_error = exc
                if attempt < self._max_retries:
                    self.logger.warning(
                        "Forecast request failed (%s); retrying",
                        type(exc).__name__,
                        extra={"attempt": attempt + 1, "max_retries": self._max_retries},
                    )
                    time.sleep(self._retry_delay)
                    continue
                raise TransportError(
                    f"Forecast request failed: {sanitize_text(str(exc))}",
                    category="network",
                ) from exc

            try:
                payload = response.json()
            except ValueError as exc:
                raise TransportError(
                    "Forecast endpoint returned non-JSON response.",
                    category="decode",
                    status_code=response.status_code,
                    body=response.text,
                ) from exc

            if not isinstance(payload, dict):
                raise TransportError(
                    "Forecast endpoint returned unexpected payload type "
                    f"{type(payload).__name__}.",
                    category="decode",
                    status_code=response.status_code,
                )
            return payload

        raise TransportError(
            "Forecast request failed after retries: "
            f"{sanitize_text(str(last_error)) if last_error else 'unknown error'}",
        )

    @staticmethod
    def _status_category(status: int) -> str:
        if status == 429:
            return "rate_limit"
        if status >= 500:
            return "server"
        return "client"


def fetch_forecast(
    params: ForecastParams | Mapping[str, Any],
    *,
    client: ForecastClient | None = None,
    base_url: str | None = None,
    api_key: str | None = None,
    timeout_seconds: float | None = None,
) -> ForecastResponse:
    """One-shot forecast call.

    Uses ``client`` when given; otherwise builds a client for this call only
    and closes it afterwards. Parameters are validated before either happens.
    """
    validated = validate_params(params)
    if client is not None:
        return client.forecast(validated)
    with ForecastClient(
        base_url=base_url, api_key=api_key, timeout_seconds=timeout_seconds
    ) as own_client:
        return own_client.forecast(validated)

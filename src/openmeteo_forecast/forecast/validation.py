"""Fail-closed validation of outbound parameters and inbound payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..exceptions import FieldIssue, ParameterValidationError, PayloadValidationError
from .models import ForecastParams, RawForecastResponse


def issues_from_validation_error(exc: ValidationError) -> list[FieldIssue]:
    """Flatten pydantic errors into (field, constraint, message) issues."""
    issues: list[FieldIssue] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "<root>"
        issues.append(FieldIssue(field=field, constraint=error["type"], message=error["msg"]))
    return issues


def _summarize(issues: list[FieldIssue], limit: int = 5) -> str:
    parts = [f"{issue.field}: {issue.message} [{issue.constraint}]" for issue in issues[:limit]]
    if len(issues) > limit:
        parts.append(f"... {len(issues) - limit} more")
    return "; ".join(parts)


def validate_params(params: ForecastParams | Mapping[str, Any]) -> ForecastParams:
    """Check a request against ranges, enums and the variable catalog.

    Every independent constraint is reported, not just the first one. Raises
    ParameterValidationError; callers must not fetch when this fails.
    """
    if isinstance(params, ForecastParams):
        return params
    try:
        return ForecastParams.model_validate(params)
    except ValidationError as exc:
        issues = issues_from_validation_error(exc)
        raise ParameterValidationError(
            f"Invalid forecast parameters: {_summarize(issues)}", issues
        ) from exc


def validate_raw_payload(payload: Any) -> RawForecastResponse:
    """Check a decoded provider body against the catalog-derived schema.

    Unknown fields are tolerated and absent variable columns are legal; a
    missing location field or a cadence block without its time axis is not.
    """
    try:
        return RawForecastResponse.model_validate(payload)
    except ValidationError as exc:
        issues = issues_from_validation_error(exc)
        raise PayloadValidationError(
            f"Forecast payload failed validation: {_summarize(issues)}", issues
        ) from exc

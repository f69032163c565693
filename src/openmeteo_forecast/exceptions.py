"""Application exception classes."""

from __future__ import annotations

from typing import NamedTuple


class FieldIssue(NamedTuple):
    """One failed constraint, located by dotted field path."""

    field: str
    constraint: str
    message: str


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class JournalError(Exception):
    """Raised when writing to journal files fails."""


class ForecastError(Exception):
    """Base class for forecast request/response failures."""


class _IssuesError(ForecastError):
    def __init__(self, message: str, issues: list[FieldIssue] | None = None) -> None:
        super().__init__(message)
        self.issues: list[FieldIssue] = list(issues or [])

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class ParameterValidationError(_IssuesError):
    """Raised before any network activity when request parameters are invalid."""


class PayloadValidationError(_IssuesError):
    """Raised when the provider payload fails required-shape checks."""


class TransportError(ForecastError):
    """Raised for network/protocol failures with status/body metadata."""

    def __init__(
        self,
        message: str,
        *,
        category: str = "unknown",
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status_code = status_code
        self.body = body

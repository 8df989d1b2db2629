"""Custom exceptions and error values for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure kinds reported by the lookup path."""

    CONFIGURATION_MISSING = "configuration_missing"
    MALFORMED_INPUT = "malformed_input"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UPSTREAM_DATA_INVALID = "upstream_data_invalid"


_STATUS_BY_KIND = {
    ErrorKind.CONFIGURATION_MISSING: 500,
    ErrorKind.MALFORMED_INPUT: 400,
    ErrorKind.UPSTREAM_UNAVAILABLE: 502,
    ErrorKind.UPSTREAM_DATA_INVALID: 502,
}


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class UpstreamError(AppError):
    """Failure talking to, or trusting, the official results source."""

    def __init__(self, kind: ErrorKind, message: str, details: Any | None = None) -> None:
        super().__init__(
            code=kind.value,
            message=message,
            status_code=_STATUS_BY_KIND[kind],
            details=details,
        )
        self.kind = kind


@dataclass(frozen=True)
class Failure:
    """Error value returned instead of raised by the lookup orchestration."""

    kind: ErrorKind
    message: str
    details: Any | None = None

    @classmethod
    def from_error(cls, exc: UpstreamError) -> "Failure":
        return cls(kind=exc.kind, message=exc.message, details=exc.details)

    def to_error(self) -> UpstreamError:
        return UpstreamError(self.kind, self.message, self.details)

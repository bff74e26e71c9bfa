"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class UpstreamErrorKind(str, Enum):
    TIMEOUT = "TIMEOUT"
    CONNECTION = "CONNECTION"
    HTTP_STATUS = "HTTP_STATUS"
    MALFORMED = "MALFORMED"
    ANOMALOUS = "ANOMALOUS"


class UpstreamError(Exception):
    """Failure of a single upstream call.

    Every concrete subclass pins one ``kind``. Everything except
    ``ANOMALOUS`` is transient and may be retried.
    """

    kind: UpstreamErrorKind

    def __init__(self, draw_no: int, message: str) -> None:
        super().__init__(f"draw {draw_no}: {message}")
        self.draw_no = draw_no

    @property
    def transient(self) -> bool:
        return self.kind is not UpstreamErrorKind.ANOMALOUS


class UpstreamTimeoutError(UpstreamError):
    kind = UpstreamErrorKind.TIMEOUT

    def __init__(self, draw_no: int, timeout: float) -> None:
        super().__init__(draw_no, f"timed out after {timeout:g}s")
        self.timeout = timeout


class UpstreamConnectionError(UpstreamError):
    kind = UpstreamErrorKind.CONNECTION


class UpstreamHTTPError(UpstreamError):
    kind = UpstreamErrorKind.HTTP_STATUS

    def __init__(self, draw_no: int, status_code: int) -> None:
        super().__init__(draw_no, f"HTTP {status_code}")
        self.status_code = status_code


class MalformedResponseError(UpstreamError):
    kind = UpstreamErrorKind.MALFORMED


class AnomalousResponseError(UpstreamError):
    """The upstream answered with a markup page instead of JSON (bot block)."""

    kind = UpstreamErrorKind.ANOMALOUS

    def __init__(self, draw_no: int) -> None:
        super().__init__(draw_no, "HTML response")

"""Custom exceptions for ReconTools."""


class ReconError(Exception):
    """Base exception for all ReconTools errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(ReconError):
    """Raised when a caller-supplied URL or hostname is invalid."""

    pass


class NetworkError(ReconError):
    """Raised when every transport failed or timed out."""

    pass


class HttpError(ReconError):
    """Raised when a transport responded with a failure status."""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message or f"HTTP error! status: {status_code}", details)
        self.status_code = status_code


class ConfigError(ReconError):
    """Raised when an upstream API reports a scan or query error."""

    pass


class TimeoutError(ReconError):
    """Raised when a bounded retry or poll budget is exhausted."""

    pass


class MalformedResponseError(ReconError):
    """Raised when a success response is structurally unexpected."""

    pass


class ScanError(ReconError):
    """Raised when a scan operation fails."""

    def __init__(
        self,
        message: str,
        scanner: str | None = None,
        target: str | None = None,
        cause: Exception | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.scanner = scanner
        self.target = target
        self.cause = cause

"""Exception hierarchy for the SafeScan SDK."""

from __future__ import annotations


class SafeScanError(Exception):
    """Base exception for all SafeScan SDK errors."""


class IntakeError(SafeScanError):
    """Raised when the submitted bytes cannot be accepted, read, or hashed."""


class ConfigurationError(SafeScanError):
    """Raised when the endpoint or credential is missing or a placeholder.

    Always raised before any network I/O takes place.
    """


class RemoteAnalysisError(SafeScanError):
    """Raised when the analysis service rejects or fails a request.

    Covers non-2xx HTTP statuses and envelopes with ``success: false``.

    Attributes:
        status_code: HTTP status of the failed response, if there was one.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AnalysisConnectionError(RemoteAnalysisError):
    """Raised when the SDK cannot reach the analysis service."""


class AnalysisTimeoutError(RemoteAnalysisError):
    """Raised when the analysis request times out."""


class UnexpectedError(SafeScanError):
    """Wraps any failure that does not belong to the SDK taxonomy."""


class StageTransitionError(SafeScanError):
    """Raised when the stage sequencer is asked for an out-of-order transition."""

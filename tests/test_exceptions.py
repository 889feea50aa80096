"""Tests for safescan_sdk.exceptions."""

from safescan_sdk.exceptions import (
    AnalysisConnectionError,
    AnalysisTimeoutError,
    ConfigurationError,
    IntakeError,
    RemoteAnalysisError,
    SafeScanError,
    StageTransitionError,
    UnexpectedError,
)


def test_hierarchy():
    for exc in (IntakeError, ConfigurationError, RemoteAnalysisError, UnexpectedError, StageTransitionError):
        assert issubclass(exc, SafeScanError)
    assert issubclass(AnalysisConnectionError, RemoteAnalysisError)
    assert issubclass(AnalysisTimeoutError, RemoteAnalysisError)


def test_base_is_exception():
    assert issubclass(SafeScanError, Exception)


def test_status_code_preserved():
    exc = RemoteAnalysisError("Scan failed: Bad Gateway", status_code=502)
    assert exc.status_code == 502
    assert str(exc) == "Scan failed: Bad Gateway"


def test_status_code_optional():
    assert AnalysisTimeoutError("timed out").status_code is None

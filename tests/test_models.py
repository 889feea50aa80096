"""Tests for safescan_sdk.models."""

from pathlib import Path

import pytest

from safescan_sdk.exceptions import IntakeError, RemoteAnalysisError
from safescan_sdk.models import (
    EMPTY_PAYLOAD,
    AnalysisEnvelope,
    AnalysisVerdict,
    FileSubmission,
    ProgressEvent,
    ScanFailed,
    ScanStage,
    Severity,
)


class TestScanStage:
    def test_values(self):
        assert [s.value for s in ScanStage] == [
            "intake",
            "fingerprinting",
            "reputation-check",
            "heuristic",
            "static-pattern",
            "behavioral",
            "complete",
            "failed",
        ]

    def test_terminal(self):
        assert ScanStage.COMPLETE.is_terminal
        assert ScanStage.FAILED.is_terminal
        assert not ScanStage.BEHAVIORAL.is_terminal


class TestSeverity:
    def test_ordering(self):
        assert Severity.SAFE < Severity.SUSPICIOUS < Severity.MALICIOUS < Severity.CRITICAL
        assert max(Severity) is Severity.CRITICAL
        assert Severity.MALICIOUS >= Severity.MALICIOUS

    def test_compares_equal_to_string(self):
        assert Severity.SAFE == "safe"

    def test_hashable(self):
        assert {Severity.SAFE: 1}[Severity.SAFE] == 1


class TestFileSubmission:
    def test_from_bytes(self):
        s = FileSubmission.from_bytes(b"hello world!", name="hello.txt")
        assert s.size == 12
        assert s.name == "hello.txt"

    def test_from_path(self, tmp_path):
        f = tmp_path / "doc.pdf"
        f.write_bytes(b"%PDF-1.7")
        s = FileSubmission.from_path(f)
        assert s.name == "doc.pdf"
        assert s.data == b"%PDF-1.7"

    def test_from_path_missing(self):
        with pytest.raises(FileNotFoundError):
            FileSubmission.from_path("/nonexistent/file.txt")

    def test_from_path_directory(self, tmp_path):
        with pytest.raises(IntakeError, match="Cannot read submitted file"):
            FileSubmission.from_path(tmp_path)

    def test_from_path_unreadable(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        f = tmp_path / "locked.bin"
        f.write_bytes(b"secret")

        def deny(self: Path) -> bytes:
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "read_bytes", deny)
        with pytest.raises(IntakeError, match="Permission denied"):
            FileSubmission.from_path(f)

    def test_repr_hides_data(self):
        assert "hello" not in repr(FileSubmission.from_bytes(b"hello", name="a"))

    def test_frozen(self):
        s = FileSubmission.from_bytes(b"x")
        with pytest.raises(AttributeError):
            s.name = "other"  # type: ignore[misc]


class TestValueObjects:
    def test_progress_event_equality(self):
        assert ProgressEvent(ScanStage.INTAKE, 10, "a") == ProgressEvent(ScanStage.INTAKE, 10, "a")

    def test_verdict_fields(self):
        v = AnalysisVerdict(severity=Severity.CRITICAL, threat_score=99)
        assert v.severity is Severity.CRITICAL
        assert v.threat_score == 99

    def test_envelope_defaults_to_empty_result(self):
        envelope = AnalysisEnvelope(success=True)
        assert envelope.result is EMPTY_PAYLOAD
        assert dict(envelope.result) == {}
        with pytest.raises(TypeError):
            envelope.result["x"] = 1  # type: ignore[index]

    def test_failed_outcome_stage(self):
        outcome = ScanFailed(error=RemoteAnalysisError("x"), message="x")
        assert outcome.stage is ScanStage.FAILED

"""Data models for SafeScan submissions, progress and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Union

from safescan_sdk.exceptions import IntakeError, SafeScanError

EMPTY_PAYLOAD: Mapping[str, Any] = MappingProxyType({})


class ScanStage(str, Enum):
    """Named phases of a scan, in display order.

    ``FAILED`` sits outside the order and is reachable from any
    non-terminal stage.
    """

    INTAKE = "intake"
    FINGERPRINTING = "fingerprinting"
    REPUTATION_CHECK = "reputation-check"
    HEURISTIC = "heuristic"
    STATIC_PATTERN = "static-pattern"
    BEHAVIORAL = "behavioral"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ScanStage.COMPLETE, ScanStage.FAILED)


class Severity(str, Enum):
    """Remote verdict category, ordered ``safe < suspicious < malicious < critical``."""

    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    MALICIOUS = "malicious"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {severity: rank for rank, severity in enumerate(Severity)}


@dataclass(frozen=True, slots=True)
class FileSubmission:
    """A file accepted for scanning.

    Attributes:
        data: Raw file content.
        name: Declared file name.
        size: Declared size in bytes.
    """

    data: bytes = field(repr=False)
    name: str
    size: int

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "file") -> FileSubmission:
        return cls(data=data, name=name, size=len(data))

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> FileSubmission:
        """Read a file from disk into a submission.

        Raises:
            FileNotFoundError: If *file_path* does not exist.
            IntakeError: If *file_path* exists but cannot be read.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise IntakeError(f"Cannot read submitted file: {exc}") from exc
        return cls.from_bytes(data, name=path.name)


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """One stage transition reported to observers.

    Attributes:
        stage: Stage just entered.
        percent: Progress in ``[0, 100]``; ``0`` for ``failed``.
        message: Human-readable status line.
    """

    stage: ScanStage
    percent: int
    message: str


@dataclass(frozen=True, slots=True)
class AnalysisVerdict:
    """Remote safety judgment.

    Attributes:
        severity: Categorical verdict.
        threat_score: Numeric score in ``[0, 100]`` as reported by the service.
    """

    severity: Severity
    threat_score: int


@dataclass(frozen=True, slots=True)
class AnalysisEnvelope:
    """Parsed response body of the analysis endpoint."""

    success: bool
    scan_id: str = ""
    result: Mapping[str, Any] = field(default_factory=lambda: EMPTY_PAYLOAD)
    error: str | None = None


@dataclass(frozen=True, slots=True)
class ScanRecord:
    """Immutable outcome of one successful scan.

    The ``*_result`` mappings are passed through verbatim from the service.
    """

    scan_id: str
    file_name: str
    file_size: int
    fingerprint: str
    scanned_at: datetime
    verdict: AnalysisVerdict
    file_hash_id: str = ""
    hash_check_result: Mapping[str, Any] = field(default_factory=lambda: EMPTY_PAYLOAD)
    heuristic_result: Mapping[str, Any] = field(default_factory=lambda: EMPTY_PAYLOAD)
    static_analysis_result: Mapping[str, Any] = field(default_factory=lambda: EMPTY_PAYLOAD)
    behavioral_analysis_result: Mapping[str, Any] = field(default_factory=lambda: EMPTY_PAYLOAD)
    external_sources: Mapping[str, Any] = field(default_factory=lambda: EMPTY_PAYLOAD)


@dataclass(frozen=True, slots=True)
class ThreatSummary:
    """A previously scanned file and its latest verdict."""

    id: str
    fingerprint: str
    file_name: str
    file_size: int
    verdict: str
    threat_score: int
    last_seen: str
    scan_count: int


@dataclass(frozen=True, slots=True)
class ScanSucceeded:
    """Terminal outcome of a scan that reached ``complete``."""

    record: ScanRecord

    @property
    def stage(self) -> ScanStage:
        return ScanStage.COMPLETE


@dataclass(frozen=True, slots=True)
class ScanFailed:
    """Terminal outcome of a scan that reached ``failed``."""

    error: SafeScanError
    message: str

    @property
    def stage(self) -> ScanStage:
        return ScanStage.FAILED


ScanOutcome = Union[ScanSucceeded, ScanFailed]

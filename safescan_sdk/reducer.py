"""Turns a successful analysis envelope into a :class:`ScanRecord`."""

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from safescan_sdk.envelope import MALFORMED_RESPONSE
from safescan_sdk.exceptions import RemoteAnalysisError
from safescan_sdk.models import (
    EMPTY_PAYLOAD,
    AnalysisEnvelope,
    AnalysisVerdict,
    FileSubmission,
    ScanRecord,
    Severity,
)

FINGERPRINT_MISMATCH = "Analysis service returned a mismatched fingerprint"


def parse_verdict(result: Mapping[str, Any]) -> AnalysisVerdict:
    """Read ``overallVerdict`` and ``threatScore`` as reported by the service."""
    try:
        severity = Severity(result.get("overallVerdict"))
    except ValueError as exc:
        raise RemoteAnalysisError(f"Unknown verdict: {result.get('overallVerdict')!r}") from exc
    score = result.get("threatScore", 0)
    # JSON encoders may send 42 as 42.0
    if isinstance(score, float) and score.is_integer():
        score = int(score)
    if isinstance(score, bool) or not isinstance(score, int):
        raise RemoteAnalysisError(MALFORMED_RESPONSE)
    return AnalysisVerdict(severity=severity, threat_score=score)


def _payload(result: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = result.get(key)
    if isinstance(value, dict):
        return MappingProxyType(value)
    return EMPTY_PAYLOAD


def build_scan_record(
    envelope: AnalysisEnvelope,
    submission: FileSubmission,
    fingerprint: str,
    scanned_at: datetime,
) -> ScanRecord:
    """Assemble the immutable record for a completed scan.

    The verdict is taken from the service as-is. The only local check is that
    an echoed ``sha256Hash`` matches *fingerprint*.

    Raises:
        RemoteAnalysisError: On a mismatched fingerprint or unreadable verdict.
    """
    result = envelope.result
    echoed = result.get("sha256Hash")
    if echoed is not None and str(echoed).lower() != fingerprint.lower():
        raise RemoteAnalysisError(FINGERPRINT_MISMATCH)

    return ScanRecord(
        scan_id=envelope.scan_id,
        file_name=submission.name,
        file_size=submission.size,
        fingerprint=fingerprint,
        scanned_at=scanned_at,
        verdict=parse_verdict(result),
        file_hash_id=str(result.get("fileHashId") or ""),
        hash_check_result=_payload(result, "hashCheckResult"),
        heuristic_result=_payload(result, "heuristicResult"),
        static_analysis_result=_payload(result, "staticAnalysisResult"),
        behavioral_analysis_result=_payload(result, "behavioralAnalysisResult"),
        external_sources=_payload(result, "externalSources"),
    )

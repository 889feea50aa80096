"""Request and response shapes shared by the REST clients."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from safescan_sdk.exceptions import RemoteAnalysisError
from safescan_sdk.models import AnalysisEnvelope, ThreatSummary

MALFORMED_RESPONSE = "Malformed response from analysis service"
DEFAULT_FAILURE = "Scan failed"
HISTORY_FAILURE = "History lookup failed"

HISTORY_SELECT = (
    "id,sha256_hash,file_name,file_size,last_seen,scan_count,"
    "scan_results(overall_verdict,threat_score)"
)


def build_scan_request(fingerprint: str, file_name: str, file_size: int, file_content: str) -> dict:
    return {
        "sha256Hash": fingerprint,
        "fileName": file_name,
        "fileSize": file_size,
        "fileContent": file_content,
    }


def auth_headers(api_key: str) -> dict:
    return {
        "Authorization": f"Bearer {api_key}",
        "apikey": api_key,
    }


def status_failure(status_code: int, reason: str, action: str = DEFAULT_FAILURE) -> RemoteAnalysisError:
    return RemoteAnalysisError(f"{action}: {reason or status_code}", status_code=status_code)


def parse_envelope(data: Any) -> AnalysisEnvelope:
    """Validate the analysis response body.

    Raises:
        RemoteAnalysisError: If the body is malformed or reports ``success: false``.
    """
    if not isinstance(data, dict) or not isinstance(data.get("success"), bool):
        raise RemoteAnalysisError(MALFORMED_RESPONSE)
    if not data["success"]:
        raise RemoteAnalysisError(data.get("error") or DEFAULT_FAILURE)
    result = data.get("result")
    if not isinstance(result, dict):
        raise RemoteAnalysisError(MALFORMED_RESPONSE)
    return AnalysisEnvelope(
        success=True,
        scan_id=str(data.get("scanId") or ""),
        result=MappingProxyType(result),
    )


def parse_threat_rows(rows: Any) -> list[ThreatSummary]:
    """Map ``file_hashes`` rows (with embedded ``scan_results``) to summaries."""
    if not isinstance(rows, list):
        raise RemoteAnalysisError(MALFORMED_RESPONSE)
    threats = []
    for row in rows:
        if not isinstance(row, dict):
            raise RemoteAnalysisError(MALFORMED_RESPONSE)
        results = row.get("scan_results") or [{}]
        latest = results if isinstance(results, dict) else results[0]
        threats.append(
            ThreatSummary(
                id=str(row.get("id", "")),
                fingerprint=row.get("sha256_hash", ""),
                file_name=row.get("file_name", ""),
                file_size=row.get("file_size") or 0,
                verdict=latest.get("overall_verdict") or "unknown",
                threat_score=latest.get("threat_score") or 0,
                last_seen=row.get("last_seen") or "",
                scan_count=row.get("scan_count") or 0,
            )
        )
    return threats

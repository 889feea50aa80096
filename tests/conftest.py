"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

BASE = "https://abc123.supabase.co"
API_KEY = "test-anon-key"
SCAN_URL = f"{BASE}/functions/v1/malware-scan"
HISTORY_URL = f"{BASE}/rest/v1/file_hashes"

# sha256(b"hello world!")
HELLO_DIGEST = "7509e5bda0c762d2bac7f90d758b5b2263fa01ccbc542ab5e3df163be08e6ca9"

FIXED_TIME = datetime(2025, 6, 23, 14, 33, 36, tzinfo=timezone.utc)


def scan_response(verdict: str = "safe", score: int = 0, scan_id: str = "abc", **extra: object) -> dict:
    result = {
        "fileHashId": "f-1",
        "overallVerdict": verdict,
        "threatScore": score,
        "hashCheckResult": {"found": False, "source": "local", "verdict": "unknown"},
        "heuristicResult": {"riskScore": score, "flags": [], "details": {}},
        "staticAnalysisResult": {"riskScore": 0, "flags": [], "detectedPatterns": []},
        "behavioralAnalysisResult": {"found": False, "verdict": "unknown"},
        "externalSources": {},
    }
    result.update(extra)
    return {"success": True, "scanId": scan_id, "result": result}


@pytest.fixture()
def sample_bytes() -> bytes:
    return b"hello world!"


@pytest.fixture()
def binary_bytes() -> bytes:
    """Start of a PE header; NUL bytes make it undecodable as text."""
    return b"MZ\x90\x00\x03\x00\x00\x00\x04\x00\x00\x00\xff\xff\x00\x00"
